# tests/conftest.py
from __future__ import annotations

import logging

import pytest

from homeloan.logs import LOGGER_NAME
from tests.utils import make_loan, make_points_loan


# -------- Isolation --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("HOMELOAN_OUT", "HOMELOAN_WITH_POINTS", "HOMELOAN_MONTH", "HOMELOAN_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()


# -------- Loan fixtures --------
@pytest.fixture
def base_loan():
    """6.75%, no points, $747,500 price, $75,000 down, 30 years."""
    return make_loan()


@pytest.fixture
def points_loan():
    """7.00% with 1.125 points, same price/down/term."""
    return make_points_loan()


@pytest.fixture
def loan_factory():
    """Factory for loans with overrides of the baseline terms."""

    def _factory(**overrides):
        return make_loan(**overrides)

    return _factory
