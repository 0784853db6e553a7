# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_loan, make_points_loan
"""

from .utils import make_loan, make_loan_terms, make_points_loan

__all__ = ["make_loan", "make_loan_terms", "make_points_loan"]
