# homeloan/inputs/inputs.py
"""
Inputs loader for the mortgage amortization reporter.

Goals
-----
- File-first loan configuration with validation via Pydantic.
- Accepts a bare loan payload (LoanTerms at the root) or a structured payload
  that also carries run options (output path, points toggle, single month).
- Minimal environment-variable overrides for CLI convenience.

Supported JSON shapes
---------------------
1) Bare (root = LoanTerms)
   {
     "home_price": 747500, "down_payment": 75000,
     "rate": 0.0675, "points": 0, "term": 30
   }

2) Structured (root = AppInputs)
   {
     "loan": { ... LoanTerms ... },
     "run": {"out": "report.txt", "with_points": true, "month": null}
   }

Environment overrides (optional)
--------------------------------
- HOMELOAN_OUT          -> AppInputs.run.out
- HOMELOAN_WITH_POINTS  -> AppInputs.run.with_points (1/0, true/false, yes/no, on/off)
- HOMELOAN_MONTH        -> AppInputs.run.month (int)

Public API
----------
- SAMPLE_SCENARIOS: the two reference loans ("base", "points")
- class InputsLoader:
    - load(path) -> AppInputs
    - load_json(text) -> AppInputs
    - from_scenario(name) -> AppInputs
    - with_overrides(cfg, **kwargs) -> AppInputs (non-destructive copies)
- function load_inputs(path) -> AppInputs  (convenience)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, Field, ValidationError

from homeloan.schemas.models import LoanTerm, LoanTerms

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

# ----------------------------
# Reference configurations
# ----------------------------

SAMPLE_SCENARIOS: dict[str, LoanTerms] = {
    "base": LoanTerms(
        home_price=747_500.0,
        down_payment=75_000.0,
        rate=0.0675,
        points=0.0,
        term=LoanTerm.THIRTY_YEARS,
    ),
    "points": LoanTerms(
        home_price=747_500.0,
        down_payment=75_000.0,
        rate=0.07,
        points=1.125,
        term=LoanTerm.THIRTY_YEARS,
    ),
}

# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling the report run."""

    out: str | None = Field(None, description="Path to write the report; stdout when None.")
    with_points: bool = Field(True, description="Use the points-adjusted rate for the amortization table.")
    month: int | None = Field(None, ge=1, description="Show a single month's breakdown instead of the full table.")


class AppInputs(BaseModel):
    """
    Full input payload.

    Attributes:
        loan: The validated LoanTerms used by the engine.
        run:  Non-financial, runtime options for the current execution.
    """

    loan: LoanTerms
    run: RunOptions = RunOptions()


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Default search (when path=None):
        1) ./data/sample/loan.json
        2) ./config.json
    """

    env_prefix: str = "HOMELOAN_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> AppInputs:
        """
        Load inputs from a JSON file (path). If path is None, try defaults.
        """
        p = self._resolve_path(path)
        raw = self._read_json_file(p)
        cfg = self._parse_root(self._maybe_wrap_bare(raw))
        logger.debug("loaded loan inputs from %s", p)
        return self._apply_env_overrides(cfg)

    def load_json(self, text: str) -> AppInputs:
        """Load inputs from a JSON string (bare or structured shape)."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Invalid JSON payload: expected an object at the root")
        cfg = self._parse_root(self._maybe_wrap_bare(raw))
        return self._apply_env_overrides(cfg)

    def from_scenario(self, name: str) -> AppInputs:
        """Build inputs from one of the built-in reference scenarios."""
        key = name.strip().lower()
        if key not in SAMPLE_SCENARIOS:
            raise ValueError(f"Unknown scenario {name!r}; choose from {sorted(SAMPLE_SCENARIOS)}")
        cfg = AppInputs(loan=SAMPLE_SCENARIOS[key].model_copy())
        return self._apply_env_overrides(cfg)

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        out: str | None = None,
        with_points: bool | None = None,
        month: int | None = None,
    ) -> AppInputs:
        """
        Return a *new* AppInputs with provided non-null overrides applied to RunOptions.
        Does not mutate the original instance.
        """
        updates: dict[str, Any] = {}
        if out is not None:
            updates["out"] = out
        if with_points is not None:
            updates["with_points"] = with_points
        if month is not None:
            updates["month"] = month

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Inputs file not found: {p}")
            return p

        for candidate in (Path("data/sample/loan.json"), Path("config.json")):
            if candidate.exists():
                return candidate
        raise FileNotFoundError(
            "No inputs path provided and no default inputs found. Looked for ./data/sample/loan.json and ./config.json."
        )

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid JSON in {p}: expected an object at the root")
        return cast(dict[str, Any], data)

    def _maybe_wrap_bare(self, raw: dict[str, Any]) -> dict[str, Any]:
        if "loan" in raw:
            return raw
        return {"loan": raw}

    def _parse_root(self, data: dict[str, Any]) -> AppInputs:
        try:
            return AppInputs.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: AppInputs) -> AppInputs:
        """
        Apply light, optional overrides from environment variables to run options.
        """
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        out = os.getenv(f"{prefix}OUT")
        if out:
            updates["out"] = out

        with_points = os.getenv(f"{prefix}WITH_POINTS")
        if with_points:
            flag = with_points.strip().lower()
            if flag in _TRUTHY:
                updates["with_points"] = True
            elif flag in _FALSY:
                updates["with_points"] = False
            else:
                logger.warning("ignoring %sWITH_POINTS=%r", prefix, with_points)

        month = os.getenv(f"{prefix}MONTH")
        if month:
            try:
                value = int(month)
            except ValueError:
                logger.warning("ignoring %sMONTH=%r", prefix, month)
            else:
                if value >= 1:
                    updates["month"] = value

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path | None = None) -> AppInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)
