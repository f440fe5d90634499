"""
numeric.py – cell → float conversion and min-max scaling

Cells arrive as raw strings.  A malformed (or absent) cell is resolved by a
ParseErrorPolicy:

    zero      → 0.0, the row carries on
    skip_row  → None, the caller drops the row
    fail      → CellParseError
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from .config import ParseErrorPolicy
from .errors import CellParseError, DegenerateDataError

logger = logging.getLogger("flarematch.numeric")


def cell(row: Sequence[str], col: int) -> Optional[str]:
    """Return ``row[col]`` or ``None`` when the row is too short."""
    return row[col] if 0 <= col < len(row) else None


def parse_float(
    value: Optional[str],
    policy: ParseErrorPolicy = ParseErrorPolicy.ZERO,
    *,
    row: int | None = None,
    col: int | None = None,
) -> Optional[float]:
    """
    Parse one cell.  Surrounding whitespace is ignored; an empty or missing
    cell counts as malformed.
    """
    text = "" if value is None else str(value).strip()
    try:
        return float(text)
    except ValueError:
        pass

    if policy is ParseErrorPolicy.FAIL:
        raise CellParseError(text, row=row, col=col)
    if policy is ParseErrorPolicy.SKIP_ROW:
        logger.debug("Unparseable cell %r (row=%s col=%s) – row skipped", text, row, col)
        return None
    return 0.0


def normalize(values: Sequence[float]) -> np.ndarray:
    """
    Min-max scale *values* onto [0, 1].

    Raises DegenerateDataError for an empty input or when every value is the
    same (the scale would divide by zero).
    """
    x = np.asarray(values, dtype=float)
    if x.size == 0:
        raise DegenerateDataError("Cannot normalise an empty predictor vector")

    lo, hi = float(np.min(x)), float(np.max(x))
    span = hi - lo
    if not np.isfinite(span) or span == 0.0:
        raise DegenerateDataError(
            f"Cannot normalise predictor: min={lo} max={hi} (no spread)"
        )
    return (x - lo) / span
