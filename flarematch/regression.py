"""
regression.py – target ~ normalised predictor, ordinary least squares

The fit is a *simple* regression: only the first predictor of each sample is
used, min-max scaled to [0, 1] before fitting.  Further predictor columns are
extracted so they are available to the caller, nothing more.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
from sklearn.linear_model import LinearRegression
from sklearn.metrics import r2_score

from .config import PREVIEW_LIMIT, ParseErrorPolicy
from .errors import DegenerateDataError
from .numeric import normalize, parse_float

logger = logging.getLogger("flarematch.regression")


@dataclass(frozen=True)
class RegressionSample:
    target: float
    predictors: Tuple[float, ...]


@dataclass(frozen=True)
class RegressionResult:
    alpha: float
    beta: float
    r_squared: float
    n_samples: int
    # (target, normalised predictor) for the first few samples
    preview: Tuple[Tuple[float, float], ...] = field(default_factory=tuple)

    def predict(self, x_norm: float) -> float:
        return self.alpha + self.beta * x_norm


def extract_samples(
    joined: Sequence[Sequence[str]],
    target_col: int,
    predictor_cols: Sequence[int],
    on_parse_error: ParseErrorPolicy = ParseErrorPolicy.ZERO,
) -> List[RegressionSample]:
    """
    Build one sample per joined row that reaches *target_col*.

    Predictor columns past the end of a short row are left out, so such a
    sample carries a shorter predictor tuple.  Under ``skip_row`` a row with
    any malformed cell is dropped altogether.
    """
    samples: List[RegressionSample] = []
    for i, row in enumerate(joined):
        if len(row) <= target_col:
            continue
        y = parse_float(row[target_col], on_parse_error, row=i, col=target_col)
        if y is None:
            continue

        xs: list[float] = []
        for col in predictor_cols:
            if col >= len(row):
                continue
            x = parse_float(row[col], on_parse_error, row=i, col=col)
            if x is None:
                break
            xs.append(x)
        else:
            samples.append(RegressionSample(y, tuple(xs)))

    logger.info("Extracted %d regression samples from %d joined rows", len(samples), len(joined))
    return samples


def fit_regression(
    samples: Sequence[RegressionSample], preview_limit: int = PREVIEW_LIMIT
) -> RegressionResult:
    """
    Fit ``target = α + β · x'`` where x' is the min-max scaled first predictor.

    Raises DegenerateDataError when there is nothing to fit, a sample has no
    predictor, the predictor has no spread, or the target is constant (R² is
    undefined then; a poor fit with R² = 0 is returned normally).
    """
    if not samples:
        raise DegenerateDataError("Insufficient data for regression analysis: no samples")
    if any(len(s.predictors) == 0 for s in samples):
        raise DegenerateDataError("Insufficient data for regression analysis: empty predictor vector")

    y = np.array([s.target for s in samples], dtype=float)
    x = normalize([s.predictors[0] for s in samples])

    ss_total = float(np.sum((y - y.mean()) ** 2))
    if ss_total == 0.0 or not np.isfinite(ss_total):
        raise DegenerateDataError("Cannot compute R²: target has no variance")

    model = LinearRegression().fit(x.reshape(-1, 1), y)
    alpha = float(model.intercept_)
    beta = float(model.coef_[0])
    r_squared = float(r2_score(y, alpha + beta * x))

    preview = tuple((float(yi), float(xi)) for yi, xi in zip(y[:preview_limit], x[:preview_limit]))
    for i, (yi, xi) in enumerate(preview):
        logger.debug("y[%d]=%.4f  x'[%d]=%.4f", i, yi, i, xi)

    logger.info("Fitted α=%.4f β=%.4f R²=%.4f on %d samples", alpha, beta, r_squared, len(y))
    return RegressionResult(alpha, beta, r_squared, len(y), preview)
