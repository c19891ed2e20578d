#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Numeric helpers shared by the analysis modules: matrix coercion, clamping,
half-up rounding, log-log regression and row-wise Pearson correlation.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy import stats


@dataclass
class RegressionResult:
    """Ordinary least-squares fit y = slope * x + intercept."""
    slope: float = 0.0
    intercept: float = 0.0
    r_squared: float = 0.0


def as_contact_matrix(contact_map, size: int) -> np.ndarray:
    """
    Return a read-only (size, size) float64 view of a contact map.

    Accepts either a square 2-D array or a flat row-major buffer of length
    ``size * size``. The caller's buffer is never written to.

    Raises:
        ValueError: If the shape does not match ``size``
    """
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")

    matrix = np.asarray(contact_map, dtype=np.float64)
    if matrix.ndim == 1:
        if matrix.size != size * size:
            raise ValueError(
                f"Flat contact map has {matrix.size} values, expected {size * size}"
            )
        matrix = matrix.reshape(size, size)
    elif matrix.ndim == 2:
        if matrix.shape != (size, size):
            raise ValueError(
                f"Contact map shape {matrix.shape} does not match size {size}"
            )
    else:
        raise ValueError(f"Contact map must be 1-D or 2-D, got {matrix.ndim}-D")

    view = matrix.view()
    view.flags.writeable = False
    return view


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to nearest integer, ties toward +infinity."""
    return int(math.floor(value + 0.5))


def linear_regression(x: Sequence[float], y: Sequence[float]) -> RegressionResult:
    """
    Ordinary least-squares regression of y on x.

    Fewer than two points, or no spread in x, yields a zero fit rather than
    an error. R^2 is 0 when y has no variance.
    """
    x_arr = np.asarray(x, dtype=np.float64)
    y_arr = np.asarray(y, dtype=np.float64)

    if x_arr.size < 2 or x_arr.size != y_arr.size:
        return RegressionResult()
    if np.ptp(x_arr) == 0:
        return RegressionResult()

    fit = stats.linregress(x_arr, y_arr)
    r_squared = float(fit.rvalue) ** 2 if np.ptp(y_arr) > 0 else 0.0
    return RegressionResult(
        slope=float(fit.slope),
        intercept=float(fit.intercept),
        r_squared=r_squared,
    )


def pearson_row_correlation(matrix: np.ndarray) -> np.ndarray:
    """
    Pearson correlation between every pair of rows.

    Uses population standard deviations. Pairs involving a zero-variance row
    get 0; the diagonal is always 1.
    """
    size = matrix.shape[0]
    if size == 0:
        return np.zeros((0, 0))

    means = matrix.mean(axis=1)
    centered = matrix - means[:, None]
    stds = np.sqrt((centered * centered).mean(axis=1))

    covariance = centered @ centered.T / max(matrix.shape[1], 1)
    denom = np.outer(stds, stds)
    corr = np.zeros((size, size))
    np.divide(covariance, denom, out=corr, where=denom > 0)
    np.fill_diagonal(corr, 1.0)
    return corr

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
