#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

A/B compartment detection via the dominant eigenvector of the O/E
correlation matrix.

Pipeline:
1. Bin the contact map to reduce size
2. Compute expected contacts at each diagonal distance
3. Compute the observed/expected (O/E) matrix
4. Compute the Pearson correlation matrix of O/E rows
5. Extract the first eigenvector via power iteration
6. Expand back to native resolution and normalize for display

The first eigenvector separates A (active) and B (inactive) chromatin, seen as
a checkerboard in the contact map. Only the top eigenvector is needed, so a
full eigendecomposition is never performed.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .data_structures import CompartmentResult
from .numeric_utils import as_contact_matrix, pearson_row_correlation

logger = logging.getLogger(__name__)

# Fewer bins than this gives an unstable correlation matrix
MIN_BINS_FOR_BINNING = 16


@dataclass
class CompartmentParams:
    """
    Attributes:
        max_iterations: Power iteration cap
        tolerance: Convergence tolerance on ||v_k+1 - v_k||
        bin_size: Coarsening factor; reduced to 1 for small maps
    """
    max_iterations: int = 100
    tolerance: float = 1e-6
    bin_size: int = 4

    @classmethod
    def from_config(cls, section: Optional[Dict[str, Any]]) -> "CompartmentParams":
        section = section or {}
        defaults = cls()
        return cls(
            max_iterations=int(section.get('max_iterations', defaults.max_iterations)),
            tolerance=float(section.get('tolerance', defaults.tolerance)),
            bin_size=int(section.get('bin_size', defaults.bin_size)),
        )


@dataclass
class PowerIterationResult:
    eigenvector: np.ndarray
    eigenvalue: float
    iterations: int


# ============================================================================
#                         PIPELINE STEPS
# ============================================================================

def bin_matrix(contact_map, size: int, bin_size: int) -> Tuple[np.ndarray, int]:
    """
    Average bin_size x bin_size tiles of a square matrix.

    The last row/column of bins may be partial; they are averaged over the
    pixels they actually cover.

    Returns:
        (binned_matrix, binned_size)
    """
    matrix = as_contact_matrix(contact_map, size)
    if bin_size <= 1 or size <= bin_size:
        return matrix.copy(), size

    binned_size = math.ceil(size / bin_size)
    starts = np.arange(0, size, bin_size)
    lengths = np.minimum(starts + bin_size, size) - starts

    sums = np.add.reduceat(np.add.reduceat(matrix, starts, axis=0), starts, axis=1)
    counts = np.outer(lengths, lengths)
    return sums / counts, binned_size


def compute_expected_contacts(contact_map, size: int) -> np.ndarray:
    """expected[d] = mean of contact_map[i, i + d] over the d-th diagonal."""
    matrix = as_contact_matrix(contact_map, size)
    expected = np.zeros(size)
    for d in range(size):
        expected[d] = np.diagonal(matrix, offset=d).mean()
    return expected


def compute_oe_matrix(contact_map, size: int, expected: np.ndarray) -> np.ndarray:
    """oe[i, j] = contact[i, j] / expected[|i - j|], or 0 where expected is 0."""
    matrix = as_contact_matrix(contact_map, size)
    idx = np.arange(size)
    distance = np.abs(idx[:, None] - idx[None, :])

    padded = np.zeros(size)
    usable = min(size, len(expected))
    padded[:usable] = expected[:usable]
    expected_at = padded[distance]

    oe = np.zeros((size, size))
    np.divide(matrix, expected_at, out=oe, where=expected_at > 0)
    return oe


def compute_correlation_matrix(contact_map, size: int) -> np.ndarray:
    """Pearson correlation matrix of the rows of the input matrix."""
    matrix = as_contact_matrix(contact_map, size)
    return pearson_row_correlation(matrix)


def power_iteration(
    matrix,
    size: int,
    max_iterations: int,
    tolerance: float,
) -> PowerIterationResult:
    """
    Dominant eigenvector and eigenvalue by power iteration.

    The start vector is alternating +1/-1 (L2-normalized), never random, so
    identical input always gives bit-identical output.
    """
    if size == 0:
        return PowerIterationResult(eigenvector=np.zeros(0), eigenvalue=0.0, iterations=0)

    m = as_contact_matrix(matrix, size)

    v = np.where(np.arange(size) % 2 == 0, 1.0, -1.0)
    v /= np.linalg.norm(v)

    eigenvalue = 0.0
    iterations = 0

    for iteration in range(max_iterations):
        iterations = iteration + 1

        w = m @ v
        eigenvalue = float(v @ w)

        norm = np.linalg.norm(w)
        if norm == 0:
            break
        w /= norm

        diff = np.linalg.norm(w - v)
        v = w
        if diff < tolerance:
            break

    return PowerIterationResult(eigenvector=v, eigenvalue=eigenvalue, iterations=iterations)


# ============================================================================
#                         TOP-LEVEL PIPELINE
# ============================================================================

def normalize_eigenvector(eigenvector: np.ndarray) -> np.ndarray:
    """Map [-maxAbs, +maxAbs] onto [0, 1]; a zero vector maps to uniform 0.5."""
    ev = np.asarray(eigenvector, dtype=np.float64)
    if ev.size == 0:
        return np.zeros(0)

    max_abs = np.abs(ev).max()
    if max_abs == 0:
        return np.full(ev.size, 0.5)
    return np.clip((ev / max_abs + 1.0) / 2.0, 0.0, 1.0)


def compute_compartments(
    contact_map,
    size: int,
    params: Optional[CompartmentParams] = None,
) -> CompartmentResult:
    """Compute the A/B compartment eigenvector from the contact map."""
    params = params or CompartmentParams()

    if size == 0:
        return CompartmentResult(
            eigenvector=np.zeros(0),
            normalized_eigenvector=np.zeros(0),
            iterations=0,
            eigenvalue=0.0,
        )

    bin_size = max(1, params.bin_size)
    if size / bin_size < MIN_BINS_FOR_BINNING:
        bin_size = 1

    binned, binned_size = bin_matrix(contact_map, size, bin_size)
    expected = compute_expected_contacts(binned, binned_size)
    oe = compute_oe_matrix(binned, binned_size, expected)
    corr = compute_correlation_matrix(oe, binned_size)

    power = power_iteration(corr, binned_size, params.max_iterations, params.tolerance)

    bin_index = np.minimum(np.arange(size) // bin_size, binned_size - 1)
    eigenvector = power.eigenvector[bin_index]
    normalized = normalize_eigenvector(eigenvector)

    logger.info(
        f"Compartments: eigenvalue={power.eigenvalue:.4f} after {power.iterations} "
        f"iterations (bin_size={bin_size}, bins={binned_size})"
    )

    return CompartmentResult(
        eigenvector=eigenvector,
        normalized_eigenvector=normalized,
        iterations=power.iterations,
        eigenvalue=power.eigenvalue,
    )

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
