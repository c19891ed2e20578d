#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Contact frequency decay P(s) curve analysis.

Computes the mean contact frequency as a function of genomic distance
(diagonal offset), fits a power law in log-log space and reports the decay
exponent. For well-assembled Hi-C data the exponent is typically -0.8 to -1.5.

The per-distance profile comes from a pluggable provider; the default,
``compute_intra_diagonal_profile``, averages only intra-contig pixels so that
inter-contig junctions do not bias the curve.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from .data_structures import ContactDecayResult, ContigRange
from .numeric_utils import as_contact_matrix, linear_regression

logger = logging.getLogger(__name__)

MAX_DEFAULT_DISTANCE = 500

# Typical exponent band for a well-assembled Hi-C map
TYPICAL_EXPONENT_RANGE = (-1.5, -0.8)

# (contact_map, size, contig_ranges, max_distance) -> profile of length max_distance + 1
ProfileProvider = Callable[[np.ndarray, int, Sequence[ContigRange], int], np.ndarray]


@dataclass
class ContactDecayParams:
    """
    Attributes:
        max_distance: Largest diagonal distance to include; None means
            min(size // 2, 500)
        min_count_for_fit: Reserved minimum sample count per distance
    """
    max_distance: Optional[int] = None
    min_count_for_fit: int = 10

    @classmethod
    def from_config(cls, section: Optional[Dict[str, Any]]) -> "ContactDecayParams":
        section = section or {}
        max_distance = section.get('max_distance')
        return cls(
            max_distance=int(max_distance) if max_distance is not None else None,
            min_count_for_fit=int(section.get('min_count_for_fit', 10)),
        )


@dataclass
class ScaffoldGroup:
    """A named scaffold (chromosome) made of contigs in display order."""
    scaffold_id: int
    name: str
    order_indices: List[int] = field(default_factory=list)
    color: Optional[str] = None


@dataclass
class ScaffoldDecayResult:
    """P(s) fit restricted to one scaffold's contigs."""
    scaffold_id: int
    scaffold_name: str
    contig_count: int
    decay: ContactDecayResult
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scaffold_id": self.scaffold_id,
            "scaffold_name": self.scaffold_name,
            "color": self.color,
            "contig_count": self.contig_count,
            "decay": self.decay.to_dict(),
        }


def compute_intra_diagonal_profile(
    contact_map,
    size: int,
    contig_ranges: Sequence[ContigRange],
    max_distance: int,
) -> np.ndarray:
    """
    Mean intra-contig intensity at each diagonal distance.

    Returns:
        Array of length max_distance + 1 where profile[d] is the mean over all
        pixel pairs (p, p + d) lying inside the same contig; 0 where no pair
        exists. profile[0] is always 0.
    """
    matrix = as_contact_matrix(contact_map, size)
    sums = np.zeros(max_distance + 1)
    counts = np.zeros(max_distance + 1)

    for contig_range in contig_ranges:
        start = max(0, contig_range.start)
        end = min(size, contig_range.end)
        if end - start < 2:
            continue
        block = matrix[start:end, start:end]
        for d in range(1, min(max_distance, end - start - 1) + 1):
            diagonal = np.diagonal(block, offset=-d)
            sums[d] += diagonal.sum()
            counts[d] += diagonal.size

    profile = np.zeros(max_distance + 1)
    np.divide(sums, counts, out=profile, where=counts > 0)
    return profile


def default_max_distance(size: int) -> int:
    return min(size // 2, MAX_DEFAULT_DISTANCE)


def compute_contact_decay(
    contact_map,
    size: int,
    contig_ranges: Sequence[ContigRange],
    params: Optional[ContactDecayParams] = None,
    profile_fn: Optional[ProfileProvider] = None,
) -> ContactDecayResult:
    """
    Compute the P(s) curve and fit its power-law exponent.

    Only distances with a positive mean contact enter the fit. With fewer than
    two usable distances the exponent and R^2 are both 0.
    """
    params = params or ContactDecayParams()
    max_d = params.max_distance if params.max_distance is not None else default_max_distance(size)
    max_d = max(0, max_d)

    if size == 0 or not contig_ranges:
        return ContactDecayResult.empty(max_d)

    provider = profile_fn or compute_intra_diagonal_profile
    profile = np.asarray(provider(contact_map, size, contig_ranges, max_d), dtype=np.float64)

    distances = np.arange(1, min(max_d, profile.size - 1) + 1)
    means = profile[distances]
    keep = means > 0
    distances = distances[keep].astype(np.float64)
    means = means[keep].copy()

    log_distances = np.log10(distances)
    log_contacts = np.log10(means)
    fit = linear_regression(log_distances, log_contacts)

    logger.debug(
        f"Contact decay: {distances.size} distances, exponent={fit.slope:.3f}, "
        f"R^2={fit.r_squared:.3f}"
    )

    return ContactDecayResult(
        distances=distances,
        mean_contacts=means,
        log_distances=log_distances,
        log_contacts=log_contacts,
        decay_exponent=fit.slope,
        r_squared=fit.r_squared,
        max_distance=max_d,
    )


def compute_decay_by_scaffold(
    contact_map,
    size: int,
    contig_ranges: Sequence[ContigRange],
    groups: Sequence[ScaffoldGroup],
    params: Optional[ContactDecayParams] = None,
    profile_fn: Optional[ProfileProvider] = None,
) -> List[ScaffoldDecayResult]:
    """
    Fit a separate P(s) curve for each scaffold group.

    Ranges spanning a single pixel are ignored; groups left with no ranges
    are skipped.
    """
    range_by_order = {r.order_index: r for r in contig_ranges}
    results: List[ScaffoldDecayResult] = []

    for group in groups:
        group_ranges = [
            range_by_order[idx]
            for idx in group.order_indices
            if idx in range_by_order and range_by_order[idx].span > 1
        ]
        if not group_ranges:
            logger.debug(f"Scaffold {group.name}: no usable contig ranges, skipped")
            continue

        decay = compute_contact_decay(contact_map, size, group_ranges, params, profile_fn)
        results.append(ScaffoldDecayResult(
            scaffold_id=group.scaffold_id,
            scaffold_name=group.name,
            contig_count=len(group_ranges),
            decay=decay,
            color=group.color,
        ))

    return results


def format_decay_summary(result: ContactDecayResult) -> str:
    """One-line plain-text summary of a decay fit."""
    if result.distances.size == 0:
        return "P(s) decay: not available"

    low, high = TYPICAL_EXPONENT_RANGE
    in_range = low <= result.decay_exponent <= high
    status = "typical" if in_range else "atypical"
    return (
        f"P(s) exponent {result.decay_exponent:.2f} ({status}), "
        f"R^2 {result.r_squared:.3f}, range 1-{result.max_distance} px"
    )

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
