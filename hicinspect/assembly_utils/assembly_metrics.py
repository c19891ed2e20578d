#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Assembly summary metrics (N50/L50, N90/L90, length statistics) for the
current contig order. These feed the contiguity component of the health
score.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from .contig_layout import ContigInfo

logger = logging.getLogger(__name__)


@dataclass
class AssemblyMetrics:
    """Contiguity snapshot of an assembly."""
    total_length: int = 0
    contig_count: int = 0
    n50: int = 0
    l50: int = 0
    n90: int = 0
    l90: int = 0
    longest_contig: int = 0
    shortest_contig: int = 0
    mean_length: float = 0.0
    median_length: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compute_n_stat(
    sorted_lengths: Sequence[int],
    total_length: int,
    fraction: float,
) -> Tuple[int, int]:
    """
    N-statistic and L-statistic from lengths sorted in descending order.

    Walks from the longest contig down until the running total reaches
    ``fraction * total_length``.

    Returns:
        (n_stat, l_stat)
    """
    if not sorted_lengths:
        return 0, 0

    threshold = fraction * total_length
    cumulative = 0
    for i, length in enumerate(sorted_lengths):
        cumulative += length
        if cumulative >= threshold:
            return length, i + 1

    return sorted_lengths[-1], len(sorted_lengths)


def calculate_metrics(
    contigs: Sequence[ContigInfo],
    contig_order: Sequence[int],
) -> AssemblyMetrics:
    """Assembly metrics over the contigs in ``contig_order``."""
    if not contig_order:
        return AssemblyMetrics()

    lengths: List[int] = [contigs[i].length for i in contig_order]
    total = sum(lengths)
    sorted_lengths = sorted(lengths, reverse=True)

    n50, l50 = compute_n_stat(sorted_lengths, total, 0.5)
    n90, l90 = compute_n_stat(sorted_lengths, total, 0.9)

    return AssemblyMetrics(
        total_length=total,
        contig_count=len(lengths),
        n50=n50,
        l50=l50,
        n90=n90,
        l90=l90,
        longest_contig=sorted_lengths[0],
        shortest_contig=sorted_lengths[-1],
        mean_length=total / len(lengths),
        median_length=float(np.median(lengths)),
    )

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
