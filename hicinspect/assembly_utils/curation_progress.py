#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Curation progress: how closely the current contig order agrees with a
reference order, and whether successive edits are moving it closer.

Agreement is measured two ways:
- Kendall's tau between the reference ranks of the contigs in display order
- The longest run of adjacent contigs that also sit adjacent, in the same
  direction, in the reference

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import math
import time
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional, Sequence

from scipy import stats

logger = logging.getLogger(__name__)

# Tau must rise by more than this between snapshots to count as improving
IMPROVEMENT_THRESHOLD = 0.001


@dataclass
class ProgressScore:
    """
    Ordering agreement snapshot.

    Attributes:
        kendall_tau: Rank correlation against the reference (-1 to 1)
        longest_run: Longest run of contigs in reference order
        longest_run_pct: longest_run as a percentage of total_contigs
        total_contigs: Contigs in the current order
        operation_count: Curation operations applied so far
        timestamp: Seconds since the epoch when computed
    """
    kendall_tau: float
    longest_run: int
    longest_run_pct: float
    total_contigs: int
    operation_count: int = 0
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProgressTrend:
    """Change in ordering agreement between two snapshots."""
    current: ProgressScore
    previous: Optional[ProgressScore]
    tau_delta: float
    improving: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'current': self.current.to_dict(),
            'previous': self.previous.to_dict() if self.previous else None,
            'tau_delta': self.tau_delta,
            'improving': self.improving,
        }


def ordering_kendall_tau(current_order: Sequence[int], reference_order: Sequence[int]) -> float:
    """
    Kendall's tau of the current order against the reference.

    Contigs missing from the reference are skipped. Fewer than two comparable
    contigs give 1.0, since there is nothing out of order.
    """
    reference_rank = {contig: rank for rank, contig in enumerate(reference_order)}
    ranks = [reference_rank[c] for c in current_order if c in reference_rank]

    if len(ranks) <= 1:
        return 1.0

    tau, _ = stats.kendalltau(list(range(len(ranks))), ranks)
    if math.isnan(tau):
        return 0.0
    return float(tau)


def longest_correct_run(current_order: Sequence[int], reference_order: Sequence[int]) -> int:
    """
    Length of the longest stretch of the current order whose neighbours are
    consecutive, ascending, in the reference.
    """
    if not current_order or not reference_order:
        return 0

    reference_rank = {contig: rank for rank, contig in enumerate(reference_order)}

    longest = 0
    current = 0
    previous_rank = None
    for contig in current_order:
        rank = reference_rank.get(contig)
        if rank is not None and previous_rank is not None and rank == previous_rank + 1:
            current += 1
        else:
            current = 1
        longest = max(longest, current)
        previous_rank = rank

    return longest


def compute_progress(
    current_order: Sequence[int],
    reference_order: Sequence[int],
    operation_count: int = 0,
) -> ProgressScore:
    """Score the current contig order against a reference order."""
    tau = ordering_kendall_tau(current_order, reference_order)
    run = longest_correct_run(current_order, reference_order)
    total = len(current_order)

    score = ProgressScore(
        kendall_tau=tau,
        longest_run=run,
        longest_run_pct=(run / total) * 100 if total > 0 else 0.0,
        total_contigs=total,
        operation_count=operation_count,
    )

    logger.debug(
        f"Curation progress: tau={tau:.3f}, longest run {run}/{total} "
        f"after {operation_count} operations"
    )
    return score


def compute_trend(current: ProgressScore, previous: Optional[ProgressScore]) -> ProgressTrend:
    """Compare two snapshots; the first snapshot has no trend."""
    tau_delta = current.kendall_tau - previous.kendall_tau if previous else 0.0
    return ProgressTrend(
        current=current,
        previous=previous,
        tau_delta=tau_delta,
        improving=tau_delta > IMPROVEMENT_THRESHOLD,
    )

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
