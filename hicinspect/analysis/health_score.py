#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Composite assembly health score (0-100).

Four equally weighted components:
  * Contiguity - N50 relative to total assembly length
  * Decay quality - P(s) exponent proximity to the ideal Hi-C value
  * Integrity - penalty for detected misassemblies
  * Compartments - A/B eigenvalue strength

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from typing import Optional

from .data_structures import HealthComponents, HealthScoreInput, HealthScoreResult
from .numeric_utils import clamp, round_half_up

logger = logging.getLogger(__name__)

IDEAL_DECAY_EXPONENT = -1.15
MAX_DECAY_DEVIATION = 0.85
MISASSEMBLY_PENALTY = 10.0
NEUTRAL_SCORE = 50.0  # Used when a Hi-C signal has not been computed


def score_contiguity(n50: float, total_length: float, contig_count: int) -> float:
    """N50 / total length scaled by contig count; a single contig scores 100."""
    if total_length <= 0 or contig_count <= 0:
        return 0.0
    return clamp((n50 / total_length) * contig_count * 100.0, 0.0, 100.0)


def score_decay_quality(exponent: Optional[float]) -> float:
    if exponent is None:
        return NEUTRAL_SCORE
    distance = abs(exponent - IDEAL_DECAY_EXPONENT)
    return clamp(100.0 - (distance / MAX_DECAY_DEVIATION) * 100.0, 0.0, 100.0)


def score_integrity(misassembly_count: int) -> float:
    return clamp(100.0 - misassembly_count * MISASSEMBLY_PENALTY, 0.0, 100.0)


def score_compartments(eigenvalue: Optional[float]) -> float:
    if eigenvalue is None:
        return NEUTRAL_SCORE
    return clamp(eigenvalue * 200.0, 0.0, 100.0)


def compute_health_score(health_input: HealthScoreInput) -> HealthScoreResult:
    """Compute the composite 0-100 health score."""
    components = HealthComponents(
        contiguity=score_contiguity(
            health_input.n50, health_input.total_length, health_input.contig_count
        ),
        decay_quality=score_decay_quality(health_input.decay_exponent),
        integrity=score_integrity(health_input.misassembly_count),
        compartments=score_compartments(health_input.eigenvalue),
    )

    mean = (
        components.contiguity
        + components.decay_quality
        + components.integrity
        + components.compartments
    ) / 4.0
    overall = int(clamp(round_half_up(mean), 0, 100))

    logger.info(
        f"Health score {overall}/100 (contiguity={components.contiguity:.1f}, "
        f"decay={components.decay_quality:.1f}, integrity={components.integrity:.1f}, "
        f"compartments={components.compartments:.1f})"
    )
    return HealthScoreResult(overall=overall, components=components)

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
