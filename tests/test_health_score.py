#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Tests for the composite assembly health score.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from hicinspect.analysis.data_structures import HealthScoreInput
from hicinspect.analysis.health_score import (
    NEUTRAL_SCORE,
    compute_health_score,
    score_compartments,
    score_contiguity,
    score_decay_quality,
    score_integrity,
)


class TestComponents:
    """Individual sub-scores."""

    def test_single_contig_is_fully_contiguous(self):
        assert score_contiguity(1_000_000, 1_000_000, 1) == 100.0

    def test_contiguity_guards_empty_assembly(self):
        assert score_contiguity(0, 0, 0) == 0.0

    def test_contiguity_capped(self):
        assert score_contiguity(600, 1000, 10) == 100.0

    def test_ideal_decay_exponent(self):
        assert score_decay_quality(-1.15) == pytest.approx(100.0)

    def test_decay_far_from_ideal(self):
        assert score_decay_quality(-2.0) == pytest.approx(0.0, abs=1e-9)
        assert score_decay_quality(0.5) == 0.0

    def test_missing_decay_is_neutral(self):
        assert score_decay_quality(None) == NEUTRAL_SCORE

    def test_integrity_penalty(self):
        assert score_integrity(0) == 100.0
        assert score_integrity(3) == 70.0
        assert score_integrity(15) == 0.0

    def test_compartment_strength(self):
        assert score_compartments(0.25) == 50.0
        assert score_compartments(2.0) == 100.0
        assert score_compartments(-1.0) == 0.0
        assert score_compartments(None) == NEUTRAL_SCORE


class TestOverall:
    """Mean of the four components."""

    def test_perfect_assembly(self):
        result = compute_health_score(HealthScoreInput(
            n50=1_000_000, total_length=1_000_000, contig_count=1,
            decay_exponent=-1.15, misassembly_count=0, eigenvalue=0.5,
        ))
        assert result.overall == 100

    def test_unknown_hic_signals(self):
        result = compute_health_score(HealthScoreInput(
            n50=1_000_000, total_length=1_000_000, contig_count=1,
        ))
        assert result.components.decay_quality == NEUTRAL_SCORE
        assert result.components.compartments == NEUTRAL_SCORE
        assert result.overall == 75

    def test_half_rounds_up(self):
        result = compute_health_score(HealthScoreInput(
            n50=50, total_length=100, contig_count=1, eigenvalue=0.25,
        ))
        # (50 + 50 + 100 + 50) / 4 = 62.5
        assert result.overall == 63

    def test_overall_is_int_in_range(self):
        result = compute_health_score(HealthScoreInput(
            n50=1, total_length=10_000, contig_count=2,
            decay_exponent=3.0, misassembly_count=50, eigenvalue=-5.0,
        ))
        assert isinstance(result.overall, int)
        assert 0 <= result.overall <= 100

    def test_to_dict(self):
        result = compute_health_score(HealthScoreInput(
            n50=100, total_length=100, contig_count=1,
        ))
        data = result.to_dict()
        assert data["overall"] == result.overall
        assert set(data["components"]) == {"contiguity", "decay_quality", "integrity", "compartments"}

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
