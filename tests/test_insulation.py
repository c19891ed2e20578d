#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Tests for insulation scores and TAD boundary detection.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import numpy as np
import pytest

from hicinspect.analysis.insulation_module import (
    InsulationParams,
    compute_insulation,
    compute_insulation_scores,
    detect_tad_boundaries,
    normalize_insulation_scores,
)


class TestInsulationScores:
    """Raw insulation profile."""

    def test_first_position_scores_zero(self, two_block_matrix):
        """Position 0 has an empty upstream flank."""
        scores = compute_insulation_scores(two_block_matrix, 64, 8)
        assert scores[0] == 0.0

    def test_inside_tad_scores_intra_level(self, two_block_matrix):
        scores = compute_insulation_scores(two_block_matrix, 64, 8)
        assert scores[16] == pytest.approx(0.8)
        assert scores[48] == pytest.approx(0.8)

    def test_boundary_scores_inter_level(self, two_block_matrix):
        scores = compute_insulation_scores(two_block_matrix, 64, 8)
        assert scores[32] == pytest.approx(0.05)

    def test_flat_buffer_accepted(self, two_block_matrix):
        flat = two_block_matrix.ravel()
        np.testing.assert_allclose(
            compute_insulation_scores(flat, 64, 8),
            compute_insulation_scores(two_block_matrix, 64, 8),
        )

    def test_input_not_modified(self, two_block_matrix):
        before = two_block_matrix.copy()
        compute_insulation(two_block_matrix, 64, InsulationParams(window_size=8))
        np.testing.assert_array_equal(two_block_matrix, before)


class TestNormalization:
    """log2 + min-max normalization."""

    def test_range_is_unit_interval(self, two_block_matrix):
        raw = compute_insulation_scores(two_block_matrix, 64, 8)
        normalized = normalize_insulation_scores(raw)
        assert normalized.min() == pytest.approx(0.0)
        assert normalized.max() == pytest.approx(1.0)

    def test_constant_profile_normalizes_to_zero(self):
        """No spread gives all zeros instead of dividing by zero."""
        normalized = normalize_insulation_scores(np.full(10, 3.0))
        np.testing.assert_array_equal(normalized, np.zeros(10))

    def test_empty_profile(self):
        assert normalize_insulation_scores(np.zeros(0)).size == 0


class TestBoundaryDetection:
    """Local minima with prominence."""

    def test_two_tads_one_boundary(self, two_block_matrix):
        result = compute_insulation(
            two_block_matrix, 64, InsulationParams(window_size=8, boundary_prominence=0.05)
        )
        assert result.boundaries == [32]
        assert len(result.boundary_strengths) == 1
        assert result.boundary_strengths[0] > 0.05

    def test_high_prominence_suppresses_boundary(self, two_block_matrix):
        result = compute_insulation(
            two_block_matrix, 64, InsulationParams(window_size=8, boundary_prominence=0.5)
        )
        assert result.boundaries == []

    def test_plateau_is_not_a_minimum(self):
        scores = np.array([1.0, 0.5, 0.5, 1.0])
        positions, strengths = detect_tad_boundaries(scores, 0.0, 2)
        assert positions == []
        assert strengths == []

    def test_short_profiles_have_no_boundaries(self):
        assert detect_tad_boundaries(np.array([1.0, 0.0]), 0.0, 5) == ([], [])

    def test_boundaries_strictly_increasing(self):
        scores = np.array([1.0, 0.2, 1.0, 0.1, 1.0, 0.3, 1.0])
        positions, _ = detect_tad_boundaries(scores, 0.1, 2)
        assert positions == [1, 3, 5]


class TestEdgeCases:
    """Degenerate input."""

    def test_uniform_matrix_has_no_boundaries(self, uniform_matrix):
        result = compute_insulation(uniform_matrix, 32)
        assert result.boundaries == []

    def test_zero_size(self):
        result = compute_insulation(np.zeros(0), 0)
        assert result.raw_scores.size == 0
        assert result.boundaries == []

    @pytest.mark.parametrize("size", [1, 2, 3, 17])
    def test_all_zero_matrix(self, size):
        result = compute_insulation(np.zeros((size, size)), size)
        np.testing.assert_array_equal(result.raw_scores, np.zeros(size))
        np.testing.assert_array_equal(result.normalized_scores, np.zeros(size))
        assert result.boundaries == []

    def test_zero_window_clamps_to_one(self, two_block_matrix):
        """A zero window scores like a one-pixel window instead of raising."""
        result = compute_insulation(two_block_matrix, 64, InsulationParams(window_size=0))
        expected = compute_insulation_scores(two_block_matrix, 64, 1)
        np.testing.assert_array_equal(result.raw_scores, expected)

    def test_zero_window_on_empty_matrix(self):
        result = compute_insulation(np.zeros((16, 16)), 16, InsulationParams(window_size=0))
        assert result.boundaries == []

    def test_negative_window_raises(self, uniform_matrix):
        with pytest.raises(ValueError):
            compute_insulation(uniform_matrix, 32, InsulationParams(window_size=-1))

    def test_from_config_defaults(self):
        params = InsulationParams.from_config(None)
        assert params.window_size == 10
        assert params.boundary_prominence == 0.1

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
