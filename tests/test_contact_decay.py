#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Tests for P(s) contact decay analysis.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import numpy as np
import pytest

from hicinspect.analysis.contact_decay_module import (
    ContactDecayParams,
    ScaffoldGroup,
    compute_contact_decay,
    compute_decay_by_scaffold,
    compute_intra_diagonal_profile,
    default_max_distance,
    format_decay_summary,
)
from hicinspect.analysis.data_structures import ContigRange


class TestDiagonalProfile:
    """Intra-contig diagonal means."""

    def test_profile_ignores_inter_contig_pixels(self, two_block_matrix, two_block_ranges):
        profile = compute_intra_diagonal_profile(two_block_matrix, 64, two_block_ranges, 10)
        assert profile[0] == 0.0
        np.testing.assert_allclose(profile[1:], np.full(10, 0.8))

    def test_distances_beyond_contig_are_zero(self):
        matrix = np.ones((8, 8))
        ranges = [ContigRange(0, 4, 0), ContigRange(4, 8, 1)]
        profile = compute_intra_diagonal_profile(matrix, 8, ranges, 6)
        assert profile[3] == 1.0
        assert profile[4] == 0.0

    def test_default_max_distance(self):
        assert default_max_distance(100) == 50
        assert default_max_distance(5000) == 500


class TestPowerLawFit:
    """Exponent recovery on synthetic maps."""

    @pytest.mark.parametrize("exponent", [-1.0, -1.5])
    def test_recovers_exponent(self, power_law_matrix, exponent):
        """
        Contacts fall off as (1 + d) ** a but are fitted against log10(d), so
        the slope only approaches a on large maps. At 512 pixels it is within
        0.1; at 200 pixels a = -1.5 fits to about -1.38.
        """
        matrix = power_law_matrix(512, exponent)
        result = compute_contact_decay(matrix, 512, [ContigRange(0, 512, 0)])
        assert result.decay_exponent == pytest.approx(exponent, abs=0.1)
        assert result.r_squared > 0.95
        assert result.max_distance == 256

    def test_log_values_match_distances(self, power_law_matrix):
        matrix = power_law_matrix(64, -1.0)
        result = compute_contact_decay(matrix, 64, [ContigRange(0, 64, 0)])
        np.testing.assert_allclose(result.log_distances, np.log10(result.distances))
        np.testing.assert_allclose(result.log_contacts, np.log10(result.mean_contacts))
        assert result.distances[0] == 1

    def test_explicit_max_distance(self, power_law_matrix):
        matrix = power_law_matrix(64, -1.0)
        result = compute_contact_decay(
            matrix, 64, [ContigRange(0, 64, 0)], ContactDecayParams(max_distance=10)
        )
        assert result.distances.size == 10
        assert result.max_distance == 10


class TestDegenerateInput:
    """Inputs that cannot support a fit."""

    def test_uniform_matrix_has_flat_decay(self, uniform_matrix):
        result = compute_contact_decay(uniform_matrix, 32, [ContigRange(0, 32, 0)])
        assert result.decay_exponent == pytest.approx(0.0, abs=1e-12)
        assert result.r_squared == 0.0

    def test_zero_matrix_is_empty(self):
        result = compute_contact_decay(np.zeros((16, 16)), 16, [ContigRange(0, 16, 0)])
        assert result.distances.size == 0
        assert result.decay_exponent == 0.0
        assert result.r_squared == 0.0

    def test_no_ranges(self, uniform_matrix):
        result = compute_contact_decay(uniform_matrix, 32, [])
        assert result.distances.size == 0

    def test_custom_profile_provider(self, uniform_matrix):
        """A profile provider replaces the diagonal scan."""
        def provider(matrix, size, ranges, max_distance):
            return np.array([0.0] + [10.0 ** -k for k in range(1, max_distance + 1)])

        result = compute_contact_decay(
            uniform_matrix, 32, [ContigRange(0, 32, 0)],
            ContactDecayParams(max_distance=4), profile_fn=provider,
        )
        assert result.distances.tolist() == [1.0, 2.0, 3.0, 4.0]


class TestDecayByScaffold:
    """Per-scaffold P(s) fits."""

    def test_one_result_per_usable_group(self, power_law_matrix):
        matrix = power_law_matrix(64, -1.0)
        ranges = [ContigRange(0, 32, 0), ContigRange(32, 63, 1), ContigRange(63, 64, 2)]
        groups = [
            ScaffoldGroup(1, "chr1", [0, 1], color="#ff0000"),
            ScaffoldGroup(2, "chr2", [2]),
        ]
        results = compute_decay_by_scaffold(matrix, 64, ranges, groups)

        assert len(results) == 1
        assert results[0].scaffold_name == "chr1"
        assert results[0].contig_count == 2
        assert results[0].color == "#ff0000"
        assert results[0].decay.decay_exponent < 0

    def test_unknown_order_indices_skipped(self, uniform_matrix):
        results = compute_decay_by_scaffold(
            uniform_matrix, 32, [ContigRange(0, 32, 0)], [ScaffoldGroup(1, "chrX", [7])]
        )
        assert results == []


class TestSummary:
    """Plain-text decay summary."""

    def test_typical_exponent(self, power_law_matrix):
        matrix = power_law_matrix(512, -1.0)
        result = compute_contact_decay(matrix, 512, [ContigRange(0, 512, 0)])
        assert "(typical)" in format_decay_summary(result)

    def test_empty_result(self):
        result = compute_contact_decay(np.zeros((4, 4)), 4, [ContigRange(0, 4, 0)])
        assert format_decay_summary(result) == "P(s) decay: not available"

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
