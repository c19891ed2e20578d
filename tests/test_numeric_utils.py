#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Tests for shared numeric helpers.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import numpy as np
import pytest

from hicinspect.analysis.numeric_utils import (
    as_contact_matrix,
    clamp,
    linear_regression,
    pearson_row_correlation,
    round_half_up,
)


class TestContactMatrixView:
    """Input normalization for contact maps."""

    def test_flat_buffer_reshaped(self):
        view = as_contact_matrix(np.arange(9.0), 3)
        assert view.shape == (3, 3)
        assert view[1, 2] == 5.0

    def test_view_is_read_only(self):
        view = as_contact_matrix(np.ones((4, 4)), 4)
        with pytest.raises(ValueError):
            view[0, 0] = 2.0

    def test_wrong_flat_length_raises(self):
        with pytest.raises(ValueError):
            as_contact_matrix(np.ones(10), 3)

    def test_wrong_shape_raises(self):
        with pytest.raises(ValueError):
            as_contact_matrix(np.ones((3, 4)), 3)


class TestRounding:
    """Rounding and clamping."""

    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4

    def test_negative_half_rounds_toward_positive(self):
        assert round_half_up(-2.5) == -2

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0
        assert clamp(2, 0, 3) == 2


class TestLinearRegression:
    """OLS fit with degenerate-input guards."""

    def test_exact_line(self):
        fit = linear_regression([0, 1, 2, 3], [1, 3, 5, 7])
        assert fit.slope == pytest.approx(2.0)
        assert fit.intercept == pytest.approx(1.0)
        assert fit.r_squared == pytest.approx(1.0)

    def test_single_point_gives_zero_fit(self):
        fit = linear_regression([1.0], [2.0])
        assert (fit.slope, fit.intercept, fit.r_squared) == (0.0, 0.0, 0.0)

    def test_no_spread_in_x(self):
        fit = linear_regression([2.0, 2.0, 2.0], [1.0, 2.0, 3.0])
        assert fit.slope == 0.0

    def test_flat_y_has_zero_r_squared(self):
        fit = linear_regression([1.0, 2.0, 3.0], [4.0, 4.0, 4.0])
        assert fit.slope == pytest.approx(0.0)
        assert fit.r_squared == 0.0


class TestPearsonCorrelation:
    """Row-wise correlation."""

    def test_perfectly_correlated_rows(self):
        matrix = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [3.0, 2.0, 1.0]])
        corr = pearson_row_correlation(matrix)
        assert corr[0, 1] == pytest.approx(1.0)
        assert corr[0, 2] == pytest.approx(-1.0)

    def test_zero_variance_row(self):
        matrix = np.array([[1.0, 1.0, 1.0], [1.0, 2.0, 3.0]])
        corr = pearson_row_correlation(matrix)
        assert corr[0, 1] == 0.0
        assert corr[0, 0] == 1.0

    def test_matches_numpy(self):
        rng = np.random.default_rng(7)
        matrix = rng.random((6, 10))
        np.testing.assert_allclose(pearson_row_correlation(matrix), np.corrcoef(matrix), atol=1e-12)

    def test_wide_matrix_stays_in_range(self):
        """Covariance averages over columns, not rows."""
        matrix = np.array([[1.0, 2.0, 3.0, 4.0], [4.0, 3.0, 2.0, 1.0]])
        corr = pearson_row_correlation(matrix)
        assert corr[0, 1] == pytest.approx(-1.0)
        assert corr[1, 0] == pytest.approx(-1.0)

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
