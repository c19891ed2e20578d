#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Pytest configuration and shared fixtures.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from pathlib import Path
import tempfile
import shutil

import numpy as np

from hicinspect.analysis.data_structures import ContigInfo, ContigRange


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="hicinspect_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def two_block_matrix():
    """64x64 map with two TADs: 0.8 inside [0, 32) and [32, 64), 0.05 between."""
    size = 64
    matrix = np.full((size, size), 0.05)
    matrix[:32, :32] = 0.8
    matrix[32:, 32:] = 0.8
    return matrix


@pytest.fixture
def two_block_ranges():
    """Two contigs matching the two TADs of two_block_matrix."""
    return [ContigRange(0, 32, 0), ContigRange(32, 64, 1)]


@pytest.fixture
def power_law_matrix():
    """Factory: size x size map with contact = (1 + |i - j|) ** exponent."""
    def _build(size: int, exponent: float) -> np.ndarray:
        idx = np.arange(size)
        distance = np.abs(idx[:, None] - idx[None, :])
        return (1.0 + distance) ** exponent
    return _build


@pytest.fixture
def uniform_matrix():
    """32x32 map of ones."""
    return np.ones((32, 32))


@pytest.fixture
def inversion_matrix():
    """
    20x20 single-contig map with a bright anti-diagonal.

    Contacts decay as 1 / (1 + d) up to distance 6 and sit at a 0.01
    background beyond; the anti-diagonal (i, 19 - i) is 2.0.
    """
    size = 20
    idx = np.arange(size)
    distance = np.abs(idx[:, None] - idx[None, :])
    matrix = np.where(distance < 7, 1.0 / (1.0 + distance), 0.01)
    matrix[idx, size - 1 - idx] = 2.0
    return matrix


@pytest.fixture
def translocation_matrix():
    """
    40x40 map of four 10-pixel contigs with strong contact between the
    first and third contig.
    """
    size = 40
    matrix = np.full((size, size), 0.01)
    for start in range(0, size, 10):
        matrix[start:start + 10, start:start + 10] = 1.0
    matrix[0:10, 20:30] = 1.0
    matrix[20:30, 0:10] = 1.0
    return matrix


@pytest.fixture
def four_contig_ranges():
    """Four 10-pixel contigs tiling a 40-pixel overview."""
    return [ContigRange(i * 10, (i + 1) * 10, i) for i in range(4)]


@pytest.fixture
def four_contigs():
    """Four contigs of 10 texture pixels each."""
    return [
        ContigInfo(name=f"contig_{i + 1}", length=(i + 1) * 100_000,
                   pixel_start=i * 10, pixel_end=(i + 1) * 10)
        for i in range(4)
    ]

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
