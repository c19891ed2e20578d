#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Matrix I/O: contact map loading, contig table parsing and JSON report export.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from ..analysis.data_structures import ContigInfo

logger = logging.getLogger(__name__)


# ============================================================================
#                         CONTACT MAPS
# ============================================================================

def load_contact_matrix(matrix_path: str | Path) -> np.ndarray:
    """
    Load a square overview contact matrix.

    Supported formats:
    - ``.npy``: a single 2-D array
    - ``.npz``: the array stored under ``contacts``, or the first array
    - anything else: whitespace-delimited text readable by ``numpy.loadtxt``

    Args:
        matrix_path: Path to the matrix file

    Returns:
        float64 array of shape (size, size)

    Raises:
        ValueError: If the file does not hold a square 2-D matrix
    """
    matrix_path = Path(matrix_path)
    logger.info(f"Loading contact matrix from {matrix_path}")

    suffix = matrix_path.suffix.lower()
    if suffix == '.npy':
        matrix = np.load(matrix_path, allow_pickle=False)
    elif suffix == '.npz':
        with np.load(matrix_path, allow_pickle=False) as archive:
            if not archive.files:
                raise ValueError(f"No arrays found in {matrix_path}")
            key = 'contacts' if 'contacts' in archive.files else archive.files[0]
            matrix = archive[key]
    else:
        matrix = np.loadtxt(matrix_path, ndmin=2)

    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(
            f"Contact matrix in {matrix_path} must be square, got shape {matrix.shape}"
        )

    logger.info(f"  Loaded {matrix.shape[0]}x{matrix.shape[1]} matrix")
    return matrix


# ============================================================================
#                         CONTIG TABLES
# ============================================================================

def load_contig_table(tsv_path: str | Path) -> list[ContigInfo]:
    """
    Load contigs in display order from a TSV file.

    TSV Format:
    -----------
    name        length     pixel_start    pixel_end
    contig_1    1500000    0              300
    contig_2    820000     300            464

    Args:
        tsv_path: Path to TSV file

    Returns:
        List of ContigInfo objects, in file order

    Raises:
        ValueError: If a data line is malformed
    """
    tsv_path = Path(tsv_path)
    logger.info(f"Loading contig table from {tsv_path}")

    contigs: list[ContigInfo] = []

    with open(tsv_path, 'r') as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith('#'):
                continue

            # Skip header line
            if not contigs and line.lower().startswith('name'):
                continue

            parts = line.split('\t')
            if len(parts) < 4:
                raise ValueError(
                    f"{tsv_path}:{line_num}: expected 4 columns "
                    f"(name, length, pixel_start, pixel_end), got {len(parts)}"
                )

            try:
                length, pixel_start, pixel_end = (int(p) for p in parts[1:4])
            except ValueError:
                raise ValueError(f"{tsv_path}:{line_num}: non-integer length or pixel bounds")

            if pixel_end < pixel_start:
                raise ValueError(f"{tsv_path}:{line_num}: pixel_end before pixel_start")

            contigs.append(ContigInfo(
                name=parts[0],
                length=length,
                pixel_start=pixel_start,
                pixel_end=pixel_end,
            ))

    logger.info(f"  Loaded {len(contigs)} contigs")
    return contigs


# ============================================================================
#                         REPORTS
# ============================================================================

def write_report(report: dict[str, Any], output_path: str | Path) -> Path:
    """
    Write an analysis report as indented JSON.

    Creates the parent directory if needed.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        json.dump(report, f, indent=2)

    logger.info(f"Report written to {output_path}")
    return output_path

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
