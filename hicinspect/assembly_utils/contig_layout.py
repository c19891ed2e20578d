#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Contig layout: mapping the current display order onto overview pixel ranges.

Contigs occupy consecutive spans of the full-resolution texture in display
order; the contact matrix handed to the analyses is an overview of that
texture, so each contig's span is rescaled to overview pixels.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from typing import List, Sequence

from ..analysis.data_structures import ContigInfo, ContigRange
from ..analysis.numeric_utils import round_half_up

logger = logging.getLogger(__name__)


def build_contig_ranges(
    contigs: Sequence[ContigInfo],
    contig_order: Sequence[int],
    texture_size: int,
    overview_size: int,
) -> List[ContigRange]:
    """
    Overview pixel range for each contig in display order.

    Must be recomputed whenever the contig order changes.
    """
    if texture_size <= 0:
        raise ValueError(f"texture_size must be positive, got {texture_size}")

    ranges: List[ContigRange] = []
    accumulated = 0
    for order_index, contig_id in enumerate(contig_order):
        contig = contigs[contig_id]
        start = round_half_up(accumulated / texture_size * overview_size)
        accumulated += contig.pixel_length
        end = round_half_up(accumulated / texture_size * overview_size)
        ranges.append(ContigRange(start=start, end=end, order_index=order_index))

    return ranges


def texture_size_of(contigs: Sequence[ContigInfo], contig_order: Sequence[int]) -> int:
    """Total texture pixels covered by the ordered contigs."""
    return sum(contigs[i].pixel_length for i in contig_order)

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
