#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Misassembly detection by fusing TAD boundaries and compartment switches.

TAD boundaries and compartment sign-changes that fall inside a contig (away
from its edges) suggest the contig may be chimeric. This module:

1. Collects internal signals from the insulation and compartment results
2. Merges a TAD boundary and a compartment switch that sit close together in
   the same contig into a single 'both' flag
3. Converts flags into cut suggestions in each contig's native pixel space
4. Scores each suggestion's confidence from the TAD, compartment and decay
   signals

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import dataclasses
import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .data_structures import (
    CompartmentResult,
    ConfidenceComponents,
    ConfidenceLevel,
    ContigInfo,
    ContigRange,
    CutConfidence,
    CutSuggestion,
    InsulationResult,
    MisassemblyFlag,
    MisassemblyReason,
    MisassemblyResult,
    MisassemblySummary,
)
from .numeric_utils import clamp, round_half_up

logger = logging.getLogger(__name__)

# Confidence weights and level cut-offs
TAD_WEIGHT = 0.5
COMPARTMENT_WEIGHT = 0.3
DECAY_WEIGHT = 0.2
HIGH_CONFIDENCE = 0.7
MEDIUM_CONFIDENCE = 0.4


@dataclass
class MisassemblyParams:
    """
    Attributes:
        edge_margin: Minimum pixels from a contig edge for a signal to count
            as internal
        merge_radius: Maximum pixel distance to merge a TAD boundary with a
            compartment switch
    """
    edge_margin: int = 2
    merge_radius: int = 3

    @classmethod
    def from_config(cls, section: Optional[Dict[str, Any]]) -> "MisassemblyParams":
        section = section or {}
        return cls(
            edge_margin=int(section.get('edge_margin', 2)),
            merge_radius=int(section.get('merge_radius', 3)),
        )


@dataclass
class _RawSignal:
    pixel: int
    order_index: int
    kind: str  # 'tad' or 'compartment'
    strength: float


# ============================================================================
#                         HELPERS
# ============================================================================

def _find_owning_range(pixel: int, ranges: Sequence[ContigRange]) -> Optional[ContigRange]:
    for contig_range in ranges:
        if contig_range.contains(pixel):
            return contig_range
    return None


def _is_internal(pixel: int, contig_range: ContigRange, margin: int) -> bool:
    return (pixel - contig_range.start) >= margin and (contig_range.end - pixel) > margin


def _collect_signals(
    insulation: InsulationResult,
    compartments: CompartmentResult,
    valid_ranges: Sequence[ContigRange],
    edge_margin: int,
) -> List[_RawSignal]:
    signals: List[_RawSignal] = []

    for boundary, strength in zip(insulation.boundaries, insulation.boundary_strengths):
        owner = _find_owning_range(boundary, valid_ranges)
        if owner is not None and _is_internal(boundary, owner, edge_margin):
            signals.append(_RawSignal(boundary, owner.order_index, 'tad', float(strength)))

    ev = np.asarray(compartments.eigenvector, dtype=np.float64)
    if ev.size > 1:
        switches = np.nonzero(ev[1:] * ev[:-1] < 0)[0] + 1
        for pixel in switches.tolist():
            owner = _find_owning_range(pixel, valid_ranges)
            if owner is not None and _is_internal(pixel, owner, edge_margin):
                delta = abs(float(ev[pixel] - ev[pixel - 1]))
                signals.append(_RawSignal(pixel, owner.order_index, 'compartment', delta))

    return signals


def _merge_signals(signals: List[_RawSignal], merge_radius: int) -> List[MisassemblyFlag]:
    """
    Greedy pairing of TAD and compartment signals.

    Signals are visited in collection order and each takes its nearest
    still-unmerged partner of the other type in the same contig. This is not
    a globally optimal matching.
    """
    flags: List[MisassemblyFlag] = []
    merged = set()

    for a, signal_a in enumerate(signals):
        if a in merged:
            continue

        best_partner = -1
        best_distance = math.inf
        for b, signal_b in enumerate(signals):
            if b == a or b in merged:
                continue
            if signal_b.order_index != signal_a.order_index or signal_b.kind == signal_a.kind:
                continue
            distance = abs(signal_b.pixel - signal_a.pixel)
            if distance <= merge_radius and distance < best_distance:
                best_partner = b
                best_distance = distance

        if best_partner >= 0:
            merged.add(a)
            merged.add(best_partner)
            signal_b = signals[best_partner]
            flags.append(MisassemblyFlag(
                order_index=signal_a.order_index,
                overview_pixel=round_half_up((signal_a.pixel + signal_b.pixel) / 2),
                reason=MisassemblyReason.BOTH,
                strength=signal_a.strength + signal_b.strength,
            ))
        else:
            reason = (
                MisassemblyReason.TAD_BOUNDARY if signal_a.kind == 'tad'
                else MisassemblyReason.COMPARTMENT_SWITCH
            )
            flags.append(MisassemblyFlag(
                order_index=signal_a.order_index,
                overview_pixel=signal_a.pixel,
                reason=reason,
                strength=signal_a.strength,
            ))

    return flags


# ============================================================================
#                         DETECTION
# ============================================================================

def detect_misassemblies(
    insulation: InsulationResult,
    compartments: CompartmentResult,
    contig_ranges: Sequence[ContigRange],
    params: Optional[MisassemblyParams] = None,
) -> MisassemblyResult:
    """
    Detect potential misassemblies from insulation and compartment results.

    Contigs shorter than ``2 * edge_margin + 1`` pixels cannot hold an
    internal signal and are ignored.
    """
    params = params or MisassemblyParams()
    min_span = 2 * params.edge_margin + 1
    valid_ranges = [r for r in contig_ranges if r.span >= min_span]

    signals = _collect_signals(insulation, compartments, valid_ranges, params.edge_margin)
    flags = _merge_signals(signals, params.merge_radius)

    summary = MisassemblySummary(total=len(flags))
    flagged = set()
    for flag in flags:
        flagged.add(flag.order_index)
        if flag.reason == MisassemblyReason.TAD_BOUNDARY:
            summary.tad_only += 1
        elif flag.reason == MisassemblyReason.COMPARTMENT_SWITCH:
            summary.compartment_only += 1
        else:
            summary.both += 1

    logger.info(
        f"Misassembly: {summary.total} flags in {len(flagged)} contigs "
        f"(tad={summary.tad_only}, compartment={summary.compartment_only}, "
        f"both={summary.both})"
    )

    return MisassemblyResult(flags=flags, flagged_contigs=flagged, summary=summary)


def misassembly_flags_by_contig(result: MisassemblyResult) -> Dict[int, List[MisassemblyFlag]]:
    """Group flags by order index."""
    grouped: Dict[int, List[MisassemblyFlag]] = defaultdict(list)
    for flag in result.flags:
        grouped[flag.order_index].append(flag)
    return dict(grouped)


# ============================================================================
#                         CUT SUGGESTIONS
# ============================================================================

def build_cut_suggestions(
    flags: Sequence[MisassemblyFlag],
    contig_ranges: Sequence[ContigRange],
    contigs: Sequence[ContigInfo],
    contig_order: Sequence[int],
) -> List[CutSuggestion]:
    """
    Convert misassembly flags into cut suggestions.

    Each flag's overview pixel becomes a pixel offset inside the owning
    contig's native span, clamped to [1, length - 1] because a cut at either
    edge is invalid. Flags whose contig cannot be resolved are dropped.

    Suggestions are sorted by order index, descending. Applying them in this
    order keeps earlier order indices valid, since each cut replaces one
    order index with two and shifts everything after it.
    """
    range_by_order = {r.order_index: r for r in contig_ranges}
    suggestions: List[CutSuggestion] = []

    for flag in flags:
        contig_range = range_by_order.get(flag.order_index)
        if contig_range is None or contig_range.span <= 0:
            continue
        if not 0 <= flag.order_index < len(contig_order):
            continue

        contig_id = contig_order[flag.order_index]
        if not 0 <= contig_id < len(contigs):
            continue
        contig = contigs[contig_id]

        contig_pixel_length = contig.pixel_length
        if contig_pixel_length <= 1:
            continue

        fraction = (flag.overview_pixel - contig_range.start) / contig_range.span
        pixel_offset = round_half_up(fraction * contig_pixel_length)
        pixel_offset = max(1, min(pixel_offset, contig_pixel_length - 1))

        suggestions.append(CutSuggestion(
            order_index=flag.order_index,
            contig_id=contig_id,
            contig_name=contig.name,
            pixel_offset=pixel_offset,
            reason=flag.reason,
            strength=flag.strength,
            overview_pixel=flag.overview_pixel,
        ))

    suggestions.sort(key=lambda s: s.order_index, reverse=True)
    return suggestions


def _confidence_level(score: float) -> ConfidenceLevel:
    if score >= HIGH_CONFIDENCE:
        return ConfidenceLevel.HIGH
    if score >= MEDIUM_CONFIDENCE:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def _local_delta(values: np.ndarray, pixel: int) -> float:
    if 1 <= pixel < values.size:
        return abs(float(values[pixel] - values[pixel - 1]))
    return 0.0


def score_cut_confidence(
    suggestions: Sequence[CutSuggestion],
    flags: Sequence[MisassemblyFlag],
    insulation_scores: Optional[np.ndarray],
    eigenvector: Optional[np.ndarray],
    decay_proxy: Optional[np.ndarray],
    contig_ranges: Sequence[ContigRange],
) -> List[CutSuggestion]:
    """
    Attach a CutConfidence to every suggestion.

    Components, each in [0, 1]:
      * tad: suggestion strength relative to the strongest flag
      * compartment: tanh(2 * |eigenvector step| at the flagged pixel)
      * decay: local step in the decay proxy relative to its genome-wide mean
        step, mapped through clamp((anomaly - 0.5) / 2, 0, 1)

    The decay proxy is a placeholder signal: when ``decay_proxy`` is None
    the insulation profile stands in for a true per-position decay-anomaly
    track.

    score = 0.5 * tad + 0.3 * compartment + 0.2 * decay. Suggestions whose
    contig range cannot be found get score 0 (low). No suggestion is ever
    dropped.

    Returns:
        New CutSuggestion objects, same order as the input
    """
    range_orders = {r.order_index for r in contig_ranges}

    strengths = [f.strength for f in flags] or [s.strength for s in suggestions]
    max_strength = max(strengths) if strengths else 0.0

    ev = np.asarray(eigenvector, dtype=np.float64) if eigenvector is not None else np.zeros(0)

    proxy_source = decay_proxy if decay_proxy is not None else insulation_scores
    proxy = np.asarray(proxy_source, dtype=np.float64) if proxy_source is not None else np.zeros(0)
    mean_step = float(np.abs(np.diff(proxy)).mean()) if proxy.size > 1 else 0.0

    scored: List[CutSuggestion] = []
    for suggestion in suggestions:
        if suggestion.order_index not in range_orders:
            confidence = CutConfidence(score=0.0, level=ConfidenceLevel.LOW)
            scored.append(dataclasses.replace(suggestion, confidence=confidence))
            continue

        pixel = suggestion.overview_pixel

        tad = clamp(suggestion.strength / max_strength, 0.0, 1.0) if max_strength > 0 else 0.0
        compartment = math.tanh(2.0 * _local_delta(ev, pixel))

        decay = 0.0
        if mean_step > 0:
            anomaly = _local_delta(proxy, pixel) / mean_step
            decay = clamp((anomaly - 0.5) / 2.0, 0.0, 1.0)

        score = clamp(
            TAD_WEIGHT * tad + COMPARTMENT_WEIGHT * compartment + DECAY_WEIGHT * decay,
            0.0, 1.0,
        )
        confidence = CutConfidence(
            score=score,
            level=_confidence_level(score),
            components=ConfidenceComponents(tad=tad, compartment=compartment, decay=decay),
        )
        scored.append(dataclasses.replace(suggestion, confidence=confidence))

    if scored:
        levels = [s.confidence.level for s in scored]
        logger.debug(
            f"Cut confidence: {levels.count(ConfidenceLevel.HIGH)} high, "
            f"{levels.count(ConfidenceLevel.MEDIUM)} medium, "
            f"{levels.count(ConfidenceLevel.LOW)} low"
        )

    return scored

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
