#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Analysis session: caller-owned container for analysis results, plus a runner
that computes them off the calling thread.

Insulation, compartments, contact decay and pattern detection are mutually
independent and run concurrently; misassembly fusion waits for insulation
and compartments. Results are held by the session the caller passes in,
never by module state. A caller that needs cancellation drops the session.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .compartment_module import CompartmentParams, compute_compartments
from .contact_decay_module import ContactDecayParams, compute_contact_decay
from .data_structures import (
    CompartmentResult,
    ContactDecayResult,
    ContigInfo,
    ContigRange,
    CutSuggestion,
    DetectedPattern,
    HealthScoreInput,
    HealthScoreResult,
    InsulationResult,
    MisassemblyResult,
)
from .health_score import compute_health_score
from .insulation_module import InsulationParams, compute_insulation
from .misassembly_fusion import (
    MisassemblyParams,
    build_cut_suggestions,
    detect_misassemblies,
    score_cut_confidence,
)
from .numeric_utils import as_contact_matrix
from .pattern_detector import detect_patterns

logger = logging.getLogger(__name__)


@dataclass
class AnalysisSession:
    """
    Results of one analysis pass over one contact map and contig order.

    Every field is replaced wholesale by the runner; nothing is patched in
    place. Flags and cut suggestions refer to order indices, so call
    ``invalidate()`` after any change to the contig order and recompute.
    """
    insulation: Optional[InsulationResult] = None
    compartments: Optional[CompartmentResult] = None
    decay: Optional[ContactDecayResult] = None
    patterns: Optional[List[DetectedPattern]] = None
    misassembly: Optional[MisassemblyResult] = None
    cut_suggestions: Optional[List[CutSuggestion]] = None
    health: Optional[HealthScoreResult] = None
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return all(
            value is not None
            for value in (self.insulation, self.compartments, self.decay,
                          self.patterns, self.misassembly)
        )

    def invalidate(self) -> None:
        """Discard every cached result."""
        self.insulation = None
        self.compartments = None
        self.decay = None
        self.patterns = None
        self.misassembly = None
        self.cut_suggestions = None
        self.health = None
        self.timings = {}

    def to_dict(self) -> Dict[str, Any]:
        def _maybe(value):
            return value.to_dict() if value is not None else None

        return {
            "insulation": _maybe(self.insulation),
            "compartments": _maybe(self.compartments),
            "decay": _maybe(self.decay),
            "patterns": [p.to_dict() for p in self.patterns] if self.patterns is not None else None,
            "misassembly": _maybe(self.misassembly),
            "cut_suggestions": (
                [s.to_dict() for s in self.cut_suggestions]
                if self.cut_suggestions is not None else None
            ),
            "health": _maybe(self.health),
            "timings": dict(self.timings),
        }


def _timed(name: str, func, *args, **kwargs):
    start = time.perf_counter()
    result = func(*args, **kwargs)
    return name, result, time.perf_counter() - start


def run_analyses(
    contact_map,
    size: int,
    contig_ranges: Sequence[ContigRange],
    config: Optional[Dict[str, Any]] = None,
    session: Optional[AnalysisSession] = None,
    max_workers: Optional[int] = None,
) -> AnalysisSession:
    """
    Run every matrix analysis and misassembly fusion into a session.

    Args:
        contact_map: (size, size) matrix or flat row-major buffer
        size: Matrix dimension
        contig_ranges: Overview ranges for the current contig order
        config: Configuration dict (sections insulation, compartments, decay,
            patterns, misassembly)
        session: Session to fill; a new one is created when omitted
        max_workers: Thread count for the independent analyses

    Returns:
        The filled session
    """
    config = config or {}
    session = session if session is not None else AnalysisSession()
    session.invalidate()

    matrix = as_contact_matrix(contact_map, size)
    pattern_config = config.get('patterns', {}) or {}

    jobs = {
        'insulation': (compute_insulation, (matrix, size, InsulationParams.from_config(config.get('insulation')))),
        'compartments': (compute_compartments, (matrix, size, CompartmentParams.from_config(config.get('compartments')))),
        'decay': (compute_contact_decay, (matrix, size, contig_ranges, ContactDecayParams.from_config(config.get('decay')))),
        'patterns': (detect_patterns, (
            matrix, size, contig_ranges,
            float(pattern_config.get('inversion_threshold', 2.0)),
            float(pattern_config.get('translocation_threshold', 2.0)),
        )),
    }

    logger.info(f"Running {len(jobs)} analyses on a {size}x{size} contact map")

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(_timed, name, func, *args) for name, (func, args) in jobs.items()]
        for future in as_completed(futures):
            name, result, elapsed = future.result()
            setattr(session, name, result)
            session.timings[name] = elapsed
            logger.debug(f"  {name} finished in {elapsed:.3f}s")

    _, session.misassembly, elapsed = _timed(
        'misassembly', detect_misassemblies,
        session.insulation, session.compartments, contig_ranges,
        MisassemblyParams.from_config(config.get('misassembly')),
    )
    session.timings['misassembly'] = elapsed

    return session


def suggest_cuts(
    session: AnalysisSession,
    contig_ranges: Sequence[ContigRange],
    contigs: Sequence[ContigInfo],
    contig_order: Sequence[int],
    decay_proxy: Optional[np.ndarray] = None,
) -> List[CutSuggestion]:
    """Build and score cut suggestions from a completed session."""
    if session.misassembly is None or session.insulation is None or session.compartments is None:
        raise ValueError("Session has no misassembly results; run run_analyses first")

    suggestions = build_cut_suggestions(
        session.misassembly.flags, contig_ranges, contigs, contig_order
    )
    session.cut_suggestions = score_cut_confidence(
        suggestions,
        session.misassembly.flags,
        session.insulation.normalized_scores,
        session.compartments.eigenvector,
        decay_proxy,
        contig_ranges,
    )
    return session.cut_suggestions


def score_session_health(session: AnalysisSession, metrics) -> HealthScoreResult:
    """
    Health score from a session's Hi-C results and assembly metrics.

    Args:
        session: Session filled by run_analyses
        metrics: Any object with n50, total_length and contig_count
            (e.g. assembly_utils.AssemblyMetrics)
    """
    # An empty P(s) curve means the exponent is unknown, not zero
    decay = session.decay if session.decay is not None and session.decay.distances.size else None
    health_input = HealthScoreInput(
        n50=metrics.n50,
        total_length=metrics.total_length,
        contig_count=metrics.contig_count,
        decay_exponent=decay.decay_exponent if decay is not None else None,
        decay_r_squared=decay.r_squared if decay is not None else None,
        misassembly_count=session.misassembly.summary.total if session.misassembly is not None else 0,
        eigenvalue=session.compartments.eigenvalue if session.compartments is not None else None,
    )
    session.health = compute_health_score(health_input)
    return session.health

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
