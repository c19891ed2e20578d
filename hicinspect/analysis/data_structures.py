#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HiCInspect v0.1.0

Data structures shared by the Hi-C analysis modules.

Every result type is plain data: numpy arrays plus scalars, produced fresh by
a pure computation and owned by the caller. None of them keep a reference to
the input contact matrix. ``to_dict()`` converts a result into JSON-friendly
builtins so results can be handed across worker or process boundaries.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set

import numpy as np


# ============================================================================
#                         ENUMERATIONS
# ============================================================================

class PatternType(str, Enum):
    """Structural pattern visible directly in the contact map."""
    INVERSION = "inversion"  # Anti-diagonal butterfly inside one contig
    TRANSLOCATION = "translocation"  # Off-diagonal enrichment between contigs


class MisassemblyReason(str, Enum):
    """Signal that triggered a misassembly flag."""
    TAD_BOUNDARY = "tad_boundary"
    COMPARTMENT_SWITCH = "compartment_switch"
    BOTH = "both"


class ConfidenceLevel(str, Enum):
    """Confidence band for a cut suggestion."""
    HIGH = "high"  # score >= 0.7
    MEDIUM = "medium"  # score >= 0.4
    LOW = "low"


# ============================================================================
#                         INPUT STRUCTURES
# ============================================================================

@dataclass(frozen=True)
class ContigRange:
    """
    Half-open overview pixel interval ``[start, end)`` occupied by one contig.

    Attributes:
        start: First overview pixel of the contig
        end: One past the last overview pixel
        order_index: Position of the contig in the current display order
    """
    start: int
    end: int
    order_index: int

    @property
    def span(self) -> int:
        return self.end - self.start

    def contains(self, pixel: int) -> bool:
        return self.start <= pixel < self.end

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "end": self.end, "order_index": self.order_index}


@dataclass
class ContigInfo:
    """
    A contig as seen by the curation layer.

    Attributes:
        name: Contig name
        length: Length in base pairs
        pixel_start: First texture pixel of the contig
        pixel_end: One past its last texture pixel
    """
    name: str
    length: int
    pixel_start: int
    pixel_end: int

    @property
    def pixel_length(self) -> int:
        return self.pixel_end - self.pixel_start


# ============================================================================
#                         ANALYSIS RESULTS
# ============================================================================

@dataclass
class InsulationResult:
    """
    Insulation profile and TAD boundary calls.

    Attributes:
        raw_scores: Mean cross-window contact per position (length = size)
        normalized_scores: log2-transformed, min-max scaled scores in [0, 1]
        boundaries: Boundary positions, strictly increasing
        boundary_strengths: Prominence of each boundary (parallel to boundaries)
    """
    raw_scores: np.ndarray
    normalized_scores: np.ndarray
    boundaries: List[int] = field(default_factory=list)
    boundary_strengths: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "raw_scores": self.raw_scores.tolist(),
            "normalized_scores": self.normalized_scores.tolist(),
            "boundaries": list(self.boundaries),
            "boundary_strengths": [float(s) for s in self.boundary_strengths],
        }


@dataclass
class CompartmentResult:
    """
    A/B compartment signal from the dominant eigenvector.

    Attributes:
        eigenvector: Signed eigenvector at native resolution (positive = A)
        normalized_eigenvector: Eigenvector mapped to [0, 1] (0 = B, 1 = A)
        iterations: Power iterations used
        eigenvalue: Dominant eigenvalue (Rayleigh quotient)
    """
    eigenvector: np.ndarray
    normalized_eigenvector: np.ndarray
    iterations: int = 0
    eigenvalue: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "eigenvector": self.eigenvector.tolist(),
            "normalized_eigenvector": self.normalized_eigenvector.tolist(),
            "iterations": self.iterations,
            "eigenvalue": float(self.eigenvalue),
        }


@dataclass
class ContactDecayResult:
    """
    P(s) contact decay curve and its log-log power-law fit.

    Attributes:
        distances: Diagonal distances with non-zero signal (start at 1)
        mean_contacts: Mean contact at each distance
        log_distances: log10 of distances
        log_contacts: log10 of mean_contacts
        decay_exponent: Slope of the log-log fit (typically -0.8 to -1.5)
        r_squared: Coefficient of determination of the fit
        max_distance: Largest distance considered
    """
    distances: np.ndarray
    mean_contacts: np.ndarray
    log_distances: np.ndarray
    log_contacts: np.ndarray
    decay_exponent: float = 0.0
    r_squared: float = 0.0
    max_distance: int = 0

    @classmethod
    def empty(cls, max_distance: int) -> "ContactDecayResult":
        return cls(
            distances=np.zeros(0),
            mean_contacts=np.zeros(0),
            log_distances=np.zeros(0),
            log_contacts=np.zeros(0),
            decay_exponent=0.0,
            r_squared=0.0,
            max_distance=max_distance,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "distances": self.distances.tolist(),
            "mean_contacts": self.mean_contacts.tolist(),
            "log_distances": self.log_distances.tolist(),
            "log_contacts": self.log_contacts.tolist(),
            "decay_exponent": float(self.decay_exponent),
            "r_squared": float(self.r_squared),
            "max_distance": self.max_distance,
        }


@dataclass(frozen=True)
class PatternRegion:
    """Overview bin interval ``[start_bin, end_bin)``."""
    start_bin: int
    end_bin: int


@dataclass
class DetectedPattern:
    """
    Inversion or translocation detected from contact map geometry.

    Attributes:
        pattern_type: inversion or translocation
        region: Primary region (the contig for inversions)
        region2: Partner region, translocations only
        strength: Normalized signal strength in [0, 1]
        description: Human-readable description
    """
    pattern_type: PatternType
    region: PatternRegion
    strength: float
    description: str
    region2: Optional[PatternRegion] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "type": self.pattern_type.value,
            "region": {"start_bin": self.region.start_bin, "end_bin": self.region.end_bin},
            "strength": float(self.strength),
            "description": self.description,
        }
        if self.region2 is not None:
            data["region2"] = {
                "start_bin": self.region2.start_bin,
                "end_bin": self.region2.end_bin,
            }
        return data


@dataclass
class MisassemblyFlag:
    """
    Internal structural signal suggesting a chimeric contig.

    Stale as soon as the contig order changes; recompute instead of patching.
    """
    order_index: int
    overview_pixel: int
    reason: MisassemblyReason
    strength: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order_index": self.order_index,
            "overview_pixel": self.overview_pixel,
            "reason": self.reason.value,
            "strength": float(self.strength),
        }


@dataclass
class MisassemblySummary:
    """Flag counts by reason."""
    tad_only: int = 0
    compartment_only: int = 0
    both: int = 0
    total: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "tad_only": self.tad_only,
            "compartment_only": self.compartment_only,
            "both": self.both,
            "total": self.total,
        }


@dataclass
class MisassemblyResult:
    """All misassembly flags plus the set of flagged order indices."""
    flags: List[MisassemblyFlag] = field(default_factory=list)
    flagged_contigs: Set[int] = field(default_factory=set)
    summary: MisassemblySummary = field(default_factory=MisassemblySummary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flags": [f.to_dict() for f in self.flags],
            "flagged_contigs": sorted(self.flagged_contigs),
            "summary": self.summary.to_dict(),
        }


@dataclass
class ConfidenceComponents:
    """Per-signal contributions to a cut confidence, each in [0, 1]."""
    tad: float = 0.0
    compartment: float = 0.0
    decay: float = 0.0


@dataclass
class CutConfidence:
    """Fused confidence for one cut suggestion."""
    score: float
    level: ConfidenceLevel
    components: ConfidenceComponents = field(default_factory=ConfidenceComponents)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": float(self.score),
            "level": self.level.value,
            "components": {
                "tad": float(self.components.tad),
                "compartment": float(self.components.compartment),
                "decay": float(self.components.decay),
            },
        }


@dataclass
class CutSuggestion:
    """
    Actionable cut inside one contig's native pixel space.

    ``contig_id`` and ``pixel_offset`` are the parameters of the curation
    layer's cut operation; this package never performs the cut itself.
    """
    order_index: int
    contig_id: int
    contig_name: str
    pixel_offset: int
    reason: MisassemblyReason
    strength: float
    overview_pixel: int
    confidence: Optional[CutConfidence] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order_index": self.order_index,
            "contig_id": self.contig_id,
            "contig_name": self.contig_name,
            "pixel_offset": self.pixel_offset,
            "reason": self.reason.value,
            "strength": float(self.strength),
            "overview_pixel": self.overview_pixel,
            "confidence": self.confidence.to_dict() if self.confidence else None,
        }


@dataclass
class HealthScoreInput:
    """
    Inputs for the composite health score.

    ``None`` for the Hi-C derived values means "not computed yet".
    """
    n50: float
    total_length: float
    contig_count: int
    decay_exponent: Optional[float] = None
    decay_r_squared: Optional[float] = None
    misassembly_count: int = 0
    eigenvalue: Optional[float] = None


@dataclass
class HealthComponents:
    """Individual 0-100 sub-scores."""
    contiguity: float = 0.0
    decay_quality: float = 0.0
    integrity: float = 0.0
    compartments: float = 0.0


@dataclass
class HealthScoreResult:
    """Composite 0-100 assembly health score."""
    overall: int
    components: HealthComponents

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "components": {
                "contiguity": float(self.components.contiguity),
                "decay_quality": float(self.components.decay_quality),
                "integrity": float(self.components.integrity),
                "compartments": float(self.components.compartments),
            },
        }

# HiCInspect v0.1.0
# Any usage is subject to this software's license.
