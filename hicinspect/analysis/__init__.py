"""
HiCInspect v0.1.0

Hi-C contact map analysis: insulation and TAD boundaries, A/B compartments,
P(s) contact decay, inversion/translocation patterns, misassembly fusion with
cut suggestions, and the composite health score.

Author: HiCInspect Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .data_structures import (
    CompartmentResult,
    ConfidenceLevel,
    ContactDecayResult,
    ContigInfo,
    ContigRange,
    CutConfidence,
    CutSuggestion,
    DetectedPattern,
    HealthScoreInput,
    HealthScoreResult,
    InsulationResult,
    MisassemblyFlag,
    MisassemblyReason,
    MisassemblyResult,
    PatternType,
)
from .insulation_module import InsulationParams, compute_insulation
from .compartment_module import CompartmentParams, compute_compartments
from .contact_decay_module import (
    ContactDecayParams,
    ScaffoldGroup,
    compute_contact_decay,
    compute_decay_by_scaffold,
)
from .pattern_detector import detect_inversions, detect_patterns, detect_translocations
from .misassembly_fusion import (
    MisassemblyParams,
    build_cut_suggestions,
    detect_misassemblies,
    score_cut_confidence,
)
from .health_score import compute_health_score
from .session import AnalysisSession, run_analyses, score_session_health, suggest_cuts

__all__ = [
    # Data structures
    "CompartmentResult",
    "ConfidenceLevel",
    "ContactDecayResult",
    "ContigInfo",
    "ContigRange",
    "CutConfidence",
    "CutSuggestion",
    "DetectedPattern",
    "HealthScoreInput",
    "HealthScoreResult",
    "InsulationResult",
    "MisassemblyFlag",
    "MisassemblyReason",
    "MisassemblyResult",
    "PatternType",
    # Analyses
    "InsulationParams",
    "compute_insulation",
    "CompartmentParams",
    "compute_compartments",
    "ContactDecayParams",
    "ScaffoldGroup",
    "compute_contact_decay",
    "compute_decay_by_scaffold",
    "detect_inversions",
    "detect_translocations",
    "detect_patterns",
    "MisassemblyParams",
    "detect_misassemblies",
    "build_cut_suggestions",
    "score_cut_confidence",
    "compute_health_score",
    # Session
    "AnalysisSession",
    "run_analyses",
    "suggest_cuts",
    "score_session_health",
]
