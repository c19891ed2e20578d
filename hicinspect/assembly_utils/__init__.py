"""
Assembly utilities for HiCInspect: contig layout, assembly metrics,
chromosome block detection and curation progress.
"""

from .contig_layout import ContigInfo, build_contig_ranges, texture_size_of
from .assembly_metrics import AssemblyMetrics, calculate_metrics, compute_n_stat
from .scaffold_detection import ChromosomeBlock, ScaffoldDetectionResult, detect_chromosome_blocks
from .curation_progress import (
    ProgressScore,
    ProgressTrend,
    compute_progress,
    compute_trend,
    longest_correct_run,
    ordering_kendall_tau,
)

__all__ = [
    "ContigInfo",
    "build_contig_ranges",
    "texture_size_of",
    "AssemblyMetrics",
    "calculate_metrics",
    "compute_n_stat",
    "ChromosomeBlock",
    "ScaffoldDetectionResult",
    "detect_chromosome_blocks",
    "ProgressScore",
    "ProgressTrend",
    "compute_progress",
    "compute_trend",
    "longest_correct_run",
    "ordering_kendall_tau",
]
