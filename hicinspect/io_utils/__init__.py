"""
HiCInspect v0.1.0

I/O Module for HiCInspect: contact matrices, contig tables and reports.
"""

from .matrix_io import load_contact_matrix, load_contig_table, write_report

__all__ = [
    "load_contact_matrix",
    "load_contig_table",
    "write_report",
]
