"""LaTeX report generation: aligned tables, sections and optional PDF output."""

from __future__ import annotations

from texreport.latex_utils import TableOptions, format_table, table_block, tex_num
from texreport.report import CompilationError, Report

__version__ = "0.1.0"

__all__ = [
    "CompilationError",
    "Report",
    "TableOptions",
    "__version__",
    "format_table",
    "table_block",
    "tex_num",
]
