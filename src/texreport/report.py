"""Report assembly: accumulate sections, TeX and tables into a LaTeX document.

A ``Report`` owns its buffer. ``render()`` wraps the accumulated body in the
fixed article preamble, and ``write_tex_pdf()`` writes the ``.tex`` file and
optionally runs the LaTeX compiler on it.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from texreport.config import Settings, load_settings
from texreport.io_utils import run_command, write_file
from texreport.latex_utils import ConvertNum, table_block

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

logger = logging.getLogger(__name__)

_MAX_SUB_LEVELS = 2
_EXTRA_BANNER = "%" * 22 + " extra commands " + "%" * 22


class CompilationError(RuntimeError):
    """The LaTeX compiler could not be run or exited with an error."""


class Report:
    """Accumulates LaTeX fragments and renders them as an article."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings if settings is not None else load_settings()
        self._buffer: list[str] = []

    @property
    def body(self) -> str:
        return "".join(self._buffer)

    def reset(self) -> None:
        self._buffer.clear()

    def add_section(self, name: str, level: int = 0) -> None:
        """Append a heading; level 1 is a subsection, 2 and deeper subsubsection."""
        command = "sub" * min(max(level, 0), _MAX_SUB_LEVELS) + "section"
        self._buffer.append(f"\n\\{command}{{{name}}}\n")

    def add_tex(self, commands: str) -> None:
        self._buffer.append(f"\n{commands}\n")

    def add_table(
        self,
        caption: str,
        label: str,
        keys: Sequence[str],
        table: Mapping[str, ArrayLike],
        key2tex: Mapping[str, str] | None = None,
        key2convert: Mapping[str, ConvertNum] | None = None,
    ) -> None:
        """Append a ``table*`` block built from *table*.

        Args:
            caption: Table caption.
            label: Label suffix; the table is labelled ``tab:<label>``.
            keys: Column keys, in output order.
            table: Maps each key to its column values.
            key2tex: Optional TeX header text per key (e.g. an equation).
            key2convert: Optional ``(row, value) -> str`` converter per key.
        """
        block = table_block(
            caption,
            label,
            keys,
            table,
            key2tex,
            key2convert,
            options=self.settings.table_options(),
        )
        self._buffer.append(f"\n{block}")

    def render(self, extra: str | None = None) -> str:
        """Return the complete LaTeX document.

        *extra* is appended after the body under an ``extra commands`` banner.
        """
        s = self.settings
        paper = "a4paper,landscape" if s.landscape else "a4paper"
        parts: list[str] = [
            f"\\documentclass[{paper}]{{article}}\n",
            "\\usepackage{amsmath}\n",
            "\\usepackage{amssymb}\n",
            "\\usepackage{booktabs}\n",
        ]
        if s.use_geometry:
            parts.append("\\usepackage[margin=1.5cm,footskip=0.5cm]{geometry}\n")

        if s.title:
            parts.append(f"\n\\title{{{s.title}}}\n")
        if s.author:
            parts.append(f"\\author{{{s.author}}}\n")

        parts.append("\n\\begin{document}\n")
        if s.title or s.author:
            parts.append("\\maketitle\n")

        if self._buffer:
            parts.append(f"{self.body}\n")

        if extra is not None:
            parts.append(f"\n{_EXTRA_BANNER}\n\n{extra}\n")

        parts.append("\n\\end{document}\n")
        return "".join(parts)

    def write_tex_pdf(
        self,
        dirout: Path | str,
        fnkey: str,
        extra: str | None = None,
    ) -> Path:
        """Write ``<dirout>/<fnkey>.tex`` and, if enabled, compile it to PDF.

        Returns:
            Path of the written ``.tex`` file.

        Raises:
            ValueError: If *fnkey* is empty or contains path separators.
            CompilationError: If the compiler is missing or fails.
        """
        if not fnkey or "/" in fnkey or "\\" in fnkey:
            msg = f"Invalid file key: {fnkey!r}"
            raise ValueError(msg)

        fn = f"{fnkey}.tex"
        tex_path = write_file(dirout, fn, self.render(extra))

        if not self.settings.generate_pdf:
            return tex_path

        outdir = tex_path.parent
        args = [
            self.settings.latex_command,
            "-interaction=batchmode",
            "-halt-on-error",
            f"-output-directory={outdir}",
            fn,
        ]
        try:
            run_command(args, cwd=outdir)
        except (OSError, subprocess.CalledProcessError) as exc:
            if self.settings.show_messages:
                logger.error("file <%s> generated; %s failed", tex_path, args[0])
            msg = f"{args[0]} failed on {tex_path}"
            raise CompilationError(msg) from exc

        if self.settings.show_messages:
            logger.info("file <%s> generated", outdir / f"{fnkey}.pdf")
        return tex_path
