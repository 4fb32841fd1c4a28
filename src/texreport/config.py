"""Report settings and logging configuration.

Settings cover the document block (title, author, paper orientation), table
defaults (position, number format, font size, column separation, alignment)
and the PDF step (compiler command, whether to run it, whether to log it).
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

from texreport.latex_utils import DEFAULT_NUM_FMT, TableOptions

DEFAULT_TABLE_POS = "h"
DEFAULT_TABLE_COL_SEP = 0.5


class Settings(BaseSettings):
    title: str = ""
    author: str = ""
    landscape: bool = False

    table_pos: str = DEFAULT_TABLE_POS  # written as [h], [!t], ...
    num_fmt: str = DEFAULT_NUM_FMT
    table_font_size: str = ""  # e.g. \scriptsize
    table_col_sep: float = DEFAULT_TABLE_COL_SEP  # em
    align_table: bool = True

    use_geometry: bool = True
    generate_pdf: bool = True
    show_messages: bool = True
    latex_command: str = "pdflatex"

    log_path: Path = Path.home() / ".texreport" / "texreport.log"

    model_config = {"env_prefix": "TEXREPORT_", "env_file": ".env", "extra": "ignore"}

    @field_validator("table_pos")
    @classmethod
    def _default_table_pos(cls, value: str) -> str:
        return value or DEFAULT_TABLE_POS

    @field_validator("num_fmt")
    @classmethod
    def _default_num_fmt(cls, value: str) -> str:
        return value or DEFAULT_NUM_FMT

    @field_validator("table_col_sep")
    @classmethod
    def _default_col_sep(cls, value: float) -> float:
        return value if value > 0 else DEFAULT_TABLE_COL_SEP

    def table_options(self) -> TableOptions:
        """Return the table formatting options these settings describe."""
        return TableOptions(
            align=self.align_table,
            num_fmt=self.num_fmt,
            col_sep=self.table_col_sep,
            table_pos=self.table_pos,
            font_size=self.table_font_size,
        )


def load_settings() -> Settings:
    """Load report settings. Creates a fresh instance each call (no caching)."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Set up root logger with stderr and file handlers at INFO level.

    Idempotent: returns early if root logger already has handlers.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    settings.log_path.parent.mkdir(parents=True, exist_ok=True)
    root.setLevel(logging.INFO)

    fmt = logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")

    stderr_handler = logging.StreamHandler()
    stderr_handler.setLevel(logging.INFO)
    stderr_handler.setFormatter(fmt)
    root.addHandler(stderr_handler)

    file_handler = RotatingFileHandler(
        settings.log_path,
        maxBytes=1_000_000,
        backupCount=3,  # keep texreport.log.1, .2, .3
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)
