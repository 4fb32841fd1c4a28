from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


def write_file(dirout: Path | str, name: str, content: str) -> Path:
    """Write *content* to ``dirout / name``, creating *dirout* if needed.

    Returns the resolved path of the written file.
    """
    directory = Path(dirout)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path.resolve()


def run_command(args: Sequence[str], *, cwd: Path | str | None = None) -> str:
    """Run *args* to completion and return its stdout.

    Raises:
        FileNotFoundError: If the executable cannot be found.
        subprocess.CalledProcessError: If the command exits non-zero.
    """
    logger.debug("Running %s", " ".join(args))
    result = subprocess.run(
        list(args),
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout
