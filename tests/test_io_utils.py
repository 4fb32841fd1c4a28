from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from texreport.io_utils import run_command, write_file


class TestWriteFile:
    def test_writes_content(self, tmp_path: Path):
        path = write_file(tmp_path, "doc.tex", "hello")
        assert path.read_text(encoding="utf-8") == "hello"
        assert path.is_absolute()

    def test_creates_missing_directory(self, tmp_path: Path):
        path = write_file(tmp_path / "a" / "b", "doc.tex", "x")
        assert path.parent.name == "b"
        assert path.exists()

    def test_overwrites_existing(self, tmp_path: Path):
        write_file(tmp_path, "doc.tex", "old")
        path = write_file(tmp_path, "doc.tex", "new")
        assert path.read_text(encoding="utf-8") == "new"


class TestRunCommand:
    @patch("texreport.io_utils.subprocess.run")
    def test_returns_stdout(self, mock_run: MagicMock) -> None:
        mock_run.return_value = subprocess.CompletedProcess(["echo"], 0, "out", "")
        assert run_command(["echo", "hi"], cwd="/tmp") == "out"
        mock_run.assert_called_once_with(
            ["echo", "hi"],
            cwd="/tmp",
            capture_output=True,
            text=True,
            check=True,
        )

    def test_nonzero_exit_propagates(self) -> None:
        with pytest.raises(subprocess.CalledProcessError):
            run_command([sys.executable, "-c", "raise SystemExit(3)"])

    def test_missing_executable_propagates(self) -> None:
        with pytest.raises(FileNotFoundError):
            run_command(["texreport-no-such-binary"])
