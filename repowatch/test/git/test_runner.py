"""Tests for git/runner.py."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from repowatch.core.result import Err, Ok
from repowatch.git.runner import GitRunner


def make_completed_process(
    stdout: str = "", stderr: str = "", returncode: int = 0
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(
        args=["git"], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestGitRunner:
    @patch("subprocess.run")
    def test_returns_output_regardless_of_exit(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stderr="fatal: no upstream configured for branch 'main'\n", returncode=128
        )

        result = GitRunner().run(tmp_path, ["rev-parse", "@{u}"])

        assert result == Ok("fatal: no upstream configured for branch 'main'\n")

    @patch("subprocess.run")
    def test_runs_in_working_copy(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        GitRunner(timeout=5.0).run(tmp_path, ["status", "--porcelain"])

        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "status", "--porcelain"]
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["timeout"] == 5.0
        assert kwargs["capture_output"] is True
        assert kwargs["errors"] == "replace"
        assert kwargs["env"]["LC_ALL"] == "C"

    @patch("subprocess.run")
    def test_stderr_warning_on_success_is_dropped(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stdout="<1a2b3c\n",
            stderr="warning: refname 'origin/main' is ambiguous.\n",
        )

        result = GitRunner().run(tmp_path, ["rev-list", "--left-right", "...origin/main"])

        assert result == Ok("<1a2b3c\n")

    @patch("subprocess.run")
    def test_custom_executable(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        GitRunner("/opt/git/bin/git").run(tmp_path, ["fetch"])

        assert mock_run.call_args[0][0] == ["/opt/git/bin/git", "fetch"]

    @patch("subprocess.run")
    def test_missing_binary(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "git")

        result = GitRunner().run(tmp_path, ["status", "--porcelain"])

        assert isinstance(result, Err)
        assert result.error.path == tmp_path
        assert result.error.command == "status --porcelain"
        assert "No such file" in result.error.message

    @patch("subprocess.run")
    def test_timeout(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=["git", "fetch"], timeout=1.0)

        result = GitRunner(timeout=1.0).run(tmp_path, ["fetch"])

        assert isinstance(result, Err)
        assert "timed out" in result.error.message
