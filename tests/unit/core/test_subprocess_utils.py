"""Tests for the subprocess wrapper with rich error context."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from gtui.core.subprocess_utils import run_subprocess_with_context


def test_success_case_returns_completed_process() -> None:
    with patch("gtui.core.subprocess_utils.subprocess.run") as mock_run:
        mock_result = Mock(spec=subprocess.CompletedProcess)
        mock_result.returncode = 0
        mock_result.stdout = "Checked out main."
        mock_run.return_value = mock_result

        result = run_subprocess_with_context(
            ["gt", "checkout", "main"],
            operation_context="check out main",
            cwd=Path("/repo"),
        )

        assert result == mock_result
        mock_run.assert_called_once_with(
            ["gt", "checkout", "main"],
            cwd=Path("/repo"),
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=True,
        )


def test_failure_with_stderr_includes_stderr_in_error() -> None:
    with patch("gtui.core.subprocess_utils.subprocess.run") as mock_run:
        mock_run.side_effect = subprocess.CalledProcessError(
            returncode=1,
            cmd=["gt", "checkout", "nope"],
            stderr="ERROR: Branch nope is not tracked",
        )

        with pytest.raises(RuntimeError) as exc_info:
            run_subprocess_with_context(["gt", "checkout", "nope"], operation_context="run gt")

        message = str(exc_info.value)
        assert "Failed to run gt" in message
        assert "Command: gt checkout nope" in message
        assert "Exit code: 1" in message
        assert "stderr: ERROR: Branch nope is not tracked" in message


def test_failure_with_blank_stderr_omits_stderr_line() -> None:
    with patch("gtui.core.subprocess_utils.subprocess.run") as mock_run:
        mock_run.side_effect = subprocess.CalledProcessError(
            returncode=2, cmd=["gt"], stderr="  \n "
        )

        with pytest.raises(RuntimeError) as exc_info:
            run_subprocess_with_context(["gt"], operation_context="run gt")

        assert "stderr:" not in str(exc_info.value)


def test_exception_chaining_preserved() -> None:
    with patch("gtui.core.subprocess_utils.subprocess.run") as mock_run:
        original = subprocess.CalledProcessError(returncode=1, cmd=["gt"], stderr="boom")
        mock_run.side_effect = original

        with pytest.raises(RuntimeError) as exc_info:
            run_subprocess_with_context(["gt"], operation_context="run gt")

        assert exc_info.value.__cause__ is original


def test_missing_executable_raises_runtime_error() -> None:
    with patch("gtui.core.subprocess_utils.subprocess.run") as mock_run:
        mock_run.side_effect = FileNotFoundError("gt")

        with pytest.raises(RuntimeError) as exc_info:
            run_subprocess_with_context(
                ["gt", "checkout", "main"], operation_context="run gt", check=False
            )

        message = str(exc_info.value)
        assert "Command not found while trying to run gt: gt" in message
        assert "Full command: gt checkout main" in message


def test_check_false_returns_failed_process() -> None:
    with patch("gtui.core.subprocess_utils.subprocess.run") as mock_run:
        mock_result = Mock(spec=subprocess.CompletedProcess)
        mock_result.returncode = 1
        mock_run.return_value = mock_result

        result = run_subprocess_with_context(["gt"], operation_context="run gt", check=False)

        assert result.returncode == 1
        assert mock_run.call_args.kwargs["check"] is False
