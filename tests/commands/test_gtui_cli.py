"""Tests for the gtui CLI commands against the sample gt metadata directory."""

import json
from pathlib import Path

from click.testing import CliRunner

from gtui.cli.cli import cli
from gtui.core.commands.fake import FakeCommandRunner
from gtui.core.commands.types import CommandResult
from gtui.core.context import GtuiContext
from gtui.core.graphite.real import RealGraphiteStore


def _ctx(graphite_dir: Path, commands: FakeCommandRunner | None = None) -> GtuiContext:
    return GtuiContext.for_test(graphite=RealGraphiteStore(graphite_dir), commands=commands)


def test_tree_shows_every_branch(graphite_dir: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["tree"], obj=_ctx(graphite_dir))

    assert result.exit_code == 0, result.output
    for name in ["main", "feature/auth-base", "feature/auth-login", "fix/typo"]:
        assert name in result.output
    assert "#101 OPEN" in result.output


def test_branches_lists_in_pre_order(graphite_dir: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["branches"], obj=_ctx(graphite_dir))

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "main",
        "feature/auth-base",
        "feature/auth-login (current)",
        "fix/typo",
    ]


def test_branches_json_output(graphite_dir: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["branches", "--json"], obj=_ctx(graphite_dir))

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["trunk"] == "main"
    assert payload["current_branch"] == "feature/auth-login"

    by_name = {b["name"]: b for b in payload["branches"]}
    assert [b["name"] for b in payload["branches"]][0] == "main"
    assert by_name["main"]["parent"] is None
    assert by_name["main"]["children"] == ["feature/auth-base", "fix/typo"]
    assert by_name["feature/auth-login"]["depth"] == 2
    assert by_name["feature/auth-login"]["is_current"] is True
    assert by_name["feature/auth-base"]["pr_number"] == 101
    assert by_name["feature/auth-login"]["pr_number"] is None
    assert by_name["feature/auth-login"]["commits"] == [
        {"hash": "unknown", "message": "Branch feature/auth-login"}
    ]


def test_log_defaults_to_current_branch(graphite_dir: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["log"], obj=_ctx(graphite_dir))

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "◉ feature/auth-login (current)"
    assert "◯ feature/auth-base" in lines
    assert "│ PR #101 (OPEN) Add auth base" in lines
    assert "│ feedface - Commit on feature/auth-base" in lines
    assert lines[-2] == "│ 0a1b2c3d - Commit on main"


def test_log_for_explicit_branch(graphite_dir: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["log", "fix/typo"], obj=_ctx(graphite_dir))

    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[0] == "◯ fix/typo"
    assert "feature/auth-base" not in result.output


def test_log_unknown_branch_fails(graphite_dir: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["log", "nope"], obj=_ctx(graphite_dir))

    assert result.exit_code == 1
    assert "Unknown branch 'nope'" in result.output


def test_checkout_runs_gt_checkout(graphite_dir: Path) -> None:
    commands = FakeCommandRunner(
        results={
            "gt checkout fix/typo": CommandResult(
                success=True, stdout="Checked out fix/typo.\n", stderr=""
            )
        }
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["checkout", "fix/typo"], obj=_ctx(graphite_dir, commands))

    assert result.exit_code == 0, result.output
    assert commands.run_calls == [["gt", "checkout", "fix/typo"]]
    assert "$ gt checkout fix/typo" in result.output
    assert "Checked out fix/typo." in result.output


def test_checkout_failure_exits_nonzero(graphite_dir: Path) -> None:
    commands = FakeCommandRunner(
        results={
            "gt checkout fix/typo": CommandResult(
                success=False, stdout="", stderr="ERROR: uncommitted changes\n"
            )
        }
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["checkout", "fix/typo"], obj=_ctx(graphite_dir, commands))

    assert result.exit_code == 1
    assert "ERROR: uncommitted changes" in result.output


def test_checkout_unknown_branch_does_not_run_gt(graphite_dir: Path) -> None:
    commands = FakeCommandRunner()
    runner = CliRunner()
    result = runner.invoke(cli, ["checkout", "nope"], obj=_ctx(graphite_dir, commands))

    assert result.exit_code == 1
    assert commands.run_calls == []


def test_missing_metadata_reports_source_error(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["tree"], obj=_ctx(tmp_path / "missing"))

    assert result.exit_code == 1
    assert "Failed to read" in result.output


def test_malformed_snapshot_reports_error(graphite_dir: Path) -> None:
    latest = graphite_dir / ".gt" / "snapshots" / "2024-06-02T09-30-00.snapshot"
    latest.write_text("{not json", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["branches"], obj=_ctx(graphite_dir))

    assert result.exit_code == 1
    assert "invalid JSON" in result.output
