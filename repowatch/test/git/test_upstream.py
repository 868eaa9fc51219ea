"""Tests for git/upstream.py."""

from __future__ import annotations

from pathlib import Path

from repowatch.core.result import Err, Ok
from repowatch.git.divergence import divergence_args
from repowatch.git.upstream import BRANCH_ARGS, UPSTREAM_ARGS, resolve_upstream

NO_UPSTREAM = "fatal: no upstream configured for branch 'feature'\n"


class TestResolveUpstream:
    def test_configured_upstream_verbatim(self, fake_runner, tmp_path: Path) -> None:
        fake_runner.reply(UPSTREAM_ARGS, "upstream/develop\n")

        assert resolve_upstream(tmp_path, fake_runner) == Ok("upstream/develop")
        assert len(fake_runner.calls) == 1

    def test_falls_back_to_origin_branch(self, fake_runner, tmp_path: Path) -> None:
        fake_runner.reply(UPSTREAM_ARGS, NO_UPSTREAM)
        fake_runner.reply(BRANCH_ARGS, "feature\n")
        fake_runner.reply(divergence_args("origin/feature", "origin/feature"), "")

        assert resolve_upstream(tmp_path, fake_runner) == Ok("origin/feature")
        assert fake_runner.commands()[-1] == (
            "rev-list",
            "--left-right",
            "origin/feature...origin/feature",
        )

    def test_none_when_fallback_missing(self, fake_runner, tmp_path: Path) -> None:
        fake_runner.reply(UPSTREAM_ARGS, NO_UPSTREAM)
        fake_runner.reply(BRANCH_ARGS, "feature\n")
        fake_runner.reply(
            divergence_args("origin/feature", "origin/feature"),
            "fatal: ambiguous argument 'origin/feature...origin/feature': unknown revision\n",
        )

        assert resolve_upstream(tmp_path, fake_runner) == Ok(None)

    def test_custom_remote(self, fake_runner, tmp_path: Path) -> None:
        fake_runner.reply(UPSTREAM_ARGS, NO_UPSTREAM)
        fake_runner.reply(BRANCH_ARGS, "main\n")
        fake_runner.reply(divergence_args("upstream/main", "upstream/main"), "")

        assert resolve_upstream(tmp_path, fake_runner, remote="upstream") == Ok("upstream/main")

    def test_none_when_branch_unknown(self, fake_runner, tmp_path: Path) -> None:
        fake_runner.reply(UPSTREAM_ARGS, "fatal: not a git repository\n")
        fake_runner.reply(BRANCH_ARGS, "fatal: not a git repository\n")

        assert resolve_upstream(tmp_path, fake_runner) == Ok(None)
        assert len(fake_runner.calls) == 2

    def test_runner_failure_propagates(self, fake_runner, tmp_path: Path) -> None:
        fake_runner.fail(UPSTREAM_ARGS, "No such file or directory: 'git'")

        result = resolve_upstream(tmp_path, fake_runner)

        assert isinstance(result, Err)
        assert "No such file" in result.error.message
