"""Shared pytest fixtures for the launchts test suite.

Provides reusable fixtures for:
- Option records (no tools, every tool)
- A fixed dependency version table
- Mock subprocess helpers
- A git environment isolated from the user's configuration
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from launchts.options import PackageManager, ToolOptions
from launchts.scaffolder.composer import VersionResolver


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@pytest.fixture
def no_tools_options() -> ToolOptions:
    """Every tool, git and install disabled."""
    return ToolOptions(
        eslint=False,
        prettier=False,
        husky=False,
        nodemon=False,
        pm=PackageManager.NPM,
        git=False,
        install=False,
    )


@pytest.fixture
def all_tools_options() -> ToolOptions:
    """Every tool enabled; git and install disabled."""
    return ToolOptions(
        eslint=True,
        prettier=True,
        husky=True,
        nodemon=True,
        pm=PackageManager.NPM,
        git=False,
        install=False,
    )


# ---------------------------------------------------------------------------
# Versions
# ---------------------------------------------------------------------------

FIXED_VERSIONS: dict[str, str] = {
    "typescript": "^5.0.0",
    "eslint": "^9.0.0",
    "@eslint/js": "^9.0.0",
    "typescript-eslint": "^8.0.0",
    "prettier": "^3.0.0",
    "husky": "^8.0.0",
    "nodemon": "^3.0.0",
}


@pytest.fixture
def fixed_versions() -> VersionResolver:
    """A resolver with a small fixed table; other names fall back to ``latest``."""
    return VersionResolver(FIXED_VERSIONS)


# ---------------------------------------------------------------------------
# Mock Subprocess
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def fake_commands() -> Callable[..., AsyncMock]:
    """Factory for a ``run_command`` replacement driven by a result table.

    ``results`` maps a command prefix (tuple of leading arguments) to a
    ``(returncode, stdout, stderr)`` tuple or an exception instance.  The
    longest matching prefix wins; unmatched commands succeed.  Calls are
    recorded on the returned mock's ``await_args_list``.
    """
    def factory(results: dict[tuple[str, ...], Any] | None = None) -> AsyncMock:
        table = results or {}

        async def _run(cmd: list[str], *args: Any, **kwargs: Any) -> tuple[int, str, str]:
            matches = [p for p in table if tuple(cmd[: len(p)]) == p]
            if not matches:
                return (0, "", "")
            outcome = table[max(matches, key=len)]
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome

        return AsyncMock(side_effect=_run)

    return factory


# ---------------------------------------------------------------------------
# Git
# ---------------------------------------------------------------------------

@pytest.fixture
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate git from the user's configuration and any enclosing repository.

    Sets an author identity so commits succeed and stops repository
    discovery at *tmp_path*.
    """
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "launchts test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@launchts.local")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "launchts test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@launchts.local")
    return tmp_path
