"""Tool options for a generated project and their resolution.

The option record is produced at the edge (flags, prompts or presets) and
consumed by the scaffolder.  :func:`resolve_options` is pure so that all
interactivity stays in :mod:`launchts.cli`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from launchts import messages
from launchts.utils import print_warning


class PackageManager(str, Enum):
    """Supported package managers.  The first member is the default."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


def parse_package_manager(value: Any) -> PackageManager | None:
    """Return the matching :class:`PackageManager`, or ``None`` if unknown."""
    if isinstance(value, PackageManager):
        return value
    try:
        return PackageManager(value)
    except ValueError:
        return None


def coerce_package_manager(value: Any) -> PackageManager:
    """Like :func:`parse_package_manager` but falls back to npm with a warning."""
    pm = parse_package_manager(value)
    if pm is None:
        print_warning(messages.unknown_package_manager(str(value)))
        return PackageManager.NPM
    return pm


class ToolOptions(BaseModel):
    """Resolved tooling choices for one scaffolding run."""

    eslint: bool = Field(default=False, description="Add ESLint (flat config)")
    prettier: bool = Field(default=False, description="Add Prettier")
    husky: bool = Field(default=False, description="Add Husky + lint-staged pre-commit hooks")
    nodemon: bool = Field(default=False, description="Add a nodemon dev script")
    pm: PackageManager = Field(default=PackageManager.NPM)
    git: bool = Field(default=True, description="Initialise a git repository")
    install: bool = Field(default=True, description="Install dependencies after creation")
    verbose: bool = Field(default=False)
    no_commit: bool = Field(default=False, description="Skip the initial git commit")

    @field_validator("pm", mode="before")
    @classmethod
    def _coerce_pm(cls, value: Any) -> PackageManager:
        return coerce_package_manager(value)


# All tools, git and install enabled (``--yes``).
YES_DEFAULTS: dict[str, bool] = {
    "eslint": True,
    "prettier": True,
    "husky": True,
    "nodemon": True,
    "git": True,
    "install": True,
}

# Sensible defaults (``--default``).
DEFAULT_OPTIONS: dict[str, bool] = {
    "eslint": False,
    "prettier": True,
    "husky": False,
    "nodemon": False,
    "git": True,
    "install": True,
}


class OptionSource(str, Enum):
    """Where the tool choices come from."""

    ALL = "all"
    DEFAULTS = "defaults"
    INTERACTIVE = "interactive"


def resolve_options(
    source: OptionSource,
    overrides: Mapping[str, Any] | None = None,
    answers: Mapping[str, Any] | None = None,
) -> ToolOptions:
    """Resolve a :class:`ToolOptions` from a preset and caller overrides.

    Args:
        source: Preset to start from.  ``INTERACTIVE`` has no preset; the
            prompt *answers* are used instead.
        overrides: Explicitly provided values (typically CLI flags).  Keys
            whose value is ``None`` were not provided and are ignored.
        answers: Prompt answers, only consulted for ``INTERACTIVE``.  They
            win over *overrides* since the prompts were seeded from them.

    Returns:
        The merged option record.  ``git`` and ``install`` stay enabled
        unless something explicitly disabled them.
    """
    given = {k: v for k, v in (overrides or {}).items() if v is not None}

    merged: dict[str, Any] = {}
    if source is OptionSource.ALL:
        merged.update(YES_DEFAULTS)
    elif source is OptionSource.DEFAULTS:
        merged.update(DEFAULT_OPTIONS)
    merged.update(given)
    if source is OptionSource.INTERACTIVE and answers:
        merged.update({k: v for k, v in answers.items() if v is not None})

    return ToolOptions(**merged)


# ---------------------------------------------------------------------------
# Package manager detection
# ---------------------------------------------------------------------------

_LOCKFILES: tuple[tuple[str, PackageManager], ...] = (
    ("pnpm-lock.yaml", PackageManager.PNPM),
    ("yarn.lock", PackageManager.YARN),
    ("package-lock.json", PackageManager.NPM),
)


def detect_package_manager(
    env: Mapping[str, str] | None = None,
    cwd: str | Path | None = None,
) -> PackageManager:
    """Infer the package manager the user is running under.

    ``npm_config_user_agent`` (set by ``npx``, ``yarn dlx`` and ``pnpm dlx``)
    wins; otherwise the lock-files in *cwd* are checked in the order pnpm,
    yarn, npm.  Defaults to npm.
    """
    env = os.environ if env is None else env
    user_agent = env.get("npm_config_user_agent", "")
    for pm in (PackageManager.PNPM, PackageManager.YARN, PackageManager.NPM):
        if user_agent.startswith(pm.value):
            return pm

    base = Path(cwd) if cwd is not None else Path.cwd()
    for lockfile, pm in _LOCKFILES:
        if (base / lockfile).exists():
            return pm
    return PackageManager.NPM
