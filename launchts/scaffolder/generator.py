"""Main scaffolding orchestrator.

Composes a project in memory (see :mod:`.composer`), writes it under a new
directory, then hands over to the :class:`~launchts.provision.Provisioner`
for git and dependency installation.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from launchts import messages
from launchts.config import Config
from launchts.options import ToolOptions
from launchts.provision import ProvisionReport, Provisioner
from launchts.utils import dump_json, write_file
from launchts.validation import is_valid_project_name

from .composer import (
    ComposedProject,
    GeneratedManifest,
    StaticFile,
    VersionResolver,
    base_tsconfig,
    compose,
    source_stub,
)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for errors that abort project creation."""


class InvalidProjectNameError(ScaffoldError):
    """Raised when the project name fails validation."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(messages.invalid_project_name(name))


class TargetExistsError(ScaffoldError):
    """Raised when the target directory already exists."""

    def __init__(self, target: Path) -> None:
        self.target = target
        super().__init__(messages.target_folder_exists(str(target)))


# ---------------------------------------------------------------------------
# Materialization
# ---------------------------------------------------------------------------

SOURCE_PATH = "src/index.ts"
BUILD_CONFIG_PATH = "tsconfig.json"
MANIFEST_PATH = "package.json"
README_PATH = "README.md"


async def materialize(
    target_dir: str | Path,
    manifest: GeneratedManifest,
    readme: str,
    static_files: list[StaticFile],
    source: str,
    build_config: dict[str, Any],
) -> list[Path]:
    """Write a composed project under *target_dir*.

    The target must not exist; this is checked before anything is created.
    The individual files do not depend on each other and are written
    concurrently.  A crash half-way may leave a partial directory behind,
    but an existing project is never overwritten.  The project name is not
    a parameter; it travels in ``manifest.name`` and in *target_dir*.

    Returns:
        The written file paths.

    Raises:
        TargetExistsError: If *target_dir* already exists.
    """
    target = Path(target_dir)
    if target.exists():
        raise TargetExistsError(target)
    try:
        await asyncio.to_thread(target.mkdir, parents=True)
    except FileExistsError:
        raise TargetExistsError(target) from None
    await asyncio.to_thread((target / "src").mkdir)

    files: list[tuple[str, str, int | None]] = [
        (SOURCE_PATH, source, None),
        (BUILD_CONFIG_PATH, dump_json(build_config), None),
        (MANIFEST_PATH, manifest.serialize(), None),
        (README_PATH, readme, None),
    ]
    files.extend((f.relative_path, f.content, f.mode) for f in static_files)

    return list(
        await asyncio.gather(
            *[
                asyncio.to_thread(write_file, target / rel, content, mode)
                for rel, content, mode in files
            ]
        )
    )


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Composes and writes one TypeScript project.

    The composition is computed once, on first use, and is a pure function
    of the name, the options and the version table.
    """

    def __init__(
        self,
        name: str,
        options: ToolOptions,
        versions: VersionResolver | None = None,
    ) -> None:
        self.name = name
        self.options = options
        self.versions = versions or VersionResolver.bundled()
        self._composed: ComposedProject | None = None

    def compose(self) -> ComposedProject:
        if self._composed is None:
            self._composed = compose(self.name, self.options, self.versions)
        return self._composed

    async def generate(self, output_dir: str | Path) -> Path:
        """Generate the project under ``output_dir / name``.

        Returns:
            Path to the generated project root.

        Raises:
            TargetExistsError: If the project directory already exists.
        """
        project_root = Path(output_dir) / self.name
        composed = self.compose()
        await materialize(
            project_root,
            composed.manifest,
            composed.readme,
            composed.static_files,
            source_stub(),
            base_tsconfig(),
        )
        return project_root


@dataclass
class CreateResult:
    """Outcome of :func:`create_project`."""

    project_path: Path
    report: ProvisionReport


async def create_project(
    name: str,
    options: ToolOptions,
    config: Config | None = None,
    provisioner: Provisioner | None = None,
) -> CreateResult:
    """Validate, generate and provision a new project.

    Provisioning problems never raise; they are returned in
    ``CreateResult.report`` for the caller to display.

    Raises:
        InvalidProjectNameError: If *name* is not a valid project name.
        TargetExistsError: If the project directory already exists.
    """
    if not is_valid_project_name(name):
        raise InvalidProjectNameError(name)

    config = config or Config()
    generator = ProjectGenerator(name, options, config.version_resolver())
    project_path = await generator.generate(config.output_dir)

    provisioner = provisioner or Provisioner(
        verbose=options.verbose, timeout=config.command_timeout
    )
    report = await provisioner.provision(project_path, options)
    return CreateResult(project_path=project_path, report=report)
