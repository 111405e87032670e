"""launchts scaffolder -- composes and writes TypeScript projects.

Quick usage::

    from launchts.options import ToolOptions
    from launchts.scaffolder import ProjectGenerator

    options = ToolOptions(eslint=True, prettier=True, git=False, install=False)
    generator = ProjectGenerator("my-app", options)
    project_path = await generator.generate("/tmp/output")
"""

from launchts.scaffolder.composer import (
    ComposedProject,
    GeneratedManifest,
    StaticFile,
    VersionResolver,
    compose,
)
from launchts.scaffolder.generator import (
    CreateResult,
    InvalidProjectNameError,
    ProjectGenerator,
    ScaffoldError,
    TargetExistsError,
    create_project,
    materialize,
)
from launchts.scaffolder.registry import TOOL_ORDER, TOOL_REGISTRY, ToolDescriptor, ToolId

__all__ = [
    "ComposedProject",
    "CreateResult",
    "GeneratedManifest",
    "InvalidProjectNameError",
    "ProjectGenerator",
    "ScaffoldError",
    "StaticFile",
    "TOOL_ORDER",
    "TOOL_REGISTRY",
    "TargetExistsError",
    "ToolDescriptor",
    "ToolId",
    "VersionResolver",
    "compose",
    "create_project",
    "materialize",
]
