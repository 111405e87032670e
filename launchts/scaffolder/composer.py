"""In-memory composition of a generated project.

Folds the enabled tools from the registry into one ``package.json`` manifest,
one README and a list of static config files.  Nothing here touches the
disk, so the output is a pure function of ``(name, options, versions)``.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib import resources
from typing import Any

from pydantic import BaseModel, Field

from launchts.utils import dump_json

from .registry import TOOL_REGISTRY, ToolDescriptor, ToolId, enabled_tools
from .templates import TemplateRenderer

FALLBACK_VERSION = "latest"

COMPILER = "typescript"
BUILD_SCRIPT = "build"
BUILD_COMMAND = "tsc -p tsconfig.json"

_BUILD_DOC_USAGE = "Compile TypeScript to JavaScript"
_BUILD_DOC_DETAILS = "Compiles TypeScript files to JavaScript in the `dist/` directory"

_REFERENCE_MANIFEST = "reference-package.json"


# ---------------------------------------------------------------------------
# Version lookup
# ---------------------------------------------------------------------------


class VersionResolver:
    """Looks up dependency versions in a reference table.

    Names missing from the table resolve to *fallback*.
    """

    def __init__(self, versions: Mapping[str, str], fallback: str = FALLBACK_VERSION) -> None:
        self.versions = dict(versions)
        self.fallback = fallback

    def resolve(self, name: str) -> str:
        return self.versions.get(name, self.fallback)

    @classmethod
    def from_manifest(
        cls, document: Mapping[str, Any], fallback: str = FALLBACK_VERSION
    ) -> "VersionResolver":
        """Build a resolver from a ``package.json`` document.

        ``devDependencies`` take precedence over ``dependencies``.
        """
        versions: dict[str, str] = {}
        versions.update(document.get("dependencies") or {})
        versions.update(document.get("devDependencies") or {})
        return cls(versions, fallback=fallback)

    @classmethod
    def bundled(cls, fallback: str = FALLBACK_VERSION) -> "VersionResolver":
        """Resolver backed by the reference manifest shipped with launchts."""
        raw = resources.files(__package__).joinpath(_REFERENCE_MANIFEST).read_text(
            encoding="utf-8"
        )
        return cls.from_manifest(json.loads(raw), fallback=fallback)


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


class GeneratedManifest(BaseModel):
    """The ``package.json`` of the generated project."""

    name: str
    version: str = "0.1.0"
    private: bool = True
    module_type: str = "module"
    scripts: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    extra_sections: dict[str, Any] = Field(default_factory=dict)

    def add_dependency(self, name: str, versions: VersionResolver) -> None:
        self.dev_dependencies[name] = versions.resolve(name)

    def add_tool(self, descriptor: ToolDescriptor, versions: VersionResolver) -> None:
        """Merge a tool's dependencies, scripts and extra sections."""
        for dep in descriptor.dependencies:
            self.add_dependency(dep, versions)
        self.scripts.update(descriptor.scripts)
        for key, section in descriptor.manifest_sections.items():
            self.extra_sections.setdefault(key, copy.deepcopy(section))

    def to_package_json(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "private": self.private,
            "type": self.module_type,
            "scripts": dict(self.scripts),
            "devDependencies": dict(self.dev_dependencies),
        }
        for key, section in self.extra_sections.items():
            document[key] = copy.deepcopy(section)
        return document

    def serialize(self) -> str:
        return dump_json(self.to_package_json())


@dataclass(frozen=True)
class StaticFile:
    """A file copied verbatim into the project."""

    relative_path: str
    content: str
    mode: int | None = None


@dataclass
class ComposedProject:
    """Everything :func:`compose` produces for one project."""

    manifest: GeneratedManifest
    readme: str
    static_files: list[StaticFile] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Fixed project files
# ---------------------------------------------------------------------------


def source_stub() -> str:
    """Content of ``src/index.ts``."""
    return "console.log('Hello TypeScript');\n"


def base_tsconfig() -> dict[str, Any]:
    """The ``tsconfig.json`` document."""
    return {
        "compilerOptions": {
            "target": "ESNext",
            "module": "NodeNext",
            "moduleResolution": "NodeNext",
            "declaration": True,
            "outDir": "dist",
            "rootDir": "src",
            "strict": True,
            "esModuleInterop": True,
            "skipLibCheck": True,
            "forceConsistentCasingInFileNames": True,
            "resolveJsonModule": True,
            "isolatedModules": True,
        },
    }


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def compose(
    name: str,
    options: Any,
    versions: VersionResolver,
    renderer: TemplateRenderer | None = None,
) -> ComposedProject:
    """Compose the manifest, README and static files for a project.

    Args:
        name: Validated project name.
        options: A :class:`launchts.options.ToolOptions`.
        versions: Dependency version lookup.
        renderer: Template renderer for the README (a default one is created
            when omitted).

    Returns:
        A :class:`ComposedProject`.
    """
    tools = enabled_tools(options)

    manifest = GeneratedManifest(name=name, scripts={BUILD_SCRIPT: BUILD_COMMAND})
    manifest.add_dependency(COMPILER, versions)

    static_files: list[StaticFile] = []
    for tool in tools:
        descriptor = TOOL_REGISTRY[tool]
        manifest.add_tool(descriptor, versions)
        if descriptor.config_file is not None and descriptor.config is not None:
            static_files.append(
                StaticFile(
                    relative_path=descriptor.config_file,
                    content=_render_config(descriptor.config),
                    mode=descriptor.config_mode,
                )
            )

    readme = (renderer or TemplateRenderer()).render(
        "README.md.j2", _readme_context(name, options, tools, manifest)
    )
    return ComposedProject(manifest=manifest, readme=readme, static_files=static_files)


def _render_config(config: str | Mapping[str, Any]) -> str:
    if isinstance(config, str):
        return config
    return dump_json(dict(config))


def _readme_context(
    name: str,
    options: Any,
    tools: list[ToolId],
    manifest: GeneratedManifest,
) -> dict[str, Any]:
    """Build the README template context from the composed manifest.

    Script lines are generated from ``manifest.scripts`` so the README never
    mentions a script the manifest does not define.
    """
    pm = getattr(options.pm, "value", options.pm)

    script_docs: dict[str, Any] = {}
    for tool in tools:
        script_docs.update(TOOL_REGISTRY[tool].script_docs)

    commands = [f"{pm} run {script}" for script in manifest.scripts]
    width = max(len(cmd) for cmd in commands) + 1
    usage_lines: list[str] = []
    detail_lines: list[str] = []
    for script, cmd in zip(manifest.scripts, commands):
        if script == BUILD_SCRIPT:
            usage, details = _BUILD_DOC_USAGE, _BUILD_DOC_DETAILS
        elif script in script_docs:
            usage, details = script_docs[script].usage, script_docs[script].details
        else:
            usage = details = f"Runs `{manifest.scripts[script]}`"
        usage_lines.append(f"{cmd.ljust(width)}# {usage}")
        detail_lines.append(f"`{cmd}` - {details}")

    structure_lines = [
        TOOL_REGISTRY[tool].structure_line
        for tool in tools
        if tool is not ToolId.HUSKY and TOOL_REGISTRY[tool].structure_line
    ]
    hooks = ToolId.HUSKY in tools
    closing_line = TOOL_REGISTRY[ToolId.HUSKY].structure_line if hooks else "..."

    return {
        "project_name": name,
        "usage_lines": usage_lines,
        "structure_lines": structure_lines,
        "closing_line": closing_line,
        "stack_entries": [TOOL_REGISTRY[tool].stack_entry for tool in tools],
        "detail_lines": detail_lines,
        "hooks_enabled": hooks,
    }
