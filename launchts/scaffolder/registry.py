"""Catalog of the optional tools a generated project can carry.

Each tool is described once here: the dev dependencies it needs, the
``package.json`` scripts it adds, its configuration file and the README
fragments that document it.  The set is closed; adding a tool means adding
one :class:`ToolDescriptor` and listing it in :data:`TOOL_ORDER`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ToolId(str, Enum):
    """Identifiers of the optional tools (matching the option field names)."""

    NODEMON = "nodemon"
    ESLINT = "eslint"
    PRETTIER = "prettier"
    HUSKY = "husky"


@dataclass(frozen=True)
class ScriptDoc:
    """README text for one ``package.json`` script."""

    usage: str
    details: str


@dataclass(frozen=True)
class ToolDescriptor:
    """Immutable description of one tool.

    Attributes:
        dependencies: Dev dependency names, in insertion order.
        scripts: ``package.json`` script name -> command.
        config_file: Path of the tool's config file, relative to the project root.
        config: Config payload, raw text or a JSON document.
        config_mode: File mode applied to *config_file* (e.g. for hooks).
        manifest_sections: Extra top-level ``package.json`` keys.
        stack_entry: Technology-stack bullet for the README.
        structure_line: Project-structure line for the README, if the tool
            owns a visible file.
        script_docs: README text for each of *scripts*.
    """

    dependencies: tuple[str, ...]
    scripts: Mapping[str, str]
    stack_entry: str
    script_docs: Mapping[str, ScriptDoc] = field(default_factory=dict)
    config_file: str | None = None
    config: str | Mapping[str, Any] | None = None
    config_mode: int | None = None
    manifest_sections: Mapping[str, Any] = field(default_factory=dict)
    structure_line: str | None = None


ESLINT_CONFIG = """\
import js from '@eslint/js';
import tseslint from 'typescript-eslint';
import globals from 'globals';

export default tseslint.config(
  js.configs.recommended,
  ...tseslint.configs.recommended,
  {
    languageOptions: {
      ecmaVersion: 'latest',
      sourceType: 'module',
      globals: {
        ...globals.node,
      },
    },
    rules: {
      'no-unused-vars': 'off',
      '@typescript-eslint/no-unused-vars': [
        'warn',
        {
          argsIgnorePattern: '^_',
          varsIgnorePattern: '^_',
          caughtErrorsIgnorePattern: '^_',
        },
      ],
      '@typescript-eslint/explicit-module-boundary-types': 'off',
    },
  },
);
"""

PRE_COMMIT_HOOK = '#!/bin/sh\n. "$(dirname "$0")/_/husky.sh"\nnpx lint-staged\n'

HOOK_PATH = ".husky/pre-commit"


TOOL_REGISTRY: Mapping[ToolId, ToolDescriptor] = MappingProxyType({
    ToolId.NODEMON: ToolDescriptor(
        dependencies=("nodemon", "ts-node"),
        scripts=MappingProxyType({
            "dev": 'nodemon --watch src -e ts --exec "ts-node src/index.ts"',
        }),
        stack_entry="**Nodemon** - Auto-reload during development",
        script_docs=MappingProxyType({
            "dev": ScriptDoc(
                usage="Start development server with auto-reload",
                details="Starts the development server with auto-reload on file changes",
            ),
        }),
    ),
    ToolId.ESLINT: ToolDescriptor(
        dependencies=(
            "eslint",
            "@eslint/js",
            "typescript-eslint",
            "globals",
            "eslint-config-prettier",
        ),
        scripts=MappingProxyType({"lint": "eslint ."}),
        stack_entry="**ESLint** - Code quality and consistency with TypeScript support",
        script_docs=MappingProxyType({
            "lint": ScriptDoc(usage="Run ESLint", details="Checks code quality with ESLint"),
        }),
        config_file="eslint.config.js",
        config=ESLINT_CONFIG,
        structure_line="eslint.config.js   # ESLint configuration (flat config)",
    ),
    ToolId.PRETTIER: ToolDescriptor(
        dependencies=("prettier",),
        scripts=MappingProxyType({"format": "prettier --write ."}),
        stack_entry="**Prettier** - Code formatting",
        script_docs=MappingProxyType({
            "format": ScriptDoc(
                usage="Format code with Prettier",
                details="Formats all files with Prettier",
            ),
        }),
        config_file=".prettierrc",
        config=MappingProxyType({
            "semi": True,
            "singleQuote": True,
            "trailingComma": "all",
            "printWidth": 80,
        }),
        structure_line=".prettierrc        # Prettier configuration",
    ),
    ToolId.HUSKY: ToolDescriptor(
        dependencies=("husky", "lint-staged"),
        scripts=MappingProxyType({"prepare": "husky install"}),
        stack_entry="**Husky + lint-staged** - Pre-commit hooks for code quality",
        script_docs=MappingProxyType({
            "prepare": ScriptDoc(
                usage="Install git hooks (runs on install)",
                details="Installs the Husky git hooks; runs automatically after install",
            ),
        }),
        config_file=HOOK_PATH,
        config=PRE_COMMIT_HOOK,
        config_mode=0o755,
        manifest_sections=MappingProxyType({
            "lint-staged": {
                "*.ts": ["eslint --fix", "prettier --write"],
                "*.json": ["prettier --write"],
            },
        }),
        structure_line=".husky/            # Git hooks",
    ),
})

# Fold order; only affects the order of scripts and README lines.
TOOL_ORDER: tuple[ToolId, ...] = (
    ToolId.NODEMON,
    ToolId.ESLINT,
    ToolId.PRETTIER,
    ToolId.HUSKY,
)


def enabled_tools(options: Any) -> list[ToolId]:
    """Return the tools switched on in *options*, in :data:`TOOL_ORDER`."""
    return [tool for tool in TOOL_ORDER if getattr(options, tool.value, False)]
