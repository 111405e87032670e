"""Command-line interface: ``launchts [name] [options]``.

Collects the project name and tool choices from flags, presets or
interactive prompts, then runs :func:`launchts.scaffolder.create_project`.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.prompt import Confirm, Prompt

from launchts import __version__, messages
from launchts.config import Config
from launchts.options import (
    OptionSource,
    PackageManager,
    ToolOptions,
    detect_package_manager,
    parse_package_manager,
    resolve_options,
)
from launchts.scaffolder import create_project
from launchts.utils import print_error, print_success, print_warning
from launchts.validation import is_valid_project_name

DEFAULT_PROJECT_NAME = "my-ts-app"

_TOOL_PROMPTS: tuple[tuple[str, str], ...] = (
    ("eslint", "Add ESLint?"),
    ("prettier", "Add Prettier?"),
    ("husky", "Add Husky (pre-commit hooks)?"),
    ("nodemon", "Add nodemon dev script?"),
)

_OVERRIDE_KEYS = (
    "eslint",
    "prettier",
    "husky",
    "nodemon",
    "git",
    "install",
    "verbose",
    "no_commit",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="launchts",
        allow_abbrev=False,
        description="Create a new TypeScript project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  launchts my-app                   Create 'my-app' interactively\n"
            "  launchts my-app --yes             Create with all options enabled\n"
            "  launchts my-app --default         Create with sensible defaults\n"
            "  launchts my-app --pm pnpm         Use pnpm as package manager\n"
        ),
    )
    parser.add_argument("name", nargs="?", help="Project name (prompted for when omitted)")
    parser.add_argument(
        "-y", "--yes", action="store_true", help="Skip prompts and enable every tool"
    )
    parser.add_argument(
        "-d", "--default", dest="use_defaults", action="store_true",
        help="Skip prompts and use sensible defaults",
    )
    parser.add_argument("--eslint", action="store_true", default=None, help="Add ESLint config")
    parser.add_argument("--prettier", action="store_true", default=None, help="Add Prettier config")
    parser.add_argument("--husky", action="store_true", default=None, help="Add Husky pre-commit hooks")
    parser.add_argument("--nodemon", action="store_true", default=None, help="Add nodemon dev script")
    parser.add_argument("--pm", default=None, help="Package manager (npm|yarn|pnpm)")
    parser.add_argument(
        "--git", action=argparse.BooleanOptionalAction, default=None,
        help="Initialize a git repository (default: on)",
    )
    parser.add_argument(
        "--install", action=argparse.BooleanOptionalAction, default=None,
        help="Install dependencies in the created project (default: on)",
    )
    parser.add_argument(
        "--verbose", action="store_true", default=None, help="Show command output while scaffolding"
    )
    parser.add_argument(
        "--no-commit", dest="no_commit", action="store_true", default=None,
        help="Do not make the initial git commit",
    )
    parser.add_argument(
        "-o", "--output", default=None,
        help="Parent directory for the project (default: current directory)",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def prompt_for_name(name_arg: str | None) -> str:
    if name_arg:
        return name_arg
    return Prompt.ask("Project name", default=DEFAULT_PROJECT_NAME)


def prompt_for_tools(overrides: dict[str, Any]) -> dict[str, bool]:
    """Ask for each tool, using the matching flag as the default answer."""
    return {
        key: Confirm.ask(question, default=bool(overrides.get(key)))
        for key, question in _TOOL_PROMPTS
    }


def prompt_for_git_and_install(git_initial: bool, install_initial: bool) -> dict[str, bool]:
    return {
        "git": Confirm.ask("Initialize a git repository?", default=git_initial),
        "install": Confirm.ask("Install dependencies now?", default=install_initial),
    }


# ---------------------------------------------------------------------------
# Create flow
# ---------------------------------------------------------------------------


def gather_options(args: argparse.Namespace, pm: PackageManager) -> ToolOptions:
    """Resolve the tool options from presets, flags and prompts."""
    overrides: dict[str, Any] = {key: getattr(args, key) for key in _OVERRIDE_KEYS}
    overrides["pm"] = pm

    if args.yes:
        return resolve_options(OptionSource.ALL, overrides)
    if args.use_defaults:
        return resolve_options(OptionSource.DEFAULTS, overrides)

    answers = prompt_for_tools(overrides)
    answers.update(
        prompt_for_git_and_install(
            git_initial=overrides["git"] is not False,
            install_initial=overrides["install"] is not False,
        )
    )
    return resolve_options(OptionSource.INTERACTIVE, overrides, answers)


def run_create_flow(args: argparse.Namespace, config: Config) -> int:
    """Run the whole create flow and return the process exit code."""
    pm: PackageManager | None = None
    if args.pm is not None:
        pm = parse_package_manager(args.pm)
        if pm is None:
            print_error(
                messages.invalid_package_manager(args.pm, [p.value for p in PackageManager])
            )
            return 1

    name = prompt_for_name(args.name)
    if not is_valid_project_name(name):
        print_error(messages.invalid_project_name(name))
        return 1

    options = gather_options(args, pm or detect_package_manager())

    try:
        result = asyncio.run(create_project(name, options, config))
    except Exception as exc:
        print_error(messages.failed_to_create_project(str(exc)))
        return 1

    for warning in result.report.warnings:
        print_warning(warning)
    print_success(messages.project_created(name))
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``launchts`` and ``python -m launchts``."""
    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)
    for flag in unknown:
        if flag.startswith("-"):
            print_warning(messages.unknown_flag(flag))

    try:
        config = Config.from_env()
        if args.output is not None:
            config = config.model_copy(update={"output_dir": Path(args.output)})
    except (ValueError, ValidationError) as exc:
        print_error(messages.generic_error(f"Invalid configuration: {exc}"))
        return 1
    return run_create_flow(args, config)
