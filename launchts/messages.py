"""User-facing messages, kept in one place so wording stays consistent."""

from __future__ import annotations

from collections.abc import Iterable


def project_created(name: str) -> str:
    return f"✔ Project {name} created"


def invalid_project_name(name: str) -> str:
    return (
        f"✖ Invalid project name: {name}. "
        "Use alphanumeric, hyphens, underscores (1-214 chars)."
    )


def invalid_package_manager(pm: str, valid: Iterable[str]) -> str:
    return f"✖ Invalid package manager: {pm}. Choose from: {', '.join(valid)}"


def target_folder_exists(target: str) -> str:
    return f"Target folder already exists: {target}"


def failed_to_create_project(message: str) -> str:
    return f"✖ Failed to create project: {message}"


def generic_error(message: str) -> str:
    return f"✖ {message}"


def unknown_package_manager(pm: str) -> str:
    return f"⚠️  Unknown package manager: {pm}. Defaulting to npm."


def unknown_flag(flag: str) -> str:
    return f"⚠️  Unknown flag: {flag}. Use --help to see available options."


def git_init_failed(reason: str) -> str:
    return (
        "⚠️  Warning: Could not initialize git.\n"
        f"   Reason: {reason}\n"
        "   Tip: Make sure git is installed ('git --version' should work)"
    )


def git_commit_failed(reason: str) -> str:
    return (
        "⚠️  Warning: Could not create git commit.\n"
        f"   Reason: {reason}\n"
        "   Tip: Run 'git config --global user.email \"you@example.com\"' "
        "and 'git config --global user.name \"Your Name\"'"
    )


def install_failed(pm: str, reason: str) -> str:
    return (
        f"⚠️  Warning: Could not install dependencies with {pm}.\n"
        f"   Reason: {reason}\n"
        f"   Tip: Make sure {pm} is installed and try running "
        f"'{pm} install' manually in the project directory"
    )
