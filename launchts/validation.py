"""Project name validation."""

from __future__ import annotations

import re

MAX_NAME_LENGTH = 214

_NAME_RE = re.compile(r"[A-Za-z0-9._-]+")


def is_valid_project_name(name: str) -> bool:
    """Return ``True`` if *name* can be used as the new project's directory.

    The name is checked exactly as given (no trimming, no case folding): it
    must be 1-214 characters of ``[A-Za-z0-9._-]`` and must not start with
    ``.`` or ``-``.
    """
    if not name or len(name) > MAX_NAME_LENGTH:
        return False
    if name[0] in ".-":
        return False
    return _NAME_RE.fullmatch(name) is not None
