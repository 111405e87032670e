"""launchts configuration.

Typed settings for a scaffolding run.  Like every other model in the package
these are Pydantic v2 models so they can be validated at construction time
and populated from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from launchts.utils import load_json

if TYPE_CHECKING:
    from launchts.scaffolder.composer import VersionResolver


class Config(BaseModel):
    """Global launchts configuration.

    Created once by the CLI entry point (usually via :meth:`from_env`) and
    passed to :func:`launchts.scaffolder.create_project`.
    """

    output_dir: Path = Field(
        default=Path("."), description="Parent directory of the generated project"
    )
    reference_manifest: Path | None = Field(
        default=None,
        description="package.json whose dependency versions are copied into new projects",
    )
    fallback_version: str = Field(
        default="latest",
        min_length=1,
        description="Version used for dependencies missing from the reference manifest",
    )
    command_timeout: int = Field(
        default=600, ge=1, description="Per-command timeout for git and installs, in seconds"
    )

    def version_resolver(self) -> "VersionResolver":
        """Build the dependency version lookup for this configuration.

        Uses :attr:`reference_manifest` when set, otherwise the reference
        manifest bundled with the package.
        """
        from launchts.scaffolder.composer import VersionResolver

        if self.reference_manifest is None:
            return VersionResolver.bundled(fallback=self.fallback_version)
        document = load_json(self.reference_manifest)
        return VersionResolver.from_manifest(document, fallback=self.fallback_version)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            LAUNCHTS_OUTPUT_DIR, LAUNCHTS_REFERENCE_MANIFEST,
            LAUNCHTS_FALLBACK_VERSION, LAUNCHTS_COMMAND_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("LAUNCHTS_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["LAUNCHTS_OUTPUT_DIR"])
        if os.environ.get("LAUNCHTS_REFERENCE_MANIFEST"):
            kwargs["reference_manifest"] = Path(os.environ["LAUNCHTS_REFERENCE_MANIFEST"])
        if os.environ.get("LAUNCHTS_FALLBACK_VERSION"):
            kwargs["fallback_version"] = os.environ["LAUNCHTS_FALLBACK_VERSION"]
        if os.environ.get("LAUNCHTS_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["LAUNCHTS_COMMAND_TIMEOUT"])
        return cls(**kwargs)
