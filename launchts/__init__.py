"""launchts -- scaffold a TypeScript project with optional tooling."""

__version__ = "0.1.0"

# The scaffolder is imported first: launchts.provision depends on its registry.
from launchts.scaffolder import ProjectGenerator, create_project  # noqa: E402

__all__ = ["ProjectGenerator", "__version__", "create_project"]
