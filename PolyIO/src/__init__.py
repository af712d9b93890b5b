"""Top-level package for PolyIO."""

from importlib import metadata

# Re-export submodules
from . import records, streams, utils


def get_version() -> str:
    """Return the package version."""
    try:
        return metadata.version("PolyIO")
    except metadata.PackageNotFoundError:  # pragma: no cover - fallback during dev
        return "0.0.0"


__all__ = ["records", "streams", "utils", "get_version"]
