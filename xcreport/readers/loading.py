"""Resolution of bundle readers registered as entry points."""

import logging
from importlib.metadata import entry_points
from typing import Any

from xcreport.readers.manifest import ReaderManifest

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "xcreport.readers"


class ReaderNotFoundError(Exception):
    """Raised when no installed distribution registers the requested reader."""


def load_reader_manifest(key: str) -> ReaderManifest[Any]:
    """Resolve the reader manifest registered under ``key``.

    Distributions register a ``ReaderManifest`` instance in the
    ``xcreport.readers`` entry-point group; the built-in reader is
    ``xcresulttool``.

    Raises:
        ReaderNotFoundError: If ``key`` is not registered
        TypeError: If the entry point does not resolve to a manifest

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        available = sorted(entry_points(group=ENTRY_POINT_GROUP).names)
        raise ReaderNotFoundError(
            f"Reader '{key}' not found. Available readers: {available}"
        )

    entry = next(iter(matches))
    manifest = entry.load()
    if not isinstance(manifest, ReaderManifest):
        raise TypeError(f"Entry point {entry.value} is not a ReaderManifest")

    log.debug("Loaded reader %s from %s", key, entry.value)
    return manifest
