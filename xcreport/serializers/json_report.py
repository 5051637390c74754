"""JSON export combining the raw exports of all bundles."""

import json
import logging
from collections.abc import Sequence
from typing import Any

log = logging.getLogger(__name__)


def render_json(exports: Sequence[bytes | None]) -> str:
    """Compose per-bundle JSON exports into a single JSON array.

    Missing exports are skipped. Exports that do not parse are logged and
    skipped, so one broken bundle cannot corrupt the whole document.
    """
    documents: list[Any] = []
    for index, export in enumerate(exports):
        if export is None:
            continue
        try:
            documents.append(json.loads(export))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            log.warning("Skipping invalid JSON export #%d: %s", index, e)
    return json.dumps(documents)
