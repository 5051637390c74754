"""Deletion of exported attachment files the report no longer references."""

import logging
from collections.abc import Iterable
from pathlib import Path

from xcreport.models.report import RenderTree

log = logging.getLogger(__name__)


def reachable_paths(tree: RenderTree, referenced: Iterable[Path] = ()) -> set[Path]:
    """Return every attachment path the rendered report may point at.

    Covers the attachments of all tests, passed ones included, plus any path
    an embedding strategy recorded while rendering.
    """
    return tree.attachment_paths() | {path.resolve() for path in referenced}


def prune_orphaned_attachments(
    tree: RenderTree,
    referenced: Iterable[Path] = (),
    *,
    log: logging.Logger = log,
) -> int:
    """Delete unreferenced files in the attachment directories of ``tree``.

    Must run after every serializer that links to attachment files. Files
    that cannot be removed are logged and skipped.

    Args:
        tree: The render tree that was rendered
        referenced: Paths recorded by the embedding strategy
        log: Logger receiving progress and per-file failures

    Returns:
        Number of files actually deleted

    """
    log.info("Deleting unattached files..")
    keep = reachable_paths(tree, referenced)

    deleted = 0
    for result_file in tree.result_files:
        attachments_dir = result_file.attachments_dir
        if not attachments_dir.is_dir():
            continue

        for path in sorted(attachments_dir.rglob("*")):
            if not path.is_file() or path.resolve() in keep:
                continue
            try:
                path.unlink()
            except OSError as e:
                log.warning("Cannot delete %s: %s", path, e)
                continue
            log.debug("Deleted %s", path)
            deleted += 1

    log.info("Deleted %d unattached files", deleted)
    return deleted
