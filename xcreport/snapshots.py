"""Extraction of failing snapshot tests for visual diff tooling."""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from xcreport.correlation import correlate_screenshots
from xcreport.models.report import RenderTree

IMAGE_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/heic": ".heic",
}


@dataclass(frozen=True, kw_only=True)
class FailedSnapshotTest:
    """Images of one failed visual comparison."""

    id: str
    mime_type: str | None
    reference_image: bytes
    failure_image: bytes
    diff_image: bytes


def get_failing_snapshot_tests(tree: RenderTree) -> Sequence[FailedSnapshotTest]:
    """Return every correlated screenshot triple of the failing tests."""
    return [
        FailedSnapshotTest(
            id=triple.identifier,
            mime_type=triple.mime_type,
            reference_image=triple.reference.read_bytes(),
            failure_image=triple.failure.read_bytes(),
            diff_image=triple.difference.read_bytes(),
        )
        for test in tree.all_tests
        for triple in correlate_screenshots(test)
    ]


def write_failing_snapshot_tests(
    snapshots: Sequence[FailedSnapshotTest], output_dir: Path
) -> Sequence[Path]:
    """Write ``<id>_{reference,failure,difference}`` image files.

    Characters that are not safe in file names are replaced by underscores.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for snapshot in snapshots:
        stem = "".join(c if c.isalnum() or c in "-_." else "_" for c in snapshot.id)
        extension = IMAGE_EXTENSIONS.get(snapshot.mime_type or "", "")
        for role, data in (
            ("reference", snapshot.reference_image),
            ("failure", snapshot.failure_image),
            ("difference", snapshot.diff_image),
        ):
            path = output_dir / f"{stem}_{role}{extension}"
            path.write_bytes(data)
            written.append(path)
    return written
