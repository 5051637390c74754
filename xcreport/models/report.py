"""Render model built from result bundles and consumed by every serializer."""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from xcreport.readers.base import ResultReader

type Status = Literal["success", "failure", "skip"]
type Node = Group | TestCase


def aggregate_status(statuses: Iterable[Status]) -> Status:
    """Reduce child statuses: any failure wins, then any success, else skip."""
    seen = set(statuses)
    if "failure" in seen:
        return "failure"
    if "success" in seen:
        return "success"
    return "skip"


@dataclass(frozen=True, kw_only=True)
class Attachment:
    """Artifact attached to a test.

    ``path`` points at the payload materialized on disk by the bundle reader;
    it is None when the payload could not be exported.
    """

    name: str | None = None
    filename: str | None = None
    uniform_type_identifier: str | None = None
    mime_type: str | None = None
    path: Path | None = None

    @property
    def is_screenshot(self) -> bool:
        return self.mime_type is not None and self.mime_type.startswith("image/")

    @property
    def has_content(self) -> bool:
        return self.path is not None

    @property
    def display_name(self) -> str:
        return self.name or self.filename or "Attachment"

    def read_bytes(self) -> bytes:
        """Return the payload, or empty bytes when it is unavailable."""
        if self.path is None:
            return b""
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return b""


@dataclass(frozen=True, kw_only=True)
class Activity:
    """Step recorded while a test ran."""

    title: str
    attachments: Sequence[Attachment] = field(default_factory=tuple)
    subactivities: Sequence["Activity"] = field(default_factory=tuple)

    def iter_attachments(self) -> Iterator[Attachment]:
        """Yield attachments depth-first in recording order."""
        yield from self.attachments
        for subactivity in self.subactivities:
            yield from subactivity.iter_attachments()


@dataclass(frozen=True, kw_only=True)
class TestCase:
    """Leaf of the render tree."""

    __test__ = False

    identifier: str
    name: str
    status: Status
    duration: float
    message: str | None = None
    file_path: str | None = None
    line_number: int | None = None
    activities: Sequence[Activity] = field(default_factory=tuple)
    attachments: Sequence[Attachment] = field(default_factory=tuple)

    @property
    def location(self) -> str | None:
        if self.file_path is None:
            return None
        if self.line_number is None:
            return self.file_path
        return f"{self.file_path}:{self.line_number}"

    @property
    def failure_attachments(self) -> Sequence[Attachment]:
        """Attachments that no activity records, such as failure screenshots."""
        recorded = {
            id(attachment)
            for activity in self.activities
            for attachment in activity.iter_attachments()
        }
        return [a for a in self.attachments if id(a) not in recorded]

    @property
    def all_tests(self) -> Sequence["TestCase"]:
        return (self,)

    @property
    def all_attachments(self) -> Sequence[Attachment]:
        return self.attachments


@dataclass(frozen=True, kw_only=True)
class Group:
    """Named container of tests and nested groups."""

    name: str
    identifier: str
    children: Sequence[Node] = field(default_factory=tuple)

    @property
    def status(self) -> Status:
        return aggregate_status(child.status for child in self.children)

    @property
    def duration(self) -> float:
        return sum(child.duration for child in self.children)

    @property
    def all_tests(self) -> Sequence[TestCase]:
        return [test for child in self.children for test in child.all_tests]

    @property
    def all_attachments(self) -> Sequence[Attachment]:
        return [
            attachment
            for child in self.children
            for attachment in child.all_attachments
        ]


@dataclass(frozen=True, kw_only=True)
class RunDestination:
    """Device or simulator a run executed on."""

    name: str
    identifier: str
    os_version: str | None = None
    model_name: str | None = None
    platform: str | None = None
    architecture: str | None = None


@dataclass(frozen=True, kw_only=True)
class ResultFile:
    """Readable result bundle that contributed runs to the tree."""

    path: Path
    reader: "ResultReader" = field(repr=False, compare=False)

    @property
    def attachments_dir(self) -> Path:
        return self.reader.attachments_dir


@dataclass(frozen=True, kw_only=True)
class Run:
    """One test action executed against one destination."""

    name: str
    destination: RunDestination
    groups: Sequence[Group] = field(default_factory=tuple)
    result_file: ResultFile | None = field(default=None, repr=False, compare=False)

    @property
    def status(self) -> Status:
        return aggregate_status(group.status for group in self.groups)

    @property
    def duration(self) -> float:
        return sum(group.duration for group in self.groups)

    @property
    def all_tests(self) -> Sequence[TestCase]:
        return [test for group in self.groups for test in group.all_tests]

    @property
    def all_attachments(self) -> Sequence[Attachment]:
        return [
            attachment for group in self.groups for attachment in group.all_attachments
        ]


@dataclass(frozen=True, kw_only=True)
class ScreenshotTriple:
    """Reference, failure and difference screenshots of one visual diff."""

    identifier: str
    reference: Attachment
    failure: Attachment
    difference: Attachment

    @property
    def mime_type(self) -> str | None:
        return self.reference.mime_type


@dataclass(frozen=True, kw_only=True)
class RenderTree:
    """Runs of all readable bundles, in input order."""

    runs: Sequence[Run] = field(default_factory=tuple)
    result_files: Sequence[ResultFile] = field(default_factory=tuple)

    @property
    def status(self) -> Status:
        return aggregate_status(run.status for run in self.runs)

    @property
    def all_tests(self) -> Sequence[TestCase]:
        return [test for run in self.runs for test in run.all_tests]

    @property
    def all_attachments(self) -> Sequence[Attachment]:
        return [attachment for run in self.runs for attachment in run.all_attachments]

    def attachment_paths(self) -> set[Path]:
        """Absolute paths of every materialized attachment, whatever the status."""
        return {
            attachment.path.resolve()
            for attachment in self.all_attachments
            if attachment.path is not None
        }
