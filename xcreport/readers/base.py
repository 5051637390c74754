"""Abstract base class for result bundle readers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from xcreport.models.xcresult import (
    ActionsInvocationRecord,
    ActionTestAttachment,
    ActionTestPlanRunSummaries,
    ActionTestSummary,
    Reference,
)

ATTACHMENTS_DIR_NAME = "Attachments"


@dataclass(frozen=True, kw_only=True)
class ResultReader(ABC):
    """Abstract reader for a single result bundle.

    Readers resolve the bundle's object graph lazily: the invocation record
    holds references that are fetched on demand while the render tree is
    built. Every lookup returns None when the object cannot be read.
    """

    path: Path

    @property
    def attachments_dir(self) -> Path:
        """Directory attachment payloads are exported to."""
        return self.path / ATTACHMENTS_DIR_NAME

    @abstractmethod
    async def get_invocation_record(self) -> ActionsInvocationRecord | None:
        """Read the root record of the bundle."""

    @abstractmethod
    async def get_test_plan_run_summaries(
        self, reference: Reference
    ) -> ActionTestPlanRunSummaries | None:
        """Resolve an action's tests reference."""

    @abstractmethod
    async def get_test_summary(self, reference: Reference) -> ActionTestSummary | None:
        """Resolve a test's summary reference."""

    @abstractmethod
    async def export_attachment(self, attachment: ActionTestAttachment) -> Path | None:
        """Materialize an attachment payload under ``attachments_dir``.

        Returns:
            Path of the exported file, None when the payload is unavailable

        """

    @abstractmethod
    async def export_json(self) -> bytes | None:
        """Return the raw JSON export of the whole bundle."""
