"""Result bundle reader that shells out to ``xcrun xcresulttool``."""

import asyncio
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from xcreport.models.base import XCResultModel
from xcreport.models.xcresult import (
    ActionsInvocationRecord,
    ActionTestAttachment,
    ActionTestPlanRunSummaries,
    ActionTestSummary,
    Reference,
)
from xcreport.readers.base import ResultReader
from xcreport.readers.xcresulttool.config import XCResultToolConfig

log = logging.getLogger(__name__)


class XCResultToolError(RuntimeError):
    """Raised when xcresulttool exits with an error."""


@dataclass(frozen=True, kw_only=True)
class XCResultToolReader(ResultReader):
    """Reads a bundle through ``xcresulttool get`` and ``xcresulttool export``."""

    config: XCResultToolConfig

    @classmethod
    def from_config(
        cls, config: XCResultToolConfig, path: Path
    ) -> "XCResultToolReader":
        """Create a reader for the bundle at ``path``."""
        return cls(config=config, path=path)

    async def get_invocation_record(self) -> ActionsInvocationRecord | None:
        """Read and validate the root record."""
        return await self._get_object(ActionsInvocationRecord)

    async def get_test_plan_run_summaries(
        self, reference: Reference
    ) -> ActionTestPlanRunSummaries | None:
        """Read the test plan summaries behind an action's tests reference."""
        return await self._get_object(ActionTestPlanRunSummaries, reference.id)

    async def get_test_summary(self, reference: Reference) -> ActionTestSummary | None:
        """Read the summary of a single test."""
        return await self._get_object(ActionTestSummary, reference.id)

    async def export_attachment(self, attachment: ActionTestAttachment) -> Path | None:
        """Export an attachment payload, reusing a previous export if present."""
        if attachment.payload_ref is None or not attachment.filename:
            return None

        destination = self.attachments_dir / attachment.filename
        if destination.exists():
            return destination

        self.attachments_dir.mkdir(parents=True, exist_ok=True)
        try:
            await self._run(
                "export",
                "--type",
                "file",
                "--id",
                attachment.payload_ref.id,
                "--output-path",
                str(destination),
            )
        except XCResultToolError as e:
            log.warning("Cannot export attachment %s: %s", attachment.filename, e)
            return None
        return destination

    async def export_json(self) -> bytes | None:
        """Return the raw JSON of the root record."""
        try:
            return await self._run("get", "--format", "json")
        except XCResultToolError as e:
            log.warning("Cannot export JSON for %s: %s", self.path, e)
            return None

    async def _get_object[T: XCResultModel](
        self, model: type[T], object_id: str | None = None
    ) -> T | None:
        args = ["get", "--format", "json"]
        if object_id is not None:
            args.extend(["--id", object_id])

        try:
            output = await self._run(*args)
        except XCResultToolError as e:
            log.warning("Cannot read %s from %s: %s", model.__name__, self.path, e)
            return None

        try:
            data: Any = json.loads(output)
            return model.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            log.warning("Unsupported %s in %s: %s", model.__name__, self.path, e)
            return None

    async def _run(self, command: str, *args: str) -> bytes:
        argv: Sequence[str] = [
            self.config.xcrun,
            "xcresulttool",
            command,
            *(["--legacy"] if self.config.legacy else []),
            "--path",
            str(self.path),
            *args,
        ]
        log.debug("Running %s", " ".join(argv))

        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()

        if process.returncode != 0:
            raise XCResultToolError(
                f"xcresulttool {command} failed: {stderr.decode().strip()}"
            )

        return stdout
