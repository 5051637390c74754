"""Builds the render tree from result bundles."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from xcreport.config import UnreadableBundlePolicy
from xcreport.models.report import (
    Activity,
    Attachment,
    Group,
    RenderTree,
    ResultFile,
    Run,
    RunDestination,
    Status,
    TestCase,
)
from xcreport.models.xcresult import (
    ActionRecord,
    ActionRunDestinationRecord,
    ActionTestActivitySummary,
    ActionTestAttachment,
    ActionTestMetadata,
    ActionTestNode,
    ActionTestSummary,
    ActionTestSummaryGroup,
)
from xcreport.readers.base import ResultReader

log = logging.getLogger(__name__)

TEST_STATUSES: dict[str, Status] = {
    "Success": "success",
    "Expected Failure": "success",
    "Failure": "failure",
    "Skipped": "skip",
}

UTI_MIME_TYPES = {
    "public.png": "image/png",
    "public.jpeg": "image/jpeg",
    "public.gif": "image/gif",
    "public.heic": "image/heic",
    "public.plain-text": "text/plain",
    "public.utf8-plain-text": "text/plain",
    "public.log": "text/plain",
    "public.html": "text/html",
    "public.json": "application/json",
    "public.xml": "application/xml",
    "public.mpeg-4": "video/mp4",
}


def map_test_status(raw_status: str) -> Status:
    """Map a bundle test status onto the three-way status."""
    return TEST_STATUSES.get(raw_status, "failure")


def mime_type_for(uniform_type_identifier: str) -> str | None:
    """Return the MIME type of a uniform type identifier, if known."""
    return UTI_MIME_TYPES.get(uniform_type_identifier)


def build_run_destination(record: ActionRunDestinationRecord) -> RunDestination:
    """Convert a run destination record into badge metadata."""
    device = record.target_device_record
    return RunDestination(
        name=device.name or record.display_name,
        identifier=device.identifier,
        os_version=device.operating_system_version,
        model_name=device.model_name,
        platform=(
            device.platform_record.user_description if device.platform_record else None
        ),
        architecture=record.target_architecture,
    )


@dataclass(frozen=True, kw_only=True)
class BundleBuilder:
    """Builds the runs of a single bundle."""

    result_file: ResultFile
    log: logging.Logger = log

    @property
    def reader(self) -> ResultReader:
        return self.result_file.reader

    async def build_runs(self) -> Sequence[Run] | None:
        """Build one run per action that has test results.

        Returns:
            The bundle's runs, or None when the invocation record is missing

        """
        record = await self.reader.get_invocation_record()
        if record is None:
            return None

        runs: list[Run] = []
        for action in record.actions:
            if (run := await self.build_run(action)) is not None:
                runs.append(run)
        return runs

    async def build_run(self, action: ActionRecord) -> Run | None:
        """Build a run from an action; actions without tests yield no run."""
        tests_ref = action.action_result.tests_ref
        if tests_ref is None:
            self.log.debug("Action %s has no test results", action.title)
            return None

        summaries = await self.reader.get_test_plan_run_summaries(tests_ref)
        if summaries is None:
            self.log.debug("Cannot resolve tests of action %s", action.title)
            return None

        groups: list[Group] = []
        for plan_summary in summaries.summaries:
            for testable in plan_summary.testable_summaries:
                children = [await self.build_node(node) for node in testable.tests]
                groups.append(
                    Group(
                        name=testable.name,
                        identifier=testable.target_name or testable.name,
                        children=children,
                    )
                )

        destination = build_run_destination(action.run_destination)
        return Run(
            name=action.title or destination.name,
            destination=destination,
            groups=groups,
            result_file=self.result_file,
        )

    async def build_node(self, node: ActionTestNode) -> Group | TestCase:
        """Convert a test hierarchy node, preserving the recorded order."""
        match node:
            case ActionTestSummaryGroup():
                return Group(
                    name=node.name,
                    identifier=node.identifier or node.name,
                    children=[await self.build_node(child) for child in node.subtests],
                )
            case ActionTestMetadata():
                return await self.build_test(node)

    async def build_test(self, metadata: ActionTestMetadata) -> TestCase:
        """Build a test case, resolving its summary for activities and failures."""
        summary: ActionTestSummary | None = None
        if metadata.summary_ref is not None:
            summary = await self.reader.get_test_summary(metadata.summary_ref)

        status = map_test_status(metadata.test_status)
        if summary is None:
            return TestCase(
                identifier=metadata.identifier,
                name=metadata.name,
                status=status,
                duration=metadata.duration,
            )

        activities = [
            await self.build_activity(activity)
            for activity in summary.activity_summaries
        ]
        attachments = [
            attachment
            for activity in activities
            for attachment in activity.iter_attachments()
        ]
        seen = {a.filename for a in attachments if a.filename}
        for failure_summary in summary.failure_summaries:
            for raw in failure_summary.attachments:
                if raw.filename and raw.filename in seen:
                    continue
                if raw.filename:
                    seen.add(raw.filename)
                attachments.append(await self.build_attachment(raw))

        message: str | None = None
        file_path: str | None = None
        line_number: int | None = None
        if summary.failure_summaries:
            first_failure = summary.failure_summaries[0]
            message = first_failure.message
            file_path = first_failure.file_name
            line_number = first_failure.line_number
        elif summary.skip_notice_summary is not None:
            message = summary.skip_notice_summary.message

        return TestCase(
            identifier=metadata.identifier,
            name=metadata.name,
            status=status,
            duration=metadata.duration,
            message=message,
            file_path=file_path,
            line_number=line_number,
            activities=activities,
            attachments=attachments,
        )

    async def build_activity(self, activity: ActionTestActivitySummary) -> Activity:
        """Convert an activity and its sub-activities."""
        return Activity(
            title=activity.title,
            attachments=[
                await self.build_attachment(raw) for raw in activity.attachments
            ],
            subactivities=[
                await self.build_activity(sub) for sub in activity.subactivities
            ],
        )

    async def build_attachment(self, raw: ActionTestAttachment) -> Attachment:
        """Materialize an attachment; a missing payload leaves ``path`` unset."""
        return Attachment(
            name=raw.name,
            filename=raw.filename,
            uniform_type_identifier=raw.uniform_type_identifier,
            mime_type=mime_type_for(raw.uniform_type_identifier),
            path=await self.reader.export_attachment(raw),
        )


type BundleResult = Sequence[Run] | BaseException | None


async def build_render_tree(
    readers: Sequence[ResultReader],
    *,
    policy: UnreadableBundlePolicy = "abort",
    log: logging.Logger = log,
) -> RenderTree:
    """Build the render tree of several bundles.

    A bundle whose invocation record cannot be read (or whose build raises)
    is logged. With the "skip" policy bundles are built concurrently and
    collected in input order. With the "abort" policy they are built one
    after another and the first unreadable bundle ends the batch, so later
    bundles are never parsed and export nothing.

    Args:
        readers: One reader per bundle, in input order
        policy: "abort" to stop at the first unreadable bundle, "skip" to
            continue with the next one
        log: Logger receiving progress and warnings

    Returns:
        Render tree of the readable bundles

    """
    result_files = [ResultFile(path=reader.path, reader=reader) for reader in readers]
    runs: list[Run] = []
    readable_files: list[ResultFile] = []
    result: BundleResult

    def collect(result_file: ResultFile, result: BundleResult) -> bool:
        if isinstance(result, BaseException):
            log.warning(
                "Can't build report for %s: %s",
                result_file.path,
                result,
                exc_info=result,
            )
            return False
        if result is None:
            log.warning("Can't find invocation record for : %s", result_file.path)
            return False
        readable_files.append(result_file)
        runs.extend(result)
        return True

    if policy == "abort":
        for result_file in result_files:
            log.info("Parsing %s", result_file.path)
            try:
                result = await BundleBuilder(
                    result_file=result_file, log=log
                ).build_runs()
            except Exception as e:
                result = e
            if not collect(result_file, result):
                break
    else:
        for result_file in result_files:
            log.info("Parsing %s", result_file.path)
        results = await asyncio.gather(
            *(
                BundleBuilder(result_file=result_file, log=log).build_runs()
                for result_file in result_files
            ),
            return_exceptions=True,
        )
        for result_file, result in zip(result_files, results, strict=True):
            collect(result_file, result)

    return RenderTree(runs=runs, result_files=readable_files)
