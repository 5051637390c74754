"""Pydantic models for the result bundle JSON format."""

from collections.abc import Sequence
from typing import Annotated, Literal

from pydantic import Field

from xcreport.models.base import XCResultModel


class Reference(XCResultModel):
    """Pointer to another object stored in the bundle."""

    id: str
    target_type: str | None = None


class ActionPlatformRecord(XCResultModel):
    """Platform of a run destination."""

    identifier: str
    user_description: str


class ActionDeviceRecord(XCResultModel):
    """Device a run was executed on."""

    name: str
    identifier: str
    model_name: str | None = None
    operating_system_version: str | None = None
    operating_system_version_with_build_number: str | None = None
    platform_record: ActionPlatformRecord | None = None


class ActionRunDestinationRecord(XCResultModel):
    """Destination (simulator or device) of a test action."""

    display_name: str
    target_architecture: str | None = None
    target_device_record: ActionDeviceRecord


class ActionResult(XCResultModel):
    """Outcome of a scheme action."""

    result_name: str
    status: str | None = None
    tests_ref: Reference | None = None
    log_ref: Reference | None = None


class ActionRecord(XCResultModel):
    """A single scheme action recorded in the bundle."""

    scheme_command_name: str
    scheme_task_name: str | None = None
    title: str | None = None
    run_destination: ActionRunDestinationRecord
    action_result: ActionResult


class ActionsInvocationRecord(XCResultModel):
    """Root object of a result bundle."""

    actions: Sequence[ActionRecord] = Field(default_factory=list)


class ActionTestAttachment(XCResultModel):
    """Attachment recorded by a test activity."""

    uniform_type_identifier: str
    name: str | None = None
    filename: str | None = None
    lifetime: str | None = None
    payload_ref: Reference | None = None
    payload_size: int | None = None


class ActionTestActivitySummary(XCResultModel):
    """Activity (step) performed during a test."""

    title: str
    activity_type: str | None = None
    uuid: str | None = None
    attachments: Sequence[ActionTestAttachment] = Field(default_factory=list)
    subactivities: Sequence["ActionTestActivitySummary"] = Field(
        default_factory=list
    )


class ActionTestFailureSummary(XCResultModel):
    """Recorded test failure."""

    message: str | None = None
    file_name: str | None = None
    line_number: int | None = None
    is_performance_failure: bool = False
    attachments: Sequence[ActionTestAttachment] = Field(default_factory=list)


class ActionTestNoticeSummary(XCResultModel):
    """Notice attached to a test, e.g. the reason it was skipped."""

    message: str | None = None
    file_name: str | None = None
    line_number: int | None = None


class ActionTestSummary(XCResultModel):
    """Full summary of a single test, fetched through its summary reference."""

    name: str
    identifier: str | None = None
    test_status: str
    duration: float = 0.0
    activity_summaries: Sequence[ActionTestActivitySummary] = Field(
        default_factory=list
    )
    failure_summaries: Sequence[ActionTestFailureSummary] = Field(
        default_factory=list
    )
    skip_notice_summary: ActionTestNoticeSummary | None = None


class ActionTestMetadata(XCResultModel):
    """Leaf of the test hierarchy."""

    type_name: Literal["ActionTestMetadata"] = Field(alias="_type")
    name: str
    identifier: str
    test_status: str
    duration: float = 0.0
    summary_ref: Reference | None = None


class ActionTestSummaryGroup(XCResultModel):
    """Inner node of the test hierarchy (suite, class)."""

    type_name: Literal["ActionTestSummaryGroup"] = Field(alias="_type")
    name: str
    identifier: str | None = None
    duration: float = 0.0
    subtests: Sequence["ActionTestNode"] = Field(default_factory=list)


ActionTestNode = Annotated[
    ActionTestSummaryGroup | ActionTestMetadata, Field(discriminator="type_name")
]


class ActionTestableSummary(XCResultModel):
    """Tests of a single test target."""

    name: str
    target_name: str | None = None
    test_kind: str | None = None
    tests: Sequence[ActionTestNode] = Field(default_factory=list)


class ActionTestPlanRunSummary(XCResultModel):
    """Tests of one test plan configuration."""

    name: str | None = None
    testable_summaries: Sequence[ActionTestableSummary] = Field(default_factory=list)


class ActionTestPlanRunSummaries(XCResultModel):
    """Root object behind an action's tests reference."""

    summaries: Sequence[ActionTestPlanRunSummary] = Field(default_factory=list)


ActionTestActivitySummary.model_rebuild()
ActionTestSummaryGroup.model_rebuild()
