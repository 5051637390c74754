"""Tests for result bundle models."""

from xcreport.models.xcresult import (
    ActionsInvocationRecord,
    ActionTestMetadata,
    ActionTestPlanRunSummaries,
    ActionTestSummary,
    ActionTestSummaryGroup,
)
from xcreport.testing import payloads


def test_parses_invocation_record() -> None:
    """Parses actions with run destination and tests reference."""
    record = ActionsInvocationRecord.model_validate(
        payloads.invocation_record([payloads.action(tests_ref="tests-1")])
    )

    assert len(record.actions) == 1
    action = record.actions[0]
    assert action.title == "Test Scheme Action"
    assert action.action_result.tests_ref is not None
    assert action.action_result.tests_ref.id == "tests-1"
    device = action.run_destination.target_device_record
    assert device.name == "iPhone 15"
    assert device.operating_system_version == "17.2"
    assert device.platform_record is not None
    assert device.platform_record.user_description == "iOS Simulator"


def test_parses_action_without_tests() -> None:
    """Leaves tests reference unset for actions without results."""
    record = ActionsInvocationRecord.model_validate(
        payloads.invocation_record([payloads.action(tests_ref=None)])
    )

    assert record.actions[0].action_result.tests_ref is None


def test_discriminates_groups_and_tests() -> None:
    """Builds groups and leaves from the type name of each node."""
    summaries = ActionTestPlanRunSummaries.model_validate(
        payloads.plan_run_summaries(
            [
                payloads.summary_group(
                    "LoginTests",
                    [
                        payloads.leaf(name="testA()", identifier="LoginTests/testA()"),
                        payloads.summary_group(
                            "Nested", [payloads.leaf(identifier="Nested/testB()")]
                        ),
                    ],
                )
            ]
        )
    )

    testable = summaries.summaries[0].testable_summaries[0]
    group = testable.tests[0]
    assert isinstance(group, ActionTestSummaryGroup)
    assert isinstance(group.subtests[0], ActionTestMetadata)
    assert isinstance(group.subtests[1], ActionTestSummaryGroup)
    assert group.subtests[0].identifier == "LoginTests/testA()"


def test_parses_test_summary_with_failure() -> None:
    """Converts numeric strings and nested attachments."""
    summary = ActionTestSummary.model_validate(
        payloads.full_summary(
            status="Failure",
            duration=12.5,
            activities=[
                payloads.activity(
                    "Tap button",
                    attachments=[
                        payloads.attachment(filename="shot.png", payload_id="p-1")
                    ],
                )
            ],
            failure_message="assertion failed",
            file_name="LoginTests.swift",
            line_number=42,
        )
    )

    assert summary.test_status == "Failure"
    assert summary.duration == 12.5
    assert summary.failure_summaries[0].line_number == 42
    attachment = summary.activity_summaries[0].attachments[0]
    assert attachment.uniform_type_identifier == "public.png"
    assert attachment.payload_ref is not None
    assert attachment.payload_ref.id == "p-1"
    assert attachment.name is None
