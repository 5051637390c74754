"""Payload helpers for result bundle JSON in tests.

Builds the typed wrapper format xcresulttool emits, where every value is
nested in ``{"_type": {"_name": ...}, "_value": ...}``.
"""

from collections.abc import Sequence
from typing import Any


def value(raw: Any, type_name: str = "String") -> dict[str, Any]:
    """Wrap a scalar."""
    return {"_type": {"_name": type_name}, "_value": str(raw)}


def array(items: Sequence[dict[str, Any]]) -> dict[str, Any]:
    """Wrap a list of objects."""
    return {"_type": {"_name": "Array"}, "_values": list(items)}


def obj(type_name: str, **fields: Any) -> dict[str, Any]:
    """Create a typed object, dropping fields set to None."""
    payload: dict[str, Any] = {"_type": {"_name": type_name}}
    payload.update({key: item for key, item in fields.items() if item is not None})
    return payload


def reference(ref_id: str) -> dict[str, Any]:
    """Create a reference to another object."""
    return obj("Reference", id=value(ref_id))


def run_destination(
    *,
    name: str = "iPhone 15",
    identifier: str = "7E6A5B3C-0000-0000-0000-000000000001",
    os_version: str = "17.2",
    model_name: str = "iPhone 15",
) -> dict[str, Any]:
    """Create a run destination record."""
    return obj(
        "ActionRunDestinationRecord",
        displayName=value(name),
        targetArchitecture=value("arm64"),
        targetDeviceRecord=obj(
            "ActionDeviceRecord",
            name=value(name),
            identifier=value(identifier),
            modelName=value(model_name),
            operatingSystemVersion=value(os_version),
            platformRecord=obj(
                "ActionPlatformRecord",
                identifier=value("com.apple.platform.iphonesimulator"),
                userDescription=value("iOS Simulator"),
            ),
        ),
    )


def action(
    *,
    title: str = "Test Scheme Action",
    tests_ref: str | None = "tests-ref-1",
    destination: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create an action record, optionally pointing at test results."""
    return obj(
        "ActionRecord",
        schemeCommandName=value("Test"),
        title=value(title),
        runDestination=destination or run_destination(),
        actionResult=obj(
            "ActionResult",
            resultName=value("tests"),
            status=value("failed"),
            testsRef=reference(tests_ref) if tests_ref else None,
        ),
    )


def invocation_record(actions: Sequence[dict[str, Any]]) -> dict[str, Any]:
    """Create the root record of a bundle."""
    return obj("ActionsInvocationRecord", actions=array(actions))


def leaf(
    *,
    name: str = "testExample()",
    identifier: str = "ExampleTests/testExample()",
    status: str = "Success",
    duration: float = 0.5,
    summary_ref: str | None = None,
) -> dict[str, Any]:
    """Create a leaf of the test hierarchy."""
    return obj(
        "ActionTestMetadata",
        name=value(name),
        identifier=value(identifier),
        testStatus=value(status),
        duration=value(duration, "Double"),
        summaryRef=reference(summary_ref) if summary_ref else None,
    )


def summary_group(
    name: str, subtests: Sequence[dict[str, Any]], *, identifier: str | None = None
) -> dict[str, Any]:
    """Create an inner node of the test hierarchy."""
    return obj(
        "ActionTestSummaryGroup",
        name=value(name),
        identifier=value(identifier or name),
        subtests=array(subtests),
    )


def plan_run_summaries(
    tests: Sequence[dict[str, Any]], *, testable: str = "ExampleTests"
) -> dict[str, Any]:
    """Create the object behind an action's tests reference."""
    return obj(
        "ActionTestPlanRunSummaries",
        summaries=array(
            [
                obj(
                    "ActionTestPlanRunSummary",
                    name=value("Test Scheme Action"),
                    testableSummaries=array(
                        [
                            obj(
                                "ActionTestableSummary",
                                name=value(testable),
                                targetName=value(testable),
                                tests=array(tests),
                            )
                        ]
                    ),
                )
            ]
        ),
    )


def attachment(
    *,
    filename: str,
    payload_id: str | None = None,
    name: str | None = None,
    uti: str = "public.png",
) -> dict[str, Any]:
    """Create an attachment record."""
    return obj(
        "ActionTestAttachment",
        uniformTypeIdentifier=value(uti),
        name=value(name) if name is not None else None,
        filename=value(filename),
        payloadRef=reference(payload_id) if payload_id else None,
    )


def activity(
    title: str,
    *,
    attachments: Sequence[dict[str, Any]] = (),
    subactivities: Sequence[dict[str, Any]] = (),
) -> dict[str, Any]:
    """Create an activity summary."""
    return obj(
        "ActionTestActivitySummary",
        title=value(title),
        attachments=array(attachments) if attachments else None,
        subactivities=array(subactivities) if subactivities else None,
    )


def full_summary(
    *,
    name: str = "testExample()",
    identifier: str = "ExampleTests/testExample()",
    status: str = "Success",
    duration: float = 0.5,
    activities: Sequence[dict[str, Any]] = (),
    failure_message: str | None = None,
    file_name: str | None = None,
    line_number: int | None = None,
    failure_attachments: Sequence[dict[str, Any]] = (),
) -> dict[str, Any]:
    """Create the full summary of a single test."""
    failures = []
    if failure_message is not None:
        failures.append(
            obj(
                "ActionTestFailureSummary",
                message=value(failure_message),
                fileName=value(file_name) if file_name else None,
                lineNumber=value(line_number, "Int") if line_number else None,
                attachments=(
                    array(failure_attachments) if failure_attachments else None
                ),
            )
        )
    return obj(
        "ActionTestSummary",
        name=value(name),
        identifier=value(identifier),
        testStatus=value(status),
        duration=value(duration, "Double"),
        activitySummaries=array(activities) if activities else None,
        failureSummaries=array(failures) if failures else None,
    )
