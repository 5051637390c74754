"""JUnit XML serialization of the render tree."""

import xml.etree.ElementTree as ET
from collections.abc import Sequence

from xcreport.models.report import RenderTree, Run, TestCase


def _counts(tests: Sequence[TestCase]) -> dict[str, str]:
    return {
        "tests": str(len(tests)),
        "failures": str(sum(1 for t in tests if t.status == "failure")),
        "skipped": str(sum(1 for t in tests if t.status == "skip")),
        "time": f"{sum(t.duration for t in tests):.3f}",
    }


def _class_name(identifier: str) -> str:
    # Identifiers look like "Suite/testMethod()"
    class_name, _, _ = identifier.rpartition("/")
    return class_name


def _suite_name(run: Run, include_run_destination_info: bool) -> str:
    if not include_run_destination_info:
        return run.name
    destination = run.destination
    details = " ".join(filter(None, [destination.name, destination.os_version]))
    return f"{run.name} - {details}" if details else run.name


def _add_properties(suite: ET.Element, run: Run) -> None:
    destination = run.destination
    properties = ET.SubElement(suite, "properties")
    for name, value in (
        ("device.name", destination.name),
        ("device.identifier", destination.identifier),
        ("device.os", destination.os_version),
        ("device.model", destination.model_name),
        ("device.platform", destination.platform),
        ("device.architecture", destination.architecture),
    ):
        if value:
            ET.SubElement(properties, "property", {"name": name, "value": value})


def _add_test_case(suite: ET.Element, test: TestCase) -> None:
    element = ET.SubElement(
        suite,
        "testcase",
        {
            "classname": _class_name(test.identifier),
            "name": test.name,
            "time": f"{test.duration:.3f}",
        },
    )
    if test.status == "failure":
        failure = ET.SubElement(element, "failure", {"message": test.message or ""})
        if test.location:
            failure.text = test.location
    elif test.status == "skip":
        skipped = ET.SubElement(element, "skipped")
        if test.message:
            skipped.set("message", test.message)


def to_junit_element(
    tree: RenderTree, *, include_run_destination_info: bool = False
) -> ET.Element:
    """Build a ``<testsuites>`` element with one ``<testsuite>`` per run."""
    root = ET.Element("testsuites", {"name": "All tests", **_counts(tree.all_tests)})
    for run in tree.runs:
        tests = run.all_tests
        suite = ET.SubElement(
            root,
            "testsuite",
            {"name": _suite_name(run, include_run_destination_info), **_counts(tests)},
        )
        if include_run_destination_info:
            _add_properties(suite, run)
        for test in tests:
            _add_test_case(suite, test)
    return root


def render_junit(
    tree: RenderTree, *, include_run_destination_info: bool = False
) -> str:
    """Serialize the render tree as a JUnit XML document."""
    root = to_junit_element(
        tree, include_run_destination_info=include_run_destination_info
    )
    ET.indent(root)
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
