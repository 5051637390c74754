"""Tests for the combined JSON export."""

import json
import logging

import pytest

from xcreport.serializers.json_report import render_json


def test_combines_exports_into_array() -> None:
    """Keeps every export as an element in input order."""
    output = render_json([b'{"bundle": "A"}', b'{"bundle": "B"}'])

    assert json.loads(output) == [{"bundle": "A"}, {"bundle": "B"}]


def test_empty_input() -> None:
    """Produces an empty array without exports."""
    assert json.loads(render_json([])) == []


def test_skips_missing_exports() -> None:
    """Ignores bundles that produced no export."""
    output = render_json([None, b'{"bundle": "B"}'])

    assert json.loads(output) == [{"bundle": "B"}]


def test_skips_invalid_exports(caplog: pytest.LogCaptureFixture) -> None:
    """Logs and drops exports that are not valid JSON."""
    with caplog.at_level(logging.WARNING):
        output = render_json([b'{"bundle": "A"}', b"{truncated", b"\x80\x81"])

    assert json.loads(output) == [{"bundle": "A"}]
    assert "Skipping invalid JSON export #1" in caplog.text
    assert "Skipping invalid JSON export #2" in caplog.text
