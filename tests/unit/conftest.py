"""Shared fixtures for unit tests."""

import io
from pathlib import Path
from typing import Protocol

import pytest
from PIL import Image

from xcreport.models.report import Attachment


class MakePngFn(Protocol):
    """Protocol for PNG creation function."""

    def __call__(self, width: int = 40, height: int = 20) -> bytes:
        """Return PNG bytes of a solid image."""


class MakeScreenshotFn(Protocol):
    """Protocol for screenshot attachment creation function."""

    def __call__(self, filename: str, name: str | None = None) -> Attachment:
        """Write a PNG to disk and return an attachment pointing at it."""


@pytest.fixture
def make_png() -> MakePngFn:
    """Return a function creating PNG images."""

    def _make(width: int = 40, height: int = 20) -> bytes:
        buffer = io.BytesIO()
        Image.new("RGB", (width, height), (200, 30, 30)).save(buffer, format="PNG")
        return buffer.getvalue()

    return _make


@pytest.fixture
def make_screenshot(tmp_path: Path, make_png: MakePngFn) -> MakeScreenshotFn:
    """Return a function creating screenshot attachments backed by files."""
    attachments_dir = tmp_path / "Attachments"

    def _make(filename: str, name: str | None = None) -> Attachment:
        attachments_dir.mkdir(exist_ok=True)
        path = attachments_dir / filename
        path.write_bytes(make_png())
        return Attachment(
            name=name,
            filename=filename,
            uniform_type_identifier="public.png",
            mime_type="image/png",
            path=path,
        )

    return _make
