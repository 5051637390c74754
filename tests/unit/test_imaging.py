"""Tests for image downsizing."""

import io
import logging

import pytest
from PIL import Image

from xcreport.imaging import downsize_image

from .conftest import MakePngFn


def image_size(data: bytes) -> tuple[int, int]:
    """Return the dimensions of encoded image data."""
    with Image.open(io.BytesIO(data)) as image:
        return image.size


def test_scales_dimensions(make_png: MakePngFn) -> None:
    """Resizes both dimensions by the scale factor."""
    data = downsize_image(make_png(80, 40), 0.25)

    assert image_size(data) == (20, 10)


def test_keeps_format(make_png: MakePngFn) -> None:
    """Re-encodes in the source format."""
    data = downsize_image(make_png(), 0.5)

    with Image.open(io.BytesIO(data)) as image:
        assert image.format == "PNG"


def test_never_collapses_to_zero(make_png: MakePngFn) -> None:
    """Keeps at least one pixel per dimension."""
    data = downsize_image(make_png(3, 3), 0.01)

    assert image_size(data) == (1, 1)


@pytest.mark.parametrize("scale_factor", [1.0, 2.0])
def test_never_enlarges(make_png: MakePngFn, scale_factor: float) -> None:
    """Returns the input unchanged for factors of one or more."""
    original = make_png()

    assert downsize_image(original, scale_factor) is original


def test_returns_undecodable_data_unchanged(caplog: pytest.LogCaptureFixture) -> None:
    """Keeps data Pillow cannot read."""
    with caplog.at_level(logging.DEBUG, logger="xcreport.imaging"):
        result = downsize_image(b"not an image", 0.5)

    assert result == b"not an image"
    assert "Keeping image at original size" in caplog.text


def test_returns_empty_data_unchanged() -> None:
    """Skips empty payloads."""
    assert downsize_image(b"", 0.5) == b""
