"""Strategies turning attachments into sources the HTML report can reference."""

import base64
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from xcreport.config import ReportOptions
from xcreport.imaging import downsize_image
from xcreport.models.report import Attachment

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True, kw_only=True)
class EmbeddingStrategy(ABC):
    """Decides how an attachment is referenced from the HTML report."""

    @abstractmethod
    def source(self, attachment: Attachment) -> str | None:
        """Return a data URI or relative path, None when there is nothing to show."""


@dataclass(frozen=True, kw_only=True)
class InlineEmbedding(EmbeddingStrategy):
    """Embeds attachment bytes as base64 data URIs."""

    downsize_images: bool = False
    downsize_scale_factor: float = 1.0

    def source(self, attachment: Attachment) -> str | None:
        """Return a ``data:`` URI with the (possibly downsized) payload."""
        if not attachment.has_content:
            return None

        data = attachment.read_bytes()
        if self.downsize_images and attachment.is_screenshot:
            data = downsize_image(data, self.downsize_scale_factor)

        mime_type = attachment.mime_type or DEFAULT_MIME_TYPE
        encoded = base64.b64encode(data).decode("ascii")
        return f"data:{mime_type};base64,{encoded}"


@dataclass(frozen=True, kw_only=True)
class LinkingEmbedding(EmbeddingStrategy):
    """Links to exported attachment files relative to the output directory.

    Every linked file is recorded in ``referenced_paths`` so pruning keeps it.
    """

    output_dir: Path
    referenced_paths: set[Path] = field(default_factory=set)

    def source(self, attachment: Attachment) -> str | None:
        """Return the attachment path relative to ``output_dir``."""
        if attachment.path is None:
            return None

        absolute = attachment.path.resolve()
        self.referenced_paths.add(absolute)
        relative = os.path.relpath(absolute, self.output_dir.resolve())
        return Path(relative).as_posix()


def embedding_for(options: ReportOptions, output_dir: Path) -> EmbeddingStrategy:
    """Create the strategy selected by ``options.rendering_mode``."""
    if options.rendering_mode == "inline":
        return InlineEmbedding(
            downsize_images=options.downsize_images,
            downsize_scale_factor=options.downsize_scale_factor,
        )
    return LinkingEmbedding(output_dir=output_dir)
