"""Report generation options."""

from typing import Literal

from pydantic import Field

from xcreport.models.base import Model

type RenderingMode = Literal["inline", "linking"]
type UnreadableBundlePolicy = Literal["abort", "skip"]


class ReportOptions(Model):
    """Options shared by the tree builder and the serializers."""

    rendering_mode: RenderingMode = Field(
        default="linking",
        description="Embed attachment bytes (inline) or link to exported files",
    )
    downsize_images: bool = Field(
        default=False, description="Downsize images before inlining them"
    )
    downsize_scale_factor: float = Field(
        default=0.5, gt=0, description="Scale applied to downsized images"
    )
    include_run_destination_info: bool = Field(
        default=False, description="Annotate JUnit suites with run destinations"
    )
    unreadable_bundle_policy: UnreadableBundlePolicy = Field(
        default="abort",
        description="Abandon the batch (abort) or only the bundle (skip)",
    )
