"""Configuration for the xcresulttool reader."""

from pydantic import BaseModel


class XCResultToolConfig(BaseModel):
    """Configuration for the xcresulttool reader."""

    xcrun: str = "xcrun"
    # Xcode 16 moved the object graph commands behind --legacy
    legacy: bool = True
