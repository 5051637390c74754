"""Reader backed by Xcode's xcresulttool."""

from xcreport.readers.xcresulttool.config import XCResultToolConfig
from xcreport.readers.xcresulttool.manifest import xcresulttool_manifest
from xcreport.readers.xcresulttool.reader import XCResultToolError, XCResultToolReader

__all__ = [
    "XCResultToolConfig",
    "XCResultToolError",
    "XCResultToolReader",
    "xcresulttool_manifest",
]
