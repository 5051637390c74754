"""xcresulttool reader manifest."""

from xcreport.readers.manifest import ReaderManifest
from xcreport.readers.xcresulttool.config import XCResultToolConfig
from xcreport.readers.xcresulttool.reader import XCResultToolReader

xcresulttool_manifest = ReaderManifest(
    config_cls=XCResultToolConfig,
    reader_factory=XCResultToolReader.from_config,
)
