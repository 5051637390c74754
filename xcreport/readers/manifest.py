"""Reader manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel

from xcreport.readers.base import ResultReader


@dataclass(frozen=True, kw_only=True)
class ReaderManifest[ConfigT: BaseModel]:
    """Manifest describing a bundle reader plugin.

    The manifest contains references to the configuration class and the
    reader factory, which builds one reader per bundle path.
    """

    config_cls: type[ConfigT]
    reader_factory: Callable[[ConfigT, Path], ResultReader]
