"""tarfetch - fetch a remote gzipped tarball and unpack it locally.

Provides:
* Streaming fetch -> gunzip -> tar -> filesystem extraction
* Detection of source-control export archives (``git archive``), whose
  synthetic top-level directory is stripped
* Path traversal protection for every written entry
* Thin CLI wrapper (`tarfetch`)
"""

from .common.config import FetchSettings  # noqa: F401
from .common.errors import (  # noqa: F401
    FormatError,
    PathSafetyError,
    RetrievalError,
    TarfetchError,
    WriteError,
)
from .common.logging_config import configure_logging  # noqa: F401
from .core.extract import (  # noqa: F401
    ExtractionResult,
    ExtractionState,
    TarballExtractor,
    copy_member,
    extract_tarball,
    untargzip,
)
from .core.rewrite import ArchiveFlavor  # noqa: F401

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "ArchiveFlavor",
    "ExtractionResult",
    "ExtractionState",
    "FetchSettings",
    "FormatError",
    "PathSafetyError",
    "RetrievalError",
    "TarballExtractor",
    "TarfetchError",
    "WriteError",
    "configure_logging",
    "copy_member",
    "extract_tarball",
    "untargzip",
]
