from .database import ConnectionCheck, ServerVersionCheck
from .plugin import CorePlugin
from .system import (
    DiskSpaceCheck,
    LogFileSizeCheck,
    PythonVersionCheck,
    TempDirectoryCheck,
    format_bytes,
)

__all__ = [
    "ConnectionCheck",
    "CorePlugin",
    "DiskSpaceCheck",
    "LogFileSizeCheck",
    "PythonVersionCheck",
    "ServerVersionCheck",
    "TempDirectoryCheck",
    "format_bytes",
]
