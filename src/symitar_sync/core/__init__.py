"""Core synchronization logic package."""

from .errors import ErrorKind, SymitarSyncError
from .directories import (
    DIRECTORY_CONFIG,
    DirectoryTypeConfig,
    is_valid_directory_type,
    resolve_directory,
    resolve_install_list,
    resolve_local_path
)
from .aggregator import SyncSummary, normalize
from .license import LicenseValidator
from .dispatcher import TransportDispatcher, TransportAdapter, SyncRequest
from .orchestrator import SyncOrchestrator, SyncResult

__all__ = [
    "ErrorKind",
    "SymitarSyncError",
    "DIRECTORY_CONFIG",
    "DirectoryTypeConfig",
    "is_valid_directory_type",
    "resolve_directory",
    "resolve_install_list",
    "resolve_local_path",
    "SyncSummary",
    "normalize",
    "LicenseValidator",
    "TransportDispatcher",
    "TransportAdapter",
    "SyncRequest",
    "SyncOrchestrator",
    "SyncResult"
]
