"""Synchronize Symitar directories with a Git repository."""

__version__ = "1.0.0"

# core is imported before config: the config schema depends on core modules
from .models import ConnectionType, DirectoryType, SyncMode, SyncOutcome
from .core import ErrorKind, SymitarSyncError, SyncOrchestrator, SyncResult, SyncSummary, normalize
from .config import ConfigLoader, SyncConfiguration, load_config_from_env

__all__ = [
    "__version__",
    "ConnectionType",
    "DirectoryType",
    "SyncMode",
    "SyncOutcome",
    "ErrorKind",
    "SymitarSyncError",
    "SyncOrchestrator",
    "SyncResult",
    "SyncSummary",
    "normalize",
    "ConfigLoader",
    "SyncConfiguration",
    "load_config_from_env"
]
