"""Symitar transport clients."""

from .base import (
    SSHConfig,
    SymitarConfig,
    SyncClient,
    TransportError
)

from .planner import SyncPlan, plan_sync, find_invalid_files
from .ssh import SymitarSSHClient
from .https import SymitarHTTPSClient

__all__ = [
    # Base classes and exceptions
    "SSHConfig",
    "SymitarConfig",
    "SyncClient",
    "TransportError",

    # Planning
    "SyncPlan",
    "plan_sync",
    "find_invalid_files",

    # Client implementations
    "SymitarSSHClient",
    "SymitarHTTPSClient"
]
