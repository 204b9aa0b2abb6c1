"""Shared enumerations and result structures."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any


class DirectoryType(str, Enum):
    """Directory types that can be synchronized."""
    POWER_ONS = "powerOns"
    LETTER_FILES = "letterFiles"
    DATA_FILES = "dataFiles"
    HELP_FILES = "helpFiles"


class ConnectionType(str, Enum):
    """Transports available for reaching the Symitar host."""
    SSH = "ssh"
    HTTPS = "https"


class SyncMode(str, Enum):
    """Direction of a synchronization."""
    PUSH = "push"
    PULL = "pull"
    MIRROR = "mirror"


class SymitarSyncDirectory(str, Enum):
    """Remote Symitar directories, named as they appear under /SYM/SYMxxx."""
    REPWRITERSPECS = "REPWRITERSPECS"
    LETTERSPECS = "LETTERSPECS"
    DATAFILES = "DATAFILES"
    HELPFILES = "HELPFILES"


@dataclass
class SyncOutcome:
    """File names changed by a single synchronize call.

    Names are relative to the remote directory. ``installed`` and
    ``uninstalled`` stay empty for directories without install support.
    """

    deployed: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    installed: List[str] = field(default_factory=list)
    uninstalled: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SyncOutcome":
        """Build an outcome from a client response mapping."""
        return cls(
            deployed=list(data.get("deployed") or []),
            deleted=list(data.get("deleted") or []),
            installed=list(data.get("installed") or []),
            uninstalled=list(data.get("uninstalled") or [])
        )

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "deployed": list(self.deployed),
            "deleted": list(self.deleted),
            "installed": list(self.installed),
            "uninstalled": list(self.uninstalled)
        }
