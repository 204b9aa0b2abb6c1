"""Directory type registry.

Maps each synchronizable directory type to its remote Symitar directory,
the default local path inside the repository and whether the platform
reports install/uninstall results for it.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from ..models import DirectoryType, SymitarSyncDirectory
from .errors import SymitarSyncError


@dataclass(frozen=True)
class DirectoryTypeConfig:
    """Static configuration for a directory type."""

    name: str
    symitar_directory: SymitarSyncDirectory
    default_path: str
    supports_install: bool


DIRECTORY_CONFIG: Dict[DirectoryType, DirectoryTypeConfig] = {
    DirectoryType.POWER_ONS: DirectoryTypeConfig(
        name="PowerOns",
        symitar_directory=SymitarSyncDirectory.REPWRITERSPECS,
        default_path="REPWRITERSPECS/",
        supports_install=True
    ),
    DirectoryType.LETTER_FILES: DirectoryTypeConfig(
        name="LetterFiles",
        symitar_directory=SymitarSyncDirectory.LETTERSPECS,
        default_path="LETTERSPECS/",
        supports_install=False
    ),
    DirectoryType.DATA_FILES: DirectoryTypeConfig(
        name="DataFiles",
        symitar_directory=SymitarSyncDirectory.DATAFILES,
        default_path="DATAFILES/",
        supports_install=False
    ),
    DirectoryType.HELP_FILES: DirectoryTypeConfig(
        name="HelpFiles",
        symitar_directory=SymitarSyncDirectory.HELPFILES,
        default_path="HELPFILES/",
        supports_install=False
    ),
}

VALID_DIRECTORY_TYPES = ", ".join(t.value for t in DIRECTORY_CONFIG)


def is_valid_directory_type(value: Union[str, DirectoryType]) -> bool:
    """Check whether ``value`` names a known directory type."""
    try:
        DirectoryType(value)
    except ValueError:
        return False
    return True


def resolve_directory(directory_type: Union[str, DirectoryType]) -> DirectoryTypeConfig:
    """Get the configuration for a directory type.

    Raises:
        SymitarSyncError: configuration kind, if the type is unknown
    """
    if not is_valid_directory_type(directory_type):
        raise SymitarSyncError.configuration(
            f"Invalid directory type: {directory_type}. Must be one of: {VALID_DIRECTORY_TYPES}"
        )
    return DIRECTORY_CONFIG[DirectoryType(directory_type)]


def resolve_install_list(directory_type: Union[str, DirectoryType], requested: List[str]) -> List[str]:
    """Return the install list to forward to the platform.

    Only install-capable directories keep the requested list; every other
    type gets an empty list no matter what was asked for.
    """
    if resolve_directory(directory_type).supports_install:
        return list(requested)
    return []


def resolve_local_path(directory_type: Union[str, DirectoryType], override: Optional[str] = None) -> str:
    """Return ``override`` when given, otherwise the type's default path."""
    if override:
        return override
    return resolve_directory(directory_type).default_path
