"""Result aggregation for synchronize outcomes."""

from dataclasses import dataclass
from typing import Union

from ..models import DirectoryType, SyncOutcome
from .directories import resolve_directory


@dataclass(frozen=True)
class SyncSummary:
    """Counts derived from a synchronize outcome."""

    deployed_count: int
    deleted_count: int
    installed_count: int
    uninstalled_count: int
    total_changes: int

    @property
    def has_changes(self) -> bool:
        return self.total_changes > 0


def normalize(directory_type: Union[str, DirectoryType], outcome: SyncOutcome) -> SyncSummary:
    """Count the changes in ``outcome`` for the given directory type.

    Install and uninstall counts are zeroed for directory types without
    install support, whatever the outcome holds, and only count towards
    ``total_changes`` for install-capable types.
    """
    supports_install = resolve_directory(directory_type).supports_install

    deployed_count = len(outcome.deployed)
    deleted_count = len(outcome.deleted)
    installed_count = len(outcome.installed) if supports_install else 0
    uninstalled_count = len(outcome.uninstalled) if supports_install else 0

    return SyncSummary(
        deployed_count=deployed_count,
        deleted_count=deleted_count,
        installed_count=installed_count,
        uninstalled_count=uninstalled_count,
        total_changes=deployed_count + deleted_count + installed_count + uninstalled_count
    )
