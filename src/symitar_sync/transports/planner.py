"""Pure planning of file transfers between a local and a remote directory."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from ..models import SyncMode


@dataclass
class SyncPlan:
    """Operations needed to bring two directories in line for a mode."""

    mode: SyncMode
    upload: List[str] = field(default_factory=list)
    download: List[str] = field(default_factory=list)
    delete_remote: List[str] = field(default_factory=list)
    remote_after: Set[str] = field(default_factory=set)

    @property
    def deployed(self) -> List[str]:
        """Files transferred by the plan, in the mode's direction."""
        return list(self.download) if self.mode == SyncMode.PULL else list(self.upload)

    @property
    def deleted(self) -> List[str]:
        return list(self.delete_remote)

    def installed(self, install_list: Iterable[str]) -> List[str]:
        """Requested install entries that exist remotely once the plan is applied."""
        return [name for name in install_list if name in self.remote_after]

    def uninstalled(self, install_list: Iterable[str]) -> List[str]:
        """Requested install entries the plan removes from the remote side."""
        removed = set(self.delete_remote)
        return [name for name in install_list if name in removed]


def _changed(name: str, source: Dict[str, bytes], target: Dict[str, bytes]) -> bool:
    return name not in target or source[name] != target[name]


def plan_sync(local: Dict[str, bytes], remote: Dict[str, bytes], mode: SyncMode) -> SyncPlan:
    """Work out what a synchronization in ``mode`` would do.

    Args:
        local: File name to content for the local directory
        remote: File name to content for the remote directory
        mode: push uploads new and changed files, pull downloads them,
            mirror pushes and also deletes remote files missing locally

    Returns:
        SyncPlan with sorted file name lists
    """
    mode = SyncMode(mode)
    plan = SyncPlan(mode=mode)

    if mode == SyncMode.PULL:
        plan.download = sorted(name for name in remote if _changed(name, remote, local))
        plan.remote_after = set(remote)
        return plan

    plan.upload = sorted(name for name in local if _changed(name, local, remote))

    if mode == SyncMode.MIRROR:
        plan.delete_remote = sorted(name for name in remote if name not in local)

    plan.remote_after = (set(remote) | set(plan.upload)) - set(plan.delete_remote)
    return plan


def find_invalid_files(files: Dict[str, bytes], names: Iterable[str], ignore: Iterable[str]) -> List[str]:
    """Return the files among ``names`` that are not plain text.

    Symitar specfiles are text; a NUL byte marks a binary file that the
    host would reject. Files named in ``ignore`` are not checked.
    """
    skipped = set(ignore)
    return [
        name for name in names
        if name not in skipped and name in files and b"\x00" in files[name]
    ]
