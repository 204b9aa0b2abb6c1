"""Base class and shared file synchronization for Symitar clients."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from ..models import SymitarSyncDirectory, SyncMode, SyncOutcome
from ..utils.logging import get_logger, set_transport_debug
from .planner import find_invalid_files, plan_sync
from .sftp import RemoteFileSystem, read_local_directory, remote_directory_path


@dataclass(frozen=True)
class SSHConfig:
    """SSH credentials for the Symitar host."""

    host: str
    port: int
    username: str
    password: str


@dataclass(frozen=True)
class SymitarConfig:
    """Symitar platform account."""

    sym_number: int
    symitar_user_number: str
    symitar_user_password: str


class TransportError(Exception):
    """Raised when a client cannot carry out a synchronization."""
    pass


class SyncClient(ABC):
    """Connection to a Symitar host able to synchronize one directory."""

    def __init__(self, ssh_config: SSHConfig, log_level: str = "info"):
        self.ssh_config = ssh_config
        self.log_level = log_level
        self.logger = get_logger(self.__class__.__name__)
        self._fs = RemoteFileSystem(
            host=ssh_config.host,
            port=ssh_config.port,
            username=ssh_config.username,
            password=ssh_config.password
        )
        set_transport_debug(log_level == "debug")

    @abstractmethod
    async def end(self) -> None:
        """Release the connection. Must be safe to call after a failure."""
        pass

    def _apply(
        self,
        symitar_config: SymitarConfig,
        local_path: str,
        install_list: List[str],
        is_dry_run: bool,
        directory: Union[str, SymitarSyncDirectory],
        mode: Union[str, SyncMode],
        validate_ignore_list: List[str]
    ) -> SyncOutcome:
        """Plan and, unless dry-running, carry out a synchronization.

        Blocking; runs in a worker thread. A dry run computes exactly the
        lists a real run would report and writes nothing on either side.
        """
        mode = SyncMode(mode)
        remote_dir = remote_directory_path(symitar_config.sym_number, SymitarSyncDirectory(directory).value)

        if mode == SyncMode.PULL and not Path(local_path).is_dir():
            local = {}
        else:
            local = read_local_directory(local_path)
        remote = self._fs.read_directory(remote_dir)

        plan = plan_sync(local, remote, mode)
        source = remote if mode == SyncMode.PULL else local

        invalid = find_invalid_files(source, plan.deployed, validate_ignore_list)
        if invalid:
            raise TransportError(f"Validation failed for: {', '.join(invalid)}")

        missing = [name for name in install_list if name not in local and name not in remote]
        if missing:
            self.logger.warning("Install list entries not found, skipping", files=missing)

        self.logger.debug(
            "Synchronization planned",
            remote_directory=remote_dir,
            mode=mode.value,
            deployed=len(plan.deployed),
            deleted=len(plan.deleted),
            dry_run=is_dry_run
        )

        if not is_dry_run:
            self._execute(plan, local_path, remote_dir, source)

        return SyncOutcome(
            deployed=plan.deployed,
            deleted=plan.deleted,
            installed=plan.installed(install_list),
            uninstalled=plan.uninstalled(install_list)
        )

    def _execute(self, plan, local_path: str, remote_dir: str, source) -> None:
        if plan.mode == SyncMode.PULL:
            target = Path(local_path)
            target.mkdir(parents=True, exist_ok=True)
            for name in plan.download:
                (target / name).write_bytes(source[name])
                self.logger.debug("Downloaded file", file=name)
            return

        for name in plan.upload:
            self._fs.write_file(remote_dir, name, source[name])
            self.logger.debug("Uploaded file", file=name)

        for name in plan.delete_remote:
            self._fs.remove_file(remote_dir, name)
            self.logger.debug("Deleted remote file", file=name)
