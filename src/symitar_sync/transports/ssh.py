"""SSH client for Symitar synchronization."""

import asyncio
from typing import Awaitable, List, Optional, Union

from ..models import SymitarSyncDirectory, SyncMode, SyncOutcome
from .base import SSHConfig, SymitarConfig, SyncClient


class SymitarSSHClient(SyncClient):
    """Synchronizes a Symitar directory over SSH/SFTP."""

    def __init__(self, ssh_config: SSHConfig, log_level: str = "info"):
        super().__init__(ssh_config, log_level)
        self._ready: Optional[asyncio.Future] = None

    @property
    def is_ready(self) -> Awaitable[None]:
        """Resolves once the SSH connection is established."""
        if self._ready is None:
            self._ready = asyncio.get_running_loop().run_in_executor(None, self._fs.connect)
        return self._ready

    async def synchronize_files(
        self,
        symitar_config: SymitarConfig,
        local_path: str,
        install_list: List[str],
        is_dry_run: bool,
        directory: Union[str, SymitarSyncDirectory],
        mode: Union[str, SyncMode],
        validate_ignore_list: List[str]
    ) -> SyncOutcome:
        await self.is_ready
        return await asyncio.get_running_loop().run_in_executor(
            None,
            self._apply,
            symitar_config,
            local_path,
            install_list,
            is_dry_run,
            directory,
            mode,
            validate_ignore_list
        )

    async def end(self) -> None:
        await asyncio.get_running_loop().run_in_executor(None, self._fs.close)
