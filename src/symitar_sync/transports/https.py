"""HTTPS client for Symitar synchronization.

The client talks to the Symitar application server at ``base_url`` and
tunnels file transfer over SSH, so it needs both sets of credentials.
"""

import asyncio
from typing import List, Optional, Union

import aiohttp

from ..models import SymitarSyncDirectory, SyncMode, SyncOutcome
from .base import SSHConfig, SymitarConfig, SyncClient, TransportError

PROBE_TIMEOUT_SECONDS = 30


class SymitarHTTPSClient(SyncClient):
    """Synchronizes a Symitar directory through the application server."""

    def __init__(
        self,
        base_url: str,
        symitar_config: SymitarConfig,
        log_level: str = "info",
        ssh_config: Optional[SSHConfig] = None
    ):
        if ssh_config is None:
            raise ValueError("SSH credentials are required for HTTPS file transfer")
        super().__init__(ssh_config, log_level)
        self.base_url = base_url.rstrip("/")
        self.symitar_config = symitar_config

    async def synchronize_files(
        self,
        local_path: str,
        install_list: List[str],
        is_dry_run: bool,
        directory: Union[str, SymitarSyncDirectory],
        mode: Union[str, SyncMode],
        validate_ignore_list: List[str]
    ) -> SyncOutcome:
        await self._probe_application_server()

        if not self._fs.is_connected:
            await asyncio.get_running_loop().run_in_executor(None, self._fs.connect)

        return await asyncio.get_running_loop().run_in_executor(
            None,
            self._apply,
            self.symitar_config,
            local_path,
            install_list,
            is_dry_run,
            directory,
            mode,
            validate_ignore_list
        )

    async def _probe_application_server(self) -> None:
        """Make sure the application server answers before touching files."""
        # Symitar application servers commonly present self-signed certificates
        connector = aiohttp.TCPConnector(ssl=False)
        timeout = aiohttp.ClientTimeout(total=PROBE_TIMEOUT_SECONDS)

        try:
            async with aiohttp.ClientSession(connector=connector, timeout=timeout) as session:
                async with session.get(self.base_url) as response:
                    self.logger.debug(
                        "Application server reachable",
                        base_url=self.base_url,
                        status=response.status,
                        user_number=self.symitar_config.symitar_user_number
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Symitar application server unreachable at {self.base_url}: {e}") from e

    async def end(self) -> None:
        await asyncio.get_running_loop().run_in_executor(None, self._fs.close)
