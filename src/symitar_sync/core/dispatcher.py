"""Transport selection and call normalization.

The two Symitar clients take the same inputs in different argument orders.
Each adapter hides one client's calling convention behind ``synchronize``
and owns the client for the duration of a single ``open()`` scope.
"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Type

from ..config.schema import SyncConfiguration
from ..models import ConnectionType, SymitarSyncDirectory, SyncMode, SyncOutcome
from ..transports import SSHConfig, SymitarConfig, SymitarHTTPSClient, SymitarSSHClient
from ..utils.logging import get_logger
from .errors import SymitarSyncError


@dataclass(frozen=True)
class SyncRequest:
    """Transport-agnostic inputs of one synchronize call."""

    local_path: str
    remote_directory: SymitarSyncDirectory
    sync_mode: SyncMode
    install_list: List[str] = field(default_factory=list)
    is_dry_run: bool = False
    validate_ignore_list: List[str] = field(default_factory=list)


def _as_outcome(result: Any) -> SyncOutcome:
    if isinstance(result, SyncOutcome):
        return result
    if isinstance(result, dict):
        return SyncOutcome.from_dict(result)
    return SyncOutcome(
        deployed=list(result.deployed),
        deleted=list(result.deleted),
        installed=list(result.installed),
        uninstalled=list(result.uninstalled)
    )


class TransportAdapter(ABC):
    """One transport flavor bound to a configuration."""

    connection_type: ConnectionType

    def __init__(self, config: SyncConfiguration, client_factory: Callable[..., Any]):
        self.config = config
        self.client_factory = client_factory
        self.logger = get_logger(self.__class__.__name__)

    @property
    def symitar_config(self) -> SymitarConfig:
        return SymitarConfig(
            sym_number=self.config.sym_number,
            symitar_user_number=self.config.symitar_user_number,
            symitar_user_password=self.config.symitar_user_password
        )

    @abstractmethod
    def create_client(self) -> Any:
        """Construct the underlying client."""
        pass

    async def wait_until_ready(self, client: Any) -> None:
        """Await the client's readiness signal, where it has one."""
        return None

    @abstractmethod
    async def call_synchronize(self, client: Any, request: SyncRequest) -> Any:
        """Invoke the client's synchronize primitive in its own argument order."""
        pass

    @asynccontextmanager
    async def open(self) -> AsyncIterator["TransportSession"]:
        """Acquire a client for one synchronize call.

        The client's ``end()`` runs exactly once on every exit path. A failing
        teardown is logged as a warning and never replaces the outcome or
        error of the body.
        """
        client = self.create_client()
        try:
            await self.wait_until_ready(client)
            self.logger.info(f"{self.config.log_prefix} Connected successfully")
            yield TransportSession(self, client)
        finally:
            self.logger.info(f"{self.config.log_prefix} Closing connection...")
            try:
                await client.end()
            except Exception as e:
                self.logger.warning(
                    f"{self.config.log_prefix} Failed to close connection",
                    error=str(e)
                )


class TransportSession:
    """Handle yielded by ``TransportAdapter.open``."""

    def __init__(self, adapter: TransportAdapter, client: Any):
        self._adapter = adapter
        self._client = client

    async def synchronize(self, request: SyncRequest) -> SyncOutcome:
        result = await self._adapter.call_synchronize(self._client, request)
        return _as_outcome(result)


class SSHTransportAdapter(TransportAdapter):
    """Adapter for the SSH client."""

    connection_type = ConnectionType.SSH

    def create_client(self) -> Any:
        self.logger.info(
            f"{self.config.log_prefix} Connecting to {self.config.symitar_hostname}:{self.config.ssh_port} via SSH..."
        )
        return self.client_factory(
            SSHConfig(
                host=self.config.symitar_hostname,
                port=self.config.ssh_port,
                username=self.config.ssh_username,
                password=self.config.ssh_password
            ),
            self.config.client_log_level
        )

    async def wait_until_ready(self, client: Any) -> None:
        await client.is_ready

    async def call_synchronize(self, client: Any, request: SyncRequest) -> Any:
        return await client.synchronize_files(
            self.symitar_config,
            request.local_path,
            request.install_list,
            request.is_dry_run,
            request.remote_directory,
            request.sync_mode,
            request.validate_ignore_list
        )


class HTTPSTransportAdapter(TransportAdapter):
    """Adapter for the HTTPS client."""

    connection_type = ConnectionType.HTTPS

    def __init__(self, config: SyncConfiguration, client_factory: Callable[..., Any]):
        if not config.symitar_app_port:
            raise SymitarSyncError.configuration("symitar-app-port is required when using HTTPS connection")
        super().__init__(config, client_factory)

    @property
    def base_url(self) -> str:
        return f"https://{self.config.symitar_hostname}:{self.config.symitar_app_port}"

    def create_client(self) -> Any:
        self.logger.info(f"{self.config.log_prefix} Connecting to {self.base_url}...")
        return self.client_factory(
            self.base_url,
            self.symitar_config,
            self.config.client_log_level,
            SSHConfig(
                host=self.config.symitar_hostname,
                port=self.config.ssh_port,
                username=self.config.ssh_username,
                password=self.config.ssh_password
            )
        )

    async def call_synchronize(self, client: Any, request: SyncRequest) -> Any:
        return await client.synchronize_files(
            request.local_path,
            request.install_list,
            request.is_dry_run,
            request.remote_directory,
            request.sync_mode,
            request.validate_ignore_list
        )


class TransportDispatcher:
    """Selects the transport adapter for a configuration."""

    _adapter_classes: Dict[ConnectionType, Type[TransportAdapter]] = {
        ConnectionType.SSH: SSHTransportAdapter,
        ConnectionType.HTTPS: HTTPSTransportAdapter,
    }

    _default_clients: Dict[ConnectionType, Callable[..., Any]] = {
        ConnectionType.SSH: SymitarSSHClient,
        ConnectionType.HTTPS: SymitarHTTPSClient,
    }

    def __init__(self, client_factories: Optional[Dict[ConnectionType, Callable[..., Any]]] = None):
        """Initialize the dispatcher.

        Args:
            client_factories: Client constructors per connection type,
                overriding the built-in Symitar clients
        """
        self.adapter_classes = dict(self._adapter_classes)
        self.client_factories = dict(self._default_clients)
        self.client_factories.update(client_factories or {})

    def create_adapter(self, config: SyncConfiguration) -> TransportAdapter:
        """Create the adapter for ``config.connection_type``.

        Raises:
            SymitarSyncError: configuration kind, for an unsupported
                connection type or an HTTPS configuration without an
                application port; no client is constructed in that case
        """
        try:
            connection_type = ConnectionType(config.connection_type)
        except ValueError:
            raise SymitarSyncError.configuration(
                f"Invalid connection type: {config.connection_type}. Must be 'https' or 'ssh'"
            )

        adapter_class = self.adapter_classes[connection_type]
        return adapter_class(config, self.client_factories[connection_type])

    def get_supported_types(self) -> List[ConnectionType]:
        """Get list of supported connection types."""
        return list(self.adapter_classes.keys())

    def register_adapter(self, connection_type: ConnectionType, adapter_class: Type[TransportAdapter]):
        """Register an adapter for a connection type on this dispatcher."""
        self.adapter_classes[connection_type] = adapter_class
