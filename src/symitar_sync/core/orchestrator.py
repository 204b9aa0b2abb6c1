"""Synchronization orchestrator."""

import time
from dataclasses import dataclass
from typing import Optional

from ..config.schema import SyncConfiguration
from ..config.settings import get_settings
from ..models import SyncOutcome
from ..utils.logging import get_logger, log_async_execution_time
from .aggregator import SyncSummary, normalize
from .directories import DirectoryTypeConfig, resolve_directory, resolve_install_list
from .dispatcher import SyncRequest, TransportDispatcher
from .errors import SymitarSyncError
from .license import LicenseValidator


@dataclass
class SyncResult:
    """Outcome of a synchronization run together with its counts."""

    outcome: SyncOutcome
    summary: SyncSummary
    directory: DirectoryTypeConfig
    is_dry_run: bool
    duration: float


class SyncOrchestrator:
    """Coordinates one synchronization run.

    License validation, directory resolution, transport selection, the
    synchronize call and connection teardown happen strictly in sequence.
    """

    def __init__(
        self,
        license_validator: Optional[LicenseValidator] = None,
        dispatcher: Optional[TransportDispatcher] = None
    ):
        self.license_validator = license_validator or LicenseValidator.from_settings(get_settings().license)
        self.dispatcher = dispatcher or TransportDispatcher()
        self.logger = get_logger(self.__class__.__name__)

    async def synchronize(self, config: SyncConfiguration) -> SyncOutcome:
        """Synchronize the configured directory and return the raw outcome.

        Raises:
            SymitarSyncError: configuration, authentication or connection
                kind from the steps before the transport is used; sync kind
                when the transport fails, raised after teardown
        """
        prefix = config.log_prefix

        self.logger.info(f"{prefix} Validating API key...")
        await self.license_validator.validate(config.api_key)

        directory = resolve_directory(config.directory_type)
        install_list = resolve_install_list(config.directory_type, config.install_poweron_list)

        adapter = self.dispatcher.create_adapter(config)

        self.logger.info(f"{prefix} Using {config.connection_type.value.upper()} connection")
        self.logger.info(
            f"{prefix} Beginning {config.sync_mode.value} synchronization of {directory.name} "
            f"for Sym {config.sym_number}{' (Dry Run)' if config.is_dry_run else ''}"
        )

        request = SyncRequest(
            local_path=config.resolved_local_path,
            remote_directory=directory.symitar_directory,
            sync_mode=config.sync_mode,
            install_list=install_list,
            is_dry_run=config.is_dry_run,
            validate_ignore_list=list(config.validate_ignore_list)
        )

        try:
            async with adapter.open() as transport:
                self.logger.info(
                    f"{prefix} Starting synchronization{' (DRY RUN)' if config.is_dry_run else ''}..."
                )
                return await transport.synchronize(request)
        except SymitarSyncError:
            raise
        except Exception as e:
            self.logger.error(f"{prefix} Synchronization failed", error=str(e))
            raise SymitarSyncError.sync(f"Synchronization failed: {e}", original_error=e) from e

    @log_async_execution_time
    async def run(self, config: SyncConfiguration) -> SyncResult:
        """Synchronize and summarize the outcome."""
        start_time = time.monotonic()

        outcome = await self.synchronize(config)
        summary = normalize(config.directory_type, outcome)

        return SyncResult(
            outcome=outcome,
            summary=summary,
            directory=resolve_directory(config.directory_type),
            is_dry_run=config.is_dry_run,
            duration=time.monotonic() - start_time
        )
