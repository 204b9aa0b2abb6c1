"""Command line / GitHub Action entry point."""

import asyncio
import os
import sys
from typing import Mapping, Optional

from . import __version__
from .config.loader import input_env_name, load_config_from_env
from .config.schema import DEFAULT_LOG_PREFIX, SyncConfiguration
from .core.directories import resolve_directory
from .core.errors import ErrorKind, SymitarSyncError
from .core.orchestrator import SyncOrchestrator, SyncResult
from .models import ConnectionType
from .utils.actions import add_mask, set_failed, set_output
from .utils.logging import get_logger, setup_logging

SECRET_INPUTS = ["api-key", "symitar-user-password", "ssh-password"]

logger = get_logger("SynchronizeSymitar")


def mask_secrets(environ: Mapping[str, str]) -> None:
    """Redact secret inputs before anything is logged."""
    for name in SECRET_INPUTS:
        add_mask(environ.get(input_env_name(name), "").strip())


def mask_config_secrets(config: SyncConfiguration) -> None:
    """Redact the secrets a configuration file may have supplied."""
    for secret in (config.api_key, config.symitar_user_password, config.ssh_password):
        add_mask(secret)


def log_configuration(config: SyncConfiguration) -> None:
    prefix = config.log_prefix
    directory = resolve_directory(config.directory_type)

    logger.info(f"{prefix} Starting Symitar synchronization (v{__version__})")
    logger.info(f"{prefix} Directory Type: {directory.name}")
    logger.info(f"{prefix} Connection Type: {config.connection_type.value.upper()}")
    logger.info(f"{prefix} Sync Mode: {config.sync_mode.value}")
    logger.info(f"{prefix} Hostname: {config.symitar_hostname}")
    if config.connection_type == ConnectionType.HTTPS:
        logger.info(f"{prefix} Symitar App Port: {config.symitar_app_port}")
    else:
        logger.info(f"{prefix} SSH Port: {config.ssh_port}")
    logger.info(f"{prefix} Sym: {config.sym_number}")
    logger.info(f"{prefix} Local Directory: {config.resolved_local_path}")
    logger.info(f"{prefix} Dry Run: {config.is_dry_run}")
    logger.info(f"{prefix} Debug: {config.debug}")
    logger.info(f"{prefix} API Key: {'provided' if config.api_key else 'missing'}")

    if directory.supports_install and config.install_poweron_list:
        logger.info(f"{prefix} Install PowerOn List: {', '.join(config.install_poweron_list)}")

    if config.validate_ignore_list:
        logger.info(f"{prefix} Validate Ignore List: {', '.join(config.validate_ignore_list)}")


def write_outputs(result: SyncResult, environ: Mapping[str, str]) -> None:
    summary = result.summary
    set_output("files-deployed", summary.deployed_count, environ)
    set_output("files-deleted", summary.deleted_count, environ)
    set_output("files-installed", summary.installed_count, environ)
    set_output("files-uninstalled", summary.uninstalled_count, environ)


def log_summary(config: SyncConfiguration, result: SyncResult) -> None:
    prefix = config.log_prefix
    outcome = result.outcome
    summary = result.summary
    rule = "=" * 40

    logger.info(f"{prefix} {rule}")
    logger.info(
        f"{prefix} Synchronization Summary - {result.directory.name}{' (DRY RUN)' if result.is_dry_run else ''}"
    )
    logger.info(f"{prefix} {rule}")

    if not summary.has_changes:
        logger.info(f"{prefix} No changes to synchronize")
    else:
        logger.info(f"{prefix} Files Deployed: {summary.deployed_count}")
        for name in outcome.deployed:
            logger.info(f"{prefix}   + {name}")
        logger.info(f"{prefix} Files Deleted: {summary.deleted_count}")
        for name in outcome.deleted:
            logger.info(f"{prefix}   - {name}")
        if result.directory.supports_install:
            logger.info(f"{prefix} Files Installed: {summary.installed_count}")
            for name in outcome.installed:
                logger.info(f"{prefix}   ✓ {name}")
            logger.info(f"{prefix} Files Uninstalled: {summary.uninstalled_count}")
            for name in outcome.uninstalled:
                logger.info(f"{prefix}   ✗ {name}")

    logger.info(f"{prefix} {rule}")
    logger.info(f"{prefix} Completed in {result.duration:.2f}s")

    if result.is_dry_run:
        logger.info(f"{prefix} This was a dry run - no changes were made")
    else:
        logger.info(f"{prefix} Synchronization completed successfully!")


def report_failure(error: SymitarSyncError, prefix: str = DEFAULT_LOG_PREFIX) -> None:
    """Log a failure according to its kind and flag the step as failed."""
    if error.kind == ErrorKind.AUTHENTICATION:
        logger.error(f"{prefix} Authentication failed: {error.message}")
        logger.error(f"{prefix} API Key: {'***' if error.api_key else 'not provided'}")
        logger.error(f"{prefix} Host: {error.host}")
        set_failed(f"API key validation failed: {error.message}")

    elif error.kind == ErrorKind.CONNECTION:
        logger.error(f"{prefix} Connection failed: {error.message}")
        logger.error(f"{prefix} Host: {error.host}:{error.port}")
        if error.original_error is not None:
            logger.error(f"{prefix} Original error: {error.original_error}")
        set_failed(f"Failed to connect to license server: {error.message}")

    elif error.kind == ErrorKind.CONFIGURATION:
        logger.error(f"{prefix} Invalid configuration: {error.message}")
        set_failed(error.message)

    else:
        logger.error(f"{prefix} Synchronization error: {error.message}")
        if error.original_error is not None:
            logger.debug(f"{prefix} Original error", error=repr(error.original_error))
        set_failed(error.message)


async def run(
    environ: Optional[Mapping[str, str]] = None,
    orchestrator: Optional[SyncOrchestrator] = None
) -> int:
    """Run one synchronization from action inputs. Returns the exit code."""
    environ = os.environ if environ is None else environ
    prefix = DEFAULT_LOG_PREFIX

    mask_secrets(environ)

    try:
        config = load_config_from_env(environ)
        mask_config_secrets(config)
        prefix = config.log_prefix

        if config.debug:
            setup_logging(log_level="DEBUG")

        log_configuration(config)

        orchestrator = orchestrator or SyncOrchestrator()
        result = await orchestrator.run(config)

        write_outputs(result, environ)
        log_summary(config, result)
        return 0

    except SymitarSyncError as e:
        report_failure(e, prefix)
        return 1
    except Exception as e:
        logger.error(f"{prefix} Unexpected error: {e}", exc_info=True)
        set_failed(str(e))
        return 1


def main() -> None:
    """Console script entry point."""
    setup_logging()
    try:
        exit_code = asyncio.run(run())
    except KeyboardInterrupt:
        logger.warning("Synchronization interrupted by user")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
