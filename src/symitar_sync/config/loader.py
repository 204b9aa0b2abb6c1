"""Configuration loader for action inputs and JSON/YAML files."""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from ..core.errors import SymitarSyncError
from ..utils.logging import get_logger
from .schema import SyncConfiguration

# Action input name -> SyncConfiguration field
INPUT_FIELDS: Dict[str, str] = {
    "directory-type": "directory_type",
    "local-directory-path": "local_directory_path",
    "connection-type": "connection_type",
    "sync-mode": "sync_mode",
    "dry-run": "is_dry_run",
    "symitar-hostname": "symitar_hostname",
    "symitar-app-port": "symitar_app_port",
    "ssh-username": "ssh_username",
    "ssh-password": "ssh_password",
    "ssh-port": "ssh_port",
    "sym-number": "sym_number",
    "symitar-user-number": "symitar_user_number",
    "symitar-user-password": "symitar_user_password",
    "api-key": "api_key",
    "install-poweron-list": "install_poweron_list",
    "validate-ignore-list": "validate_ignore_list",
    "debug": "debug",
}

REQUIRED_INPUTS = [
    "directory-type",
    "connection-type",
    "sync-mode",
    "symitar-hostname",
    "ssh-username",
    "ssh-password",
    "sym-number",
    "symitar-user-number",
    "symitar-user-password",
    "api-key",
]

BOOLEAN_INPUTS = {"dry-run", "debug"}
LIST_INPUTS = {"install-poweron-list", "validate-ignore-list"}
INTEGER_INPUTS = {"ssh-port", "symitar-app-port", "sym-number"}


def input_env_name(name: str) -> str:
    """Environment variable carrying an action input, e.g. ``INPUT_SYNC-MODE``."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def parse_list(value: str) -> List[str]:
    """Split a comma-separated input, dropping blank entries."""
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_integer(name: str, value: str) -> int:
    try:
        return int(value, 10)
    except ValueError:
        label = {
            "ssh-port": "SSH port",
            "symitar-app-port": "Symitar app port",
            "sym-number": "sym number",
        }[name]
        raise SymitarSyncError.configuration(f"Invalid {label}: {value}")


class ConfigLoader:
    """Builds a SyncConfiguration from action inputs or a file."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ
        self.logger = get_logger(self.__class__.__name__)

    def get_input(self, name: str, required: bool = False) -> str:
        """Read an action input the way the Actions runner exposes it."""
        value = self.environ.get(input_env_name(name), "").strip()
        if required and not value:
            raise SymitarSyncError.configuration(f"Input required and not supplied: {name}")
        return value

    def read_inputs(self, required: bool = True) -> Dict[str, Any]:
        """Collect the supplied inputs as SyncConfiguration field values."""
        data: Dict[str, Any] = {}

        for name, field_name in INPUT_FIELDS.items():
            raw = self.get_input(name, required=required and name in REQUIRED_INPUTS)
            if not raw:
                continue

            if name in BOOLEAN_INPUTS:
                data[field_name] = raw == "true"
            elif name in LIST_INPUTS:
                data[field_name] = parse_list(raw)
            elif name in INTEGER_INPUTS:
                data[field_name] = parse_integer(name, raw)
            else:
                data[field_name] = raw

        return data

    def load_from_inputs(self) -> SyncConfiguration:
        """Load configuration from action inputs.

        Raises:
            SymitarSyncError: configuration kind, if inputs are missing or invalid
        """
        return self.load_from_dict(self.read_inputs(required=True))

    def load_from_file(self, file_path: Union[str, Path]) -> SyncConfiguration:
        """Load configuration from a JSON or YAML file.

        Keys use SyncConfiguration field names. Action inputs present in the
        environment override file values.

        Raises:
            SymitarSyncError: configuration kind, if the file cannot be
                read, parsed or validated
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise SymitarSyncError.configuration(f"Configuration file not found: {file_path}")

        self.logger.info("Loading configuration from file", file_path=str(file_path))

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                if file_path.suffix.lower() in ['.yaml', '.yml']:
                    data = yaml.safe_load(f) or {}
                elif file_path.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    raise SymitarSyncError.configuration(f"Unsupported file format: {file_path.suffix}")
        except yaml.YAMLError as e:
            raise SymitarSyncError.configuration(f"Invalid YAML format: {e}")
        except json.JSONDecodeError as e:
            raise SymitarSyncError.configuration(f"Invalid JSON format: {e}")

        if not isinstance(data, dict):
            raise SymitarSyncError.configuration(f"Configuration file must contain a mapping: {file_path}")

        overrides = self.read_inputs(required=False)
        if overrides:
            self.logger.info("Applied input overrides", overrides=sorted(overrides))
        data.update(overrides)

        return self.load_from_dict(data)

    def load_from_dict(self, data: Dict[str, Any]) -> SyncConfiguration:
        """Validate ``data`` into a SyncConfiguration."""
        try:
            return SyncConfiguration(**data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            )
            raise SymitarSyncError.configuration(f"Invalid configuration: {problems}")


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> SyncConfiguration:
    """Load configuration for this run.

    Uses the file named by ``SYMITAR_SYNC_CONFIG_FILE`` when set, otherwise
    the action inputs alone.
    """
    loader = ConfigLoader(environ)

    config_file = loader.environ.get("SYMITAR_SYNC_CONFIG_FILE")
    if config_file:
        return loader.load_from_file(config_file)

    return loader.load_from_inputs()
