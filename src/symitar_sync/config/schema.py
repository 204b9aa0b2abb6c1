"""Configuration schema for a synchronization run."""

import re
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.directories import resolve_local_path
from ..core.errors import SymitarSyncError
from ..models import ConnectionType, DirectoryType, SyncMode

HOSTNAME_PATTERN = re.compile(r"^[a-zA-Z0-9.-]+$")

DEFAULT_LOG_PREFIX = "[SynchronizeSymitar]"


class SyncConfiguration(BaseModel):
    """Everything one synchronization run needs. Immutable once built."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    # Connection
    symitar_hostname: str = Field(..., description="Symitar host name")
    symitar_app_port: Optional[int] = Field(None, description="Symitar application port, required for HTTPS")
    ssh_port: int = Field(default=22, description="SSH port")
    ssh_username: str = Field(..., description="SSH user")
    ssh_password: str = Field(..., description="SSH password")

    # Platform account
    sym_number: int = Field(..., description="Sym directory number")
    symitar_user_number: str = Field(..., description="Symitar user number")
    symitar_user_password: str = Field(..., description="Symitar user password")
    api_key: str = Field(default="", description="PowerOn Pipelines API key")

    # Intent
    directory_type: DirectoryType = Field(..., description="Directory type to synchronize")
    connection_type: ConnectionType = Field(..., description="Transport to use")
    sync_mode: SyncMode = Field(..., description="Synchronization direction")
    is_dry_run: bool = Field(default=False, description="Compute changes without applying them")
    debug: bool = Field(default=False, description="Verbose transport logging")

    # Lists
    install_poweron_list: List[str] = Field(default_factory=list, description="PowerOns to install")
    validate_ignore_list: List[str] = Field(default_factory=list, description="Files exempt from validation")

    local_directory_path: Optional[str] = Field(None, description="Local directory override")
    log_prefix: str = Field(default=DEFAULT_LOG_PREFIX)

    @field_validator("directory_type", mode="before")
    @classmethod
    def validate_directory_type(cls, v):
        valid = [t.value for t in DirectoryType]
        if isinstance(v, str) and v not in valid:
            raise SymitarSyncError.configuration(
                f"Invalid directory type: {v}. Must be one of: {', '.join(valid)}"
            )
        return v

    @field_validator("connection_type", mode="before")
    @classmethod
    def validate_connection_type(cls, v):
        if isinstance(v, str) and v not in [t.value for t in ConnectionType]:
            raise SymitarSyncError.configuration(f"Invalid connection type: {v}. Must be 'https' or 'ssh'")
        return v

    @field_validator("sync_mode", mode="before")
    @classmethod
    def validate_sync_mode(cls, v):
        if isinstance(v, str) and v not in [m.value for m in SyncMode]:
            raise SymitarSyncError.configuration(f"Invalid sync mode: {v}. Must be 'push', 'pull', or 'mirror'")
        return v

    @field_validator("symitar_hostname")
    @classmethod
    def validate_hostname(cls, v):
        if not HOSTNAME_PATTERN.match(v):
            raise SymitarSyncError.configuration(f"Invalid hostname format: {v}")
        return v

    @field_validator("ssh_port")
    @classmethod
    def validate_ssh_port(cls, v):
        if v < 1 or v > 65535:
            raise SymitarSyncError.configuration(f"Invalid SSH port: {v}. Must be between 1-65535")
        return v

    @field_validator("symitar_app_port")
    @classmethod
    def validate_app_port(cls, v):
        if v is not None and (v < 1 or v > 65535):
            raise SymitarSyncError.configuration(f"Invalid Symitar app port: {v}. Must be between 1-65535")
        return v

    @field_validator("sym_number")
    @classmethod
    def validate_sym_number(cls, v):
        if v < 0 or v > 9999:
            raise SymitarSyncError.configuration(f"Invalid sym number: {v}. Must be between 0-9999")
        return v

    @model_validator(mode="after")
    def validate_transport(self):
        if self.connection_type == ConnectionType.HTTPS and not self.symitar_app_port:
            raise SymitarSyncError.configuration("symitar-app-port is required when connection-type is https")
        return self

    @property
    def resolved_local_path(self) -> str:
        """Local directory to synchronize."""
        return resolve_local_path(self.directory_type, self.local_directory_path)

    @property
    def client_log_level(self) -> str:
        return "debug" if self.debug else "info"
