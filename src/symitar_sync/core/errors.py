"""Error type raised by the synchronization core.

Every failure carries an explicit ``kind`` so callers can branch on the
category instead of on the exception class.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories surfaced by a synchronization run."""
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    CONNECTION = "connection"
    SYNC = "sync"


class SymitarSyncError(Exception):
    """Raised when a synchronization run cannot complete.

    Payload fields are only populated for the kinds that use them:
    ``api_key``/``host`` for authentication failures, ``host``/``port``/
    ``is_ssl``/``original_error`` for connection failures and
    ``original_error`` for sync failures.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        api_key: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        is_ssl: bool = False,
        original_error: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.api_key = api_key
        self.host = host
        self.port = port
        self.is_ssl = is_ssl
        self.original_error = original_error

    @classmethod
    def configuration(cls, message: str) -> "SymitarSyncError":
        return cls(ErrorKind.CONFIGURATION, message)

    @classmethod
    def authentication(cls, message: str, api_key: str, host: str) -> "SymitarSyncError":
        return cls(ErrorKind.AUTHENTICATION, message, api_key=api_key, host=host)

    @classmethod
    def connection(
        cls,
        message: str,
        host: str,
        port: int,
        is_ssl: bool,
        original_error: Optional[BaseException] = None
    ) -> "SymitarSyncError":
        return cls(
            ErrorKind.CONNECTION,
            message,
            host=host,
            port=port,
            is_ssl=is_ssl,
            original_error=original_error
        )

    @classmethod
    def sync(cls, message: str, original_error: Optional[BaseException] = None) -> "SymitarSyncError":
        return cls(ErrorKind.SYNC, message, original_error=original_error)

    def __repr__(self) -> str:
        return f"SymitarSyncError(kind={self.kind.value!r}, message={self.message!r})"
