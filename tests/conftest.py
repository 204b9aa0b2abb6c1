"""Shared fixtures and fakes for the test suite."""

import asyncio
from typing import Any, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from symitar_sync.config.schema import SyncConfiguration
from symitar_sync.models import SyncOutcome


DEFAULT_OUTCOME = {
    "deployed": ["FILE1.PO", "FILE2.PO"],
    "deleted": ["OLD.PO"],
    "installed": ["FILE1.PO"],
    "uninstalled": []
}


class FakeSyncClient:
    """Stands in for a Symitar client; records how it was built and called."""

    def __init__(self, *args, outcome: Any = None, error: Optional[Exception] = None,
                 ready_error: Optional[Exception] = None, end_error: Optional[Exception] = None):
        self.args = args
        self.synchronize_files = AsyncMock(
            return_value=outcome if outcome is not None else SyncOutcome.from_dict(DEFAULT_OUTCOME),
            side_effect=error
        )
        self.end = AsyncMock(side_effect=end_error)
        self._ready_error = ready_error

    @property
    def is_ready(self):
        return self._ready()

    async def _ready(self):
        await asyncio.sleep(0)
        if self._ready_error is not None:
            raise self._ready_error


class FakeClientFactory:
    """Callable that builds FakeSyncClient instances and keeps them."""

    def __init__(self, **client_kwargs):
        self.client_kwargs = client_kwargs
        self.instances: List[FakeSyncClient] = []

    def __call__(self, *args):
        client = FakeSyncClient(*args, **self.client_kwargs)
        self.instances.append(client)
        return client

    @property
    def call_count(self) -> int:
        return len(self.instances)


class FakeResponse:
    """Minimal aiohttp response used as an async context manager."""

    def __init__(self, status: int = 200, payload: Any = None, reason: str = "OK"):
        self.status = status
        self.payload = payload
        self.reason = reason
        self.entered = False
        self.exited = False

    async def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.exited = True
        return False


class FakeSession:
    """Minimal aiohttp session replaying scripted responses or errors."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls: List[dict] = []
        self.responses: List[FakeResponse] = []
        self.closed = False

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        self.responses.append(result)
        return result

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True
        return False


def make_config(**overrides) -> SyncConfiguration:
    data = {
        "symitar_hostname": "symitar.example.com",
        "sym_number": 627,
        "symitar_user_number": "1",
        "symitar_user_password": "questpass",
        "ssh_username": "testuser",
        "ssh_password": "testpass",
        "ssh_port": 22,
        "api_key": "test-api-key",
        "local_directory_path": "./powerons/",
        "directory_type": "powerOns",
        "connection_type": "ssh",
        "sync_mode": "push",
        "is_dry_run": False,
        "install_poweron_list": ["FILE1.PO"],
        "validate_ignore_list": [],
        "debug": False,
        "log_prefix": "[Test]"
    }
    data.update(overrides)
    return SyncConfiguration(**data)


@pytest.fixture
def ssh_config() -> SyncConfiguration:
    return make_config()


@pytest.fixture
def https_config() -> SyncConfiguration:
    return make_config(connection_type="https", symitar_app_port=42627)


@pytest.fixture
def license_validator():
    validator = MagicMock()
    validator.validate = AsyncMock(return_value=None)
    return validator
