"""Tests for the action entry point."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import yaml

from symitar_sync import main as entry
from symitar_sync.core import SymitarSyncError, SyncOrchestrator, TransportDispatcher
from symitar_sync.models import ConnectionType
from symitar_sync.utils.actions import add_mask, issue_command, set_output

from conftest import FakeClientFactory


@pytest.fixture
def action_env(tmp_path):
    output_file = tmp_path / "github_output"
    output_file.write_text("")
    return {
        "GITHUB_OUTPUT": str(output_file),
        "INPUT_DIRECTORY-TYPE": "powerOns",
        "INPUT_CONNECTION-TYPE": "ssh",
        "INPUT_SYNC-MODE": "push",
        "INPUT_SYMITAR-HOSTNAME": "symitar.example.com",
        "INPUT_SSH-USERNAME": "testuser",
        "INPUT_SSH-PASSWORD": "ssh-secret",
        "INPUT_SYM-NUMBER": "627",
        "INPUT_SYMITAR-USER-NUMBER": "1",
        "INPUT_SYMITAR-USER-PASSWORD": "quest-secret",
        "INPUT_API-KEY": "api-secret",
        "INPUT_INSTALL-POWERON-LIST": "FILE1.PO",
    }


def read_outputs(environ):
    with open(environ["GITHUB_OUTPUT"], encoding="utf-8") as f:
        return dict(line.split("=", 1) for line in f.read().splitlines())


def make_orchestrator(validate_error=None, **client_kwargs):
    validator = MagicMock()
    validator.validate = AsyncMock(side_effect=validate_error)
    factory = FakeClientFactory(**client_kwargs)
    orchestrator = SyncOrchestrator(
        license_validator=validator,
        dispatcher=TransportDispatcher({ConnectionType.SSH: factory})
    )
    return orchestrator, factory


class TestActionCommands:
    """Workflow command helpers."""

    def test_issue_command_escapes(self, capsys):
        issue_command("error", "50%\nfailed")
        assert capsys.readouterr().out == "::error::50%25%0Afailed\n"

    def test_add_mask_skips_empty(self, capsys):
        add_mask("")
        add_mask(None)
        assert capsys.readouterr().out == ""

    def test_set_output_without_runner(self):
        assert set_output("files-deployed", 1, {}) is False


class TestRun:
    """Exit codes, outputs and failure reporting."""

    @pytest.mark.asyncio
    async def test_success_writes_outputs(self, action_env):
        orchestrator, factory = make_orchestrator()

        exit_code = await entry.run(action_env, orchestrator)

        assert exit_code == 0
        assert read_outputs(action_env) == {
            "files-deployed": "2",
            "files-deleted": "1",
            "files-installed": "1",
            "files-uninstalled": "0",
        }
        factory.instances[0].end.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_secrets_are_masked(self, action_env, capsys):
        orchestrator, _ = make_orchestrator()

        await entry.run(action_env, orchestrator)

        out = capsys.readouterr().out
        assert "::add-mask::api-secret" in out
        assert "::add-mask::quest-secret" in out
        assert "::add-mask::ssh-secret" in out

    @pytest.mark.asyncio
    async def test_secrets_from_config_file_are_masked(self, tmp_path, capsys):
        config_path = tmp_path / "sync.yaml"
        config_path.write_text(yaml.dump({
            "symitar_hostname": "symitar.example.com",
            "sym_number": 627,
            "symitar_user_number": "1",
            "symitar_user_password": "file-quest-secret",
            "ssh_username": "testuser",
            "ssh_password": "file-ssh-secret",
            "api_key": "file-api-secret",
            "directory_type": "powerOns",
            "connection_type": "ssh",
            "sync_mode": "push",
        }))
        failure = SymitarSyncError.authentication("No active subscription found", "file-api-secret", "")
        orchestrator, _ = make_orchestrator(validate_error=failure)

        exit_code = await entry.run({"SYMITAR_SYNC_CONFIG_FILE": str(config_path)}, orchestrator)

        out = capsys.readouterr().out
        assert exit_code == 1
        assert "::add-mask::file-api-secret" in out
        assert "::add-mask::file-quest-secret" in out
        assert "::add-mask::file-ssh-secret" in out
        assert out.index("::add-mask::file-api-secret") < out.index("::error::")

    @pytest.mark.asyncio
    async def test_authentication_failure(self, action_env, capsys):
        failure = SymitarSyncError.authentication("No active subscription found", "api-secret", "license.libum.io")
        orchestrator, factory = make_orchestrator(validate_error=failure)

        exit_code = await entry.run(action_env, orchestrator)

        assert exit_code == 1
        assert "::error::API key validation failed: No active subscription found" in capsys.readouterr().out
        assert factory.call_count == 0
        assert read_outputs(action_env) == {}

    @pytest.mark.asyncio
    async def test_connection_failure(self, action_env, capsys):
        failure = SymitarSyncError.connection("unreachable", "license.libum.io", 443, True)
        orchestrator, _ = make_orchestrator(validate_error=failure)

        exit_code = await entry.run(action_env, orchestrator)

        assert exit_code == 1
        assert "::error::Failed to connect to license server: unreachable" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_configuration_failure(self, action_env, capsys):
        action_env["INPUT_SYNC-MODE"] = "sideways"
        orchestrator, factory = make_orchestrator()

        exit_code = await entry.run(action_env, orchestrator)

        assert exit_code == 1
        assert "::error::Invalid sync mode: sideways" in capsys.readouterr().out
        orchestrator.license_validator.validate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sync_failure(self, action_env, capsys):
        orchestrator, factory = make_orchestrator(error=RuntimeError("Permission denied"))

        exit_code = await entry.run(action_env, orchestrator)

        assert exit_code == 1
        assert "::error::Synchronization failed: Permission denied" in capsys.readouterr().out
        factory.instances[0].end.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unexpected_failure(self, action_env, capsys):
        orchestrator = MagicMock()
        orchestrator.run = AsyncMock(side_effect=KeyError("boom"))

        exit_code = await entry.run(action_env, orchestrator)

        assert exit_code == 1
        assert "::error::" in capsys.readouterr().out

    def test_main_exit_code(self, monkeypatch):
        monkeypatch.setattr(entry, "setup_logging", MagicMock())
        monkeypatch.setattr(entry, "run", AsyncMock(return_value=1))

        with pytest.raises(SystemExit) as exc_info:
            entry.main()

        assert exc_info.value.code == 1
