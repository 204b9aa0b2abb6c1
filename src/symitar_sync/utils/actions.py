"""GitHub Actions workflow commands."""

import os
import sys
from typing import Any, Mapping, Optional


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: str = "") -> None:
    """Write a ``::command::message`` line to stdout."""
    sys.stdout.write(f"::{command}::{_escape_data(message)}\n")
    sys.stdout.flush()


def add_mask(secret: Optional[str]) -> None:
    """Ask the runner to redact ``secret`` from the log."""
    if secret:
        issue_command("add-mask", secret)


def set_output(name: str, value: Any, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Record a step output. Returns False when not running under Actions."""
    environ = os.environ if environ is None else environ
    output_file = environ.get("GITHUB_OUTPUT")
    if not output_file:
        return False

    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")
    return True


def set_failed(message: str) -> None:
    """Report a step failure annotation."""
    issue_command("error", message)
