"""Blocking SFTP access to a Symitar host.

All methods block; async callers run them in the default executor.
"""

import posixpath
import stat
from pathlib import Path
from typing import Dict, Optional

import paramiko

from ..utils.logging import get_logger

CONNECT_TIMEOUT_SECONDS = 20
BANNER_TIMEOUT_SECONDS = 30


def remote_directory_path(sym_number: int, directory: str) -> str:
    """Absolute path of a Symitar directory, e.g. ``/SYM/SYM627/REPWRITERSPECS``."""
    return posixpath.join("/SYM", f"SYM{sym_number:03d}", directory)


def read_local_directory(local_path: str) -> Dict[str, bytes]:
    """Read the regular, non-hidden files directly inside ``local_path``."""
    directory = Path(local_path)
    if not directory.is_dir():
        raise FileNotFoundError(f"Local directory not found: {local_path}")

    return {
        entry.name: entry.read_bytes()
        for entry in sorted(directory.iterdir())
        if entry.is_file() and not entry.name.startswith(".")
    }


class RemoteFileSystem:
    """SSH connection with an SFTP channel to the Symitar host."""

    def __init__(self, host: str, port: int, username: str, password: str):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.logger = get_logger(self.__class__.__name__)
        self._ssh: Optional[paramiko.SSHClient] = None
        self._sftp: Optional[paramiko.SFTPClient] = None

    @property
    def is_connected(self) -> bool:
        return self._sftp is not None

    def connect(self) -> None:
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        # Held before connecting so close() releases a half-open transport
        self._ssh = client
        client.connect(
            hostname=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
            timeout=CONNECT_TIMEOUT_SECONDS,
            banner_timeout=BANNER_TIMEOUT_SECONDS,
            auth_timeout=BANNER_TIMEOUT_SECONDS,
            look_for_keys=False,
            allow_agent=False
        )
        self._sftp = client.open_sftp()
        self.logger.debug("SFTP channel opened", host=self.host, port=self.port)

    def _require_sftp(self) -> paramiko.SFTPClient:
        if self._sftp is None:
            raise ConnectionError(f"Not connected to {self.host}:{self.port}")
        return self._sftp

    def read_directory(self, remote_dir: str) -> Dict[str, bytes]:
        """Read every regular file directly inside ``remote_dir``."""
        sftp = self._require_sftp()
        files: Dict[str, bytes] = {}
        for attributes in sftp.listdir_attr(remote_dir):
            if attributes.st_mode is None or not stat.S_ISREG(attributes.st_mode):
                continue
            with sftp.open(posixpath.join(remote_dir, attributes.filename), "rb") as handle:
                files[attributes.filename] = handle.read()
        return files

    def write_file(self, remote_dir: str, name: str, content: bytes) -> None:
        sftp = self._require_sftp()
        with sftp.open(posixpath.join(remote_dir, name), "wb") as handle:
            handle.write(content)

    def remove_file(self, remote_dir: str, name: str) -> None:
        self._require_sftp().remove(posixpath.join(remote_dir, name))

    def close(self) -> None:
        """Close the channel and connection. Safe to call repeatedly."""
        if self._sftp is not None:
            self._sftp.close()
            self._sftp = None
        if self._ssh is not None:
            self._ssh.close()
            self._ssh = None
