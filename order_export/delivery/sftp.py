from __future__ import annotations

import logging
import os
import re
import tempfile
from datetime import date
from typing import Optional

import paramiko

from .exceptions import DeliveryError

EXPORT_PREFIX = "HCM_001_SHOPIFY_ECOMM_"
DEFAULT_REMOTE_NAME = re.compile(r"orders\.csv$")

logger = logging.getLogger(__name__)


def export_filename(run_date: date) -> str:
    return f"{EXPORT_PREFIX}{run_date.strftime('%Y%m%d')}.csv"


def remote_path_for(base_path: str, filename: str) -> str:
    """Swap a trailing 'orders.csv' in the configured remote path for the dated file name."""
    return DEFAULT_REMOTE_NAME.sub(lambda _m: filename, base_path)


class SftpUploader:
    """Uploads a single file per call over SFTP with password authentication."""

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        *,
        port: int = 22,
        timeout: float = 30.0,
        strict_host_key: bool = False,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout
        self.strict_host_key = strict_host_key

    def _connect(self) -> paramiko.SSHClient:
        ssh = paramiko.SSHClient()
        if self.strict_host_key:
            ssh.load_system_host_keys()
            ssh.set_missing_host_key_policy(paramiko.RejectPolicy())
        else:
            ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        ssh.connect(
            hostname=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
            timeout=self.timeout,
            allow_agent=False,
            look_for_keys=False,
        )
        return ssh

    def upload(self, local_path: str, remote_path: str) -> str:
        ssh: Optional[paramiko.SSHClient] = None
        try:
            ssh = self._connect()
            sftp = ssh.open_sftp()
            try:
                sftp.put(local_path, remote_path)
            finally:
                sftp.close()
        except (paramiko.SSHException, OSError) as e:
            raise DeliveryError(f"SFTP upload to {self.host}:{remote_path} failed: {e}") from e
        finally:
            if ssh is not None:
                ssh.close()

        logger.info("Uploaded %s to %s:%s", os.path.basename(local_path), self.host, remote_path)
        return remote_path

    def deliver(self, payload: str, filename: str, remote_path: str) -> str:
        """
        Write `payload` to a local file named `filename` and upload it.

        The local file lives in a temporary directory that is removed whether
        or not the upload succeeds.
        """
        with tempfile.TemporaryDirectory(prefix="order_export_") as tmpdir:
            local_path = os.path.join(tmpdir, filename)
            with open(local_path, "w", encoding="utf-8", newline="") as f:
                f.write(payload)

            return self.upload(local_path, remote_path)
