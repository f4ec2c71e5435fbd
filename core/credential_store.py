"""Credential store: shops/credentials/<shopId>.credentials.json.

Credential files hold theme access tokens. They are written with mode 600 in a
mode 700 directory where the platform has POSIX permissions, and they are
never committed (see the audit for the .gitignore checks).
"""

from __future__ import annotations

import json
import logging
import os
import re
import stat
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from config.rules import SHOP_ID_MAX_LENGTH
from config.schema import CREDENTIALS_FORMAT_VERSION, CredentialMetadata, ShopCredentials
from core.jsonfile import remove_if_exists, write_json_atomic
from core.result import Err, ErrorKind, Ok, Result

logger = logging.getLogger(__name__)

CREDENTIALS_SUFFIX = ".credentials.json"
FILE_MODE = 0o600
DIR_MODE = 0o700

_UNSAFE_CHARS = re.compile(r"[^a-z0-9-]", re.IGNORECASE)


class UnsafeCredentialPath(ValueError):
    """The shop id would escape the credentials directory."""


@dataclass
class CredentialFileInfo:
    path: Path
    permissions: str
    modified: datetime

    @property
    def is_private(self) -> bool:
        return self.permissions == "600"


def permission_bits(path: Path) -> str:
    """Permission bits of ``path`` as an octal string, e.g. ``"600"``."""
    return format(stat.S_IMODE(path.stat().st_mode), "o")


class CredentialStore:
    """Loads and saves per-shop credentials under one directory."""

    def __init__(self, credentials_dir: Path):
        self.credentials_dir = Path(credentials_dir)

    def credential_path(self, shop_id: str) -> Path:
        """Path of the credential file for ``shop_id``.

        Raises:
            UnsafeCredentialPath: the id contains characters outside
                ``[a-z0-9-]``, has a bad length, or resolves outside the
                credentials directory.
        """
        if not isinstance(shop_id, str):
            raise UnsafeCredentialPath(f"Invalid shop ID for credentials path: {shop_id!r}")
        sanitized = _UNSAFE_CHARS.sub("", shop_id)
        if sanitized != shop_id or not sanitized or len(sanitized) > SHOP_ID_MAX_LENGTH:
            raise UnsafeCredentialPath(f"Invalid shop ID for credentials path: {shop_id!r}")

        base = self.credentials_dir.resolve()
        path = (base / f"{sanitized}{CREDENTIALS_SUFFIX}").resolve()
        if not path.is_relative_to(base):
            raise UnsafeCredentialPath(f"Credentials path escapes {base}: {shop_id!r}")
        return path

    def _safe_path(self, shop_id: str) -> Path | Err:
        try:
            return self.credential_path(shop_id)
        except UnsafeCredentialPath as e:
            return Err(ErrorKind.UNSAFE_PATH, str(e))

    def load_credentials(self, shop_id: str) -> Result[ShopCredentials | None]:
        """Load credentials; ``Ok(None)`` when the shop has none yet."""
        path = self._safe_path(shop_id)
        if isinstance(path, Err):
            return path
        if not path.exists():
            return Ok(None)

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            return Err(ErrorKind.IO_ERROR, f"Failed to read credentials for {shop_id}: {e}")

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            return Err(ErrorKind.INVALID_JSON, f"Invalid JSON in credentials for {shop_id}: {e.msg}")

        if not isinstance(data, Mapping) or not isinstance(data.get("shopify"), Mapping) or "stores" not in data["shopify"]:
            return Err(ErrorKind.INVALID_CREDENTIALS, f"Invalid credentials structure for {shop_id}")

        try:
            return Ok(ShopCredentials.model_validate(data))
        except ValidationError as e:
            return Err(ErrorKind.INVALID_CREDENTIALS, f"Invalid credentials structure for {shop_id}: {e.error_count()} error(s)")

    def save_credentials(self, shop_id: str, credentials: ShopCredentials | Mapping[str, Any]) -> Result[None]:
        """Write credentials, replacing ``_metadata`` with a fresh stamp."""
        path = self._safe_path(shop_id)
        if isinstance(path, Err):
            return path

        try:
            if not isinstance(credentials, BaseModel):
                # the stamp below replaces whatever metadata the caller sent
                document = {k: v for k, v in credentials.items() if k != "_metadata"}
                credentials = ShopCredentials.model_validate(document)
        except ValidationError as e:
            return Err(ErrorKind.INVALID_CREDENTIALS, f"Invalid credentials structure for {shop_id}: {e.error_count()} error(s)")

        stamped = credentials.model_copy(
            update={
                "metadata": CredentialMetadata(
                    created=datetime.now(timezone.utc).isoformat(),
                    version=CREDENTIALS_FORMAT_VERSION,
                )
            }
        )

        try:
            self._ensure_directory()
            write_json_atomic(path, stamped.to_json_dict(), mode=None)
        except OSError as e:
            return Err(ErrorKind.IO_ERROR, f"Failed to save credentials for {shop_id}: {e}")

        try:
            os.chmod(path, FILE_MODE)
        except OSError as e:
            logger.debug("chmod %o %s failed: %s", FILE_MODE, path, e)
        return Ok()

    def delete_credentials(self, shop_id: str) -> Result[None]:
        path = self._safe_path(shop_id)
        if isinstance(path, Err):
            return path
        try:
            remove_if_exists(path)
        except OSError as e:
            return Err(ErrorKind.IO_ERROR, f"Failed to delete credentials for {shop_id}: {e}")
        return Ok()

    def file_info(self, shop_id: str) -> CredentialFileInfo | None:
        """Permissions and mtime of the credential file, None when absent."""
        try:
            path = self.credential_path(shop_id)
            st = path.stat()
        except (UnsafeCredentialPath, OSError):
            return None
        return CredentialFileInfo(
            path=path,
            permissions=format(stat.S_IMODE(st.st_mode), "o"),
            modified=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )

    def _ensure_directory(self) -> None:
        if self.credentials_dir.is_dir():
            return
        self.credentials_dir.mkdir(parents=True, mode=DIR_MODE, exist_ok=True)
        try:
            os.chmod(self.credentials_dir, DIR_MODE)
        except OSError as e:
            logger.debug("chmod %o %s failed: %s", DIR_MODE, self.credentials_dir, e)
