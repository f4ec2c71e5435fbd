"""Shop configuration store: shops/<shopId>.config.json."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from config.schema import ShopConfig
from core.credential_store import CredentialStore
from core.jsonfile import remove_if_exists, write_json_atomic
from core.result import Err, ErrorKind, Ok, Result
from core.validation import decode_shop_config, validate_shop_id

logger = logging.getLogger(__name__)

CONFIG_SUFFIX = ".config.json"
EXAMPLE_MARKER = "example"
DEFAULT_MAX_CONFIG_SIZE = 1024 * 1024


class ShopConfigStore:
    """Reads and writes shop configurations.

    Every configuration is validated before it is returned and before it is
    written, so nothing invalid ever reaches disk through this store.
    """

    def __init__(
        self,
        shops_dir: Path,
        credentials: CredentialStore,
        max_config_size: int = DEFAULT_MAX_CONFIG_SIZE,
    ):
        self.shops_dir = Path(shops_dir)
        self.credentials = credentials
        self.max_config_size = max_config_size

    def config_path(self, shop_id: str) -> Path:
        return self.shops_dir / f"{shop_id}{CONFIG_SUFFIX}"

    def _checked_id(self, shop_id: str) -> Err | None:
        """Ids are file names under shops/, so only valid ids reach the disk."""
        result = validate_shop_id(shop_id)
        if result.success:
            return None
        return Err(ErrorKind.UNSAFE_PATH, f"Refusing shop id {shop_id!r}: {result.error}")

    def load_config(self, shop_id: str) -> Result[ShopConfig]:
        rejected = self._checked_id(shop_id)
        if rejected:
            return rejected
        path = self.config_path(shop_id)
        if not path.is_file():
            return Err(ErrorKind.NOT_FOUND, f"Shop configuration not found: {shop_id}")

        try:
            size = path.stat().st_size
            if size > self.max_config_size:
                return Err(
                    ErrorKind.TOO_LARGE,
                    f"Config file too large: {size} bytes (max {self.max_config_size})",
                )
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            return Err(ErrorKind.IO_ERROR, f"Failed to read config for {shop_id}: {e}")

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            return Err(ErrorKind.INVALID_JSON, f"Invalid JSON in {path.name}: {e.msg} (line {e.lineno})")

        return decode_shop_config(data, shop_id)

    def save_config(self, shop_id: str, config: ShopConfig | Mapping[str, Any]) -> Result[None]:
        decoded = decode_shop_config(config, shop_id)
        if not decoded.success:
            return decoded

        try:
            self.shops_dir.mkdir(parents=True, exist_ok=True)
            write_json_atomic(self.config_path(shop_id), decoded.data.to_json_dict())
        except OSError as e:
            return Err(ErrorKind.IO_ERROR, f"Failed to save config for {shop_id}: {e}")
        logger.debug("saved %s", self.config_path(shop_id))
        return Ok()

    def list_shops(self) -> Result[list[str]]:
        """Shop ids with a config file, sorted; example configs are skipped."""
        if not self.shops_dir.is_dir():
            return Ok([])
        try:
            names = [p.name for p in self.shops_dir.iterdir() if p.is_file()]
        except OSError as e:
            return Err(ErrorKind.IO_ERROR, f"Failed to list shops: {e}")
        return Ok(
            sorted(
                name.removesuffix(CONFIG_SUFFIX)
                for name in names
                if name.endswith(CONFIG_SUFFIX) and EXAMPLE_MARKER not in name
            )
        )

    def count_shops(self) -> int:
        result = self.list_shops()
        return len(result.data) if result.success else 0

    def delete_shop(self, shop_id: str) -> Result[None]:
        """Remove config and credentials. Deleting a missing shop succeeds."""
        rejected = self._checked_id(shop_id)
        if rejected:
            return rejected
        try:
            remove_if_exists(self.config_path(shop_id))
        except OSError as e:
            return Err(ErrorKind.IO_ERROR, f"Failed to delete shop {shop_id}: {e}")
        return self.credentials.delete_credentials(shop_id)

    def exists(self, shop_id: str) -> bool:
        return self._checked_id(shop_id) is None and self.config_path(shop_id).is_file()

