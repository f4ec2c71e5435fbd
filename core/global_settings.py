"""Project-wide settings (settings.json at the project root)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from config.schema import ContentProtectionDefaults, GlobalSettings
from core.jsonfile import write_json_atomic
from core.result import Err, ErrorKind, Ok, Result

logger = logging.getLogger(__name__)


class GlobalSettingsStore:
    def __init__(self, settings_file: Path):
        self.settings_file = Path(settings_file)

    def load(self) -> Result[GlobalSettings]:
        """Settings from disk, or the built-in defaults when there is no file."""
        if not self.settings_file.exists():
            return Ok(GlobalSettings())
        try:
            raw = self.settings_file.read_text(encoding="utf-8")
        except OSError as e:
            return Err(ErrorKind.IO_ERROR, f"Failed to read settings: {e}")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            return Err(ErrorKind.INVALID_JSON, f"Invalid JSON in {self.settings_file.name}: {e.msg}")
        try:
            return Ok(GlobalSettings.model_validate(data))
        except ValidationError as e:
            return Err(ErrorKind.INVALID_SHAPE, f"Invalid settings: {e.error_count()} error(s)")

    def save(self, settings: GlobalSettings) -> Result[None]:
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            write_json_atomic(self.settings_file, settings.to_json_dict())
        except OSError as e:
            return Err(ErrorKind.IO_ERROR, f"Failed to save settings: {e}")
        return Ok()

    def default_content_protection(self) -> ContentProtectionDefaults:
        result = self.load()
        if not result.success:
            logger.warning("Using default content protection: %s", result.error)
            return ContentProtectionDefaults()
        return result.data.content_protection
