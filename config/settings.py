"""Runtime limits and on-disk layout.

Priority (highest to lowest):
1. CLI flags (--debug / --verbose)
2. Environment variables (MULTI_SHOP_*, LOG_LEVEL)
3. Defaults below
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("debug", "info", "warning", "error")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


class ToolSettings(BaseModel):
    """Limits applied by the stores and the CLI."""

    max_config_file_size: int = Field(1024 * 1024, gt=0, description="Max shop config size in bytes (1MB)")
    min_token_length: int = Field(10, gt=0, description="Shortest theme token accepted by prompts")
    max_token_length: int = Field(500, gt=0, description="Longest theme token accepted by prompts")
    command_timeout: float = Field(5.0, gt=0, description="Timeout for version and history lookups (seconds)")
    log_level: str = Field("warning", description="debug/info/warning/error")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        v = v.strip().lower()
        if v == "warn":
            v = "warning"
        if v not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}. Available: {', '.join(LOG_LEVELS)}")
        return v

    @classmethod
    def from_env(cls) -> ToolSettings:
        defaults = cls()
        log_level = os.getenv("LOG_LEVEL", "").strip().lower() or defaults.log_level
        if log_level not in (*LOG_LEVELS, "warn"):
            log_level = defaults.log_level
        return cls(
            max_config_file_size=_env_int("MULTI_SHOP_MAX_CONFIG_SIZE", defaults.max_config_file_size),
            min_token_length=_env_int("MULTI_SHOP_MIN_TOKEN_LENGTH", defaults.min_token_length),
            max_token_length=_env_int("MULTI_SHOP_MAX_TOKEN_LENGTH", defaults.max_token_length),
            command_timeout=_env_float("MULTI_SHOP_COMMAND_TIMEOUT", defaults.command_timeout),
            log_level=log_level,
        )


class ProjectPaths(BaseModel):
    """Every location the tool reads or writes, derived from one root."""

    root: Path

    @classmethod
    def for_root(cls, root: str | Path | None = None) -> ProjectPaths:
        return cls(root=Path(root or Path.cwd()).resolve())

    @property
    def shops_dir(self) -> Path:
        return self.root / "shops"

    @property
    def credentials_dir(self) -> Path:
        return self.shops_dir / "credentials"

    @property
    def example_config(self) -> Path:
        return self.shops_dir / "shop.config.example.json"

    @property
    def settings_file(self) -> Path:
        return self.root / "settings.json"

    @property
    def gitignore(self) -> Path:
        return self.root / ".gitignore"

    @property
    def workflows_dir(self) -> Path:
        return self.root / ".github" / "workflows"
