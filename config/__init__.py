"""Configuration schemas, rules and runtime settings for multi-shop."""

from .schema import GlobalSettings, ShopConfig, ShopCredentials
from .settings import ProjectPaths, ToolSettings

__all__ = ["GlobalSettings", "ProjectPaths", "ShopConfig", "ShopCredentials", "ToolSettings"]
