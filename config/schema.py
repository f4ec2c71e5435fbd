"""Document schemas for multi-shop using Pydantic.

This module defines the on-disk JSON structures:
- Shop configuration (shops/<id>.config.json)
- Shop credentials (shops/credentials/<id>.credentials.json)
- Global settings (settings.json)

Keys on disk are camelCase; Python attributes are snake_case. Dump with
``by_alias=True`` when writing.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from config.rules import SHOP_ID_MAX_LENGTH, SHOP_NAME_MAX_LENGTH

ContentProtectionMode = Literal["strict", "warn", "off"]
ContentProtectionVerbosity = Literal["verbose", "quiet"]
AuthenticationMethod = Literal["theme-access-app", "manual-tokens"]
Environment = Literal["production", "staging"]

CREDENTIALS_FORMAT_VERSION = "1.0.0"
SETTINGS_FORMAT_VERSION = "1.0.0"


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        """Plain dict ready for ``json.dumps`` (aliased keys, no nulls)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============================================================================
# Shop Configuration
# ============================================================================


class ShopifyStore(_Document):
    """One store (production or staging) of a shop."""

    domain: str
    branch: str
    theme_id: str | None = Field(None, alias="themeId")


class ShopStores(_Document):
    production: ShopifyStore
    staging: ShopifyStore


class AuthenticationConfig(_Document):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    method: AuthenticationMethod
    notes: dict[str, Any] | None = None


class ShopifyConfig(_Document):
    stores: ShopStores
    authentication: AuthenticationConfig


class ContentProtection(_Document):
    """Per-shop override of the global content protection defaults."""

    enabled: bool = True
    mode: ContentProtectionMode = "strict"
    verbosity: ContentProtectionVerbosity = "verbose"


class ShopConfig(_Document):
    """Complete shop configuration.

    Unknown top-level keys are kept so a full rewrite never drops data the
    user added by hand.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    shop_id: str = Field(..., alias="shopId", min_length=1, max_length=SHOP_ID_MAX_LENGTH)
    name: str = Field(..., min_length=1, max_length=SHOP_NAME_MAX_LENGTH)
    shopify: ShopifyConfig
    content_protection: ContentProtection | None = Field(None, alias="contentProtection")
    metadata: dict[str, Any] | None = None

    def store(self, environment: Environment) -> ShopifyStore:
        return getattr(self.shopify.stores, environment)


# ============================================================================
# Credentials
# ============================================================================


class StoreCredentials(_Document):
    theme_token: str = Field("", alias="themeToken")


class CredentialStores(_Document):
    production: StoreCredentials = Field(default_factory=StoreCredentials)
    staging: StoreCredentials = Field(default_factory=StoreCredentials)


class ShopifyCredentials(_Document):
    stores: CredentialStores


class CredentialMetadata(_Document):
    created: str
    version: str = CREDENTIALS_FORMAT_VERSION


class ShopCredentials(_Document):
    """Secret material for one shop. ``_metadata`` is stamped by the store."""

    developer: str
    shopify: ShopifyCredentials
    notes: str | None = None
    metadata: CredentialMetadata | None = Field(None, alias="_metadata")

    def token(self, environment: Environment) -> str:
        return getattr(self.shopify.stores, environment).theme_token

    @property
    def has_production(self) -> bool:
        return bool(self.shopify.stores.production.theme_token)

    @property
    def has_staging(self) -> bool:
        return bool(self.shopify.stores.staging.theme_token)


# ============================================================================
# Global Settings
# ============================================================================


class ContentProtectionDefaults(_Document):
    default_mode: ContentProtectionMode = Field("strict", alias="defaultMode")
    default_verbosity: ContentProtectionVerbosity = Field("verbose", alias="defaultVerbosity")
    apply_to_new_shops: bool = Field(True, alias="applyToNewShops")

    def as_protection(self) -> ContentProtection:
        """Protection block stamped into newly created shops."""
        return ContentProtection(
            enabled=self.default_mode != "off",
            mode=self.default_mode,
            verbosity=self.default_verbosity,
        )


class GlobalSettings(_Document):
    """Project-wide defaults, stored once per repository."""

    content_protection: ContentProtectionDefaults = Field(
        default_factory=ContentProtectionDefaults, alias="contentProtection"
    )
    version: str = SETTINGS_FORMAT_VERSION
