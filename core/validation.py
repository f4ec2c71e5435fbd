"""Pure validators for shop identifiers, domains and configurations.

No I/O. Each check returns ``Ok()`` or an ``Err`` whose kind tells the caller
which rule failed; the order of checks is fixed so messages are deterministic.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from config.rules import (
    DOMAIN_PATTERN,
    DOMAIN_SUFFIX,
    PROMO_NAME_PATTERN,
    SHOP_ID_MAX_LENGTH,
    SHOP_ID_MIN_LENGTH,
    SHOP_ID_PATTERN,
    SHOP_NAME_MAX_LENGTH,
    Messages,
)
from config.schema import ShopConfig
from core.result import Err, ErrorKind, Ok, Result


def validate_shop_id(shop_id: Any) -> Result[None]:
    if not shop_id or not isinstance(shop_id, str):
        return Err(ErrorKind.REQUIRED, Messages.SHOP_ID_REQUIRED)
    if len(shop_id) < SHOP_ID_MIN_LENGTH:
        return Err(ErrorKind.TOO_SHORT, Messages.SHOP_ID_TOO_SHORT)
    if len(shop_id) > SHOP_ID_MAX_LENGTH:
        return Err(ErrorKind.TOO_LONG, Messages.SHOP_ID_TOO_LONG)
    if not SHOP_ID_PATTERN.fullmatch(shop_id):
        return Err(ErrorKind.INVALID_FORMAT, Messages.SHOP_ID_INVALID)
    return Ok()


def validate_domain(domain: Any) -> Result[None]:
    if not domain or not isinstance(domain, str):
        return Err(ErrorKind.REQUIRED, Messages.DOMAIN_REQUIRED)
    if not domain.endswith(DOMAIN_SUFFIX):
        return Err(ErrorKind.WRONG_SUFFIX, Messages.DOMAIN_WRONG_SUFFIX)
    if len(domain) <= len(DOMAIN_SUFFIX):
        return Err(ErrorKind.NO_SUBDOMAIN, Messages.DOMAIN_NO_SUBDOMAIN)
    if not DOMAIN_PATTERN.fullmatch(domain):
        return Err(ErrorKind.INVALID_FORMAT, Messages.DOMAIN_INVALID)
    return Ok()


def validate_shop_name(name: Any) -> Result[None]:
    if not isinstance(name, str) or not name.strip():
        return Err(ErrorKind.REQUIRED, Messages.SHOP_NAME_REQUIRED)
    if len(name) > SHOP_NAME_MAX_LENGTH:
        return Err(ErrorKind.TOO_LONG, Messages.SHOP_NAME_TOO_LONG)
    return Ok()


def validate_promo_name(name: Any) -> Result[None]:
    if not name or not isinstance(name, str):
        return Err(ErrorKind.REQUIRED, Messages.PROMO_REQUIRED)
    if not PROMO_NAME_PATTERN.fullmatch(name):
        return Err(ErrorKind.INVALID_FORMAT, Messages.PROMO_INVALID)
    return Ok()


def _dig(data: Mapping[str, Any], *keys: str) -> Any:
    """Follow nested keys, returning None as soon as a level is missing."""
    current: Any = data
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def validate_shop_config(config: Any, expected_shop_id: str) -> Result[None]:
    """Validate a whole shop configuration against the id it is stored under."""
    if isinstance(config, BaseModel):
        config = config.model_dump(by_alias=True)
    if not isinstance(config, Mapping):
        return Err(ErrorKind.NOT_OBJECT, Messages.CONFIG_NOT_OBJECT)

    embedded_id = config.get("shopId")
    result = validate_shop_id(embedded_id)
    if not result.success:
        return result

    if embedded_id != expected_shop_id:
        return Err(ErrorKind.MISMATCH, Messages.SHOP_ID_MISMATCH)

    result = validate_domain(_dig(config, "shopify", "stores", "production", "domain"))
    if not result.success:
        return result.prefixed("Production")

    result = validate_domain(_dig(config, "shopify", "stores", "staging", "domain"))
    if not result.success:
        return result.prefixed("Staging")

    try:
        ShopConfig.model_validate(config)
    except ValidationError as e:
        return Err(ErrorKind.INVALID_SHAPE, f"Invalid shop configuration: {_summarize(e)}")

    return Ok()


def decode_shop_config(config: Any, expected_shop_id: str) -> Result[ShopConfig]:
    """Validate and return the typed configuration."""
    result = validate_shop_config(config, expected_shop_id)
    if not result.success:
        return result
    if isinstance(config, ShopConfig):
        return Ok(config)
    if isinstance(config, BaseModel):
        config = config.model_dump(by_alias=True)
    return Ok(ShopConfig.model_validate(config))


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "config"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
