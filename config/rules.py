"""Validation rules and messages shared by the validators and the prompts."""

import re

# Shop identifiers
SHOP_ID_PATTERN = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")
SHOP_ID_MIN_LENGTH = 1
SHOP_ID_MAX_LENGTH = 50
SHOP_ID_DESCRIPTION = "Lowercase alphanumeric with hyphens (no leading/trailing hyphens)"

# Shopify store domains
DOMAIN_SUFFIX = ".myshopify.com"
DOMAIN_PATTERN = re.compile(r"[a-z0-9-]+\.myshopify\.com")
DOMAIN_DESCRIPTION = "Valid Shopify store domain"

# Display names
SHOP_NAME_MAX_LENGTH = 100

# Promo campaign names
PROMO_NAME_PATTERN = re.compile(r"[a-z0-9-]+")

# Branch layout for every shop
PRODUCTION_BRANCH = "{shop_id}/main"
STAGING_BRANCH = "{shop_id}/staging"
PROMO_BRANCH = "{shop_id}/promo-{promo}"

AUTH_METHODS = ("theme-access-app", "manual-tokens")


class Messages:
    """Fixed error texts. Tests and prompts compare against these."""

    SHOP_ID_REQUIRED = "Shop ID is required"
    SHOP_ID_TOO_SHORT = f"Shop ID must be at least {SHOP_ID_MIN_LENGTH} character"
    SHOP_ID_TOO_LONG = f"Shop ID must be at most {SHOP_ID_MAX_LENGTH} characters"
    SHOP_ID_INVALID = f"Shop ID {SHOP_ID_DESCRIPTION}"
    SHOP_ID_MISMATCH = "Shop ID in config does not match provided shop ID"

    SHOP_NAME_REQUIRED = "Shop name is required"
    SHOP_NAME_TOO_LONG = f"Shop name must be at most {SHOP_NAME_MAX_LENGTH} characters"

    DOMAIN_REQUIRED = "Domain is required"
    DOMAIN_WRONG_SUFFIX = f"Domain must end with {DOMAIN_SUFFIX}"
    DOMAIN_NO_SUBDOMAIN = f"Domain must have a subdomain before {DOMAIN_SUFFIX}"
    DOMAIN_INVALID = f"Domain {DOMAIN_DESCRIPTION}"

    PROMO_REQUIRED = "Promo name is required"
    PROMO_INVALID = "Use lowercase letters, numbers, and hyphens only"

    CONFIG_NOT_OBJECT = "Configuration must be an object"
