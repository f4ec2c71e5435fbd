"""Create a shop: collect input, write config, set up branches and credentials."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from config.rules import PRODUCTION_BRANCH, STAGING_BRANCH
from config.schema import (
    AuthenticationConfig,
    ShopConfig,
    ShopCredentials,
    ShopifyConfig,
    ShopifyStore,
    ShopStores,
)
from config.settings import ToolSettings
from core.context import ShopContext
from core.result import Ok, Result, cancelled
from core.validation import validate_domain, validate_shop_id, validate_shop_name
from tui.prompts import Option, Prompter

logger = logging.getLogger(__name__)

AUTH_OPTIONS = [
    Option("theme-access-app", "Theme Access App", "Recommended"),
    Option("manual-tokens", "Manual Tokens", "Direct API access"),
]

THEME_ACCESS_STEPS = (
    "1. Ask a shop admin to add your email to the Theme Access app\n"
    "2. Check your email for the access link\n"
    "3. Click the link to view your theme access password\n"
    "4. Enter the passwords below"
)


@dataclass
class ShopData:
    shop_id: str
    name: str
    production_domain: str
    staging_domain: str
    auth_method: str


def _error_of(result: Result) -> str | None:
    return None if result.success else result.error


def collect_shop_data(context: ShopContext, prompter: Prompter) -> ShopData | None:
    listed = context.shops.list_shops()
    existing = set(listed.data) if listed.success else set()

    def check_id(value: str) -> str | None:
        if value in existing:
            return "A shop with this ID already exists"
        return _error_of(validate_shop_id(value))

    shop_id = prompter.text("Shop ID (lowercase, hyphens only)", validate=check_id)
    if shop_id is None:
        return None
    name = prompter.text("Shop display name", validate=lambda v: _error_of(validate_shop_name(v)))
    if name is None:
        return None
    production = prompter.text(
        "Production domain (e.g. my-shop.myshopify.com)",
        validate=lambda v: _error_of(validate_domain(v)),
    )
    if production is None:
        return None
    staging = prompter.text(
        "Staging domain (can be same as production)",
        default=production,
        validate=lambda v: _error_of(validate_domain(v)),
    )
    if staging is None:
        return None
    auth_method = prompter.select("Authentication method:", AUTH_OPTIONS)
    if auth_method is None:
        return None
    return ShopData(shop_id, name, production, staging, auth_method)


def build_shop_config(data: ShopData, context: ShopContext) -> ShopConfig:
    defaults = context.global_settings.default_content_protection()
    return ShopConfig(
        shop_id=data.shop_id,
        name=data.name,
        shopify=ShopifyConfig(
            stores=ShopStores(
                production=ShopifyStore(
                    domain=data.production_domain,
                    branch=PRODUCTION_BRANCH.format(shop_id=data.shop_id),
                ),
                staging=ShopifyStore(
                    domain=data.staging_domain,
                    branch=STAGING_BRANCH.format(shop_id=data.shop_id),
                ),
            ),
            authentication=AuthenticationConfig(method=data.auth_method),
        ),
        content_protection=defaults.as_protection() if defaults.apply_to_new_shops else None,
    )


def create_new_shop(context: ShopContext, prompter: Prompter) -> Result[None]:
    prompter.note("Create a new shop", "New Shop")
    data = collect_shop_data(context, prompter)
    if data is None:
        return cancelled("Shop creation cancelled")

    config = build_shop_config(data, context)
    saved = context.shops.save_config(data.shop_id, config)
    if not saved.success:
        return saved
    prompter.success(f"Shop configuration created for {data.name}")
    logger.info("created shop %s", data.shop_id)

    create_shop_branches(context, prompter, data.shop_id)
    return setup_credentials(context, prompter, data, config)


def manual_branch_commands(shop_id: str) -> list[str]:
    return [
        f"git checkout -b {branch} && git push -u origin {branch}"
        for branch in (PRODUCTION_BRANCH.format(shop_id=shop_id), STAGING_BRANCH.format(shop_id=shop_id))
    ]


def create_shop_branches(context: ShopContext, prompter: Prompter, shop_id: str) -> bool:
    """Offer to create and push ``<id>/main`` and ``<id>/staging``."""
    if not prompter.confirm("Create GitHub branches for this shop?", default=True):
        prompter.note("\n".join(manual_branch_commands(shop_id)), "Create branches manually")
        return False

    git = context.git
    if not git.is_repository():
        prompter.error("Not a git repository")
        prompter.note("\n".join(manual_branch_commands(shop_id)), "Create branches manually")
        return False

    original = git.current_branch()
    created = []
    for branch in (PRODUCTION_BRANCH.format(shop_id=shop_id), STAGING_BRANCH.format(shop_id=shop_id)):
        result = git.create_and_push_branch(branch)
        if result.success:
            created.append(branch)
        else:
            prompter.warning(f"Could not create {branch}: {result.error_text}")
        if original:
            git.checkout(original)

    if created:
        prompter.success(f"Created: {' and '.join(created)}")
    return len(created) == 2


def developer_name() -> str:
    return os.environ.get("USER") or os.environ.get("USERNAME") or "developer"


def token_validator(settings: ToolSettings, required: bool = True):
    def check(value: str) -> str | None:
        if not value:
            return "Password is required" if required else None
        if len(value) < settings.min_token_length:
            return "Password seems too short"
        if len(value) > settings.max_token_length:
            return "Password seems too long"
        return None

    return check


def ask_tokens(
    context: ShopContext,
    prompter: Prompter,
    config: ShopConfig,
) -> tuple[str, str] | None:
    """Production token, then staging (reuses production when left empty)."""
    production_domain = config.shopify.stores.production.domain
    staging_domain = config.shopify.stores.staging.domain

    production = prompter.text(
        f"Production theme access password ({production_domain})",
        password=True,
        validate=token_validator(context.settings),
    )
    if production is None:
        return None

    if staging_domain == production_domain:
        return production, production
    staging = prompter.text(
        f"Staging theme access password ({staging_domain}, Enter to reuse production)",
        password=True,
        validate=token_validator(context.settings, required=False),
    )
    return production, staging or production


def setup_credentials(context: ShopContext, prompter: Prompter, data: ShopData, config: ShopConfig) -> Result[None]:
    prompter.note(f"Setting up credentials for {config.name}", "Credentials")
    if data.auth_method == "theme-access-app":
        prompter.info(THEME_ACCESS_STEPS)

    tokens = ask_tokens(context, prompter, config)
    if tokens is None:
        prompter.warning("Credentials skipped. Add them later via Edit Shop.")
        return Ok()

    credentials = ShopCredentials.model_validate(
        {
            "developer": developer_name(),
            "shopify": {
                "stores": {
                    "production": {"themeToken": tokens[0]},
                    "staging": {"themeToken": tokens[1]},
                }
            },
            "notes": f"Theme access app credentials for {data.shop_id}",
        }
    )
    saved = context.credentials.save_credentials(data.shop_id, credentials)
    if not saved.success:
        return saved
    prompter.success("Credentials saved securely")
    prompter.note(f"Shop {config.name} is ready for development!", "Success")
    return Ok()
