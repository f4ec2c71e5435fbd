"""Content protection settings, per shop and project-wide."""

from __future__ import annotations

from config.schema import ContentProtection, ContentProtectionDefaults, GlobalSettings
from core.context import ShopContext
from core.result import Err, ErrorKind, Ok, Result, cancelled
from tui.prompts import Option, Prompter, select_shop

PROTECTION_OPTIONS = [
    Option("status", "Show Protection Status", "View all shops"),
    Option("configure", "Configure Shop Protection", "Enable/disable per shop"),
    Option("enable-all", "Enable All Shops", "Protect all shops"),
    Option("disable-all", "Disable All Shops", "Remove protection"),
    Option("global", "Global Settings", "Configure defaults"),
]

MODE_OPTIONS = [
    Option("strict", "Strict", "Block cross-shop content sync"),
    Option("warn", "Warn", "Show warning, require confirmation"),
    Option("off", "Off", "No protection"),
]

VERBOSITY_OPTIONS = [
    Option("verbose", "Verbose", "Show all details (recommended)"),
    Option("quiet", "Quiet", "Minimal output"),
]

DISABLED = ContentProtection(enabled=False, mode="off", verbosity="verbose")
STRICT = ContentProtection(enabled=True, mode="strict", verbosity="verbose")


def handle_content_protection(context: ShopContext, prompter: Prompter) -> Result[None]:
    choice = prompter.select("Content Protection:", PROTECTION_OPTIONS)
    if choice is None:
        return cancelled()
    if choice == "status":
        return show_protection_status(context, prompter)
    if choice == "configure":
        return configure_shop_protection(context, prompter)
    if choice == "enable-all":
        return apply_to_all_shops(context, prompter, STRICT)
    if choice == "disable-all":
        return apply_to_all_shops(context, prompter, DISABLED)
    return configure_global_settings(context, prompter)


def describe(protection: ContentProtection | None) -> str:
    if protection is None or not protection.enabled:
        return "Disabled"
    return f"Enabled ({protection.mode} mode, {protection.verbosity})"


def show_protection_status(context: ShopContext, prompter: Prompter) -> Result[None]:
    shops = context.shops.list_shops()
    if not shops.success:
        return shops
    if not shops.data:
        prompter.note("No shops configured yet", "Protection Status")
        return Ok()

    for shop_id in shops.data:
        loaded = context.shops.load_config(shop_id)
        if loaded.success:
            prompter.info(f"  {shop_id}: {describe(loaded.data.content_protection)}")
        else:
            prompter.info(f"  {shop_id}: [red]{loaded.error}[/red]")
    return Ok()


def set_shop_protection(context: ShopContext, shop_id: str, protection: ContentProtection) -> Result[None]:
    loaded = context.shops.load_config(shop_id)
    if not loaded.success:
        return loaded
    updated = loaded.data.model_copy(update={"content_protection": protection})
    return context.shops.save_config(shop_id, updated)


def _ask_mode_and_verbosity(prompter: Prompter) -> tuple[str, str] | None:
    mode = prompter.select("Protection mode:", MODE_OPTIONS)
    if mode is None:
        return None
    verbosity = prompter.select("Output verbosity:", VERBOSITY_OPTIONS)
    if verbosity is None:
        return None
    return mode, verbosity


def configure_shop_protection(context: ShopContext, prompter: Prompter) -> Result[None]:
    shops = context.shops.list_shops()
    if not shops.success:
        return shops
    if not shops.data:
        return Err(ErrorKind.NOT_FOUND, "No shops configured")

    shop_id = select_shop(prompter, shops.data, "Select shop to configure:")
    if shop_id is None:
        return cancelled("No shop selected")
    loaded = context.shops.load_config(shop_id)
    if not loaded.success:
        return loaded
    prompter.note(f"Current: {describe(loaded.data.content_protection)}", f"Configure {shop_id}")

    enable = prompter.confirm("Enable content protection?", default=True)
    if enable is None:
        return cancelled()
    if not enable:
        protection = DISABLED
    else:
        answer = _ask_mode_and_verbosity(prompter)
        if answer is None:
            return cancelled()
        protection = ContentProtection(enabled=answer[0] != "off", mode=answer[0], verbosity=answer[1])

    result = set_shop_protection(context, shop_id, protection)
    if result.success:
        prompter.success(f"Content protection for {shop_id}: {describe(protection)}")
    return result


def apply_to_all_shops(context: ShopContext, prompter: Prompter, protection: ContentProtection) -> Result[None]:
    shops = context.shops.list_shops()
    if not shops.success:
        return shops
    if not shops.data:
        return Err(ErrorKind.NOT_FOUND, "No shops configured")

    if protection.enabled:
        question = f"Enable strict content protection for all {len(shops.data)} shops?"
    else:
        question = f"Disable content protection for all {len(shops.data)} shops? This removes safety checks."
    if not prompter.confirm(question, default=protection.enabled):
        return cancelled()

    updated = 0
    for shop_id in shops.data:
        result = set_shop_protection(context, shop_id, protection)
        if result.success:
            updated += 1
        else:
            prompter.warning(f"{shop_id}: {result.error}")
    verb = "Enabled" if protection.enabled else "Disabled"
    prompter.success(f"{verb} content protection for {updated} shop{'' if updated == 1 else 's'}")
    return Ok()


def configure_global_settings(context: ShopContext, prompter: Prompter) -> Result[None]:
    current = context.global_settings.default_content_protection()
    auto = "auto-apply" if current.apply_to_new_shops else "manual"
    prompter.note(f"Current: {current.default_mode} mode, {current.default_verbosity}, {auto}", "Global Settings")

    answer = _ask_mode_and_verbosity(prompter)
    if answer is None:
        return cancelled()
    apply_to_new = prompter.confirm("Apply to new shops automatically?", default=True)
    if apply_to_new is None:
        return cancelled()

    settings = GlobalSettings(
        content_protection=ContentProtectionDefaults(
            default_mode=answer[0],
            default_verbosity=answer[1],
            apply_to_new_shops=apply_to_new,
        )
    )
    result = context.global_settings.save(settings)
    if result.success:
        prompter.success("Global settings updated. New shops will use these defaults.")
    return result
