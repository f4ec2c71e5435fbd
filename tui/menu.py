"""Interactive shop manager (``multi-shop shop``)."""

from __future__ import annotations

import logging

from core.context import ShopContext
from core.git import GitError
from core.result import ErrorKind, Result
from tui.dev import start_development
from tui.prompts import Option, Prompter
from tui.shop_creation import create_new_shop
from tui.shop_editing import edit_shop
from tui.tools import handle_tools

logger = logging.getLogger(__name__)

MENU_OPTIONS = [
    Option("dev", "Start Development Server", "Most common"),
    Option("list", "List Shops", "View all shops"),
    Option("create", "Create New Shop", "Set up new shop"),
    Option("edit", "Edit Shop", "Update shop"),
    Option("tools", "Tools", "Sync shops and workflows"),
    Option("exit", "Exit", "Close manager"),
]


def status_line(context: ShopContext) -> str:
    count = context.shops.count_shops()
    if count == 0:
        return "No shops configured yet"
    return f"{count} shop{'' if count == 1 else 's'} configured"


def list_shops(context: ShopContext, prompter: Prompter) -> Result[list[str]]:
    shops = context.shops.list_shops()
    if not shops.success:
        return shops
    if not shops.data:
        prompter.note("No shops configured yet.", "Shop List")
        return shops

    prompter.note(f"Found {len(shops.data)} configured shop{'' if len(shops.data) == 1 else 's'}", "Shop List")
    for shop_id in shops.data:
        loaded = context.shops.load_config(shop_id)
        if not loaded.success:
            prompter.info(f"\n[red]{shop_id}[/red] (configuration error: {loaded.error})")
            continue
        config = loaded.data
        prompter.info(f"\n[bold]{config.name}[/bold] ({shop_id})")
        prompter.info(f"   Production: {config.shopify.stores.production.domain}")
        prompter.info(f"   Staging: {config.shopify.stores.staging.domain}")
        prompter.info(f"   Branch: {config.shopify.stores.production.branch}")
        prompter.info(f"   Auth: {config.shopify.authentication.method}")
    return shops


def report(prompter: Prompter, result: Result) -> None:
    """Show a failed result; cancellations are not errors."""
    if result.success:
        return
    if result.kind is ErrorKind.CANCELLED:
        prompter.info(f"[dim]{result.error}[/dim]")
    else:
        prompter.error(result.error)


def run_menu(context: ShopContext, prompter: Prompter) -> None:
    prompter.note("Multi-Shop Manager", None)
    handlers = {
        "dev": start_development,
        "list": list_shops,
        "create": create_new_shop,
        "edit": edit_shop,
        "tools": handle_tools,
    }
    pause_after = {"list", "create"}

    while True:
        prompter.note(status_line(context), "Current Status")
        choice = prompter.select("What would you like to do?", MENU_OPTIONS)
        if choice is None or choice == "exit":
            prompter.info("Goodbye!")
            return
        try:
            result = handlers[choice](context, prompter)
        except GitError as e:
            logger.debug("git failure in %s", choice, exc_info=True)
            prompter.error(str(e))
            continue
        report(prompter, result)
        if choice in pause_after:
            prompter.pause()
