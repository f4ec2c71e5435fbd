"""Tools menu: sync, theme linking, version check and the other helpers."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from rich.table import Table

from core.context import ShopContext
from core.github import GH_REMEDIATION
from core.result import Ok, Result, cancelled
from core.shopify import SHOPIFY_REMEDIATION
from tui.campaigns import handle_campaign_tools
from tui.content_protection import handle_content_protection
from tui.health_view import handle_health_check
from tui.prompts import Option, Prompter, select_shop
from tui.shop_sync import sync_shops

DISTRIBUTION = "multi-shop"

TOOL_OPTIONS = [
    Option("sync", "Sync Shops", "Create PRs to deploy changes to shops"),
    Option("themes", "Link Themes", "Connect Git branches to Shopify themes"),
    Option("versions", "Version Check", "Check versions of important tools"),
    Option("health", "Health Check", "Verify shop configuration"),
    Option("protection", "Content Protection", "Prevent cross-shop content overwrites"),
    Option("campaigns", "Campaign Tools", "Promo branches per shop"),
]


def handle_tools(context: ShopContext, prompter: Prompter) -> Result:
    choice = prompter.select("Select tool:", TOOL_OPTIONS)
    if choice is None:
        return cancelled("No tool selected")
    handler = {
        "sync": sync_shops,
        "themes": link_themes,
        "versions": check_versions,
        "health": handle_health_check,
        "protection": handle_content_protection,
        "campaigns": handle_campaign_tools,
    }[choice]
    return handler(context, prompter)


def link_themes(context: ShopContext, prompter: Prompter) -> Result[None]:
    shops = context.shops.list_shops()
    if not shops.success:
        return shops
    if not shops.data:
        prompter.note("No shops configured yet. Create shops first.", "Link Themes")
        return Ok()

    shop_id = select_shop(prompter, shops.data, "Select shop to link themes:", "Set up theme linking for {shop}")
    if shop_id is None:
        return cancelled("No shop selected")

    loaded = context.shops.load_config(shop_id)
    if not loaded.success:
        return loaded
    credentials = context.credentials.load_credentials(shop_id)
    if not credentials.success or credentials.data is None:
        prompter.note("Set up credentials first using 'Edit Shop'", "Credentials Required")
        return Ok()

    config = loaded.data
    production, staging = config.shopify.stores.production, config.shopify.stores.staging
    prompter.note(
        "1. Go to Shopify Admin:\n"
        f"   Production: https://{production.domain}/admin/themes\n"
        f"   Staging: https://{staging.domain}/admin/themes\n"
        "2. Add theme -> Connect from GitHub:\n"
        f"   Production branch: {production.branch}\n"
        f"   Staging branch: {staging.branch}\n"
        "3. Theme names (suggested):\n"
        f'   Production: "{config.name} Main"\n'
        f'   Staging: "{config.name} Staging"\n'
        "4. After connecting, changes sync automatically between Shopify and Git",
        f"Theme linking for {config.name}",
    )
    return Ok()


def _installed_version() -> str | None:
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return None


def check_versions(context: ShopContext, prompter: Prompter) -> Result[None]:
    table = Table(title="Tool Versions")
    table.add_column("Tool", style="cyan")
    table.add_column("Installed")
    table.add_column("Status")

    table.add_row(DISTRIBUTION, _installed_version() or "-", "[green]ok[/green]")

    shopify = context.shopify.version()
    latest = context.shopify.latest_version() if shopify else None
    if shopify is None:
        status = f"[red]missing[/red] {SHOPIFY_REMEDIATION}"
    elif latest and latest not in shopify:
        status = f"[yellow]update available ({latest})[/yellow] npm install -g @shopify/cli"
    else:
        status = "[green]up to date[/green]" if latest else "[green]ok[/green]"
    table.add_row("Shopify CLI", shopify or "-", status)

    gh = context.github.version()
    table.add_row("GitHub CLI", gh or "-", "[green]ok[/green]" if gh else f"[red]missing[/red] {GH_REMEDIATION}")

    git = context.git.version()
    table.add_row("git", git or "-", "[green]ok[/green]" if git else "[red]missing[/red]")

    prompter.console.print(table)
    return Ok()
