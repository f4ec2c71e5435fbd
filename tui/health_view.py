"""Render health reports."""

from __future__ import annotations

from rich.table import Table

from core.context import ShopContext
from core.health import HealthReport, check_shop_health
from core.result import Err, ErrorKind, Ok, Result, cancelled
from tui.prompts import Option, Prompter, select_shop

STATUS_STYLE = {
    "pass": "[green]PASS[/green]",
    "warn": "[yellow]WARN[/yellow]",
    "fail": "[red]FAIL[/red]",
    "info": "[blue]INFO[/blue]",
}

HEALTH_OPTIONS = [
    Option("single", "Check Single Shop", "Detailed check for one shop"),
    Option("all", "Check All Shops", "Quick check for all shops"),
]


def handle_health_check(context: ShopContext, prompter: Prompter) -> Result[list[HealthReport]]:
    shops = context.shops.list_shops()
    if not shops.success:
        return shops
    if not shops.data:
        prompter.note("No shops configured yet", "Health Check")
        return Err(ErrorKind.NOT_FOUND, "No shops configured")

    choice = prompter.select("Health Check:", HEALTH_OPTIONS)
    if choice is None:
        return cancelled()

    if choice == "single":
        shop_id = select_shop(prompter, shops.data, "Select shop to check:")
        if shop_id is None:
            return cancelled("No shop selected")
        report = check_shop_health(context, shop_id)
        show_detailed(prompter, report)
        return Ok([report])

    prompter.note(f"Checking health for {len(shops.data)} shops...", "Health Check")
    reports = [check_shop_health(context, shop_id) for shop_id in shops.data]
    show_summary(prompter, reports)
    return Ok(reports)


def show_detailed(prompter: Prompter, report: HealthReport) -> None:
    table = Table(title=f"Health: {report.shop_id}", show_lines=False)
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Message")
    for name, check in report.checks.items():
        detail = "\n".join([check.message, *(f"  {d}" for d in check.details)])
        table.add_row(name, STATUS_STYLE[check.status], detail)
    prompter.console.print(table)

    for error in report.errors:
        prompter.error(error)
    for warning in report.warnings:
        prompter.warning(warning)
    if report.recommendations:
        prompter.info("\n[bold]Recommendations:[/bold]")
        for recommendation in report.recommendations:
            prompter.info(f"  - {recommendation}")
    prompter.info(f"\nOverall: {STATUS_STYLE[report.overall]}")


def show_summary(prompter: Prompter, reports: list[HealthReport]) -> None:
    table = Table(title="Shop Health")
    table.add_column("Shop", style="cyan")
    for name in ("Config", "Credentials", "Branches", "Protection", "Overall"):
        table.add_column(name)
    for report in reports:
        table.add_row(
            report.shop_id,
            *(STATUS_STYLE[c.status] for c in report.checks.values()),
            STATUS_STYLE[report.overall],
        )
    prompter.console.print(table)
