"""Render a security audit report as rich text or JSON."""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table

from core.audit import AuditReport

LEVEL_STYLE = {"error": "red", "warning": "yellow", "info": "blue"}


def render_json(report: AuditReport) -> str:
    return json.dumps(report.to_dict(), indent=2)


def render(console: Console, report: AuditReport) -> None:
    console.print(f"\n[bold]Security Audit Report[/bold]  [dim]{report.timestamp}[/dim]\n")

    if report.shops:
        table = Table(title=f"Shops Audited: {len(report.shops)}")
        table.add_column("Shop", style="cyan")
        table.add_column("Permissions")
        table.add_column("Production")
        table.add_column("Staging")
        table.add_column("Metadata")
        for shop in report.shops:
            table.add_row(
                shop.shop_id,
                shop.file_permissions,
                "yes" if shop.has_production else "[red]no[/red]",
                "yes" if shop.has_staging else "[red]no[/red]",
                "present" if shop.metadata_present else "[yellow]missing[/yellow]",
            )
        console.print(table)
    else:
        console.print("No shops configured yet\n")

    for level, heading in (("error", "Errors"), ("warning", "Warnings"), ("info", "Information")):
        issues = report.issues_at(level)
        if not issues:
            continue
        style = LEVEL_STYLE[level]
        console.print(f"[{style}]{heading}:[/{style}]")
        for issue in issues:
            prefix = f"{issue.shop_id}: " if issue.shop_id else ""
            console.print(f"  - {prefix}{issue.message}")
            if issue.recommendation:
                console.print(f"    [dim]-> {issue.recommendation}[/dim]")
        console.print()

    console.print("[bold]Recommendations:[/bold]")
    for line in report.recommendations:
        console.print(f"  {line}")
