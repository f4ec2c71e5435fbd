"""multi-shop command line entry point.

Usage:
    multi-shop init [--force]
    multi-shop shop
    multi-shop dev
    multi-shop audit [--json]
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from core.audit import run_security_audit
from core.context import ShopContext, create_context
from core.git import GitError
from core.log import resolve_level, setup_logging
from core.result import ErrorKind
from tui import __version__
from tui.audit_view import render, render_json
from tui.dev import run_contextual_dev
from tui.initializer import Initializer
from tui.menu import report, run_menu
from tui.prompts import Prompter

logger = logging.getLogger(__name__)


class MultiShopGroup(click.Group):
    """Turns unexpected exceptions into a short message and exit code 1."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except (click.exceptions.Exit, click.exceptions.Abort, click.ClickException):
            raise
        except GitError as e:
            logger.debug("git failure", exc_info=True)
            click.secho(f"✗ {e}", fg="red", err=True)
            ctx.exit(1)
        except Exception as e:
            logger.error("Unexpected error: %s", e, exc_info=logger.isEnabledFor(logging.DEBUG))
            click.secho(f"✗ Fatal error: {e}", fg="red", err=True)
            ctx.exit(1)


@click.group(cls=MultiShopGroup)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Theme project directory (default: current directory)",
)
@click.version_option(__version__, prog_name="multi-shop")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool, cwd: Path | None) -> None:
    """Contextual development and shop management for multi-shop Shopify themes."""
    if ctx.obj is None:
        ctx.obj = create_context(cwd)
    context: ShopContext = ctx.obj
    setup_logging(resolve_level(context.settings.log_level, verbose=verbose, debug=debug))
    logger.debug("project root: %s", context.paths.root)


def _prompter() -> Prompter:
    return Prompter(Console())


@cli.command()
@click.option("--force", is_flag=True, help="Skip the theme-structure and re-initialisation checks")
@click.pass_obj
def init(context: ShopContext, force: bool) -> None:
    """Initialize multi-shop in the current Shopify theme project."""
    prompter = _prompter()
    result = Initializer(context.paths, prompter, force=force).run()
    if not result.success:
        report(prompter, result)
        if result.kind is not ErrorKind.CANCELLED:
            sys.exit(1)
        return

    summary = result.data
    lines = [f"Created: {path}" for path in summary.created_directories]
    if summary.gitignore_added:
        lines.append(f".gitignore: added {', '.join(summary.gitignore_added)}")
    else:
        lines.append(".gitignore already up to date")
    lines.append(f"Example config: {summary.example_config}")
    lines += ["", "Next steps:", "1. Create your first shop: multi-shop shop", "2. Start development: multi-shop dev"]
    prompter.note("\n".join(lines), "Multi-shop setup complete")


@cli.command()
@click.pass_obj
def shop(context: ShopContext) -> None:
    """Launch interactive shop management."""
    run_menu(context, _prompter())


@cli.command()
@click.pass_obj
def dev(context: ShopContext) -> None:
    """Start a dev server for the shop of the current branch."""
    prompter = _prompter()
    outcome = run_contextual_dev(context, prompter)
    logger.info("branch %r handled as %s", outcome.context.branch, outcome.context.kind.value)
    result = outcome.result
    if not result.success:
        report(prompter, result)
        if result.kind is not ErrorKind.CANCELLED:
            sys.exit(1)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_obj
def audit(context: ShopContext, as_json: bool) -> None:
    """Audit credential storage; exits 1 when error-level issues exist."""
    result = run_security_audit(context)
    if not result.success:
        click.secho(f"✗ {result.error}", fg="red", err=True)
        sys.exit(1)

    audit_report = result.data
    if as_json:
        click.echo(render_json(audit_report))
    else:
        render(Console(), audit_report)
    if audit_report.has_errors:
        sys.exit(1)


def main() -> None:
    cli(prog_name="multi-shop")


if __name__ == "__main__":
    main()
