"""Campaign tools: promo branches per shop (``<shop>/promo-<name>``)."""

from __future__ import annotations

from config.rules import PRODUCTION_BRANCH, PROMO_BRANCH
from core.context import ShopContext
from core.dispatcher import classify_branch
from core.result import Err, ErrorKind, Ok, Result, cancelled
from core.validation import validate_promo_name
from tui.prompts import Option, Prompter, select_shop

PROMO_MARKER = "/promo-"

CAMPAIGN_OPTIONS = [
    Option("create", "Create Promo Branch", "Start new campaign"),
    Option("push", "Push Promo to Main", "Merge campaign content back"),
    Option("end", "End Promo", "Cleanup after campaign"),
    Option("list", "List Active Promos", "Show all promo branches"),
]


def handle_campaign_tools(context: ShopContext, prompter: Prompter) -> Result[None]:
    choice = prompter.select("Select campaign tool:", CAMPAIGN_OPTIONS)
    if choice is None:
        return cancelled("No tool selected")
    handler = {
        "create": create_promo_branch,
        "push": push_promo_to_main,
        "end": end_promo,
        "list": list_active_promos,
    }[choice]
    return handler(context, prompter)


def create_promo_branch(context: ShopContext, prompter: Prompter) -> Result[None]:
    prompter.note("Create a promo branch for a campaign or seasonal promotion", "Create Promo Branch")
    shops = context.shops.list_shops()
    if not shops.success:
        return shops
    if not shops.data:
        return Err(ErrorKind.NOT_FOUND, "No shops configured")

    shop_id = select_shop(prompter, shops.data, "Select shop for promo:")
    if shop_id is None:
        return cancelled("No shop selected")

    promo = prompter.text(
        "Promo campaign name (e.g. summer-sale)",
        validate=lambda v: validate_promo_name(v).error,
    )
    if promo is None:
        return cancelled()

    branch = PROMO_BRANCH.format(shop_id=shop_id, promo=promo)
    base = PRODUCTION_BRANCH.format(shop_id=shop_id)
    if not context.git.remote_branch_exists(base):
        return Err(ErrorKind.NOT_FOUND, f"Base branch {base} not found. Create the shop branches first.")

    result = context.git.create_and_push_branch(branch, f"origin/{base}")
    if not result.success:
        return Err(ErrorKind.PROCESS_ERROR, f"Failed to create branch: {result.error_text}")

    prompter.success(f"Promo branch {branch} created and pushed")
    prompter.note(
        "1. Shopify Admin -> Themes -> Add theme -> Connect from GitHub\n"
        f"   Select branch: {branch}\n"
        f"2. Customize in the theme editor; changes sync back to {branch}\n"
        "3. Publish the theme (or schedule it) to launch the promo\n"
        f"4. After the campaign: Campaign Tools -> Push Promo to Main (merges into {base})\n"
        f"5. Cleanup: Campaign Tools -> End Promo (deletes {branch})",
        "Next Steps",
    )
    return Ok()


def _current_promo_branch(context: ShopContext) -> str | None:
    branch = context.git.current_branch()
    return branch if PROMO_MARKER in branch else None


def push_promo_to_main(context: ShopContext, prompter: Prompter) -> Result[None]:
    branch = _current_promo_branch(context)
    if branch is None:
        return Err(ErrorKind.INVALID_FORMAT, f"Not on a promo branch. Current: {context.git.current_branch()}")

    shop_id = classify_branch(branch).shop_id
    target = PRODUCTION_BRANCH.format(shop_id=shop_id)
    if not prompter.confirm(f"Create PR: {branch} -> {target}?", default=True):
        return cancelled()

    promo = branch.split(PROMO_MARKER, 1)[1]
    title = f"Deploy promo campaign: {promo}"
    body = (
        f"Merge promo campaign content from {branch} to {target}.\n\n"
        "This includes all customizations made during the campaign.\n\n"
        f"**Review carefully:** this PR contains campaign-specific content that keeps {target} current."
    )
    result = context.github.create_pr(target, branch, title, body)
    if result.success:
        prompter.success(f"PR created: {branch} -> {target}")
        return Ok()

    prompter.error(f"PR creation failed: {result.error_text}")
    prompter.note(
        f"gh pr create --base {target} --head {branch}\n\n"
        f"Or on GitHub: New pull request with base {target}, compare {branch}",
        "Manual PR creation",
    )
    return Err(ErrorKind.PROCESS_ERROR, result.error_text)


def end_promo(context: ShopContext, prompter: Prompter) -> Result[None]:
    branch = _current_promo_branch(context)
    if branch is None:
        return Err(ErrorKind.INVALID_FORMAT, "Not on a promo branch. Switch to the promo branch first.")

    if not prompter.confirm(f"Delete branch {branch}? This can't be undone.", default=False):
        return cancelled()

    shop_main = PRODUCTION_BRANCH.format(shop_id=classify_branch(branch).shop_id)
    checkout = context.git.checkout(shop_main)
    if not checkout.success:
        return Err(ErrorKind.PROCESS_ERROR, f"Failed to cleanup: {checkout.error_text}")
    deleted = context.git.delete_branch(branch)
    if not deleted.success:
        return Err(ErrorKind.PROCESS_ERROR, f"Failed to cleanup: {deleted.error_text}")

    prompter.success(f"Branch {branch} has been deleted locally and on GitHub")
    return Ok()


def promo_branches(context: ShopContext) -> list[str]:
    return [b for b in context.git.remote_branches() if PROMO_MARKER in b]


def list_active_promos(context: ShopContext, prompter: Prompter) -> Result[None]:
    branches = promo_branches(context)
    if not branches:
        prompter.note("No active promo branches found", "Active Promos")
        return Ok()

    plural = "" if len(branches) == 1 else "es"
    prompter.note(f"Found {len(branches)} active promo branch{plural}", "Active Promos")
    for branch in branches:
        shop, promo = branch.split(PROMO_MARKER, 1)
        prompter.info(f"  {shop}: {promo}  [dim]({branch})[/dim]")
    return Ok()
