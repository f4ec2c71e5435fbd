"""Edit an existing shop: delete it or replace its credentials."""

from __future__ import annotations

from config.schema import ShopCredentials
from core.context import ShopContext
from core.result import Ok, Result, cancelled
from tui.prompts import Option, Prompter, select_shop
from tui.shop_creation import THEME_ACCESS_STEPS, ask_tokens, developer_name

EDIT_OPTIONS = [
    Option("delete", "Delete Shop", "Remove completely"),
    Option("credentials", "Edit Credentials", "Update theme access passwords"),
]


def edit_shop(context: ShopContext, prompter: Prompter) -> Result[None]:
    shops = context.shops.list_shops()
    if not shops.success:
        return shops
    if not shops.data:
        prompter.note("No shops to edit. Create a shop first.", "Edit Shop")
        return Ok()

    shop_id = select_shop(prompter, shops.data, "Select shop to edit:")
    if shop_id is None:
        return cancelled("No shop selected")

    action = prompter.select("What would you like to edit?", EDIT_OPTIONS)
    if action is None:
        return cancelled("No action selected")
    if action == "delete":
        return delete_shop(context, prompter, shop_id)
    return edit_credentials(context, prompter, shop_id)


def delete_shop(context: ShopContext, prompter: Prompter, shop_id: str) -> Result[None]:
    if not prompter.confirm(f'Delete shop "{shop_id}" permanently?', default=False):
        return Ok()
    result = context.shops.delete_shop(shop_id)
    if result.success:
        prompter.success(f'Shop "{shop_id}" deleted')
    return result


def edit_credentials(context: ShopContext, prompter: Prompter, shop_id: str) -> Result[None]:
    loaded = context.shops.load_config(shop_id)
    if not loaded.success:
        return loaded
    config = loaded.data

    existing_result = context.credentials.load_credentials(shop_id)
    existing = existing_result.data if existing_result.success else None

    prompter.note(f"Editing credentials for {config.name}", "Edit Credentials")
    prompter.info(THEME_ACCESS_STEPS)

    tokens = ask_tokens(context, prompter, config)
    if tokens is None:
        return cancelled("Credential editing cancelled")

    credentials = ShopCredentials.model_validate(
        {
            "developer": existing.developer if existing else developer_name(),
            "shopify": {
                "stores": {
                    "production": {"themeToken": tokens[0]},
                    "staging": {"themeToken": tokens[1]},
                }
            },
            "notes": (existing.notes if existing else None) or f"Theme access app credentials for {shop_id}",
        }
    )
    saved = context.credentials.save_credentials(shop_id, credentials)
    if saved.success:
        prompter.success(f"Credentials updated for {config.name}")
    return saved
