"""Tests for the development server workflow."""

import pytest

from core.dispatcher import BranchKind
from core.git import GitError
from core.result import ErrorKind
from fakes.prompter import ScriptedPrompter
from tui.dev import run_contextual_dev, start_development


@pytest.fixture
def shop(context, config_factory, credentials_factory):
    context.shops.save_config("shop-a", config_factory(staging="shop-a-staging.myshopify.com"))
    context.credentials.save_credentials("shop-a", credentials_factory())
    return context


class TestStartDevelopment:
    def test_runs_theme_dev_with_token(self, shop, runner):
        assert start_development(shop, ScriptedPrompter("shop-a", "staging")).success

        call = runner.interactive_calls[0]
        assert call.line == "shopify theme dev --store=shop-a-staging"
        assert call.env == {
            "SHOPIFY_CLI_THEME_TOKEN": "staging-token-456",
            "SHOPIFY_FLAG_STORE": "shop-a-staging",
        }

    def test_preselected_shop_skips_selection(self, shop, runner):
        prompter = ScriptedPrompter("production")

        assert start_development(shop, prompter, preselected_shop="shop-a").success
        assert prompter.prompts == ["Select environment:"]
        assert runner.interactive_calls[0].env["SHOPIFY_CLI_THEME_TOKEN"] == "prod-token-123"

    def test_missing_token(self, context, runner, config_factory):
        context.shops.save_config("shop-a", config_factory())

        result = start_development(context, ScriptedPrompter("shop-a", "production"))

        assert result.kind is ErrorKind.NOT_FOUND
        assert runner.interactive_calls == []

    def test_missing_shopify_cli(self, shop, runner):
        runner.missing("shopify")
        result = start_development(shop, ScriptedPrompter("shop-a", "staging"))
        assert result.kind is ErrorKind.PROCESS_ERROR
        assert "npm install -g @shopify/cli" in result.error

    def test_nonzero_exit(self, shop, runner):
        runner.interactive_exit_code = 2
        result = start_development(shop, ScriptedPrompter("shop-a", "staging"))
        assert result.kind is ErrorKind.PROCESS_ERROR

    def test_no_shops(self, context):
        assert start_development(context, ScriptedPrompter()).kind is ErrorKind.NOT_FOUND


class TestContextualDev:
    def test_shop_branch(self, shop, runner):
        runner.on("git", "branch", "--show-current", stdout="shop-a/staging\n")
        prompter = ScriptedPrompter("staging")

        outcome = run_contextual_dev(shop, prompter)

        assert outcome.context.kind is BranchKind.SHOP
        assert outcome.result.success
        assert prompter.prompts == ["Select environment:"]

    def test_feature_branch_asks_for_shop(self, shop, runner):
        runner.on("git", "branch", "--show-current", stdout="feature-cart\n")
        prompter = ScriptedPrompter("shop-a", "staging")

        outcome = run_contextual_dev(shop, prompter)

        assert outcome.context.kind is BranchKind.FEATURE
        assert prompter.prompts == ["Select shop for development:", "Select environment:"]

    def test_git_failure(self, shop, runner):
        runner.on("git", "branch", exit_code=128, stderr="fatal: not a git repository")
        with pytest.raises(GitError):
            run_contextual_dev(shop, ScriptedPrompter())
