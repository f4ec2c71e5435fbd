"""Tests for branch classification and dispatch."""

import pytest

from core.dispatcher import BranchDispatcher, BranchKind, classify_branch
from core.git import GitClient, GitError


class TestClassifyBranch:
    @pytest.mark.parametrize(
        "branch,shop_id",
        [
            ("shop-a/main", "shop-a"),
            ("shop-a/staging", "shop-a"),
            ("shop-a/promo-summer", "shop-a"),
            ("shop-a/feature/x", "shop-a"),
            ("  shop-b/main \n", "shop-b"),
        ],
    )
    def test_shop_branches(self, branch, shop_id):
        context = classify_branch(branch)
        assert context.kind is BranchKind.SHOP
        assert context.shop_id == shop_id

    @pytest.mark.parametrize("branch", ["main", "feature-login", "", "   ", "/oops"])
    def test_feature_branches(self, branch):
        context = classify_branch(branch)
        assert context.kind is BranchKind.FEATURE
        assert context.shop_id is None

    def test_name_is_trimmed(self):
        assert classify_branch(" main ").branch == "main"


class TestBranchDispatcher:
    def make(self, runner):
        calls = []
        dispatcher = BranchDispatcher(
            GitClient(runner),
            shop_flow=lambda preselected_shop: calls.append(("shop", preselected_shop)) or "shop-result",
            feature_flow=lambda: calls.append(("feature", None)) or "feature-result",
        )
        return dispatcher, calls

    def test_shop_branch_preselects_shop(self, runner):
        runner.on("git", "branch", "--show-current", stdout="shop-a/main\n")
        dispatcher, calls = self.make(runner)

        outcome = dispatcher.run()

        assert calls == [("shop", "shop-a")]
        assert outcome.context.shop_id == "shop-a"
        assert outcome.result == "shop-result"

    def test_feature_branch(self, runner):
        runner.on("git", "branch", "--show-current", stdout="main\n")
        dispatcher, calls = self.make(runner)

        outcome = dispatcher.run()

        assert calls == [("feature", None)]
        assert outcome.context.kind is BranchKind.FEATURE
        assert outcome.result == "feature-result"

    def test_git_failure_propagates(self, runner):
        runner.on("git", "branch", "--show-current", exit_code=128, stderr="fatal: not a git repository")
        dispatcher, calls = self.make(runner)

        with pytest.raises(GitError, match="not a git repository"):
            dispatcher.run()
        assert calls == []
        assert len(runner.calls) == 1
