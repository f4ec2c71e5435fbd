"""Tests for ``multi-shop init``."""

import json
import os
import stat

import pytest

from config.settings import ProjectPaths
from core.result import ErrorKind
from fakes.prompter import ScriptedPrompter
from tui.initializer import Initializer


@pytest.fixture
def paths(tmp_path):
    (tmp_path / "sections").mkdir()
    return ProjectPaths.for_root(tmp_path)


class TestInitializer:
    def test_creates_layout(self, paths):
        report = Initializer(paths, ScriptedPrompter()).run().data

        assert report.created_directories == ["shops", "shops/credentials", ".github/workflows"]
        assert "shops/credentials/" in report.gitignore_added
        assert "*.credentials.json" in report.gitignore_added
        example = json.loads(paths.example_config.read_text())
        assert example["shopId"] == "example-shop"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_credentials_directory_is_private(self, paths):
        Initializer(paths, ScriptedPrompter()).run()
        assert stat.S_IMODE(paths.credentials_dir.stat().st_mode) == 0o700

    def test_gitignore_is_appended_once(self, paths):
        paths.gitignore.write_text("node_modules\n.env")
        Initializer(paths, ScriptedPrompter()).run()
        report = Initializer(paths, ScriptedPrompter(), force=True).run().data

        content = paths.gitignore.read_text()
        assert content.startswith("node_modules\n.env\n")
        assert content.count(".env\n") == 1
        assert content.count("*.credentials.json") == 1
        assert report.gitignore_added == []

    def test_not_a_theme_asks_first(self, tmp_path):
        paths = ProjectPaths.for_root(tmp_path)
        result = Initializer(paths, ScriptedPrompter(False)).run()
        assert result.kind is ErrorKind.CANCELLED
        assert not paths.shops_dir.exists()

    def test_reinitialize_asks_first(self, paths):
        paths.shops_dir.mkdir()
        prompter = ScriptedPrompter(False)
        assert Initializer(paths, prompter).run().kind is ErrorKind.CANCELLED
        assert prompter.prompts == ["Multi-shop appears to already be set up. Reinitialize?"]

    def test_force_skips_questions(self, tmp_path):
        paths = ProjectPaths.for_root(tmp_path)
        (tmp_path / "shops").mkdir()
        assert Initializer(paths, ScriptedPrompter(), force=True).run().success
