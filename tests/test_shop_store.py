"""Tests for the shop configuration store."""

import json

from core.result import ErrorKind


def write_raw(context, shop_id, text):
    context.paths.shops_dir.mkdir(parents=True, exist_ok=True)
    path = context.paths.shops_dir / f"{shop_id}.config.json"
    path.write_text(text)
    return path


class TestLoadConfig:
    def test_not_found(self, context):
        result = context.shops.load_config("missing")
        assert result.kind is ErrorKind.NOT_FOUND

    def test_invalid_json(self, context):
        write_raw(context, "shop-a", "{not json")
        result = context.shops.load_config("shop-a")
        assert result.kind is ErrorKind.INVALID_JSON

    def test_too_large_is_checked_before_parsing(self, context):
        context.shops.max_config_size = 64
        write_raw(context, "shop-a", "{" + " " * 100)
        result = context.shops.load_config("shop-a")
        assert result.kind is ErrorKind.TOO_LARGE

    def test_validates_loaded_config(self, context, config_factory):
        write_raw(context, "shop-a", json.dumps(config_factory("shop-b")))
        assert context.shops.load_config("shop-a").kind is ErrorKind.MISMATCH

    def test_returns_typed_config(self, context, config_factory):
        write_raw(context, "shop-a", json.dumps(config_factory()))
        result = context.shops.load_config("shop-a")
        assert result.success
        assert result.data.name == "Shop A"


class TestSaveConfig:
    def test_round_trip(self, context, config_factory):
        config = config_factory(metadata={"description": "EU store"})
        assert context.shops.save_config("shop-a", config).success

        loaded = context.shops.load_config("shop-a")
        assert loaded.data.to_json_dict() == config

    def test_writes_pretty_json(self, context, config_factory):
        context.shops.save_config("shop-a", config_factory())
        text = (context.paths.shops_dir / "shop-a.config.json").read_text()
        assert text.startswith('{\n  "shopId": "shop-a"')

    def test_creates_directory(self, context, config_factory):
        assert not context.paths.shops_dir.exists()
        context.shops.save_config("shop-a", config_factory())
        assert context.paths.shops_dir.is_dir()

    def test_invalid_config_never_touches_disk(self, context, config_factory):
        result = context.shops.save_config("shop-a", config_factory(production="bad"))
        assert not result.success
        assert not context.paths.shops_dir.exists()

    def test_save_replaces_whole_document(self, context, config_factory):
        context.shops.save_config("shop-a", config_factory(metadata={"tags": ["old"]}))
        context.shops.save_config("shop-a", config_factory())
        data = json.loads((context.paths.shops_dir / "shop-a.config.json").read_text())
        assert "metadata" not in data

    def test_no_temp_files_left(self, context, config_factory):
        context.shops.save_config("shop-a", config_factory())
        assert [p.name for p in context.paths.shops_dir.iterdir()] == ["shop-a.config.json"]


class TestListAndDelete:
    def test_missing_directory_is_empty(self, context):
        result = context.shops.list_shops()
        assert result.success
        assert result.data == []

    def test_lists_configs_without_examples(self, context, config_factory):
        for shop_id in ("shop-b", "shop-a"):
            context.shops.save_config(shop_id, config_factory(shop_id))
        write_raw(context, "shop", "{}").rename(context.paths.shops_dir / "shop.config.example.json")
        (context.paths.shops_dir / "notes.txt").write_text("x")

        assert context.shops.list_shops().data == ["shop-a", "shop-b"]
        assert context.shops.count_shops() == 2

    def test_delete_removes_config_and_credentials(self, context, config_factory, credentials_factory):
        context.shops.save_config("shop-a", config_factory())
        context.credentials.save_credentials("shop-a", credentials_factory())

        assert context.shops.delete_shop("shop-a").success
        assert not (context.paths.shops_dir / "shop-a.config.json").exists()
        assert not context.credentials.credential_path("shop-a").exists()

    def test_delete_missing_shop_succeeds(self, context):
        assert context.shops.delete_shop("ghost").success

    def test_delete_twice_succeeds(self, context, config_factory, credentials_factory):
        context.shops.save_config("shop-a", config_factory())
        context.credentials.save_credentials("shop-a", credentials_factory())

        assert context.shops.delete_shop("shop-a").success
        assert context.shops.delete_shop("shop-a").success
        assert context.shops.list_shops().data == []


class TestShopIdContainment:
    def test_delete_outside_shops_dir_touches_nothing(self, context):
        context.paths.shops_dir.mkdir(parents=True)
        victim = context.paths.root / "victim.config.json"
        victim.write_text("{}")

        result = context.shops.delete_shop("../victim")

        assert result.kind is ErrorKind.UNSAFE_PATH
        assert victim.exists()

    def test_load_outside_shops_dir_is_refused(self, context, config_factory):
        context.paths.shops_dir.mkdir(parents=True)
        (context.paths.root / "victim.config.json").write_text(json.dumps(config_factory("victim")))

        assert context.shops.load_config("../victim").kind is ErrorKind.UNSAFE_PATH
        assert not context.shops.exists("../victim")
