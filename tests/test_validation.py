"""Tests for core.validation."""

import pytest

from config.rules import Messages
from config.schema import ShopConfig
from core.result import ErrorKind
from core.validation import (
    decode_shop_config,
    validate_domain,
    validate_promo_name,
    validate_shop_config,
    validate_shop_id,
    validate_shop_name,
)


class TestValidateShopId:
    """Tests for validate_shop_id."""

    @pytest.mark.parametrize("shop_id", ["a", "shop-a", "shop-a-2", "123", "a" * 50])
    def test_valid_ids(self, shop_id):
        assert validate_shop_id(shop_id).success

    @pytest.mark.parametrize("shop_id", ["", None, 42])
    def test_required(self, shop_id):
        result = validate_shop_id(shop_id)
        assert not result.success
        assert result.kind is ErrorKind.REQUIRED
        assert result.error == Messages.SHOP_ID_REQUIRED

    def test_too_long(self):
        result = validate_shop_id("a" * 51)
        assert result.kind is ErrorKind.TOO_LONG
        assert result.error == "Shop ID must be at most 50 characters"

    @pytest.mark.parametrize("shop_id", ["Shop-A", "-shop", "shop-", "shop--a", "shop_a", "shop a", "../etc"])
    def test_invalid_format(self, shop_id):
        result = validate_shop_id(shop_id)
        assert result.kind is ErrorKind.INVALID_FORMAT
        assert result.error == "Shop ID Lowercase alphanumeric with hyphens (no leading/trailing hyphens)"

    def test_length_checked_before_format(self):
        assert validate_shop_id("A" * 51).kind is ErrorKind.TOO_LONG


class TestValidateDomain:
    """Tests for validate_domain."""

    def test_valid(self):
        assert validate_domain("my-shop.myshopify.com").success

    def test_single_character_subdomain(self):
        assert validate_domain("a.myshopify.com").success

    def test_required(self):
        result = validate_domain("")
        assert result.kind is ErrorKind.REQUIRED
        assert result.error == "Domain is required"

    def test_wrong_suffix(self):
        result = validate_domain("my-shop.example.com")
        assert result.kind is ErrorKind.WRONG_SUFFIX
        assert result.error == "Domain must end with .myshopify.com"

    def test_no_subdomain(self):
        result = validate_domain(".myshopify.com")
        assert result.kind is ErrorKind.NO_SUBDOMAIN
        assert result.error == "Domain must have a subdomain before .myshopify.com"

    def test_invalid_characters(self):
        result = validate_domain("My_Shop.myshopify.com")
        assert result.kind is ErrorKind.INVALID_FORMAT
        assert result.error == "Domain Valid Shopify store domain"

    def test_nested_subdomain_rejected(self):
        assert validate_domain("a.b.myshopify.com").kind is ErrorKind.INVALID_FORMAT


class TestValidateShopConfig:
    """Tests for validate_shop_config."""

    def test_valid(self, config_factory):
        assert validate_shop_config(config_factory(), "shop-a").success

    @pytest.mark.parametrize("config", [None, "shop-a", ["shop-a"], 3])
    def test_not_object(self, config):
        result = validate_shop_config(config, "shop-a")
        assert result.kind is ErrorKind.NOT_OBJECT
        assert result.error == "Configuration must be an object"

    def test_embedded_id_is_validated(self, config_factory):
        config = config_factory()
        config["shopId"] = "Bad Id"
        assert validate_shop_config(config, "Bad Id").kind is ErrorKind.INVALID_FORMAT

    def test_missing_id(self, config_factory):
        config = config_factory()
        del config["shopId"]
        assert validate_shop_config(config, "shop-a").kind is ErrorKind.REQUIRED

    def test_mismatch(self, config_factory):
        result = validate_shop_config(config_factory("shop-b"), "shop-a")
        assert result.kind is ErrorKind.MISMATCH
        assert result.error == "Shop ID in config does not match provided shop ID"

    def test_production_domain_prefixed(self, config_factory):
        result = validate_shop_config(config_factory(production="shop.example.com"), "shop-a")
        assert result.kind is ErrorKind.WRONG_SUFFIX
        assert result.error == "Production Domain must end with .myshopify.com"

    def test_staging_domain_prefixed(self, config_factory):
        result = validate_shop_config(config_factory(staging="nope"), "shop-a")
        assert result.error == "Staging Domain must end with .myshopify.com"

    def test_production_checked_before_staging(self, config_factory):
        result = validate_shop_config(config_factory(production="bad", staging="bad"), "shop-a")
        assert result.error.startswith("Production")

    def test_missing_stores_reports_production_domain(self):
        result = validate_shop_config({"shopId": "shop-a", "name": "A"}, "shop-a")
        assert result.kind is ErrorKind.REQUIRED
        assert result.error == "Production Domain is required"

    def test_unknown_auth_method_is_invalid_shape(self, config_factory):
        config = config_factory()
        config["shopify"]["authentication"]["method"] = "password"
        result = validate_shop_config(config, "shop-a")
        assert result.kind is ErrorKind.INVALID_SHAPE
        assert "authentication" in result.error

    def test_bad_protection_mode_is_invalid_shape(self, config_factory):
        config = config_factory(contentProtection={"enabled": True, "mode": "paranoid", "verbosity": "quiet"})
        assert validate_shop_config(config, "shop-a").kind is ErrorKind.INVALID_SHAPE

    def test_accepts_model(self, config_factory):
        model = ShopConfig.model_validate(config_factory())
        assert validate_shop_config(model, "shop-a").success


class TestDecodeShopConfig:
    def test_returns_typed_config(self, config_factory):
        result = decode_shop_config(config_factory(metadata={"tags": ["eu"]}), "shop-a")
        assert result.success
        assert result.data.shop_id == "shop-a"
        assert result.data.store("staging").domain == "staging-shop-a.myshopify.com"
        assert result.data.metadata == {"tags": ["eu"]}

    def test_unknown_keys_survive(self, config_factory):
        result = decode_shop_config(config_factory(customKey={"x": 1}), "shop-a")
        assert result.data.to_json_dict()["customKey"] == {"x": 1}


class TestNamesAndPromos:
    def test_shop_name(self):
        assert validate_shop_name("My Shop").success
        assert validate_shop_name("  ").kind is ErrorKind.REQUIRED
        assert validate_shop_name("x" * 101).kind is ErrorKind.TOO_LONG

    def test_promo_name(self):
        assert validate_promo_name("summer-sale-2025").success
        assert validate_promo_name("").kind is ErrorKind.REQUIRED
        result = validate_promo_name("Summer Sale")
        assert result.kind is ErrorKind.INVALID_FORMAT
        assert result.error == "Use lowercase letters, numbers, and hyphens only"
