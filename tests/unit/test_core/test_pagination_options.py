"""Unit tests for pagination option resolution."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from model_pagination.core.pagination.operators import Op
from model_pagination.core.pagination.options import (
    PageRequest,
    PaginationConfig,
    module_defaults,
    resolve_options,
)
from model_pagination.core.settings import PaginationSettings


class TestResolveOptions:
    """Tests for the layer merge."""

    def test_earlier_layer_wins(self):
        """Call-time beats configure-time beats module defaults."""
        call = {"page_size": 5}
        configured = {"page_size": 20, "page_index": 3}
        module = {"page_size": 1, "page_index": 0, "where": None}

        assert resolve_options(call, configured, module) == {
            "page_size": 5,
            "page_index": 3,
            "where": None,
        }

    def test_explicit_none_overrides(self):
        """A key set to None still takes precedence over lower layers."""
        assert resolve_options({"where": None}, {"where": {"a": 1}}) == {"where": None}

    def test_layers_are_not_modified(self):
        """The result is a new dict."""
        configured = {"page_size": 20}

        resolved = resolve_options({"page_size": 5}, configured)
        resolved["page_size"] = 99

        assert configured == {"page_size": 20}


class TestPaginationConfig:
    """Tests for configure-time options."""

    def test_module_defaults(self, pagination_settings):
        """With no options the documented defaults apply."""
        config = PaginationConfig.from_options({}, pagination_settings)

        assert config.method_name == "paginate"
        assert config.primary_key_field == "id"
        assert config.one_base_index is False
        assert config.page_size == 1
        assert config.where is None
        assert config.order == ()
        assert config.attributes is None
        assert config.include is None
        assert config.default_page_index == 0

    def test_settings_supply_module_layer(self):
        """PaginationSettings values become the lowest layer."""
        settings = PaginationSettings(page_size=25, one_base_index=True, primary_key_field="uuid")

        config = PaginationConfig.from_options({}, settings)

        assert module_defaults(settings)["page_size"] == 25
        assert config.page_size == 25
        assert config.primary_key_field == "uuid"
        assert config.default_page_index == 1

    def test_options_override_settings(self, pagination_settings):
        """Configure-time options beat settings."""
        config = PaginationConfig.from_options(
            {"page_size": 10, "order": [("name", "asc")], "where": {"a": {Op.gt: 1}}},
            pagination_settings,
        )

        assert config.page_size == 10
        assert config.order == (("name", "asc"),)
        assert config.where == {"a": {Op.gt: 1}}

    def test_unknown_option_rejected(self, pagination_settings):
        """Misspelled options fail loudly."""
        with pytest.raises(ValidationError):
            PaginationConfig.from_options({"pagesize": 10}, pagination_settings)

    def test_page_size_must_be_positive(self, pagination_settings):
        """page_size=0 is not a valid default."""
        with pytest.raises(ValidationError):
            PaginationConfig.from_options({"page_size": 0}, pagination_settings)

    @pytest.mark.parametrize("name", ["", "list pages", "_private", "model", "config", "fetch_page"])
    def test_method_name_validation(self, pagination_settings, name):
        """method_name must be a public identifier not used by the wrapper."""
        with pytest.raises(ValidationError):
            PaginationConfig.from_options({"method_name": name}, pagination_settings)

    def test_config_is_frozen(self, pagination_settings):
        """Defaults cannot change after configuration."""
        config = PaginationConfig.from_options({}, pagination_settings)

        with pytest.raises(ValidationError):
            config.page_size = 50  # type: ignore[misc]

    def test_none_order_means_empty(self, pagination_settings):
        """order=None is treated as no ordering."""
        config = PaginationConfig.from_options({"order": None}, pagination_settings)

        assert config.order == ()


class TestPageRequest:
    """Tests for call-time options."""

    def test_defaults_from_config(self, pagination_settings):
        """Without call options the configured defaults apply."""
        config = PaginationConfig.from_options(
            {"page_size": 10, "one_base_index": True, "include": ["posts"]},
            pagination_settings,
        )

        request = PageRequest.resolve(config, {})

        assert request.page_size == 10
        assert request.page_index == 1
        assert request.primary_desc is False
        assert request.include == ["posts"]
        assert request.pass_through == {}

    def test_call_options_override(self, pagination_settings):
        """Call options beat configured defaults."""
        config = PaginationConfig.from_options({"page_size": 10}, pagination_settings)

        request = PageRequest.resolve(config, {"page_size": 3, "page_index": 4, "primary_desc": True})

        assert request.page_size == 3
        assert request.page_index == 4
        assert request.primary_desc is True

    def test_pass_through_excludes_offset_and_limit(self, pagination_settings):
        """Unknown options are kept, offset/limit are dropped."""
        config = PaginationConfig.from_options({}, pagination_settings)

        request = PageRequest.resolve(
            config,
            {"distinct": True, "transaction": "tx", "offset": 7, "limit": 8},
        )

        assert request.pass_through == {"distinct": True, "transaction": "tx"}

    def test_page_size_must_be_positive(self, pagination_settings):
        """A call-time page_size of 0 is rejected."""
        config = PaginationConfig.from_options({}, pagination_settings)

        with pytest.raises(ValidationError):
            PageRequest.resolve(config, {"page_size": 0})
