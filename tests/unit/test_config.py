"""Unit tests for ClientConfig."""

import logging

import pytest
from pydantic import ValidationError

from apiwrap import ClientConfig, ConfigurationError, CursorPager, DefaultPager
from apiwrap.config import DEFAULT_FORMAT, DEFAULT_TOKEN_TYPE, DEFAULT_USER_AGENT
from apiwrap.pagination import DEFAULT_PAGE_SIZE


class TestClientConfigDefaults:
    """Tests for default option values."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.endpoint is None
        assert config.format == DEFAULT_FORMAT == "json"
        assert config.user_agent == DEFAULT_USER_AGENT
        assert config.connection_options == {}
        assert config.logger is None
        assert config.page_size == DEFAULT_PAGE_SIZE == 500
        assert config.pagination_class is DefaultPager
        assert config.token_type == DEFAULT_TOKEN_TYPE == "Bearer"
        assert config.rate_limit is None
        assert config.rate_period is None

    def test_user_agent_mentions_version(self):
        from apiwrap import __version__

        assert __version__ in DEFAULT_USER_AGENT

    def test_is_json(self):
        assert ClientConfig().is_json
        assert ClientConfig(format="JSON").is_json
        assert not ClientConfig(format="xml").is_json

    def test_is_throttled(self):
        assert not ClientConfig().is_throttled
        assert ClientConfig(rate_limit=10, rate_period=1).is_throttled


class TestClientConfigValidation:
    """Invalid options raise ConfigurationError before any I/O."""

    def test_rate_limit_without_period(self):
        with pytest.raises(ConfigurationError, match="configured together"):
            ClientConfig(rate_limit=10)

    def test_rate_period_without_limit(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(rate_period=1.0)

    @pytest.mark.parametrize(
        "options",
        [
            {"rate_limit": 0, "rate_period": 1},
            {"rate_limit": 5, "rate_period": 0},
            {"rate_limit": 5, "rate_period": -1},
            {"page_size": 0},
        ],
    )
    def test_non_positive_values_rejected(self, options):
        with pytest.raises(ConfigurationError):
            ClientConfig(**options)

    def test_unknown_option_rejected(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(endpont="https://typo.example.com/")

    def test_frozen(self):
        config = ClientConfig()
        with pytest.raises(ValidationError):
            config.endpoint = "https://api.example.com/"


class TestClientConfigOptions:
    """Tests for options() and with_options()."""

    def test_with_options_returns_new_value(self):
        base = ClientConfig(endpoint="https://api.example.com/")
        changed = base.with_options(access_token="abc", page_size=50)

        assert changed is not base
        assert changed.access_token == "abc"
        assert changed.page_size == 50
        assert changed.endpoint == "https://api.example.com/"
        assert base.access_token is None
        assert base.page_size == DEFAULT_PAGE_SIZE

    def test_with_options_validates(self):
        with pytest.raises(ConfigurationError):
            ClientConfig().with_options(rate_limit=5)

    def test_options_lists_every_field(self):
        options = ClientConfig(client_id="cid").options()
        assert options["client_id"] == "cid"
        assert set(options) == set(ClientConfig.model_fields)

    def test_accepts_logger_and_pager_class(self):
        log = logging.getLogger("apiwrap.tests.config")
        config = ClientConfig(logger=log, pagination_class=CursorPager)
        assert config.logger is log
        assert config.pagination_class is CursorPager

    def test_repr_hides_secrets(self):
        config = ClientConfig(
            access_token="tok-123",
            refresh_token="ref-456",
            client_secret="shh-789",
            password="pw-000",
        )
        text = repr(config)
        for secret in ("tok-123", "ref-456", "shh-789", "pw-000"):
            assert secret not in text
