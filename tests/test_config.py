"""
Configuration Tests

Config is built from an explicit mapping here, so no test reads
the real process environment or a .env file.
"""

import pytest

from wordmap.config import (
    AppConfig,
    DEFAULT_MODEL_PRIORITY,
    load_config,
    parse_model_priority,
)
from wordmap.contracts.errors import ConfigurationError


class TestModelPriority:

    def test_default_chain(self):
        assert DEFAULT_MODEL_PRIORITY == (
            "gemini-2.0-pro",
            "gemini-2.0-flash",
            "gemini-1.5-pro",
            "gemini-1.5-flash",
        )

    @pytest.mark.parametrize("raw", [None, "", "   ", ",", " , ,"])
    def test_blank_falls_back_to_default(self, raw):
        assert parse_model_priority(raw) == DEFAULT_MODEL_PRIORITY

    def test_override_replaces_in_full(self):
        assert parse_model_priority(" gemini-2.5-pro, ,gemini-2.5-flash ") == (
            "gemini-2.5-pro",
            "gemini-2.5-flash",
        )


class TestLoadConfig:

    def test_defaults(self):
        config = load_config({})

        assert config.gemini_api_key is None
        assert config.model_priority == DEFAULT_MODEL_PRIORITY
        assert config.timeout_seconds == 30.0
        assert config.port == 3001
        assert config.provider == "gemini"
        assert not config.is_development

    def test_environment_values(self):
        config = load_config({
            "GEMINI_API_KEY": "k",
            "GEMINI_MODEL_PRIORITY": "a,b",
            "GEMINI_TIMEOUT_SECONDS": "12.5",
            "WORDMAP_ENV": "Development",
            "WORDMAP_PROVIDER": "mock",
            "PORT": "8080",
            "WORDMAP_CORS_ORIGINS": "https://a.example, https://b.example",
        })

        assert config.gemini_api_key == "k"
        assert config.model_priority == ("a", "b")
        assert config.timeout_seconds == 12.5
        assert config.is_development
        assert config.provider == "mock"
        assert config.port == 8080
        assert config.cors_origins == ("https://a.example", "https://b.example")

    def test_bad_number(self):
        with pytest.raises(ConfigurationError, match="GEMINI_TIMEOUT_SECONDS"):
            load_config({"GEMINI_TIMEOUT_SECONDS": "soon"})

    def test_bad_provider(self):
        with pytest.raises(ConfigurationError):
            load_config({"WORDMAP_PROVIDER": "openai"})

    def test_config_is_frozen(self):
        config = AppConfig()
        with pytest.raises(AttributeError):
            config.model_priority = ("x",)

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigurationError):
            AppConfig(timeout_seconds=0)
