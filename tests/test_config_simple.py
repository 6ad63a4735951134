"""Simplified test for configuration reading."""

import os
from unittest.mock import patch

from prompt_layout.configs.config import AppConfig, get_app_config


class TestConfigSimple:
    """Test basic configuration functionality."""

    def test_config_works(self):
        """Environment variables override nested settings."""

        env_vars = {
            "PROMPT_LAYOUT_RENDER__MAX_TOKENS": "100",
            "PROMPT_LAYOUT_MODERATION__MODERATE": "input",
            "PROMPT_LAYOUT_LOGGING__JSON_OUTPUT": "false",
        }

        with patch.dict(os.environ, env_vars, clear=False):
            config = AppConfig()

            assert config.render.max_tokens == 100
            assert config.moderation.moderate == "input"
            assert config.logging.json_output is False

    def test_init_args_take_priority(self):
        with patch.dict(os.environ, {"PROMPT_LAYOUT_RENDER__MAX_TOKENS": "100"}):
            config = AppConfig(render={"max_tokens": 7})
        assert config.render.max_tokens == 7

    def test_get_app_config_is_not_a_singleton(self):
        """Each call re-reads configuration."""
        config1 = get_app_config()
        config2 = get_app_config()

        assert config1 is not config2
        assert isinstance(config1, AppConfig)
        assert config1.tokenizer.encoding == "cl100k_base"
        assert {c.category for c in config1.moderation.categories} == {
            "Hate",
            "SelfHarm",
            "Sexual",
            "Violence",
        }
