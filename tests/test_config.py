"""Tests for CheckerConfig defaults and environment overrides."""

import dataclasses

import pytest

from json_data_checker.config import CheckerConfig


class TestCheckerConfig:
    def test_defaults(self):
        config = CheckerConfig()
        assert config.default_page_size == 5
        assert config.page_size_choices == (5, 10, 20)
        assert config.discriminator_keys == ("role",)
        assert config.export_file_name == "edited_data.json"

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            CheckerConfig().export_indent = 4

    def test_from_env(self):
        config = CheckerConfig.from_env({
            "JSON_DATA_CHECKER_PAGE_SIZE": "8",
            "JSON_DATA_CHECKER_LOG_LEVEL": "debug",
            "JSON_DATA_CHECKER_EXPORT_NAME": "out.json",
        })
        assert config.default_page_size == 8
        assert config.page_size_choices == (5, 8, 10, 20)
        assert config.log_level == "DEBUG"
        assert config.export_file_name == "out.json"

    def test_from_env_ignores_bad_page_size(self):
        assert CheckerConfig.from_env({"JSON_DATA_CHECKER_PAGE_SIZE": "lots"}).default_page_size == 5
        assert CheckerConfig.from_env({"JSON_DATA_CHECKER_PAGE_SIZE": "0"}).default_page_size == 5

    def test_from_env_empty(self):
        assert CheckerConfig.from_env({}) == CheckerConfig()
