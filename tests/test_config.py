"""Unit tests for Settings."""

import pytest

from config import Settings


class TestSettingsDefaults:
    def test_defaults(self):
        settings = Settings()

        assert settings.home_directory == "/home/user"
        assert settings.generation_max_tokens == 2000
        assert settings.generation_api_key is None
        assert settings.log_level == "INFO"


class TestSettingsFromEnv:
    def test_reads_prefixed_variables(self):
        settings = Settings.from_env(
            {
                "CODESHELL_GENERATION_BASE_URL": "http://localhost:9000",
                "CODESHELL_GENERATION_MAX_TOKENS": "512",
                "CODESHELL_GENERATION_TIMEOUT": "2.5",
                "CODESHELL_HOME_DIRECTORY": "/root",
                "CODESHELL_LOG_LEVEL": "debug",
            }
        )

        assert settings.generation_base_url == "http://localhost:9000"
        assert settings.generation_max_tokens == 512
        assert settings.generation_timeout == 2.5
        assert settings.home_directory == "/root"
        assert settings.log_level == "DEBUG"

    def test_empty_and_unprefixed_values_ignored(self):
        settings = Settings.from_env(
            {"CODESHELL_GENERATION_API_KEY": "", "GENERATION_MODEL": "other"}
        )

        assert settings.generation_api_key is None
        assert settings.generation_model == Settings().generation_model


class TestSettingsValidation:
    @pytest.mark.parametrize("home", ["home/user", "/home/user/"])
    def test_invalid_home_directory(self, home):
        with pytest.raises(ValueError):
            Settings(home_directory=home)

    def test_root_home_directory_allowed(self):
        assert Settings(home_directory="/").home_directory == "/"

    def test_invalid_max_tokens(self):
        with pytest.raises(ValueError):
            Settings.from_env({"CODESHELL_GENERATION_MAX_TOKENS": "0"})
