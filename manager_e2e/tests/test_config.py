"""Tests for configuration loading."""

from pathlib import Path

import pytest

from manager_e2e.core.config import DEFAULT_BASE_URL, Config, LoginOptions
from manager_e2e.models.users import Credentials


class TestConfigDefaults:
    """Tests for default values."""

    def test_defaults(self, clean_env):
        config = Config.from_env()

        assert config.base_url == DEFAULT_BASE_URL
        assert config.storage_state == Path("storage/auth.json")
        assert config.users_file == Path("data/users.json")
        assert config.media_dir == Path("data/media")
        assert config.navigation_timeout_ms == 30000
        assert config.wizard_timeout_ms == 30000
        assert config.allow_sso is False
        assert config.prefer_sso is False
        assert config.log_level == "INFO"

    def test_primary_variable_wins_over_alias(self, clean_env):
        clean_env.setenv("MANAGER_E2E_BASE_URL", "https://primary.example.com")
        clean_env.setenv("PLAYWRIGHT_BASE_URL", "https://alias.example.com")

        assert Config.from_env().base_url == "https://primary.example.com"

    def test_alias_variables(self, clean_env):
        clean_env.setenv("PLAYWRIGHT_BASE_URL", "https://alias.example.com")
        clean_env.setenv("PLAYWRIGHT_STORAGE_STATE", "/tmp/state.json")

        config = Config.from_env()

        assert config.base_url == "https://alias.example.com"
        assert config.storage_state == Path("/tmp/state.json")

    def test_timeouts_from_env(self, clean_env):
        clean_env.setenv("MANAGER_E2E_WIZARD_TIMEOUT_MS", "45000")
        assert Config.from_env().wizard_timeout_ms == 45000


class TestConfigValidate:
    """Tests for Config.validate."""

    def test_valid(self, clean_env):
        Config.from_env().validate()

    def test_bad_base_url(self, clean_env):
        clean_env.setenv("MANAGER_E2E_BASE_URL", "qa.example.com")
        with pytest.raises(ValueError, match="http"):
            Config.from_env().validate()

    def test_non_positive_timeout(self, clean_env):
        config = Config.from_env()
        config.navigation_timeout_ms = 0
        with pytest.raises(ValueError, match="Timeouts"):
            config.validate()

    def test_sso_email_without_password(self, clean_env):
        clean_env.setenv("MICROSOFT_EMAIL", "sso@example.com")
        Config.from_env().validate()


class TestLoginOptions:
    """Tests for Config.login_options."""

    def test_defaults_are_password_only(self, clean_env):
        assert Config.from_env().login_options() == LoginOptions()

    @pytest.mark.parametrize("value", ["1", "true", "YES"])
    def test_allow_sso(self, clean_env, value):
        clean_env.setenv("ALLOW_MICROSOFT_SSO", value)
        assert Config.from_env().login_options().allow_interactive_mfa is True

    def test_auth_strategy_microsoft(self, clean_env):
        clean_env.setenv("AUTH_STRATEGY", "Microsoft")
        assert Config.from_env().login_options().prefer_sso_strategy is True

    def test_use_microsoft_sso(self, clean_env):
        clean_env.setenv("USE_MICROSOFT_SSO", "1")
        assert Config.from_env().login_options().prefer_sso_strategy is True

    def test_override_credentials(self, clean_env):
        clean_env.setenv("MICROSOFT_EMAIL", "sso@example.com")
        clean_env.setenv("MICROSOFT_PASSWORD", "pw")

        override = Config.from_env().login_options().override_credentials

        assert override.email == "sso@example.com"
        assert override.password == "pw"


class TestConfigUrl:
    """Tests for Config.url."""

    def test_joins_path(self, clean_env):
        config = Config(base_url="https://qa.example.com/")
        assert config.url("/manager/login") == "https://qa.example.com/manager/login"
        assert config.url("manager") == "https://qa.example.com/manager"

    def test_absolute_url_unchanged(self, clean_env):
        config = Config(base_url="https://qa.example.com")
        assert config.url("https://other.example.com/x") == "https://other.example.com/x"


class TestSsoCredentials:
    """Tests for LoginOptions.sso_credentials."""

    FILE_USER = Credentials(email="qa.user@example.com", password="s3cret")

    def test_no_override_uses_users_file(self, clean_env):
        assert Config.from_env().login_options().sso_credentials(self.FILE_USER) == self.FILE_USER

    def test_email_only(self, clean_env):
        clean_env.setenv("MICROSOFT_EMAIL", "sso@example.com")

        creds = Config.from_env().login_options().sso_credentials(self.FILE_USER)

        assert creds == Credentials(email="sso@example.com", password="s3cret")

    def test_password_only(self, clean_env):
        clean_env.setenv("MICROSOFT_PASSWORD", "pw")

        creds = Config.from_env().login_options().sso_credentials(self.FILE_USER)

        assert creds == Credentials(email="qa.user@example.com", password="pw")
