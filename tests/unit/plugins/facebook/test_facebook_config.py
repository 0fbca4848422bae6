"""
Unit tests for the Facebook plugin settings
"""

import pytest

from plugins.facebook.config import FacebookSettings, get_facebook_settings

pytestmark = [pytest.mark.unit, pytest.mark.facebook]


class TestFacebookSettings:
    """Test the FacebookSettings class"""

    def test_defaults(self):
        """Test the settings of an unconfigured plugin"""
        settings = FacebookSettings(_env_file=None)

        assert settings.application is None
        assert settings.registered is False
        assert settings.permission_list == []
        assert settings.landing.success == "/"
        assert settings.landing.failure == "/"
        assert settings.session_key == "auth_token"
        assert settings.verify_state is True

    def test_permissions_from_string(self):
        """Test that permissions may be separated by commas and spaces"""
        settings = FacebookSettings(permissions="email, public_profile user_posts", _env_file=None)

        assert settings.permission_list == ["email", "public_profile", "user_posts"]

    def test_permissions_from_list(self):
        """Test that permissions may be given as a list"""
        settings = FacebookSettings(permissions=["email", "user_photos"], _env_file=None)

        assert settings.permission_list == ["email", "user_photos"]

    def test_client_kwargs_with_registration(self):
        """Test flattening the settings into client constructor arguments"""
        settings = FacebookSettings(
            application={"app_id": "123", "secret": "s3cret"},
            postback="/auth/facebook/postback",
            timeout=5,
            _env_file=None,
        )

        assert settings.client_kwargs() == {
            "app_id": "123",
            "secret": "s3cret",
            "postback": "/auth/facebook/postback",
            "timeout": 5,
        }

    def test_client_kwargs_leave_out_unset_values(self):
        """Test that unset values do not override the client's defaults"""
        settings = FacebookSettings(_env_file=None)

        assert settings.client_kwargs() == {}

    def test_nested_environment_variables(self, monkeypatch):
        """Test reading the registration from FACEBOOK_ environment variables"""
        monkeypatch.setenv("FACEBOOK_APPLICATION__APP_ID", "env-app-id")
        monkeypatch.setenv("FACEBOOK_APPLICATION__SECRET", "env-secret")
        monkeypatch.setenv("FACEBOOK_LANDING__FAILURE", "/failed")
        monkeypatch.setenv("FACEBOOK_PERMISSIONS", "email")

        settings = FacebookSettings(_env_file=None)

        assert settings.registered is True
        assert settings.application.app_id == "env-app-id"
        assert settings.application.secret == "env-secret"
        assert settings.landing.failure == "/failed"
        assert settings.landing.success == "/"
        assert settings.permission_list == ["email"]

    def test_init_values_override_environment(self, monkeypatch):
        """Test that settings passed in take precedence over the environment"""
        monkeypatch.setenv("FACEBOOK_SESSION_KEY", "from_env")

        settings = FacebookSettings(session_key="from_init", _env_file=None)

        assert settings.session_key == "from_init"

    def test_get_facebook_settings_is_cached(self):
        """Test that the settings getter returns the same instance"""
        assert get_facebook_settings() is get_facebook_settings()
