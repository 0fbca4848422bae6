"""
Shared pytest fixtures and configuration
"""

import os
import sys
from pathlib import Path

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

# Add the project root to Python path to make imports work
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Settings
from plugins.facebook import FacebookGraphClient, FacebookSettings, fb, remove_hooks
from plugins.facebook.config import get_facebook_settings

# Keep the developer's environment out of the settings under test
for _key in list(os.environ):
    if _key.startswith("FACEBOOK_"):
        del os.environ[_key]


@pytest.fixture(autouse=True)
def clean_plugin_state():
    """
    Reset hook callbacks and cached settings around each test.
    """
    get_facebook_settings.cache_clear()
    remove_hooks()
    yield
    remove_hooks()
    get_facebook_settings.cache_clear()


@pytest.fixture
def facebook_settings() -> FacebookSettings:
    """
    Facebook plugin settings with a complete registration and auth routes.
    """
    return FacebookSettings(
        application={"app_id": "test-app-id", "secret": "test-app-secret"},
        permissions="email,public_profile",
        landing={"success": "/welcome", "failure": "/oops"},
        auth_path="/auth/facebook",
        _env_file=None,
    )


@pytest.fixture
def app(facebook_settings) -> FastAPI:
    """
    Create the application with helper routes to inspect and drive the session.
    """
    from main import create_app

    application = create_app(
        Settings(SECRET_KEY="test-secret-key", _env_file=None),
        facebook_settings,
    )

    @application.get("/test/whoami")
    def whoami(graph: FacebookGraphClient = Depends(fb)):
        return {"client_id": id(graph), "access_token": graph.access_token}

    @application.get("/test/login-as/{token}")
    async def login_as(request: Request, token: str):
        request.session[facebook_settings.session_key] = token
        return {"ok": True}

    @application.get("/test/logout")
    async def logout(request: Request):
        request.session.clear()
        return {"ok": True}

    @application.get("/test/session")
    async def session(request: Request):
        return dict(request.session)

    return application


@pytest.fixture
def accessor(app):
    """
    The client accessor installed on the test application.
    """
    return app.state.facebook


@pytest.fixture
def client(app) -> TestClient:
    """
    Test client keeping the session cookie between requests.
    """
    return TestClient(app)


@pytest.fixture
def hook_calls():
    """
    Record calls of the fb_access_token_available hook.
    """
    from plugins.facebook import ACCESS_TOKEN_AVAILABLE, add_hook

    calls = []
    add_hook(ACCESS_TOKEN_AVAILABLE, lambda token: calls.append(token))
    return calls
