# plugins/facebook/integration.py
"""
Wiring of the Facebook plugin into a FastAPI application.
"""

import logging
from typing import Any, Mapping, Optional, Union

from fastapi import FastAPI

from plugins.facebook.client import FacebookClientAccessor, FacebookSessionMiddleware
from plugins.facebook.config import FacebookSettings, get_facebook_settings
from plugins.facebook.routes import FacebookAuthRoutes

logger = logging.getLogger(__name__)

class FacebookSetupError(RuntimeError):
    """Raised when the plugin settings cannot be used to set up the plugin."""

def load_settings(settings: Union[FacebookSettings, Mapping[str, Any], None] = None) -> FacebookSettings:
    """
    Merge plugin settings with the FACEBOOK_* environment.

    A mapping takes precedence over the environment; None uses the
    environment alone.
    """
    if settings is None:
        return get_facebook_settings()
    if isinstance(settings, FacebookSettings):
        return settings
    return FacebookSettings(**dict(settings))

def validate_settings(settings: FacebookSettings, mount_routes: bool = False) -> None:
    """
    Check that the registration is complete.

    Raises:
        FacebookSetupError: If the registration is declared without app_id or
            secret, or auth routes are requested without a registration
    """
    if settings.registered:
        missing = [
            name for name in ("app_id", "secret")
            if not getattr(settings.application, name)
        ]
        if missing:
            message = f"Facebook application registration is missing: {', '.join(missing)}"
            logger.critical(message)
            raise FacebookSetupError(message)
    elif mount_routes:
        message = "Facebook auth routes require an application registration (app_id and secret)"
        logger.critical(message)
        raise FacebookSetupError(message)

def setup_fb(
    app: FastAPI,
    settings: Union[FacebookSettings, Mapping[str, Any], None] = None,
    auth_path: Optional[str] = None,
) -> FacebookClientAccessor:
    """
    Set up the Facebook plugin on an application.

    Installs the client accessor on app.state, adds the middleware that
    discards stale clients, and mounts the auth routes when an auth path is
    given (argument first, then settings.auth_path).

    Call this before adding SessionMiddleware so that the session is
    available to the plugin's middleware.

    Args:
        app (FastAPI): The application
        settings: Plugin settings, as FacebookSettings or a mapping
        auth_path (Optional[str]): Mount path of the auth routes

    Returns:
        FacebookClientAccessor: The installed accessor

    Raises:
        FacebookSetupError: If the registration is incomplete
    """
    settings = load_settings(settings)
    if auth_path is None:
        auth_path = settings.auth_path

    validate_settings(settings, mount_routes=bool(auth_path))

    accessor = FacebookClientAccessor(settings)
    app.state.facebook = accessor
    app.add_middleware(FacebookSessionMiddleware, accessor=accessor)

    if auth_path:
        routes = FacebookAuthRoutes(auth_path)
        app.include_router(routes.get_router())
        logger.info(
            f"Mounted Facebook auth routes at {routes.authorize_path} and {routes.postback_path}"
        )

    logger.info(f"Facebook plugin set up (registered: {settings.registered})")
    return accessor
