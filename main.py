# Standard library imports
import logging
from typing import Any, Mapping, Optional, Union

# Third-party imports
from fastapi import Depends, FastAPI, HTTPException, Request
from starlette.middleware.sessions import SessionMiddleware

# Local imports
from config import Settings, get_settings
from plugin_manager import plugin_manager
from plugins.facebook import FacebookGraphClient, FacebookSettings, fb, setup_fb

logger = logging.getLogger(__name__)

def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

def create_app(
    settings: Optional[Settings] = None,
    facebook_settings: Union[FacebookSettings, Mapping[str, Any], None] = None,
) -> FastAPI:
    """
    Create the application with the Facebook plugin set up.

    Args:
        settings (Optional[Settings]): Application settings, from the environment by default
        facebook_settings: Facebook plugin settings, from the environment by default

    Returns:
        FastAPI: The application
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.APP_TITLE)

    # Initialize plugins first
    if settings.PLUGINS_AUTO_DISCOVER:
        plugin_manager.discover_plugins()

    # The Facebook middleware must be added before SessionMiddleware so that
    # it runs inside it
    if settings.PLUGINS_ENABLED:
        setup_fb(app, facebook_settings)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_EXPIRY_HOURS * 3600,
        same_site=settings.SESSION_SAME_SITE,
        https_only=settings.SESSION_HTTPS_ONLY
    )

    @app.get("/")
    async def root(request: Request):
        """Describe the available plugins and whether the user is connected."""
        accessor = getattr(request.app.state, "facebook", None)
        connected = bool(
            accessor and request.session.get(accessor.settings.session_key)
        )
        return {
            "title": settings.APP_TITLE,
            "plugins": plugin_manager.get_plugin_info(),
            "scopes": plugin_manager.get_all_plugin_scopes(),
            "facebook_connected": connected,
        }

    @app.get("/me")
    def me(graph: FacebookGraphClient = Depends(fb)):
        """Return the Graph API profile of the connected user."""
        if not graph.access_token:
            raise HTTPException(
                status_code=401,
                detail="Not connected to Facebook"
            )
        return graph.get_object("me")

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="debug",
        use_colors=True
    )
