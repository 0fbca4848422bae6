# plugins/facebook/__init__.py
"""
Facebook Plugin Package
=======================

This package links a FastAPI application with the Facebook Graph API through
the facebook-sdk client library. It takes the repetitive glue out of using the
Graph API from request handlers:

Client Accessor:
--------------
- fb: returns a lazily-built FacebookGraphClient for the current request,
  carrying the access token stored in the session
- FacebookSessionMiddleware: discards the cached client when the session token
  no longer matches the one embedded in it

Routes:
------
- FacebookAuthRoutes: optional redirect-to-authorize and postback routes

Resource Servers:
---------------
- FacebookGraphResourcePlugin: builds clients from stored credentials

Hooks:
-----
- fb_access_token_available: fired with the token after a successful postback

Usage:
-----
    from fastapi import Depends, FastAPI
    from starlette.middleware.sessions import SessionMiddleware
    from plugins.facebook import fb, setup_fb

    app = FastAPI()
    setup_fb(app, {"application": {"app_id": "...", "secret": "..."}}, auth_path="/auth/facebook")
    app.add_middleware(SessionMiddleware, secret_key="...")

    @app.get("/")
    def index(graph = Depends(fb)):
        return graph.get_object("16665510298")["name"]

All plugins are automatically registered with the plugin system when this
package is imported.
"""

from .client import FacebookClientAccessor, FacebookGraphClient, FacebookSessionMiddleware, fb, get_accessor
from .config import FacebookSettings, get_facebook_settings
from .hooks import ACCESS_TOKEN_AVAILABLE, add_hook, execute_hooks, hook, remove_hooks
from .integration import FacebookSetupError, setup_fb
from .resource import FacebookGraphResourcePlugin
from .routes import FacebookAuthRoutes

# Register plugins
from plugins import register_resource_plugin, register_route_plugin

# Automatically register the plugins when this package is imported
register_resource_plugin(FacebookGraphResourcePlugin)
register_route_plugin(FacebookAuthRoutes)

__all__ = [
    'fb', 'setup_fb', 'get_accessor',
    'FacebookGraphClient', 'FacebookClientAccessor', 'FacebookSessionMiddleware',
    'FacebookSettings', 'get_facebook_settings', 'FacebookSetupError',
    'FacebookAuthRoutes', 'FacebookGraphResourcePlugin',
    'ACCESS_TOKEN_AVAILABLE', 'add_hook', 'hook', 'execute_hooks', 'remove_hooks',
]
