# plugins/facebook/routes.py
"""
Facebook OAuth Routes
=====================

This module implements the HTTP routes that let a user authorize the
application on Facebook:

- GET <auth_path>: redirect to the Facebook authorization dialog
- GET <auth_path>/postback: exchange the returned code for an access token

On success the access token is stored in the session, the
fb_access_token_available hook fires with the token, and the browser is sent
to the configured success landing page. Any failure of the exchange sends the
browser to the failure landing page instead.
"""

import logging
import secrets
from typing import Optional

import facebook
import requests
from fastapi import APIRouter, Query, Request
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from plugins import RoutePlugin
from plugins.facebook.client import fb, get_accessor
from plugins.facebook.hooks import ACCESS_TOKEN_AVAILABLE, execute_hooks

logger = logging.getLogger(__name__)

STATE_SESSION_KEY = "fb_oauth_state"

def normalize_auth_path(auth_path: str) -> str:
    """Return auth_path with a leading slash and no trailing slash ("" for the root)."""
    return "/" + auth_path.strip("/") if auth_path.strip("/") else ""

class FacebookAuthRoutes(RoutePlugin):
    """
    Plugin for Facebook OAuth routes.

    The routes read the plugin settings and the Graph API client from the
    accessor installed on the application by setup_fb().

    Class Attributes:
        service_name (str): The unique identifier for this plugin
    """

    service_name = "facebook"
    DESCRIPTION = "Facebook login and Graph API access"

    def __init__(self, auth_path: str = "/auth/facebook"):
        self.auth_path = normalize_auth_path(auth_path)

    @property
    def authorize_path(self) -> str:
        return self.auth_path or "/"

    @property
    def postback_path(self) -> str:
        return f"{self.auth_path}/postback"

    def get_router(self) -> APIRouter:
        """
        Get the router for Facebook OAuth routes.

        Returns:
            APIRouter: FastAPI router with the authorize and postback routes
        """
        router = APIRouter(tags=["facebook", "oauth"])

        @router.get(self.authorize_path, name="facebook_authorize")
        async def facebook_authorize(request: Request):
            """
            Redirect the user to the Facebook authorization dialog.

            The configured permissions are requested and Facebook is told to
            come back to the postback route.
            """
            accessor = get_accessor(request)
            settings = accessor.settings
            client = fb(request)
            postback = accessor.resolve_postback(
                request.base_url, str(request.url_for("facebook_postback"))
            )

            params = {}
            if settings.verify_state:
                state = secrets.token_urlsafe(16)
                request.session[STATE_SESSION_KEY] = state
                params["state"] = state

            redirect_url = client.authorize_url(settings.permission_list, postback, **params)
            logger.info(f"Redirecting to Facebook authorization, permissions: {settings.permission_list}")
            return RedirectResponse(redirect_url)

        @router.get(self.postback_path, name="facebook_postback")
        async def facebook_postback(
            request: Request,
            code: Optional[str] = Query(None),
            state: Optional[str] = Query(None),
            error: Optional[str] = Query(None),
            error_description: Optional[str] = Query(None),
        ):
            """
            Handle the redirect back from Facebook.

            Exchanges the authorization code for an access token and stores
            it in the session.
            """
            accessor = get_accessor(request)
            settings = accessor.settings
            failure = RedirectResponse(settings.landing.failure, status_code=303)

            expected_state = request.session.pop(STATE_SESSION_KEY, None)

            if error:
                logger.warning(f"Facebook authorization refused: {error} ({error_description})")
                return failure

            if not code:
                logger.warning("Facebook postback without authorization code")
                return failure

            if settings.verify_state and not (
                state and expected_state and secrets.compare_digest(state, expected_state)
            ):
                logger.warning("Facebook postback with invalid state")
                return failure

            postback = accessor.resolve_postback(
                request.base_url, str(request.url_for("facebook_postback"))
            )

            try:
                token = await run_in_threadpool(accessor.exchange_code, code, postback)
            except facebook.GraphAPIError as e:
                logger.error(f"Facebook token exchange failed: {e}")
                return failure
            except requests.RequestException as e:
                logger.error(f"Error contacting Facebook for token exchange: {str(e)}")
                return failure

            request.session[settings.session_key] = token
            accessor.check(token)
            await execute_hooks(ACCESS_TOKEN_AVAILABLE, token)

            logger.info("Facebook access token acquired")
            return RedirectResponse(settings.landing.success, status_code=303)

        return router
