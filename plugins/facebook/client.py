# plugins/facebook/client.py
"""
Facebook Graph Client Accessor
==============================

This module gives request handlers a lazily-constructed Graph API client
that follows the access token stored in the user's session.

Components:
----------
- FacebookGraphClient: facebook.GraphAPI extended with the registration values
  needed for the OAuth authorize and token exchange steps
- FacebookClientAccessor: the process-wide cache cell holding the client
- FacebookSessionMiddleware: discards a stale client before each request
- fb: accessor for route handlers, usable as a FastAPI dependency

Usage:
-----
    from fastapi import Depends
    from plugins.facebook import fb

    @app.get("/perl")
    def perl(graph = Depends(fb)):
        return graph.get_object("16665510298")["name"]

The cached client is rebuilt whenever the token embedded in it no longer
matches the token in the session, so a handler never talks to the Graph API
with another user's credentials.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urljoin

import facebook
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from plugins.facebook.config import FacebookSettings

logger = logging.getLogger(__name__)

class FacebookGraphClient(facebook.GraphAPI):
    """
    Graph API client that knows how to run the OAuth code flow.

    Attributes:
        app_id (Optional[str]): Facebook application id
        secret (Optional[str]): Facebook application secret
        postback (Optional[str]): Default redirect URI for authorize and exchange
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        app_id: Optional[str] = None,
        secret: Optional[str] = None,
        postback: Optional[str] = None,
        version: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(access_token=access_token, timeout=timeout, version=version)
        self.app_id = app_id
        self.secret = secret
        self.postback = postback

    def authorize_url(self, permissions: List[str], redirect_uri: Optional[str] = None, **params) -> str:
        """
        Build the URL of the Facebook authorization dialog.

        Args:
            permissions (List[str]): Permission scopes to request
            redirect_uri (Optional[str]): Where Facebook sends the user back to,
                defaults to the client's postback
            **params: Extra query parameters, e.g. state

        Returns:
            str: The authorization dialog URL
        """
        return self.get_auth_url(self.app_id, redirect_uri or self.postback, permissions, **params)

    def request_access_token(self, code: str, redirect_uri: Optional[str] = None) -> str:
        """
        Exchange an authorization code for an access token.

        The client itself is left unchanged; callers build a client carrying
        the returned token to act on behalf of the user.

        Args:
            code (str): The code Facebook passed to the postback URL
            redirect_uri (Optional[str]): Must match the one used for the
                authorization dialog, defaults to the client's postback

        Returns:
            str: The access token

        Raises:
            facebook.GraphAPIError: If Facebook rejects the code
        """
        result = self.get_access_token_from_code(
            code, redirect_uri or self.postback, self.app_id, self.secret
        )
        return result["access_token"]

class FacebookClientAccessor:
    """
    Cache cell for the Graph API client.

    The accessor owns the plugin settings and at most one client. The client
    is valid as long as its embedded access token equals the session token;
    check() drops it otherwise and get_client() lazily builds a new one.

    Attributes:
        settings (FacebookSettings): The plugin settings
    """

    def __init__(
        self,
        settings: FacebookSettings,
        client_factory: Callable[..., FacebookGraphClient] = FacebookGraphClient,
    ):
        self.settings = settings
        self._client_factory = client_factory
        self._client: Optional[FacebookGraphClient] = None
        self._postback: Optional[str] = settings.postback
        self._postback_resolved = False
        self._lock = threading.RLock()

    @property
    def client(self) -> Optional[FacebookGraphClient]:
        """The cached client, without building one."""
        return self._client

    def client_kwargs(self, session_token: Optional[str] = None) -> Dict[str, Any]:
        kwargs = self.settings.client_kwargs()
        if self._postback is not None:
            kwargs["postback"] = self._postback
        if session_token:
            kwargs["access_token"] = session_token
        return kwargs

    def is_stale(self, session_token: Optional[str]) -> bool:
        client = self._client
        if client is None:
            return False
        return (client.access_token or None) != (session_token or None)

    def check(self, session_token: Optional[str]) -> bool:
        """
        Discard the cached client if it does not carry the session token.

        Returns:
            bool: True if a cached client was discarded
        """
        with self._lock:
            if self.is_stale(session_token):
                logger.debug("Session token changed, discarding cached Graph API client")
                self._client = None
                return True
            return False

    def invalidate(self) -> None:
        with self._lock:
            self._client = None

    def get_client(self, session_token: Optional[str] = None) -> FacebookGraphClient:
        """
        Return the cached client, building it first if needed.

        Errors raised by the client constructor propagate unchanged.

        Args:
            session_token (Optional[str]): Access token stored in the session

        Returns:
            FacebookGraphClient: The client carrying the session token
        """
        with self._lock:
            if self._client is None or self.is_stale(session_token):
                self._client = self._client_factory(**self.client_kwargs(session_token))
                logger.debug(
                    f"Created Graph API client (user token: {'yes' if session_token else 'no'})"
                )
            return self._client

    def exchange_code(self, code: str, redirect_uri: Optional[str] = None) -> str:
        """
        Exchange an authorization code for an access token.

        The exchange runs on a client of its own that is never cached, so
        clients already handed out to other requests keep their tokens. The
        cached client is picked up again by check() once the session holds
        the new token.

        Raises:
            facebook.GraphAPIError: If Facebook rejects the code
        """
        exchanger = self._client_factory(**self.client_kwargs())
        return exchanger.request_access_token(code, redirect_uri)

    def resolve_postback(self, base_url: str, default_path: str) -> str:
        """
        Turn the configured postback into an absolute URL.

        The first call rewrites a relative postback (or default_path when none
        is configured) against base_url; the result is kept for later calls and
        handed to clients built afterwards.

        Args:
            base_url (str): Base URL of the application, e.g. request.base_url
            default_path (str): Postback path used when none is configured

        Returns:
            str: The absolute postback URL
        """
        with self._lock:
            if not self._postback_resolved:
                raw = urljoin(str(base_url), (self._postback or default_path).lstrip("/"))
                self._postback = raw
                self._postback_resolved = True
                if self._client is not None:
                    self._client.postback = raw
                logger.info(f"Facebook postback URL resolved to {raw}")
            return self._postback

def get_accessor(request: Request) -> FacebookClientAccessor:
    """
    Get the accessor installed by setup_fb().

    Raises:
        RuntimeError: If setup_fb() was not called for this application
    """
    accessor = getattr(request.app.state, "facebook", None)
    if accessor is None:
        raise RuntimeError("Facebook plugin is not set up, call setup_fb(app) first")
    return accessor

def session_token(request: Request, accessor: FacebookClientAccessor) -> Optional[str]:
    if "session" not in request.scope:
        return None
    return request.session.get(accessor.settings.session_key)

def fb(request: Request) -> FacebookGraphClient:
    """
    Get the Graph API client for the current request.

    Can be called from a handler or used as a dependency:

        def handler(graph: FacebookGraphClient = Depends(fb)): ...
    """
    accessor = get_accessor(request)
    return accessor.get_client(session_token(request, accessor))

class FacebookSessionMiddleware(BaseHTTPMiddleware):
    """
    Middleware discarding a stale Graph API client before each request.

    Must run inside Starlette's SessionMiddleware, i.e. be added to the
    application before it.
    """

    def __init__(self, app: ASGIApp, accessor: FacebookClientAccessor):
        super().__init__(app)
        self.accessor = accessor
        self._warned = False

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        if "session" not in request.scope and not self._warned:
            logger.warning("No session available, add SessionMiddleware after setup_fb()")
            self._warned = True
        self.accessor.check(session_token(request, self.accessor))
        return await call_next(request)
