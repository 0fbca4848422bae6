# plugins/facebook/resource.py
"""
Facebook Graph Resource Plugin
==============================

This module implements the Graph API resource plugin. It builds Graph API
clients from stored credentials, for code running outside a request (e.g. a
job using a token persisted from the fb_access_token_available hook), and
describes the permissions the application can request.

Supported Scopes:
---------------
- public_profile: Read the user's public profile
- email: Read the user's primary email address
- user_friends: Read the list of friends also using the application
- user_posts: Read the posts on the user's timeline
- user_photos: Read the user's photos
- pages_show_list: List the Pages the user manages
"""

import logging
from typing import Any, Dict, List, Optional

import facebook
import requests
from starlette.concurrency import run_in_threadpool

from plugins import ResourcePlugin
from plugins.facebook.client import FacebookGraphClient
from plugins.facebook.config import FacebookSettings, get_facebook_settings

logger = logging.getLogger(__name__)

class FacebookGraphResourcePlugin(ResourcePlugin):
    """
    Resource plugin for the Facebook Graph API.

    Class Attributes:
        service_name (str): The unique identifier for this plugin
        SCOPES (Dict[str, str]): Permissions the plugin knows about
    """

    service_name = "facebook"
    DESCRIPTION = "Facebook Graph API"

    SCOPES = {
        "public_profile": "Read the user's public profile",
        "email": "Read the user's primary email address",
        "user_friends": "Read the list of friends also using the application",
        "user_posts": "Read the posts on the user's timeline",
        "user_photos": "Read the user's photos",
        "pages_show_list": "List the Pages the user manages",
    }

    def __init__(self, settings: Optional[FacebookSettings] = None):
        self.settings = settings or get_facebook_settings()

    async def initialize_client(self, credentials: Dict[str, Any]) -> FacebookGraphClient:
        """
        Build a Graph API client for stored credentials.

        Args:
            credentials (Dict[str, Any]): Must contain "access_token"

        Returns:
            FacebookGraphClient: The client

        Raises:
            ValueError: If no access token is present
        """
        access_token = credentials.get("access_token")
        if not access_token:
            raise ValueError("Facebook credentials must contain an access_token")
        return FacebookGraphClient(access_token=access_token, **self.settings.client_kwargs())

    async def validate_client(self, client: FacebookGraphClient) -> bool:
        """
        Check that the client's token is still accepted by fetching "me".
        """
        try:
            await run_in_threadpool(client.get_object, "me")
            return True
        except facebook.GraphAPIError as e:
            logger.warning(f"Facebook access token rejected: {e}")
            return False
        except requests.RequestException as e:
            logger.error(f"Error validating Facebook client: {str(e)}")
            return False

    def get_available_scopes(self) -> List[str]:
        """
        Permissions this plugin can request: the known scopes followed by any
        extra permissions configured for the application.
        """
        scopes = list(self.SCOPES)
        for scope in self.settings.permission_list:
            if scope not in scopes:
                scopes.append(scope)
        return scopes
