"""
Configuration for Facebook plugin
"""

import re
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings


class FacebookApplication(BaseModel):
    """Registration of the application with Facebook."""
    app_id: Optional[str] = None
    secret: Optional[str] = None


class FacebookLanding(BaseModel):
    """Where the postback handler sends the browser once it is done."""
    success: str = "/"
    failure: str = "/"


class FacebookSettings(BaseSettings):
    """
    Facebook plugin settings

    These settings can be passed to setup_fb() as a mapping, or configured via
    environment variables prefixed with FACEBOOK_. Nested values use a double
    underscore, e.g. FACEBOOK_APPLICATION__APP_ID or FACEBOOK_LANDING__FAILURE.
    """
    # Registration; required when auth routes are mounted
    application: Optional[FacebookApplication] = None

    # Permissions requested during authorization, comma or space separated
    permissions: str = ""

    # Postback URL, absolute or relative to the application base URL
    postback: Optional[str] = None

    landing: FacebookLanding = FacebookLanding()

    # Mount path of the auth routes; routes are not mounted when unset
    auth_path: Optional[str] = None

    # Forwarded to the Graph API client
    api_version: Optional[str] = None
    timeout: Optional[float] = None

    # Session key holding the user's access token
    session_key: str = "auth_token"

    # Issue and check the OAuth state parameter
    verify_state: bool = True

    class Config:
        env_prefix = "FACEBOOK_"
        env_file = ".env"
        env_nested_delimiter = "__"
        extra = "ignore"

    @field_validator("permissions", mode="before")
    @classmethod
    def _join_permissions(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set)):
            return " ".join(str(item) for item in value)
        return value

    @property
    def permission_list(self) -> List[str]:
        """Requested permissions as a list, in configured order."""
        return [scope for scope in re.split(r"[\s,]+", self.permissions) if scope]

    @property
    def registered(self) -> bool:
        """Whether the application registration has been declared."""
        return self.application is not None

    def client_kwargs(self) -> Dict[str, Any]:
        """
        Flatten the settings into FacebookGraphClient constructor arguments.

        Unset values are left out so the client's own defaults apply.
        """
        kwargs = {
            "version": self.api_version,
            "timeout": self.timeout,
            "postback": self.postback,
        }
        if self.application is not None:
            kwargs["app_id"] = self.application.app_id
            kwargs["secret"] = self.application.secret
        return {key: value for key, value in kwargs.items() if value is not None}


@lru_cache()
def get_facebook_settings():
    """
    Get the Facebook settings, cached to avoid reloading
    """
    return FacebookSettings()
