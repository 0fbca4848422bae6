# plugins/__init__.py
"""
Plugin System for the Facebook Graph Plugin
===========================================

This module provides the foundation for the plugin architecture used to link
a FastAPI application with the Facebook Graph API. It defines the base
interfaces that all plugins must implement and provides functionality for
plugin registration and lookup.

The plugin system supports two types of plugins:
1. Resource Plugins: Build and validate Graph API clients
2. Route Plugins: Provide HTTP endpoints (e.g. the OAuth redirect and postback)

Plugin Lifecycle:
---------------
1. Plugin classes are defined in separate modules
2. Plugins are registered with the registry using the registration functions
3. The application discovers and loads plugins at startup
4. Plugin instances are created when needed for specific operations
5. The application uses plugins through their defined interfaces

Adding a New Plugin:
------------------
To add support for a new service:
1. Create a new directory under 'plugins/'
2. Implement a ResourcePlugin for API clients
3. Implement a RoutePlugin if the service needs HTTP endpoints
4. Register the plugins in the __init__.py of your plugin package
"""

from typing import Dict, List, Type, Optional, Any
import logging
from enum import Enum

logger = logging.getLogger(__name__)

class PluginType(str, Enum):
    """
    Enum defining the types of plugins supported by the system.

    Types:
        RESOURCE: Plugins that build clients for a resource server API
        ROUTE: Plugins that provide HTTP endpoints
    """
    RESOURCE = "resource"
    ROUTE = "route"

class PluginBase:
    """
    Base class for all plugins.

    Class Attributes:
        plugin_type (PluginType): The type of plugin (RESOURCE or ROUTE)
        service_name (str): Unique identifier for the service this plugin supports
                           (e.g., "facebook")
    """

    plugin_type: PluginType
    service_name: str

    @classmethod
    def get_metadata(cls) -> Dict[str, Any]:
        """
        Return metadata about the plugin for discovery and introspection.

        Returns:
            Dict[str, Any]: Dictionary containing plugin metadata including:
                - plugin_type: The type of plugin
                - service_name: The service this plugin supports
                - class_name: The name of the plugin class
        """
        return {
            "plugin_type": cls.plugin_type,
            "service_name": cls.service_name,
            "class_name": cls.__name__
        }

class ResourcePlugin(PluginBase):
    """
    Base class for resource plugins that interact with resource server APIs.

    Resource plugins are responsible for:
    - Initializing API clients with credentials
    - Validating that a client can still talk to the API
    - Defining the permission scopes that can be requested

    Class Attributes:
        plugin_type (PluginType): Set to RESOURCE for all resource plugins
    """

    plugin_type = PluginType.RESOURCE

    async def initialize_client(self, credentials: Dict[str, Any]) -> Any:
        """
        Initialize an API client for the resource server using the provided credentials.

        Args:
            credentials (Dict[str, Any]): The credentials to use for initialization

        Returns:
            Any: An initialized client object that can be used for API calls

        Raises:
            NotImplementedError: If the subclass doesn't implement this method
        """
        raise NotImplementedError("Subclasses must implement initialize_client")

    async def validate_client(self, client: Any) -> bool:
        """
        Validate if the client is still valid and can be used for API calls.

        Args:
            client (Any): The client to validate

        Returns:
            bool: True if the client is valid, False otherwise

        Raises:
            NotImplementedError: If the subclass doesn't implement this method
        """
        raise NotImplementedError("Subclasses must implement validate_client")

    def get_available_scopes(self) -> List[str]:
        """
        Get the list of scopes (permissions) supported by this resource plugin.

        Returns:
            List[str]: List of scope strings (e.g., ["email", "public_profile"])

        Raises:
            NotImplementedError: If the subclass doesn't implement this method
        """
        raise NotImplementedError("Subclasses must implement get_available_scopes")

class RoutePlugin(PluginBase):
    """
    Base class for plugins that provide their own routes.

    Route plugins create a FastAPI APIRouter holding their service-specific
    endpoints. The application decides where the router is mounted.

    Class Attributes:
        plugin_type (PluginType): Set to ROUTE for all route plugins
    """

    plugin_type = PluginType.ROUTE

    def get_router(self):
        """
        Get the router for this plugin's routes.

        Returns:
            fastapi.APIRouter: The router with all plugin-specific routes

        Raises:
            NotImplementedError: If the subclass doesn't implement this method
        """
        raise NotImplementedError("Subclasses must implement get_router")

# Plugin registry
_resource_plugins: Dict[str, Type[ResourcePlugin]] = {}
_route_plugins: Dict[str, Type[RoutePlugin]] = {}

def register_resource_plugin(plugin_class: Type[ResourcePlugin]) -> None:
    """
    Register a resource plugin with the system.

    Each plugin is registered under its service_name, which must be unique
    across all resource plugins.

    Args:
        plugin_class (Type[ResourcePlugin]): The resource plugin class to register

    Example:
        >>> class MyResourcePlugin(ResourcePlugin):
        ...     service_name = "my_service"
        >>> register_resource_plugin(MyResourcePlugin)
    """
    _resource_plugins[plugin_class.service_name] = plugin_class
    logger.info(f"Registered resource plugin: {plugin_class.service_name}")

def register_route_plugin(plugin_class: Type[RoutePlugin]) -> None:
    """
    Register a route plugin with the system.

    Args:
        plugin_class (Type[RoutePlugin]): The route plugin class to register
    """
    _route_plugins[plugin_class.service_name] = plugin_class
    logger.info(f"Registered route plugin: {plugin_class.service_name}")

def get_resource_plugin(service_name: str) -> Optional[Type[ResourcePlugin]]:
    """
    Get a resource plugin class by its service name.

    Returns None if no plugin with the given service name is found.
    """
    return _resource_plugins.get(service_name)

def get_route_plugin(service_name: str) -> Optional[Type[RoutePlugin]]:
    """
    Get a route plugin class by its service name.

    Returns None if no plugin with the given service name is found.
    """
    return _route_plugins.get(service_name)

def get_all_resource_plugins() -> Dict[str, Type[ResourcePlugin]]:
    """
    Get all registered resource plugins.

    The dictionary is a copy of the internal registry, so modifying it will
    not affect the registry.
    """
    return _resource_plugins.copy()

def get_all_route_plugins() -> Dict[str, Type[RoutePlugin]]:
    """
    Get all registered route plugins.

    The dictionary is a copy of the internal registry, so modifying it will
    not affect the registry.
    """
    return _route_plugins.copy()
