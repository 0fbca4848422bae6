# plugin_manager.py
"""
Plugin Manager
==============

This module provides utilities for discovering, loading, and managing plugins.
It serves as the central coordination point for plugin operations, handling
plugin discovery, instantiation, and access to plugin capabilities.

Usage:
------
The plugin_manager is instantiated as a singleton at the module level and should be
imported and used directly by application code:

    from plugin_manager import plugin_manager

    # Discover available plugins
    plugin_manager.discover_plugins()

    # Get a plugin by name
    graph = plugin_manager.create_resource_plugin("facebook")

    # Get all available scopes from all plugins
    scopes = plugin_manager.get_all_plugin_scopes()
"""

import importlib
import logging
import os
from typing import Dict, Type, Optional, Any

from plugins import (
    ResourcePlugin,
    RoutePlugin,
    get_resource_plugin,
    get_route_plugin,
    get_all_resource_plugins,
    get_all_route_plugins,
)

logger = logging.getLogger(__name__)

class PluginManager:
    """
    Manager for plugins.

    The PluginManager is responsible for:
    - Discovering plugins in the plugins directory
    - Loading plugin modules
    - Creating plugin instances
    - Aggregating plugin-provided scopes

    It acts as a facade over the lower-level plugin registry.
    """

    def __init__(self):
        """
        Initialize the plugin manager.

        Plugins are not loaded during initialization; the discover_plugins
        method must be called to discover and load plugins.
        """
        self._plugin_dir = os.path.join(os.path.dirname(__file__), "plugins")
        self._loaded_plugins = set()

    def discover_plugins(self):
        """
        Discover plugins in the plugins directory.

        This method scans the plugins directory for plugin packages (subdirectories)
        and imports each package. Each successfully imported package is expected
        to register its plugins with the plugin registry.

        Import errors are logged and the remaining plugins are still loaded.
        """
        for item in sorted(os.listdir(self._plugin_dir)):
            if os.path.isdir(os.path.join(self._plugin_dir, item)) and not item.startswith('__'):
                module_name = f"plugins.{item}"
                if module_name not in self._loaded_plugins:
                    try:
                        importlib.import_module(module_name)
                        self._loaded_plugins.add(module_name)
                        logger.info(f"Discovered plugin: {module_name}")
                    except ImportError as e:
                        logger.error(f"Error loading plugin {module_name}: {e}")

    @property
    def loaded_plugins(self):
        return frozenset(self._loaded_plugins)

    def get_resource_plugin(self, service_name: str) -> Optional[Type[ResourcePlugin]]:
        """Get a resource plugin class by service name, or None."""
        return get_resource_plugin(service_name)

    def get_route_plugin(self, service_name: str) -> Optional[Type[RoutePlugin]]:
        """Get a route plugin class by service name, or None."""
        return get_route_plugin(service_name)

    def get_all_resource_plugins(self) -> Dict[str, Type[ResourcePlugin]]:
        return get_all_resource_plugins()

    def get_all_route_plugins(self) -> Dict[str, Type[RoutePlugin]]:
        return get_all_route_plugins()

    def create_resource_plugin(self, service_name: str, **kwargs) -> Optional[ResourcePlugin]:
        """
        Create an instance of a resource plugin.

        Args:
            service_name (str): The unique service name of the plugin to instantiate
            **kwargs: Additional keyword arguments to pass to the plugin constructor

        Returns:
            Optional[ResourcePlugin]: A plugin instance if the plugin was found,
                                     None otherwise

        Example:
            >>> graph = plugin_manager.create_resource_plugin("facebook")
            >>> if graph:
            ...     client = await graph.initialize_client(credentials)
        """
        plugin_class = self.get_resource_plugin(service_name)
        if plugin_class:
            return plugin_class(**kwargs)
        return None

    def create_route_plugin(self, service_name: str, **kwargs) -> Optional[RoutePlugin]:
        """
        Create an instance of a route plugin.

        Returns None if no plugin with the given service name is found.
        """
        plugin_class = self.get_route_plugin(service_name)
        if plugin_class:
            return plugin_class(**kwargs)
        return None

    def get_all_plugin_scopes(self) -> Dict[str, str]:
        """
        Get all scopes from all resource plugins.

        Collects the available scopes from every registered resource plugin,
        along with their descriptions.

        Returns:
            Dict[str, str]: Dictionary mapping scope names to scope descriptions
        """
        scopes = {}
        for plugin_name, plugin_class in self.get_all_resource_plugins().items():
            plugin = plugin_class()
            for scope in plugin.get_available_scopes():
                if hasattr(plugin_class, 'SCOPES') and scope in plugin_class.SCOPES:
                    scopes[scope] = plugin_class.SCOPES[scope]
                else:
                    scopes[scope] = f"Permission for {scope}"
        return scopes

    def get_plugin_info(self) -> Dict[str, Dict[str, Any]]:
        """
        Get information about all available plugins.

        Returns:
            Dict[str, Dict[str, Any]]: Dictionary mapping plugin names to their metadata
        """
        plugin_info = {}

        for service_name, plugin_class in self.get_all_resource_plugins().items():
            plugin_info[service_name] = {
                "name": service_name,
                "description": getattr(plugin_class, "DESCRIPTION", f"Integration with {service_name.title()}"),
                "type": plugin_class.plugin_type.value,
                "scopes": sorted(getattr(plugin_class, "SCOPES", {}).keys()),
            }

        for service_name, plugin_class in self.get_all_route_plugins().items():
            info = plugin_info.setdefault(service_name, {
                "name": service_name,
                "description": getattr(plugin_class, "DESCRIPTION", f"Integration with {service_name.title()}"),
            })
            info["routes"] = True

        return plugin_info

# Create a singleton instance of the plugin manager
plugin_manager = PluginManager()
