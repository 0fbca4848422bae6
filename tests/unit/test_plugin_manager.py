"""
Unit tests for the plugin manager
"""

import pytest

from plugin_manager import PluginManager
from plugins import PluginType, get_all_resource_plugins, get_all_route_plugins

pytestmark = [pytest.mark.unit]


@pytest.fixture
def manager():
    manager = PluginManager()
    manager.discover_plugins()
    return manager


class TestPluginManager:
    """Test the PluginManager class"""

    def test_discover_plugins(self, manager):
        """Test that the Facebook plugin package is discovered and registered"""
        assert "plugins.facebook" in manager.loaded_plugins
        assert "facebook" in get_all_resource_plugins()
        assert "facebook" in get_all_route_plugins()

    def test_discover_plugins_twice(self, manager):
        """Test that discovering again does not reload plugins"""
        loaded = manager.loaded_plugins
        manager.discover_plugins()
        assert manager.loaded_plugins == loaded

    def test_create_resource_plugin(self, manager):
        """Test creating a registered resource plugin"""
        from plugins.facebook import FacebookGraphResourcePlugin

        plugin = manager.create_resource_plugin("facebook")

        assert isinstance(plugin, FacebookGraphResourcePlugin)
        assert plugin.plugin_type == PluginType.RESOURCE

    def test_create_route_plugin_with_arguments(self, manager):
        """Test that constructor arguments reach the route plugin"""
        plugin = manager.create_route_plugin("facebook", auth_path="/login/facebook/")

        assert plugin.auth_path == "/login/facebook"
        assert plugin.postback_path == "/login/facebook/postback"

    def test_create_unknown_plugin(self, manager):
        """Test that unknown service names yield None"""
        assert manager.create_resource_plugin("myspace") is None
        assert manager.create_route_plugin("myspace") is None

    def test_get_all_plugin_scopes(self, manager):
        """Test that scopes carry their descriptions"""
        scopes = manager.get_all_plugin_scopes()

        assert scopes["email"] == "Read the user's primary email address"
        assert "public_profile" in scopes

    def test_get_plugin_info(self, manager):
        """Test the plugin metadata"""
        info = manager.get_plugin_info()

        assert info["facebook"]["type"] == "resource"
        assert info["facebook"]["routes"] is True
        assert "email" in info["facebook"]["scopes"]
