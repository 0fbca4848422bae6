"""
Unit tests for the Facebook plugin hooks
"""

import pytest

from plugins.facebook.hooks import (
    ACCESS_TOKEN_AVAILABLE,
    add_hook,
    execute_hooks,
    get_hooks,
    hook,
    remove_hooks,
)

pytestmark = [pytest.mark.unit, pytest.mark.facebook]


class TestHooks:
    """Test hook registration and execution"""

    @pytest.mark.asyncio
    async def test_sync_and_async_callbacks_run_in_order(self):
        """Test that both plain and coroutine callbacks are run, in order"""
        calls = []

        def first(token):
            calls.append(("first", token))

        async def second(token):
            calls.append(("second", token))

        add_hook(ACCESS_TOKEN_AVAILABLE, first)
        add_hook(ACCESS_TOKEN_AVAILABLE, second)

        count = await execute_hooks(ACCESS_TOKEN_AVAILABLE, "user-token")

        assert count == 2
        assert calls == [("first", "user-token"), ("second", "user-token")]

    @pytest.mark.asyncio
    async def test_decorator_registers_callback(self):
        """Test registering a callback with the decorator"""
        calls = []

        @hook(ACCESS_TOKEN_AVAILABLE)
        def remember(token):
            calls.append(token)

        await execute_hooks(ACCESS_TOKEN_AVAILABLE, "user-token")

        assert calls == ["user-token"]
        assert remember in get_hooks(ACCESS_TOKEN_AVAILABLE)

    @pytest.mark.asyncio
    async def test_hook_without_callbacks(self):
        """Test executing a hook nobody listens to"""
        assert await execute_hooks("nobody_listens") == 0

    @pytest.mark.asyncio
    async def test_callback_errors_propagate(self):
        """Test that an exception raised by a callback reaches the caller"""
        def broken(token):
            raise RuntimeError("storage unavailable")

        add_hook(ACCESS_TOKEN_AVAILABLE, broken)

        with pytest.raises(RuntimeError, match="storage unavailable"):
            await execute_hooks(ACCESS_TOKEN_AVAILABLE, "user-token")

    def test_remove_hooks(self):
        """Test removing the callbacks of one hook and of all hooks"""
        add_hook(ACCESS_TOKEN_AVAILABLE, print)
        add_hook("other", print)

        remove_hooks(ACCESS_TOKEN_AVAILABLE)
        assert get_hooks(ACCESS_TOKEN_AVAILABLE) == []
        assert get_hooks("other") == [print]

        remove_hooks()
        assert get_hooks("other") == []
