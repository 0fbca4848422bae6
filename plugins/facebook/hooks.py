# plugins/facebook/hooks.py
"""
Hooks published by the Facebook plugin.

Application code registers callbacks to react to plugin events, for example
to persist a freshly acquired access token somewhere other than the session:

    from plugins.facebook import hook

    @hook("fb_access_token_available")
    async def store_token(token):
        ...

Callbacks may be plain functions or coroutine functions. They run in
registration order; an exception raised by a callback propagates to the caller.
"""

import inspect
import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

ACCESS_TOKEN_AVAILABLE = "fb_access_token_available"

# Hook registry
_hooks: Dict[str, List[Callable[..., Any]]] = {}

def add_hook(name: str, callback: Callable[..., Any]) -> None:
    """
    Register a callback for a hook.

    Args:
        name (str): The hook name, e.g. "fb_access_token_available"
        callback (Callable[..., Any]): Function or coroutine function to call
    """
    _hooks.setdefault(name, []).append(callback)
    logger.info(f"Registered hook callback {getattr(callback, '__name__', callback)!r} for {name}")

def hook(name: str):
    """Decorator form of add_hook()."""
    def decorator(callback):
        add_hook(name, callback)
        return callback
    return decorator

def get_hooks(name: str) -> List[Callable[..., Any]]:
    return list(_hooks.get(name, []))

def remove_hooks(name: Optional[str] = None) -> None:
    """Drop the callbacks of one hook, or of all hooks when name is None."""
    if name is None:
        _hooks.clear()
    else:
        _hooks.pop(name, None)

async def execute_hooks(name: str, *args, **kwargs) -> int:
    """
    Run every callback registered for a hook.

    Returns:
        int: The number of callbacks run
    """
    callbacks = get_hooks(name)
    for callback in callbacks:
        result = callback(*args, **kwargs)
        if inspect.isawaitable(result):
            await result
    logger.debug(f"Executed {len(callbacks)} callback(s) for hook {name}")
    return len(callbacks)
