"""
Decorators that wrap a callable in a Timer cycle.
"""

from __future__ import annotations

import inspect
import functools
from typing import Any, Callable, TypeVar

from cycletime.utils.timing import Timer

F = TypeVar("F", bound=Callable[..., Any])


def timed(timer: Timer) -> Callable[[F], F]:
    """
    Decorator that runs start()/end() around every call.

    Usage:
        build_timer = client.get_timer("build", 10)

        @timed(build_timer)
        async def build(...):
            ...

    The cycle is ended even when the function raises.
    """

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                timer.start()
                try:
                    return await func(*args, **kwargs)
                finally:
                    timer.end()

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            timer.start()
            try:
                return func(*args, **kwargs)
            finally:
                timer.end()

        return sync_wrapper  # type: ignore[return-value]

    return decorator
