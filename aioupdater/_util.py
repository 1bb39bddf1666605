"""
AIOUpdater utility module.

These functions are not part of the public API.
"""
from functools import partial
from typing import Any, Callable, TypeVar

T = TypeVar('T')


def bind_context(func: Callable[..., T], that: Any = None) -> Callable[[], T]:
    """
    Fix the context a callback runs with.

    The context is passed explicitly as the first positional argument, the
    same way ``self`` reaches a method. A ``None`` context leaves the
    function untouched so plain zero-argument callables work as-is.

    :param func: Callable to bind
    :param that: Context value to supply on every call
    :return: Zero-argument callable
    """
    if that is None:
        return func
    return partial(func, that)


def callable_name(func: Callable) -> str:
    """Readable name of a callable for log messages and reprs."""
    while isinstance(func, partial):
        func = func.func
    return getattr(func, '__qualname__', None) or repr(func)
