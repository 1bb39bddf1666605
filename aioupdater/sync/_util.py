"""
Tools for deriving the sync classes from their async counterparts.

These functions are not part of the public API.
"""
import re
from functools import partial
from importlib import import_module
from textwrap import dedent
from types import FunctionType
from inspect import getsourcefile, getsourcelines, iscoroutinefunction
from typing import Any, Callable, Dict, Union

SYNC_PACKAGE = 'aioupdater.sync'

Member = Union[FunctionType, property]


def _make_sub(pat: str, repl: str = '') -> Callable[[str], str]:
    """Create a regex substitution function for the given arguments."""
    return partial(re.compile(pat).sub, repl)  # noqa


_strip_async = _make_sub(r'(?<!\w)(?:async|await) ')
_sync_dunders = _make_sub(r'__a(enter|exit)__', repl=r'__\1__')


def synchronize(cls: type = None, base: type = None) -> type:
    """
    Class decorator filling a sync class in from its async equivalent.

    Methods and properties of `base` missing on `cls` are recompiled from
    source in the sync module's namespace, so names such as ``Batcher``
    resolve to the sync classes. Coroutine methods lose their async/await
    keywords and ``__aenter__``/``__aexit__`` become ``__enter__``/
    ``__exit__``. The recompiled code keeps the file name and line numbers
    of the async source for tracebacks.

    Without `base`, the class of the same name in the module path with
    ``.sync`` removed is used.
    """
    if cls is None:
        return partial(synchronize, base=base)
    if base is None:
        base = getattr(
            import_module(cls.__module__.replace('.sync', '')),
            cls.__name__,
        )
    # Later entries win, so sync names shadow their async namesakes
    scope = {
        **import_module(base.__module__).__dict__,
        **import_module(SYNC_PACKAGE).__dict__,
        **import_module(cls.__module__).__dict__,
        cls.__name__: cls,
    }
    for name, value in base.__dict__.items():
        if name in cls.__dict__:
            continue
        if isinstance(value, (FunctionType, property)):
            value = _recompile(value, scope)
            name = _member_func(value).__name__
        setattr(cls, name, value)
    cls.__doc__ = cls.__doc__ or base.__doc__
    return cls


def _member_func(member: Member) -> FunctionType:
    """Function behind a method or a property getter."""
    return member.fget if isinstance(member, property) else member


def _recompile(member: Member, scope: Dict[str, Any]) -> Member:
    """
    Compile a method or property again from its source inside `scope`.

    Decorators are part of the source, so a property comes back as a
    property.
    """
    func = _member_func(member)
    lines, lnum = getsourcelines(func)
    code = dedent(''.join(lines))
    if iscoroutinefunction(func):
        code = _strip_async(_sync_dunders(code))
    # Pad so line numbers match the original file
    code = compile('\n' * (lnum - 1) + code, getsourcefile(func), 'exec')
    local = {}
    exec(code, scope, local)
    return next(iter(local.values()))
