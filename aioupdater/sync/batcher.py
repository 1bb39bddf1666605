"""
Updater Batcher module.
"""

import logging
from inspect import isawaitable, iscoroutine
from typing import Any, Callable

from ._util import synchronize
from .._util import callable_name

logger = logging.getLogger(__name__)


@synchronize
class Batcher:
    """
    Coalesce nested update regions into one notification.

    Same behaviour as :py:class:`aioupdater.Batcher` with plain method calls
    and ``with`` blocks instead of coroutines. Callbacks must be regular
    callables; one returning an awaitable raises :py:exc:`TypeError`, after
    the region it ran in has been closed.
    """

    def _call(self, func: Callable[[], Any]) -> None:
        result = func()
        if isawaitable(result):
            if iscoroutine(result):
                result.close()
            raise TypeError(
                f"{callable_name(func)} returned an awaitable; "
                f"use aioupdater.Batcher for coroutine callbacks"
            )
