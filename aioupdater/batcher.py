"""
AIOUpdater Batcher module.
"""

import logging
from inspect import isawaitable
from typing import Any, Awaitable, Callable, Optional, Type, Union

from ._util import bind_context, callable_name

logger = logging.getLogger(__name__)

DEFAULT_STRICT = False

Callback = Callable[..., Union[None, Awaitable[None]]]


class InvalidArgument(TypeError):
    """
    Exception raised when a :py:class:`Batcher` is created without a usable
    notification function.
    """
    pass


class ImbalancedUsage(RuntimeError):
    """
    Exception raised by a strict :py:class:`Batcher` when
    :py:meth:`Batcher.end` is called more often than
    :py:meth:`Batcher.begin`.
    """
    pass


class Batcher:
    """
    Coalesce nested update regions into one notification.

    Every region is opened with :py:meth:`begin` and closed with
    :py:meth:`end`, or run as a whole through :py:meth:`do`. Regions may
    nest to any depth; only the close of the outermost one calls the
    `update` function. This lets many small mutations of a subject collapse
    into a single refresh.

    If `that` is given it is passed as the first argument to `update` and to
    every function run through :py:meth:`do`, so methods of the subject can
    be used directly.

    By default unbalanced :py:meth:`end` calls are tolerated: the counter is
    allowed to go negative and each such call logs a warning and still
    notifies. Pass
    ``strict=True`` to raise :py:exc:`ImbalancedUsage` instead.

    The notification and the wrapped functions may be plain callables or
    coroutine functions; awaitable results are awaited. Calls into one
    instance are expected to nest, not to interleave across tasks.
    """

    def __init__(self,
                 that: Any = None,
                 update: Callback = None,
                 strict: bool = DEFAULT_STRICT):
        """Initialise a new Batcher instance."""
        if update is None:
            raise InvalidArgument("'update' function is required")
        if not callable(update):
            raise InvalidArgument(
                f"'update' must be callable, got {type(update).__name__}"
            )

        self._that = that
        self._notify = bind_context(update, that)
        self._strict = strict
        self._counter = 0

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} counter={self._counter} "
            f"update={callable_name(self._notify)}>"
        )

    @property
    def counter(self) -> int:
        """Number of regions currently open."""
        return self._counter

    @property
    def batching(self) -> bool:
        """True while at least one region is open."""
        return self._counter >= 1

    @property
    def strict(self) -> bool:
        return self._strict

    def begin(self) -> int:
        """
        Open a region.

        Every call must be paired with exactly one :py:meth:`end`, also when
        the enclosed code raises. Prefer using the batcher as a context
        manager, which guarantees that.

        :return: New nesting depth
        """
        self._counter += 1
        return self._counter

    async def end(self) -> bool:
        """
        Close a region, sending the notification if it was the outermost.

        An ``end()`` with no open region logs a warning each time it is
        called; in strict mode it raises instead.

        :return: True if the notification was sent by this call
        :raises ImbalancedUsage:
            If strict and no region is open. The counter is left unchanged.
        """
        if self._counter <= 0:
            if self._strict:
                raise ImbalancedUsage(
                    f"end() called with no open region on {self!r}"
                )
            logger.warning(
                f"Unbalanced end() on {self!r}, sending notification anyway"
            )
        return await self._release()

    async def do(self, func: Optional[Callback] = None) -> bool:
        """
        Run `func` as a single batched region.

        The region is closed, and the notification sent if due, before any
        exception raised by `func` reaches the caller. Without `func` this
        just opens and closes an empty region, which notifies when no other
        region is open.

        :param func: Optional function to call with the batcher's context
        :return: True if no region is open after the call
        """
        self.begin()
        try:
            if func is not None:
                await self._call(bind_context(func, self._that))
        finally:
            await self._release()
        return self._counter == 0

    async def _release(self) -> bool:
        """Close a region opened by this batcher itself."""
        self._counter -= 1
        if self._counter > 0:
            return False
        logger.debug(f"Sending update notification {self!r}")
        await self._call(self._notify)
        return True

    async def _call(self, func: Callable[[], Any]) -> None:
        """Invoke a bound callback, awaiting its result if needed."""
        result = func()
        if isawaitable(result):
            await result

    # Support usage as an async context manager
    async def __aenter__(self) -> 'Batcher':
        """Open a region."""
        self.begin()
        return self

    async def __aexit__(self, exc_type: Type[Exception], *_) -> None:
        """Close the region, letting any exception from the block through."""
        await self._release()

    # Guard against porting mistakes
    def __enter__(self):
        raise RuntimeError("Use async with")

    def __exit__(self, *_exc):  # pragma: no cover
        raise RuntimeError("Use async with")
