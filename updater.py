"""Synchronous updater API for code that does not use asyncio."""

__all__ = [
    'DEFAULT_STRICT',
    'Batcher',
    'InvalidArgument',
    'ImbalancedUsage',
]

from aioupdater.sync import *
from aioupdater.sync import __version__  # noqa
