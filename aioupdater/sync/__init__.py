"""
Updater, nested update regions collapsed into a single notification.
"""

__all__ = [
    'DEFAULT_STRICT',
    'Batcher',
    'InvalidArgument',
    'ImbalancedUsage',
]

from .batcher import Batcher

from .. import DEFAULT_STRICT, InvalidArgument, ImbalancedUsage
from .. import __version__  # noqa
