"""
AIOUpdater, nested update regions collapsed into a single notification.
"""

__all__ = [
    'DEFAULT_STRICT',
    'Batcher',
    'InvalidArgument',
    'ImbalancedUsage',
]

__version__ = '1.0.0'

from .batcher import (
    DEFAULT_STRICT,
    Batcher,
    InvalidArgument,
    ImbalancedUsage,
)
