"""Initialization strategies for partitional clustering."""

from .random import RandomInit
from .from_indices import FromIndicesInit

__all__ = [
    'RandomInit',
    'FromIndicesInit'
]
