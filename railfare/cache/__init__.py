"""
Caching for route evaluations.

This package provides the consistency cache that keeps one authoritative
timing and fare record per train and station pair.
"""

from .consistency_cache import ConsistencyCache

__all__ = [
    'ConsistencyCache'
]
