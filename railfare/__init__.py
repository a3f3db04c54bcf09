"""
railfare fare and schedule engine

Computes distance, elapsed duration and per-class dynamic fares for a train
between two stations on its schedule, and keeps one authoritative record per
(train, origin, destination) so search, booking, payment and invoice stages
all see the same numbers.
"""

from .version import __version__, __app_name__, __description__

__all__ = ["__version__", "__app_name__", "__description__"]
