"""
Core Interfaces Package

Interface definitions for the engine's external collaborators.
"""

from .i_schedule_repository import IScheduleRepository, IStationDirectory
from .i_distance_model import IDistanceModel

__all__ = [
    'IScheduleRepository',
    'IStationDirectory',
    'IDistanceModel'
]
