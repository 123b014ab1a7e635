"""Domain layer for moodcapsule application."""

from moodcapsule.domain.entry import EntryStore
from moodcapsule.domain.preferences import PreferenceState
from moodcapsule.domain.statistics import StatisticsService
from moodcapsule.domain.state import StateService

__all__ = [
    "EntryStore",
    "PreferenceState",
    "StatisticsService",
    "StateService",
]
