"""
Progress domain package.

Public API:
- RouteSession, start_session
- Models: RouteEntry, ProgressSummary, NextStopStatus
"""
from .models import NextStopStatus, ProgressSummary, RouteEntry
from .session import RouteSession, start_session

__all__ = ["RouteSession",
           "start_session",
             "RouteEntry",
               "ProgressSummary",
               "NextStopStatus",
               ]
