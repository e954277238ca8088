from __future__ import annotations

from enum import Enum


class EventAction(str, Enum):
    EXPLORE = "explore"
    PRUNE = "prune"
    COMPLETE = "complete"


class SolveStatus(str, Enum):
    COMPLETE = "complete"
    NO_TOUR = "no_tour"
    CANCELLED = "cancelled"
    TIMEOUT = "timeout"


__all__ = ["EventAction", "SolveStatus"]
