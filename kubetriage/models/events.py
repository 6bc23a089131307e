"""Event data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum


# Stand-in for events that carry no timestamp at all; ranks last.
UNKNOWN_TIME = datetime.min.replace(tzinfo=UTC)


class EventType(StrEnum):
    """Event types kept by the event filter.  Anything else is noise."""

    WARNING = "Warning"
    ERROR = "Error"


@dataclass(frozen=True)
class RawEvent:
    """An event as returned by the event source, before filtering.

    ``type`` is free-form: Kubernetes emits ``Normal`` and ``Warning``, some
    controllers emit ``Error``.
    """

    type: str
    reason: str
    message: str
    timestamp: datetime


@dataclass(frozen=True)
class DiagnosticEvent:
    """A Warning or Error event relevant to the triaged pod."""

    type: EventType
    reason: str
    message: str
    timestamp: datetime

    @property
    def emphasized(self) -> bool:
        """True for events the renderer should highlight."""
        return self.type == EventType.ERROR or "Failed" in self.reason
