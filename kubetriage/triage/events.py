"""Event filter and ranker.

Keeps only Warning and Error events for the pod and orders them most recent
first.  Normal events are dropped: they describe the happy path and bury the
signal.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from kubetriage.errors import EventQueryError, TriageError
from kubetriage.models.events import DiagnosticEvent, EventType, RawEvent
from kubetriage.observability.logging import get_logger

_logger = get_logger("triage.events")

_RELEVANT_TYPES = {t.value: t for t in EventType}


class EventSource(Protocol):
    """Minimal event source interface required by the event filter."""

    async def list_events(self, namespace: str, name: str) -> Sequence[RawEvent]: ...


def filter_events(raw_events: Iterable[RawEvent]) -> list[DiagnosticEvent]:
    """Drop every event whose type is neither Warning nor Error."""
    relevant: list[DiagnosticEvent] = []
    for raw in raw_events:
        event_type = _RELEVANT_TYPES.get(raw.type)
        if event_type is None:
            continue
        relevant.append(
            DiagnosticEvent(
                type=event_type,
                reason=raw.reason,
                message=raw.message,
                timestamp=raw.timestamp,
            )
        )
    return relevant


def rank_events(events: Iterable[DiagnosticEvent]) -> list[DiagnosticEvent]:
    """Order events most recent first.

    ``sorted`` is stable with ``reverse=True``, so events sharing a timestamp
    keep their retrieval order.
    """
    return sorted(events, key=lambda e: e.timestamp, reverse=True)


async def relevant_events(source: EventSource, namespace: str, name: str) -> list[DiagnosticEvent]:
    """Fetch, filter and rank the events involving pod *name*.

    Raises EventQueryError if the listing fails; no partial list is returned.
    """
    try:
        raw_events = await source.list_events(namespace, name)
    except TriageError as exc:
        raise EventQueryError(f"failed to get events: {exc}") from exc

    ranked = rank_events(filter_events(raw_events))
    _logger.debug("events_filtered", retrieved=len(raw_events), kept=len(ranked))
    return ranked
