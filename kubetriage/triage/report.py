"""Triage report assembler."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from kubetriage.models.events import DiagnosticEvent
from kubetriage.models.pod import Instance
from kubetriage.models.report import (
    ClassifiedComponent,
    ComponentLogs,
    ComponentTriage,
    HealthyEntry,
    HealthySummary,
    TriageReport,
)

DEFAULT_PRIMARY_EVENTS = 10


def summarize_healthy(healthy: Sequence[ClassifiedComponent]) -> HealthySummary:
    return HealthySummary(
        entries=tuple(HealthyEntry(name=c.name, state=c.state, restart_count=c.restart_count) for c in healthy)
    )


def assemble_report(
    instance: Instance,
    shown: Sequence[ClassifiedComponent],
    healthy: Sequence[ClassifiedComponent],
    events: Sequence[DiagnosticEvent],
    logs: Mapping[str, ComponentLogs],
    max_primary_events: int = DEFAULT_PRIMARY_EVENTS,
) -> TriageReport:
    """Combine classifier, event and log results into one report.

    Events are attached once at report level, not per container.  The whole
    ranked sequence is kept; only the first *max_primary_events* are primary.
    Shown containers keep classifier order and are paired with their logs.
    """
    components = tuple(ComponentTriage(component=c, logs=logs[c.name]) for c in shown)
    return TriageReport(
        pod_name=instance.name,
        namespace=instance.namespace,
        phase=instance.phase,
        ready_count=instance.ready_count,
        components=components,
        events=tuple(events),
        healthy=summarize_healthy(healthy),
        primary_event_count=max_primary_events,
    )
