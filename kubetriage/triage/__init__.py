"""Triage core: health gate, classifier, event filter, log aggregator, assembler."""

from kubetriage.triage.classifier import classify
from kubetriage.triage.engine import TriageEngine
from kubetriage.triage.events import relevant_events
from kubetriage.triage.health import is_healthy
from kubetriage.triage.logs import collect_logs
from kubetriage.triage.report import assemble_report

__all__ = [
    "TriageEngine",
    "assemble_report",
    "classify",
    "collect_logs",
    "is_healthy",
    "relevant_events",
]
