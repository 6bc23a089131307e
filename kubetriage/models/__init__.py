"""Core data structures for kubetriage."""

from kubetriage.models.config import TriageConfig
from kubetriage.models.events import DiagnosticEvent, EventType, RawEvent
from kubetriage.models.pod import (
    ComponentStatus,
    ConditionStatus,
    ContainerState,
    ContainerStateKind,
    Instance,
    PodCondition,
    PodPhase,
)
from kubetriage.models.report import (
    ClassifiedComponent,
    ComponentLogs,
    ComponentTriage,
    HealthyEntry,
    HealthySummary,
    LogFailureReason,
    LogFetchOutcome,
    LogKind,
    TriageOptions,
    TriageOutcome,
    TriageReport,
    TriageState,
)

__all__ = [
    "ClassifiedComponent",
    "ComponentLogs",
    "ComponentStatus",
    "ComponentTriage",
    "ConditionStatus",
    "ContainerState",
    "ContainerStateKind",
    "DiagnosticEvent",
    "EventType",
    "HealthyEntry",
    "HealthySummary",
    "Instance",
    "LogFailureReason",
    "LogFetchOutcome",
    "LogKind",
    "PodCondition",
    "PodPhase",
    "RawEvent",
    "TriageConfig",
    "TriageOptions",
    "TriageOutcome",
    "TriageReport",
    "TriageState",
]
