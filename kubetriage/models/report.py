"""Triage result data structures.

``TriageOutcome`` is the contract between the triage engine and any
presentation layer.  Every structure here is produced once per invocation
and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from kubetriage.models.events import DiagnosticEvent
from kubetriage.models.pod import PodPhase


@dataclass(frozen=True)
class TriageOptions:
    """Invocation-level options."""

    pod_name: str
    namespace: str
    tail_lines: int = 50
    all_containers: bool = False
    force: bool = False
    no_color: bool = False


@dataclass(frozen=True)
class ClassifiedComponent:
    """Classifier verdict for one container.

    ``failed`` is the computed verdict.  A container can be shown in the
    failed section with ``failed=False`` when ``--all-containers`` is set.
    ``exit_code`` and ``message`` come from the Waiting or Terminated state
    and are empty otherwise.
    """

    name: str
    state: str
    reason: str
    restart_count: int
    failed: bool
    exit_code: int | None = None
    message: str = ""


class LogKind(StrEnum):
    PREVIOUS = "previous"
    CURRENT = "current"


class LogFailureReason(StrEnum):
    """Why a log body is missing."""

    PREVIOUS_ABSENT = "previous_absent"  # expected: the container never restarted
    NOT_FOUND = "not_found"
    UNREACHABLE = "unreachable"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class LogFetchOutcome:
    """Result of one log retrieval: exactly one of ``body`` or ``failure`` is set."""

    kind: LogKind
    body: str | None = None
    failure: LogFailureReason | None = None
    detail: str = ""

    def __post_init__(self) -> None:
        if (self.body is None) == (self.failure is None):
            raise ValueError("LogFetchOutcome needs exactly one of body or failure")

    @classmethod
    def success(cls, kind: LogKind, body: str) -> LogFetchOutcome:
        return cls(kind=kind, body=body)

    @classmethod
    def failed(cls, kind: LogKind, reason: LogFailureReason, detail: str = "") -> LogFetchOutcome:
        return cls(kind=kind, failure=reason, detail=detail)

    @property
    def ok(self) -> bool:
        return self.body is not None

    @property
    def is_expected_absence(self) -> bool:
        """A missing previous log for a container that never restarted is not an error."""
        return self.failure == LogFailureReason.PREVIOUS_ABSENT


@dataclass(frozen=True)
class ComponentLogs:
    """Previous and current log outcome for one container."""

    container: str
    previous: LogFetchOutcome
    current: LogFetchOutcome


@dataclass(frozen=True)
class ComponentTriage:
    """A container shown in detail, paired with its logs."""

    component: ClassifiedComponent
    logs: ComponentLogs


@dataclass(frozen=True)
class HealthyEntry:
    name: str
    state: str
    restart_count: int

    def __str__(self) -> str:
        return f"{self.name} ({self.state}, {self.restart_count} restarts)"


@dataclass(frozen=True)
class HealthySummary:
    """Compact summary of containers that need no attention."""

    entries: tuple[HealthyEntry, ...] = ()

    @property
    def count(self) -> int:
        return len(self.entries)

    def describe(self) -> list[str]:
        return [str(e) for e in self.entries]


@dataclass(frozen=True)
class TriageReport:
    """Assembled triage result for an unhealthy (or forced) pod.

    ``events`` holds the full filtered, ranked sequence; the first
    ``primary_event_count`` of them are the ones to emphasize.
    """

    pod_name: str
    namespace: str
    phase: PodPhase
    ready_count: str
    components: tuple[ComponentTriage, ...]
    events: tuple[DiagnosticEvent, ...]
    healthy: HealthySummary
    primary_event_count: int = 10

    @property
    def primary_events(self) -> tuple[DiagnosticEvent, ...]:
        return self.events[: self.primary_event_count]


class TriageState(StrEnum):
    """Terminal states of a successful invocation.  Failures are raised."""

    HEALTHY_EXIT = "healthy_exit"
    DONE = "done"


@dataclass(frozen=True)
class TriageOutcome:
    """What the engine hands to the renderer."""

    state: TriageState
    pod_name: str
    namespace: str
    ready_count: str
    report: TriageReport | None = None
    no_color: bool = False
