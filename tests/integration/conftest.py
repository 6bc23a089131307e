"""Shared fixtures for kubetriage integration tests.

Provides a fake cluster that implements the pod, event and log sources the
triage engine consumes, records every call, and can be told to fail for
specific containers, so the engine pipeline runs end to end without a real
Kubernetes API.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from kubetriage.errors import (
    ConnectivityError,
    InstanceNotFoundError,
    LogUnreachableError,
    PreviousLogUnavailableError,
)
from kubetriage.models.config import TriageConfig
from kubetriage.models.events import RawEvent
from kubetriage.models.pod import (
    ComponentStatus,
    ConditionStatus,
    ContainerState,
    ContainerStateKind,
    Instance,
    PodCondition,
    PodPhase,
)
from kubetriage.triage.engine import TriageEngine

# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------

_NOW = datetime(2026, 2, 18, 12, 0, 0, tzinfo=UTC)


def minutes_ago(minutes: int) -> datetime:
    return _NOW - timedelta(minutes=minutes)


# ---------------------------------------------------------------------------
# Object factory helpers
# ---------------------------------------------------------------------------


def make_container(
    name: str = "app",
    restarts: int = 0,
    kind: ContainerStateKind = ContainerStateKind.RUNNING,
    reason: str = "",
    ready: bool | None = None,
) -> ComponentStatus:
    """Create a ComponentStatus with sensible defaults for testing."""
    return ComponentStatus(
        name=name,
        restart_count=restarts,
        state=ContainerState(kind=kind, reason=reason),
        ready=kind == ContainerStateKind.RUNNING if ready is None else ready,
    )


def make_pod(
    *containers: ComponentStatus,
    name: str = "my-app-7b4f8c6d-x2kj",
    namespace: str = "default",
    phase: PodPhase = PodPhase.RUNNING,
    ready: ConditionStatus | None = None,
) -> Instance:
    """Create an Instance; the Ready condition follows the containers unless given."""
    if ready is None:
        ready = ConditionStatus.TRUE if all(c.ready for c in containers) else ConditionStatus.FALSE
    return Instance(
        name=name,
        namespace=namespace,
        phase=phase,
        components=tuple(containers),
        conditions=(PodCondition(type="Ready", status=ready),),
    )


def make_event(
    type: str = "Warning",
    reason: str = "BackOff",
    message: str = "Back-off restarting failed container",
    timestamp: datetime | None = None,
) -> RawEvent:
    return RawEvent(type=type, reason=reason, message=message, timestamp=timestamp or _NOW)


def crash_looping_pod() -> Instance:
    """app is crash-looping, sidecar is fine."""
    return make_pod(
        make_container("app", restarts=5, kind=ContainerStateKind.WAITING, reason="CrashLoopBackOff"),
        make_container("sidecar"),
    )


# ---------------------------------------------------------------------------
# Fake cluster
# ---------------------------------------------------------------------------


class FakeCluster:
    """In-memory pod, event and log source with call counters."""

    def __init__(
        self,
        pod: Instance | None = None,
        events: list[RawEvent] | None = None,
        logs: dict[tuple[str, bool], str] | None = None,
    ) -> None:
        self.pod = pod
        self.events = events or []
        self.logs = logs or {}
        self.failing_containers: set[str] = set()
        self.events_error: Exception | None = None
        self.log_delay = 0.0
        self.instance_calls = 0
        self.event_calls = 0
        self.log_calls: list[tuple[str, bool, int]] = []

    async def get_instance(self, namespace: str, name: str) -> Instance:
        self.instance_calls += 1
        if self.pod is None or self.pod.name != name or self.pod.namespace != namespace:
            raise InstanceNotFoundError(namespace, name)
        return self.pod

    async def list_events(self, namespace: str, name: str) -> list[RawEvent]:
        self.event_calls += 1
        if self.events_error is not None:
            raise self.events_error
        return list(self.events)

    async def read_log(
        self,
        namespace: str,
        pod: str,
        container: str,
        *,
        previous: bool,
        tail_lines: int,
    ) -> str:
        self.log_calls.append((container, previous, tail_lines))
        if self.log_delay:
            await asyncio.sleep(self.log_delay)
        if container in self.failing_containers:
            raise LogUnreachableError(f"container {container} log stream unavailable")
        if (container, previous) not in self.logs:
            if previous:
                raise PreviousLogUnavailableError(
                    f'previous terminated container "{container}" in pod "{pod}" not found'
                )
            return ""
        return self.logs[(container, previous)]

    @property
    def total_calls(self) -> int:
        return self.instance_calls + self.event_calls + len(self.log_calls)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cluster() -> FakeCluster:
    return FakeCluster(
        pod=crash_looping_pod(),
        events=[
            make_event("Normal", "Pulled", "Container image already present", minutes_ago(10)),
            make_event("Warning", "BackOff", "Back-off restarting failed container", minutes_ago(1)),
            make_event("Normal", "Started", "Started container app", minutes_ago(9)),
        ],
        logs={
            ("app", True): "starting\npanic: nil map assignment\n",
            ("app", False): "starting\n",
        },
    )


@pytest.fixture
def triage_config() -> TriageConfig:
    config = TriageConfig()
    config.log_fetch.timeout_seconds = 5.0
    return config


@pytest.fixture
def engine(cluster: FakeCluster, triage_config: TriageConfig) -> TriageEngine:
    return TriageEngine(instances=cluster, events=cluster, logs=cluster, config=triage_config)


@pytest.fixture
def connectivity_error() -> ConnectivityError:
    return ConnectivityError("dial tcp 10.0.0.1:6443: connect: connection refused")
