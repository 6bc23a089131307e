"""Point-in-time view of a pod and its containers.

Built fresh from the API on every invocation; nothing in kubetriage mutates
these objects after creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class PodPhase(StrEnum):
    """Pod lifecycle phase as reported in ``status.phase``."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class ConditionStatus(StrEnum):
    """Tri-state status of a pod condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class ContainerStateKind(StrEnum):
    """Which of the ``state`` sub-objects is populated for a container."""

    RUNNING = "Running"
    WAITING = "Waiting"
    TERMINATED = "Terminated"
    UNKNOWN = "Unknown"


READY_CONDITION = "Ready"


@dataclass(frozen=True)
class ContainerState:
    """Current container state.

    ``reason`` is only meaningful for Waiting and Terminated; ``exit_code`` only
    for Terminated.
    """

    kind: ContainerStateKind
    reason: str = ""
    message: str = ""
    exit_code: int | None = None


@dataclass(frozen=True)
class ComponentStatus:
    """Observed status of a single container in the pod."""

    name: str
    restart_count: int
    state: ContainerState
    ready: bool = False


@dataclass(frozen=True)
class PodCondition:
    """A pod condition such as ``Ready`` or ``PodScheduled``."""

    type: str
    status: ConditionStatus


@dataclass(frozen=True)
class Instance:
    """The pod under inspection."""

    name: str
    namespace: str
    phase: PodPhase
    components: tuple[ComponentStatus, ...] = field(default_factory=tuple)
    conditions: tuple[PodCondition, ...] = field(default_factory=tuple)

    @property
    def ready_count(self) -> str:
        """Ready containers over total, formatted like ``kubectl get pods`` ("1/2")."""
        ready = sum(1 for c in self.components if c.ready)
        return f"{ready}/{len(self.components)}"
