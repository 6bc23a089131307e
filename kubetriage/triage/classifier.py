"""Container classifier: partitions a pod's containers into failed and healthy.

Waiting and Terminated reasons are separate taxonomies.  ``Error`` appears in
both but means different things: a waiting container that could not be
started versus a process that exited non-zero.
"""

from __future__ import annotations

from kubetriage.models.pod import ComponentStatus, ContainerStateKind, Instance
from kubetriage.models.report import ClassifiedComponent
from kubetriage.observability.logging import get_logger

_logger = get_logger("triage.classifier")

WAITING_FAILURE_REASONS: frozenset[str] = frozenset(
    {
        "CrashLoopBackOff",
        "Error",
        "ImagePullBackOff",
        "ErrImagePull",
        "CreateContainerError",
        "InvalidImageName",
    }
)

TERMINATED_FAILURE_REASONS: frozenset[str] = frozenset(
    {
        "Error",
        "OOMKilled",
        "ContainerCannotRun",
        "DeadlineExceeded",
    }
)


def classify_component(status: ComponentStatus) -> ClassifiedComponent:
    """Compute the verdict for a single container."""
    # A non-zero restart count is the strongest failure signal, whatever the current state.
    failed = status.restart_count > 0
    state = status.state

    reason = ""
    message = ""
    exit_code = None
    if state.kind == ContainerStateKind.WAITING:
        reason, message = state.reason, state.message
        if reason in WAITING_FAILURE_REASONS:
            failed = True
    elif state.kind == ContainerStateKind.TERMINATED:
        reason, message, exit_code = state.reason, state.message, state.exit_code
        if reason in TERMINATED_FAILURE_REASONS:
            failed = True

    return ClassifiedComponent(
        name=status.name,
        state=state.kind.value,
        reason=reason,
        restart_count=status.restart_count,
        failed=failed,
        exit_code=exit_code,
        message=message,
    )


def classify(
    instance: Instance,
    all_containers: bool = False,
) -> tuple[list[ClassifiedComponent], list[ClassifiedComponent]]:
    """Split the pod's containers into ``(shown, healthy)``.

    A container goes to the first list when it failed or when *all_containers*
    is set; its ``failed`` flag still carries the computed verdict.  Both lists
    keep the pod's container order and every container lands in exactly one.
    """
    shown: list[ClassifiedComponent] = []
    healthy: list[ClassifiedComponent] = []

    for status in instance.components:
        component = classify_component(status)
        if component.failed or all_containers:
            shown.append(component)
        else:
            healthy.append(component)

    _logger.debug(
        "containers_classified",
        failed=sum(1 for c in shown if c.failed),
        shown=len(shown),
        healthy=len(healthy),
    )
    return shown, healthy
