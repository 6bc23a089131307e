"""Health gate: decides whether a pod needs deep triage at all."""

from __future__ import annotations

from kubetriage.models.pod import READY_CONDITION, ConditionStatus, Instance, PodPhase


def is_healthy(instance: Instance) -> bool:
    """Return True if *instance* is healthy enough to skip triage.

    A pod is healthy iff all of the following hold:

    1. Phase is Running.
    2. Every ``Ready`` condition is True (Unknown counts as not ready).
    3. Every container has a restart count of exactly zero.  A container that
       is Running again after a restart still fails this check: a recovered
       crash is the kind of intermittent failure triage exists to surface.

    A Running pod with no container statuses is vacuously healthy.
    """
    if instance.phase != PodPhase.RUNNING:
        return False

    for condition in instance.conditions:
        if condition.type == READY_CONDITION and condition.status != ConditionStatus.TRUE:
            return False

    return all(c.restart_count == 0 for c in instance.components)
