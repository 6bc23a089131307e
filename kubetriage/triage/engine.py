"""Triage engine: runs one invocation from pod lookup to assembled report.

State machine::

    Start -> HealthGate -> HealthyExit
                        -> Classify -> (events || logs) -> Assemble -> Done

Any non-isolated failure (pod lookup, event query) is raised and ends the
invocation.  Log failures are isolated by the aggregator.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

from kubetriage.models.config import TriageConfig
from kubetriage.models.pod import Instance
from kubetriage.models.report import TriageOptions, TriageOutcome, TriageState
from kubetriage.observability.logging import get_logger
from kubetriage.triage.classifier import classify
from kubetriage.triage.events import EventSource, relevant_events
from kubetriage.triage.health import is_healthy
from kubetriage.triage.logs import LogSource, collect_logs
from kubetriage.triage.report import assemble_report

_logger = get_logger("triage.engine")


class InstanceSource(Protocol):
    """Minimal pod source interface required by the engine."""

    async def get_instance(self, namespace: str, name: str) -> Instance: ...


class TriageEngine:
    """Runs the triage pipeline against injected collaborators.

    The three sources are usually the same ``KubeClient``; tests pass fakes.
    """

    def __init__(
        self,
        instances: InstanceSource,
        events: EventSource,
        logs: LogSource,
        config: TriageConfig | None = None,
    ) -> None:
        self._instances = instances
        self._events = events
        self._logs = logs
        self._config = config or TriageConfig()

    async def run(self, options: TriageOptions) -> TriageOutcome:
        """Triage one pod.

        Raises:
            InstanceNotFoundError: the pod does not exist.
            ConnectivityError:     the API could not be reached.
            EventQueryError:       the event listing failed.
        """
        instance = await self._instances.get_instance(options.namespace, options.pod_name)

        if not options.force and is_healthy(instance):
            _logger.info("pod_healthy", ready=instance.ready_count)
            return TriageOutcome(
                state=TriageState.HEALTHY_EXIT,
                pod_name=instance.name,
                namespace=instance.namespace,
                ready_count=instance.ready_count,
                no_color=options.no_color,
            )

        shown, healthy = classify(instance, options.all_containers)

        timeout = self._config.log_fetch.timeout_seconds or None
        try:
            async with asyncio.TaskGroup() as tg:
                events_task = tg.create_task(
                    relevant_events(self._events, instance.namespace, instance.name),
                    name="events",
                )
                logs_task = tg.create_task(
                    collect_logs(
                        self._logs,
                        instance.namespace,
                        instance.name,
                        shown,
                        options.tail_lines,
                        timeout=timeout,
                    ),
                    name="logs",
                )
        except ExceptionGroup as eg:
            raise eg.exceptions[0] from eg

        report = assemble_report(
            instance,
            shown,
            healthy,
            events_task.result(),
            logs_task.result(),
            max_primary_events=self._config.report.max_primary_events,
        )
        _logger.info(
            "triage_done",
            shown=len(report.components),
            healthy=report.healthy.count,
            events=len(report.events),
        )
        return TriageOutcome(
            state=TriageState.DONE,
            pod_name=instance.name,
            namespace=instance.namespace,
            ready_count=instance.ready_count,
            report=report,
            no_color=options.no_color,
        )
