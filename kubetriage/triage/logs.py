"""Log aggregator: concurrent previous/current log retrieval per container.

One task per container, run in an ``asyncio.TaskGroup``.  Each task fetches
the previous-run tail and then the current-run tail, and writes only to its
own pre-allocated slot in the results list, so no locking is needed.  The
caller sees nothing until every task has finished.

Per-fetch failures (no previous run, unknown container, unreachable stream,
deadline expiry) are captured as ``LogFetchOutcome`` failures and never
affect any other fetch.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Protocol

from kubetriage.errors import (
    ConnectivityError,
    LogFetchError,
    LogNotFoundError,
    PreviousLogUnavailableError,
)
from kubetriage.models.report import (
    ClassifiedComponent,
    ComponentLogs,
    LogFailureReason,
    LogFetchOutcome,
    LogKind,
)
from kubetriage.observability.logging import get_logger

_logger = get_logger("triage.logs")


class LogSource(Protocol):
    """Minimal log source interface required by the aggregator."""

    async def read_log(
        self,
        namespace: str,
        pod: str,
        container: str,
        *,
        previous: bool,
        tail_lines: int,
    ) -> str: ...


def _tail(text: str, limit: int) -> str:
    """Keep at most the last *limit* lines of *text*."""
    lines = text.splitlines(keepends=True)
    if len(lines) <= limit:
        return text
    return "".join(lines[-limit:])


def _failure_reason(exc: Exception) -> LogFailureReason:
    if isinstance(exc, PreviousLogUnavailableError):
        return LogFailureReason.PREVIOUS_ABSENT
    if isinstance(exc, LogNotFoundError):
        return LogFailureReason.NOT_FOUND
    return LogFailureReason.UNREACHABLE


async def fetch_log(
    source: LogSource,
    namespace: str,
    pod: str,
    container: str,
    kind: LogKind,
    tail_lines: int,
    deadline: float | None = None,
) -> LogFetchOutcome:
    """Fetch one log tail, converting every expected failure into an outcome."""
    timeout = asyncio.timeout_at(deadline)
    try:
        async with timeout:
            body = await source.read_log(
                namespace,
                pod,
                container,
                previous=kind == LogKind.PREVIOUS,
                tail_lines=tail_lines,
            )
    except TimeoutError as exc:
        if timeout.expired():
            _logger.warning("log_fetch_cancelled", container=container, kind=kind.value)
            return LogFetchOutcome.failed(kind, LogFailureReason.CANCELLED, "log fetch deadline exceeded")
        # Raised by the source itself, not by the deadline.
        detail = str(exc) or "log stream timed out"
        _logger.info("log_fetch_failed", container=container, kind=kind.value, reason="unreachable", error=detail)
        return LogFetchOutcome.failed(kind, LogFailureReason.UNREACHABLE, detail)
    except (LogFetchError, ConnectivityError) as exc:
        reason = _failure_reason(exc)
        if reason != LogFailureReason.PREVIOUS_ABSENT:
            _logger.info("log_fetch_failed", container=container, kind=kind.value, reason=reason.value, error=str(exc))
        return LogFetchOutcome.failed(kind, reason, str(exc))

    return LogFetchOutcome.success(kind, _tail(body, tail_lines))


async def collect_logs(
    source: LogSource,
    namespace: str,
    pod: str,
    components: Sequence[ClassifiedComponent],
    tail_lines: int,
    timeout: float | None = None,
) -> dict[str, ComponentLogs]:
    """Fetch logs for every container in *components* concurrently.

    Args:
        source:     Log source (the kube adapter in production).
        namespace:  Pod namespace.
        pod:        Pod name.
        components: Containers to fetch logs for; the result keeps this order.
        tail_lines: Maximum number of trailing lines per log.
        timeout:    Seconds until all in-flight fetches are abandoned and
                    recorded as ``cancelled``.  ``None`` or 0 waits forever.

    Returns:
        Container name -> ComponentLogs, in the order of *components*.
    """
    results: list[ComponentLogs | None] = [None] * len(components)
    deadline = asyncio.get_running_loop().time() + timeout if timeout else None

    async def _worker(idx: int, container: str) -> None:
        previous = await fetch_log(source, namespace, pod, container, LogKind.PREVIOUS, tail_lines, deadline)
        current = await fetch_log(source, namespace, pod, container, LogKind.CURRENT, tail_lines, deadline)
        results[idx] = ComponentLogs(container=container, previous=previous, current=current)

    try:
        async with asyncio.TaskGroup() as tg:
            for idx, component in enumerate(components):
                tg.create_task(_worker(idx, component.name), name=f"logs-{component.name}")
    except ExceptionGroup as eg:
        # Isolated failures never get here; re-raise the first unexpected one as-is.
        raise eg.exceptions[0] from eg

    _logger.debug("logs_collected", containers=len(components))
    return {logs.container: logs for logs in results if logs is not None}
