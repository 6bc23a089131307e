"""Terminal rendering of a TriageOutcome.

Pure presentation: nothing here makes decisions about pod health.  Colour
and keyword highlighting are dropped entirely when ``no_color`` is set.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import click

from kubetriage.models.events import UNKNOWN_TIME, DiagnosticEvent
from kubetriage.models.report import (
    ComponentTriage,
    LogFetchOutcome,
    TriageOutcome,
    TriageReport,
    TriageState,
)

_WIDTH = 80

HIGHLIGHT_KEYWORDS: tuple[str, ...] = (
    "ERROR", "error", "Error",
    "panic", "PANIC", "Panic",
    "fatal", "FATAL", "Fatal",
    "exception", "Exception", "EXCEPTION",
    "failed", "Failed", "FAILED",
    "killed", "Killed", "KILLED",
    "OOMKilled",
)  # fmt: skip


def format_duration(delta: timedelta) -> str:
    """Render an age the way kubectl does: 30s, 5m, 3h, 2d (floored)."""
    seconds = max(int(delta.total_seconds()), 0)
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def should_highlight(line: str) -> bool:
    return any(keyword in line for keyword in HIGHLIGHT_KEYWORDS)


class TextRenderer:
    """Writes a triage outcome to stdout via click."""

    def __init__(
        self,
        no_color: bool = False,
        now: Callable[[], datetime] | None = None,
        echo: Callable[[str], None] = click.echo,
    ) -> None:
        self._no_color = no_color
        self._now = now or (lambda: datetime.now(tz=UTC))
        self._echo = echo

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def _line(self, text: str = "") -> None:
        self._echo(text)

    def _error(self, text: str) -> None:
        if self._no_color:
            self._echo(text)
        else:
            self._echo(click.style(text, fg="red", bold=True))

    def _rule(self, char: str = "=") -> None:
        self._line(char * _WIDTH)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def render(self, outcome: TriageOutcome) -> None:
        if outcome.state == TriageState.HEALTHY_EXIT or outcome.report is None:
            self._line(f"✅ Pod '{outcome.pod_name}' is healthy (Ready {outcome.ready_count}, 0 restarts).")
            self._line("Use --force to inspect anyway.")
            return
        self.render_report(outcome.report)

    def render_report(self, report: TriageReport) -> None:
        self._line()
        self._line(f"📋 POD STATUS: {report.namespace}/{report.pod_name}")
        self._line(f"  Phase: {report.phase} | Ready: {report.ready_count}")
        self._line()
        self._render_events(report)

        for entry in report.components:
            self._render_component(entry, report)

        if report.healthy.count:
            self._rule("-")
            names = ", ".join(report.healthy.describe())
            self._line(f"ℹ️  {report.healthy.count} other container(s) running normally: [{names}]")
            self._line()

    def _render_events(self, report: TriageReport) -> None:
        primary = report.primary_events
        if not primary:
            return
        self._line(f"⚠️  CRITICAL EVENTS (Warning/Error only - Last {report.primary_event_count})")
        for event in primary:
            line = self._event_line(event)
            if event.emphasized:
                self._error(line)
            else:
                self._line(line)
        hidden = len(report.events) - len(primary)
        if hidden > 0:
            self._line(f"  ... {hidden} older event(s) not shown")
        self._line()

    def _event_line(self, event: DiagnosticEvent) -> str:
        if event.timestamp == UNKNOWN_TIME:
            age = "?"
        else:
            age = f"{format_duration(self._now() - event.timestamp)} ago"
        return f"  {age} | {event.type:<7} | {event.reason:<15} | {event.message}"

    def _render_component(self, entry: ComponentTriage, report: TriageReport) -> None:
        component = entry.component
        self._line()
        self._rule()
        if component.failed:
            reason = component.reason or component.state
            self._error(f"🚨 TRIAGE FOR FAILED CONTAINER: '{component.name}' (Reason: {reason})")
        else:
            self._line(f"🔍 TRIAGE FOR CONTAINER: '{component.name}'")
        self._rule()
        state = component.state
        if component.exit_code is not None:
            state = f"{state} (exit {component.exit_code})"
        self._line(f"  State: {state} | Restarts: {component.restart_count} | Ready: {report.ready_count}")
        if component.message:
            self._line(f"  Message: {component.message}")
        self._line()

        self._render_log("🔥 PREVIOUS LOGS (Last Crash)", "No previous logs", entry.logs.previous)
        self._render_log("🔄 CURRENT LOGS", "No current logs", entry.logs.current)

    def _render_log(self, title: str, missing: str, outcome: LogFetchOutcome) -> None:
        if outcome.body is not None:
            lines = [line for line in outcome.body.splitlines() if line]
            if not lines:
                return
            self._line(f"{title} - Last {len(lines)} lines")
            self._rule("-")
            for line in lines:
                if not self._no_color and should_highlight(line):
                    self._error("  " + line)
                else:
                    self._line("  " + line)
            self._rule("-")
            self._line()
        elif not outcome.is_expected_absence:
            self._line(title)
            self._line(f"  ({missing}: {outcome.detail or outcome.failure})")
            self._line()
