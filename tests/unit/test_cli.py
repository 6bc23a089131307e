"""Tests for the click command."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from kubetriage.cli import cli
from kubetriage.errors import ClientConfigError, InstanceNotFoundError
from kubetriage.models.events import UNKNOWN_TIME, DiagnosticEvent, EventType
from kubetriage.models.pod import PodPhase
from kubetriage.models.report import (
    HealthyEntry,
    HealthySummary,
    TriageOutcome,
    TriageReport,
    TriageState,
)

_HEALTHY = TriageOutcome(state=TriageState.HEALTHY_EXIT, pod_name="web", namespace="default", ready_count="1/1")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("LOG_LEVEL", "LINES", "NO_COLOR", "KUBECONFIG", "CONTEXT"):
        monkeypatch.delenv(f"KUBETRIAGE_{key}", raising=False)


def _invoke(args: list[str], outcome: TriageOutcome | Exception = _HEALTHY) -> tuple[object, AsyncMock]:
    mock = AsyncMock()
    if isinstance(outcome, Exception):
        mock.side_effect = outcome
    else:
        mock.return_value = outcome
    with patch("kubetriage.cli.main.run_triage", mock):
        result = CliRunner().invoke(cli, args)
    return result, mock


class TestOptions:
    def test_defaults(self) -> None:
        result, mock = _invoke(["web"])

        assert result.exit_code == 0
        options, config = mock.call_args.args
        assert options.pod_name == "web"
        assert options.namespace == ""
        assert options.tail_lines == 50
        assert options.all_containers is False
        assert options.force is False
        assert options.no_color is False

    def test_flags(self) -> None:
        result, mock = _invoke(
            ["web", "-n", "prod", "--lines", "100", "--all-containers", "--force", "--no-color", "--context", "staging"]
        )

        assert result.exit_code == 0
        options, config = mock.call_args.args
        assert options.namespace == "prod"
        assert options.tail_lines == 100
        assert options.all_containers is True
        assert options.force is True
        assert options.no_color is True
        assert config.kube.context == "staging"

    def test_env_default_lines(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBETRIAGE_LINES", "20")
        _, mock = _invoke(["web"])
        assert mock.call_args.args[0].tail_lines == 20

    def test_requires_pod_name(self) -> None:
        result, mock = _invoke([])
        assert result.exit_code == 2
        mock.assert_not_called()

    @pytest.mark.parametrize(("value", "expected"), [("0", 1), ("20000", 10000), ("10000", 10000)])
    def test_lines_clamped_like_env(self, value: str, expected: int) -> None:
        result, mock = _invoke(["web", "--lines", value])
        assert result.exit_code == 0
        assert mock.call_args.args[0].tail_lines == expected


class TestOutputAndExitCodes:
    def test_healthy_pod_message(self) -> None:
        result, _ = _invoke(["web"])
        assert "Pod 'web' is healthy (Ready 1/1, 0 restarts)." in result.output
        assert "Use --force to inspect anyway." in result.output

    def test_report_rendered(self) -> None:
        report = TriageReport(
            pod_name="web",
            namespace="default",
            phase=PodPhase.PENDING,
            ready_count="0/1",
            components=(),
            events=(DiagnosticEvent(EventType.WARNING, "FailedScheduling", "0/3 nodes are available", UNKNOWN_TIME),),
            healthy=HealthySummary(entries=(HealthyEntry("sidecar", "Running", 0),)),
        )
        outcome = TriageOutcome(
            state=TriageState.DONE, pod_name="web", namespace="default", ready_count="0/1", report=report
        )

        result, _ = _invoke(["web", "--no-color"], outcome)

        assert result.exit_code == 0
        assert "Phase: Pending | Ready: 0/1" in result.output
        assert "FailedScheduling" in result.output
        assert "[sidecar (Running, 0 restarts)]" in result.output

    def test_not_found_is_single_line_error(self) -> None:
        result, _ = _invoke(["ghost", "-n", "prod"], InstanceNotFoundError("prod", "ghost"))

        assert result.exit_code == 1
        assert "Error: pod 'ghost' not found in namespace 'prod'" in result.output

    def test_client_config_error(self) -> None:
        result, _ = _invoke(["web"], ClientConfigError("failed to read kubeconfig: no such file"))

        assert result.exit_code == 1
        assert "Error: failed to read kubeconfig" in result.output

    def test_invalid_env_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBETRIAGE_LOG_LEVEL", "loud")
        result, mock = _invoke(["web"])

        assert result.exit_code == 1
        assert "invalid configuration" in result.output
        mock.assert_not_called()

    def test_renderer_follows_outcome_color_setting(self) -> None:
        outcome = TriageOutcome(
            state=TriageState.HEALTHY_EXIT, pod_name="web", namespace="default", ready_count="1/1", no_color=True
        )
        with patch("kubetriage.cli.main.TextRenderer") as renderer:
            result, _ = _invoke(["web"], outcome)

        assert result.exit_code == 0
        renderer.assert_called_once_with(no_color=True)
        renderer.return_value.render.assert_called_once_with(outcome)
