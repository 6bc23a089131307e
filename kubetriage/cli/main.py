"""``kubetriage`` / ``kubectl triage`` command."""

from __future__ import annotations

import asyncio

import click

from kubetriage import __version__
from kubetriage.app import run_triage
from kubetriage.config import load_config
from kubetriage.errors import TriageError
from kubetriage.models.report import TriageOptions
from kubetriage.output.text import TextRenderer

_EXAMPLES = """\b
Examples:
  # Triage a crashing pod
  kubectl triage my-failing-pod

  # Triage a pod in a specific namespace
  kubectl triage my-pod -n production

  # Show all containers, not just failed ones
  kubectl triage my-pod --all-containers

  # Inspect a healthy pod anyway
  kubectl triage my-pod --force

  # Show more log lines
  kubectl triage my-pod --lines=100
"""


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=_EXAMPLES,
)
@click.argument("pod_name")
@click.option("-n", "--namespace", default="", help="Pod namespace (default: from the current kubeconfig context).")
@click.option("--kubeconfig", default=None, help="Path to the kubeconfig file.")
@click.option("--context", "kube_context", default=None, help="Kubeconfig context to use.")
@click.option(
    "--lines",
    type=click.IntRange(min=1, max=10000, clamp=True),
    default=None,
    help="Number of log lines to display, 1 to 10000 (default: 50).",
)
@click.option("--all-containers", is_flag=True, help="Show all containers, not just failed/restarted ones.")
@click.option("--force", is_flag=True, help="Inspect the pod even if it appears healthy.")
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Diagnostic log level (logs go to stderr).",
)
@click.version_option(version=__version__, prog_name="kubetriage")
def cli(
    pod_name: str,
    namespace: str,
    kubeconfig: str | None,
    kube_context: str | None,
    lines: int | None,
    all_containers: bool,
    force: bool,
    no_color: bool,
    log_level: str | None,
) -> None:
    """Fast triage for failed Kubernetes pods.

    Shows pod status, Warning/Error events only, and the previous-crash and
    current logs of failed or restarted containers.  Healthy containers are
    summarized on one line.
    """
    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(f"invalid configuration: {exc}") from exc

    if kubeconfig:
        config.kube.kubeconfig = kubeconfig
    if kube_context:
        config.kube.context = kube_context
    if log_level:
        config.log.level = log_level.lower()

    options = TriageOptions(
        pod_name=pod_name,
        namespace=namespace,
        tail_lines=lines or config.defaults.tail_lines,
        all_containers=all_containers,
        force=force,
        no_color=no_color or config.defaults.no_color,
    )

    try:
        outcome = asyncio.run(run_triage(options, config))
    except TriageError as exc:
        raise click.ClickException(str(exc)) from exc

    TextRenderer(no_color=outcome.no_color).render(outcome)
