"""Error taxonomy for a triage invocation.

Fatal errors (everything except ``LogFetchError``) abort the invocation and are
reported by the CLI as a single line.  ``LogFetchError`` subclasses are raised
by the log source and always contained by the log aggregator.
"""

from __future__ import annotations


class TriageError(Exception):
    """Base class for every error raised by kubetriage."""


class ClientConfigError(TriageError):
    """Raised when neither in-cluster config nor a kubeconfig can be loaded."""


class ConnectivityError(TriageError):
    """Raised when the Kubernetes API cannot be reached or answers unexpectedly."""


class InstanceNotFoundError(TriageError):
    """Raised when the requested pod does not exist."""

    def __init__(self, namespace: str, name: str) -> None:
        super().__init__(f"pod '{name}' not found in namespace '{namespace}'")
        self.namespace = namespace
        self.name = name


class EventQueryError(TriageError):
    """Raised when the event listing for a pod fails."""


class LogFetchError(TriageError):
    """Base class for per-container log retrieval failures."""


class LogNotFoundError(LogFetchError):
    """The log source does not know the container (or the pod vanished)."""


class PreviousLogUnavailableError(LogFetchError):
    """The container has no previous run, so there is no previous log."""


class LogUnreachableError(LogFetchError):
    """The log stream could not be opened or read."""
