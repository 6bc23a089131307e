"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DefaultsConfig:
    """Defaults for invocation options that the command line may override."""

    tail_lines: int = 50
    no_color: bool = False


@dataclass
class LogFetchConfig:
    """Log aggregator configuration."""

    timeout_seconds: float = 15.0  # 0 disables the deadline


@dataclass
class ReportConfig:
    """Report assembly configuration."""

    max_primary_events: int = 10


@dataclass
class KubeConfig:
    """Kubernetes client configuration."""

    kubeconfig: str = ""
    context: str = ""


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "warning"


@dataclass
class TriageConfig:
    """Top-level kubetriage configuration."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    log_fetch: LogFetchConfig = field(default_factory=LogFetchConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    kube: KubeConfig = field(default_factory=KubeConfig)
    log: LogConfig = field(default_factory=LogConfig)
