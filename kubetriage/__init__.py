"""kubetriage: a one-shot diagnostic snapshot for unhealthy Kubernetes pods."""

__version__ = "0.1.0"
