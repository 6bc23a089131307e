"""Kubernetes API access for kubetriage."""

from kubetriage.kube.client import KubeClient, instance_from_dict, raw_event_from_dict, resolve_namespace

__all__ = ["KubeClient", "instance_from_dict", "raw_event_from_dict", "resolve_namespace"]
