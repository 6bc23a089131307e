"""Kubernetes API adapter built on kubernetes-asyncio.

Implements the pod, event and log sources the triage engine consumes, and
translates API and transport errors into the kubetriage error taxonomy.
API objects are converted through their JSON (camelCase) form, so the
conversion helpers work on plain dicts.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiohttp
from kubernetes_asyncio import client as k8s_client
from kubernetes_asyncio import config as k8s_config
from kubernetes_asyncio.client.exceptions import ApiException

from kubetriage.errors import (
    ClientConfigError,
    ConnectivityError,
    InstanceNotFoundError,
    LogNotFoundError,
    LogUnreachableError,
    PreviousLogUnavailableError,
)
from kubetriage.models.events import UNKNOWN_TIME, RawEvent
from kubetriage.models.pod import (
    ComponentStatus,
    ConditionStatus,
    ContainerState,
    ContainerStateKind,
    Instance,
    PodCondition,
    PodPhase,
)
from kubetriage.observability.logging import get_logger

_logger = get_logger("kube.client")

_SERVICE_ACCOUNT_NAMESPACE = Path("/var/run/secrets/kubernetes.io/serviceaccount/namespace")
_PREVIOUS_LOG_MISSING = "previous terminated container"
DEFAULT_NAMESPACE = "default"


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------


def _parse_time(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_phase(value: Any) -> PodPhase:
    try:
        return PodPhase(value)
    except ValueError:
        return PodPhase.UNKNOWN


def _parse_condition_status(value: Any) -> ConditionStatus:
    try:
        return ConditionStatus(value)
    except ValueError:
        return ConditionStatus.UNKNOWN


def container_state_from_dict(state: dict[str, Any] | None) -> ContainerState:
    """Convert a ``containerStatuses[].state`` object.

    Waiting wins over Terminated, which wins over Running, matching the order
    the kubelet populates them in practice.
    """
    state = state or {}
    waiting = state.get("waiting")
    if waiting is not None:
        return ContainerState(
            kind=ContainerStateKind.WAITING,
            reason=waiting.get("reason") or "",
            message=waiting.get("message") or "",
        )
    terminated = state.get("terminated")
    if terminated is not None:
        return ContainerState(
            kind=ContainerStateKind.TERMINATED,
            reason=terminated.get("reason") or "",
            message=terminated.get("message") or "",
            exit_code=terminated.get("exitCode"),
        )
    if state.get("running") is not None:
        return ContainerState(kind=ContainerStateKind.RUNNING)
    return ContainerState(kind=ContainerStateKind.UNKNOWN)


def instance_from_dict(raw: dict[str, Any]) -> Instance:
    """Build an Instance from a pod in its JSON form."""
    metadata = raw.get("metadata") or {}
    status = raw.get("status") or {}

    components = tuple(
        ComponentStatus(
            name=str(cs.get("name", "")),
            restart_count=int(cs.get("restartCount") or 0),
            state=container_state_from_dict(cs.get("state")),
            ready=bool(cs.get("ready", False)),
        )
        for cs in status.get("containerStatuses") or []
    )
    conditions = tuple(
        PodCondition(
            type=str(c.get("type", "")),
            status=_parse_condition_status(c.get("status")),
        )
        for c in status.get("conditions") or []
    )
    return Instance(
        name=str(metadata.get("name", "")),
        namespace=str(metadata.get("namespace", "")),
        phase=_parse_phase(status.get("phase")),
        components=components,
        conditions=conditions,
    )


def raw_event_from_dict(raw: dict[str, Any]) -> RawEvent:
    """Build a RawEvent from a core/v1 Event in its JSON form.

    The timestamp is ``lastTimestamp``, falling back to ``eventTime``,
    ``firstTimestamp`` and finally the object's creation time.
    """
    metadata = raw.get("metadata") or {}
    timestamp = (
        _parse_time(raw.get("lastTimestamp"))
        or _parse_time(raw.get("eventTime"))
        or _parse_time(raw.get("firstTimestamp"))
        or _parse_time(metadata.get("creationTimestamp"))
        or UNKNOWN_TIME
    )
    return RawEvent(
        type=str(raw.get("type") or ""),
        reason=str(raw.get("reason") or ""),
        message=str(raw.get("message") or "").strip(),
        timestamp=timestamp,
    )


def _api_message(exc: ApiException) -> str:
    """Extract the Status message from an API error body, if there is one."""
    try:
        body = json.loads(exc.body)
    except (TypeError, ValueError):
        return str(exc.reason or exc.status)
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return str(exc.reason or exc.status)


# ---------------------------------------------------------------------------
# Client bootstrap
# ---------------------------------------------------------------------------


def resolve_namespace(kubeconfig: str = "", context: str = "", in_cluster: bool = False) -> str:
    """Namespace to use when none is given on the command line.

    The selected kubeconfig context's namespace, else the service account
    namespace when running in a pod, else ``default``.
    """
    if in_cluster:
        try:
            namespace = _SERVICE_ACCOUNT_NAMESPACE.read_text().strip()
        except OSError:
            namespace = ""
        return namespace or DEFAULT_NAMESPACE

    try:
        contexts, active = k8s_config.list_kube_config_contexts(config_file=kubeconfig or None)
    except (k8s_config.ConfigException, OSError) as exc:
        _logger.debug("kubeconfig_contexts_unavailable", error=str(exc))
        return DEFAULT_NAMESPACE

    selected = active
    if context:
        selected = next((c for c in contexts or [] if c.get("name") == context), active)
    namespace = ((selected or {}).get("context") or {}).get("namespace")
    return namespace or DEFAULT_NAMESPACE


def _load_incluster(configuration: k8s_client.Configuration) -> bool:
    """Load the service account config; False when not running in a pod."""
    try:
        k8s_config.load_incluster_config(client_configuration=configuration)
    except k8s_config.ConfigException as exc:
        _logger.debug("not running in cluster", error=str(exc))
        return False
    _logger.debug("k8s client configured from in-cluster service account")
    return True


class KubeClient:
    """Read-only CoreV1 client for one pod's status, events and logs."""

    def __init__(self, api_client: k8s_client.ApiClient, default_namespace: str = DEFAULT_NAMESPACE) -> None:
        self._api_client = api_client
        self._core = k8s_client.CoreV1Api(api_client)
        self.default_namespace = default_namespace

    @classmethod
    async def connect(cls, kubeconfig: str = "", context: str = "") -> KubeClient:
        """Configure from the in-cluster service account or a kubeconfig.

        An explicit *kubeconfig* or *context* skips in-cluster detection.

        Raises ClientConfigError if no usable configuration is found.
        """
        configuration = k8s_client.Configuration()
        in_cluster = not (kubeconfig or context) and _load_incluster(configuration)
        if not in_cluster:
            try:
                await k8s_config.load_kube_config(
                    config_file=kubeconfig or None,
                    context=context or None,
                    client_configuration=configuration,
                )
            except (k8s_config.ConfigException, OSError) as exc:
                raise ClientConfigError(f"failed to read kubeconfig: {exc}") from exc
            _logger.debug("k8s client configured from kubeconfig", context=context or "<current>")

        namespace = resolve_namespace(kubeconfig, context, in_cluster=in_cluster)
        return cls(k8s_client.ApiClient(configuration), default_namespace=namespace)

    async def close(self) -> None:
        await self._api_client.close()

    def _to_dict(self, obj: Any) -> dict[str, Any]:
        return self._api_client.sanitize_for_serialization(obj)

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    async def get_instance(self, namespace: str, name: str) -> Instance:
        try:
            pod = await self._core.read_namespaced_pod(name=name, namespace=namespace)
        except ApiException as exc:
            if exc.status == 404:
                raise InstanceNotFoundError(namespace, name) from exc
            raise ConnectivityError(
                f"failed to get pod {name} in namespace {namespace}: {_api_message(exc)}"
            ) from exc
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise ConnectivityError(f"failed to get pod {name} in namespace {namespace}: {exc}") from exc
        return instance_from_dict(self._to_dict(pod))

    async def list_events(self, namespace: str, name: str) -> list[RawEvent]:
        try:
            event_list = await self._core.list_namespaced_event(
                namespace=namespace,
                field_selector=f"involvedObject.name={name}",
            )
        except ApiException as exc:
            raise ConnectivityError(_api_message(exc)) from exc
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise ConnectivityError(str(exc)) from exc
        items = self._to_dict(event_list).get("items") or []
        return [raw_event_from_dict(item) for item in items]

    async def read_log(
        self,
        namespace: str,
        pod: str,
        container: str,
        *,
        previous: bool,
        tail_lines: int,
    ) -> str:
        try:
            body = await self._core.read_namespaced_pod_log(
                name=pod,
                namespace=namespace,
                container=container,
                previous=previous,
                tail_lines=tail_lines,
            )
        except ApiException as exc:
            message = _api_message(exc)
            if previous and exc.status == 400 and _PREVIOUS_LOG_MISSING in message:
                raise PreviousLogUnavailableError(message) from exc
            if exc.status == 404:
                raise LogNotFoundError(message) from exc
            raise LogUnreachableError(message) from exc
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise LogUnreachableError(str(exc)) from exc
        if isinstance(body, bytes):
            return body.decode("utf-8", errors="replace")
        return body or ""
