"""Application bootstrap for kubetriage.

Wires components in dependency order for a single invocation:
config → logging → K8s client → triage engine.  The client is always
closed on the way out, whether the triage succeeded or raised.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from kubetriage import __version__
from kubetriage.config import load_config
from kubetriage.kube.client import KubeClient
from kubetriage.models.config import TriageConfig
from kubetriage.models.report import TriageOptions, TriageOutcome
from kubetriage.observability.logging import bind_invocation, get_logger, setup_logging
from kubetriage.triage.engine import TriageEngine

if TYPE_CHECKING:
    import structlog


class TriageApp:
    """Application root.  Owns the Kubernetes client and the triage engine.

    ``stop()`` is safe to call on an app that never started.
    """

    def __init__(self, config: TriageConfig | None = None) -> None:
        self.config = config
        self._client: KubeClient | None = None
        self._engine: TriageEngine | None = None
        self._log: structlog.stdlib.BoundLogger | None = None

    async def start(self) -> None:
        """Load configuration, configure logging and connect to the cluster.

        Raises ClientConfigError if no kubeconfig or in-cluster config is usable.
        """
        if self.config is None:
            self.config = load_config()

        setup_logging(self.config.log.level)
        self._log = get_logger("app")
        self._log.debug("kubetriage starting", version=__version__)

        self._client = await KubeClient.connect(
            kubeconfig=self.config.kube.kubeconfig,
            context=self.config.kube.context,
        )
        self._engine = TriageEngine(
            instances=self._client,
            events=self._client,
            logs=self._client,
            config=self.config,
        )

    async def run(self, options: TriageOptions) -> TriageOutcome:
        """Triage one pod; an empty namespace resolves to the client default."""
        assert self._client is not None
        assert self._engine is not None
        if not options.namespace:
            options = dataclasses.replace(options, namespace=self._client.default_namespace)
        bind_invocation(options.namespace, options.pod_name)
        return await self._engine.run(options)

    async def stop(self) -> None:
        if self._client is None:
            return
        log = self._log or get_logger("app")
        try:
            await self._client.close()
        except Exception as exc:  # noqa: BLE001
            log.debug("k8s client close raised (non-fatal)", error=str(exc))
        self._client = None
        self._engine = None


async def run_triage(options: TriageOptions, config: TriageConfig | None = None) -> TriageOutcome:
    """Run a complete invocation: start, triage, stop."""
    app = TriageApp(config)
    try:
        await app.start()
        return await app.run(options)
    finally:
        await app.stop()
