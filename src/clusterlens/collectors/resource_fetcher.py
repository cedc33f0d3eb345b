# src/clusterlens/collectors/resource_fetcher.py
"""
Lists the raw cluster objects an aggregation needs, one concurrent list call
per resource kind, and returns them as a single ClusterSnapshot.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, Optional

from kubernetes_asyncio import client
from kubernetes_asyncio.client.rest import ApiException

from ..core.config import config
from ..core.exceptions import (
    ClusterAccessError,
    ClusterConnectionError,
    FetchError,
    ResourceNotFoundError,
)
from ..core.k8s_client import get_api_client
from ..models.node import NodeUsage
from ..models.snapshot import ClusterSnapshot, ResourceKind
from ..utils.k8s_utils import parse_cpu_cores, parse_memory_bytes

logger = logging.getLogger(__name__)

METRICS_GROUP = "metrics.k8s.io"
METRICS_VERSION = "v1beta1"

_SNAPSHOT_FIELDS = {
    ResourceKind.NODES: "nodes",
    ResourceKind.PODS: "pods",
    ResourceKind.REPLICA_SETS: "replica_sets",
    ResourceKind.PERSISTENT_VOLUMES: "persistent_volumes",
    ResourceKind.STORAGE_CLASSES: "storage_classes",
    ResourceKind.SERVICES: "services",
    ResourceKind.NODE_METRICS: "node_metrics",
}


class ResourceFetcher:
    """
    Fetches a point-in-time snapshot of the requested resource kinds.

    Every kind is listed in its own task inside one asyncio.TaskGroup; the
    end of the group is the barrier before any result is read. Hard kinds
    abort the run with a FetchError naming the kind; node metrics are soft
    and only mark usage as unavailable.
    """

    def __init__(
        self,
        core_api=None,
        apps_api=None,
        storage_api=None,
        custom_api=None,
        timeout: Optional[float] = None,
        metrics_enabled: Optional[bool] = None,
    ):
        self._core_api = core_api
        self._apps_api = apps_api
        self._storage_api = storage_api
        self._custom_api = custom_api
        self._api_client = None
        self._timeout = timeout if timeout is not None else config.FETCH_TIMEOUT_SECONDS
        self._metrics_enabled = config.METRICS_ENABLED if metrics_enabled is None else metrics_enabled

    async def _ensure_apis(self):
        """
        Lazily build the typed API wrappers that were not injected, sharing
        one ApiClient between them.
        """
        if all((self._core_api, self._apps_api, self._storage_api, self._custom_api)):
            return

        if self._api_client is None:
            self._api_client = await get_api_client()
            if self._api_client is None:
                raise ClusterConnectionError("kubeconfig", "no Kubernetes configuration could be loaded")
            logger.debug("ResourceFetcher initialized with centralized config.")

        self._core_api = self._core_api or client.CoreV1Api(self._api_client)
        self._apps_api = self._apps_api or client.AppsV1Api(self._api_client)
        self._storage_api = self._storage_api or client.StorageV1Api(self._api_client)
        self._custom_api = self._custom_api or client.CustomObjectsApi(self._api_client)

    async def fetch(self, kinds: Iterable[ResourceKind]) -> ClusterSnapshot:
        """
        Lists every requested kind concurrently.

        Raises:
            FetchError: the first failure among the hard kinds, naming that kind.
        """
        requested = list(dict.fromkeys(ResourceKind(kind) for kind in kinds))
        if ResourceKind.NODE_METRICS in requested and not self._metrics_enabled:
            logger.info("Node metrics disabled by configuration; usage will be unavailable.")
            requested.remove(ResourceKind.NODE_METRICS)

        await self._ensure_apis()

        tasks: Dict[ResourceKind, asyncio.Task] = {}
        try:
            async with asyncio.TaskGroup() as tg:
                for kind in requested:
                    tasks[kind] = tg.create_task(self._fetch_kind(kind), name=f"fetch-{kind.name.lower()}")
        except ExceptionGroup as group:
            failures = [e for e in group.exceptions if isinstance(e, FetchError)]
            if not failures:
                raise
            logger.debug("Fetch aborted; %d required kind(s) failed.", len(failures))
            raise failures[0]

        results = {_SNAPSHOT_FIELDS[kind]: task.result() for kind, task in tasks.items()}
        snapshot = ClusterSnapshot(**results)
        logger.debug(
            "Snapshot ready: %d node(s), %d pod(s), metrics %s.",
            len(snapshot.nodes),
            len(snapshot.pods),
            "available" if snapshot.metrics_available else "unavailable",
        )
        return snapshot

    async def _fetch_kind(self, kind: ResourceKind) -> Any:
        try:
            result = await self._list(kind)
        except Exception as e:
            if kind.is_soft:
                logger.warning("Could not fetch %s: %s. Usage data will be unavailable.", kind.value, e)
                return None
            raise self._classify_error(kind, e) from e

        logger.debug("Listed %d %s.", len(result), kind.value)
        return result

    async def _list(self, kind: ResourceKind) -> Any:
        timeout = self._timeout
        if kind is ResourceKind.NODES:
            return (await self._core_api.list_node(_request_timeout=timeout)).items
        if kind is ResourceKind.PODS:
            return (await self._core_api.list_pod_for_all_namespaces(_request_timeout=timeout)).items
        if kind is ResourceKind.REPLICA_SETS:
            return (await self._apps_api.list_replica_set_for_all_namespaces(_request_timeout=timeout)).items
        if kind is ResourceKind.PERSISTENT_VOLUMES:
            return (await self._core_api.list_persistent_volume(_request_timeout=timeout)).items
        if kind is ResourceKind.STORAGE_CLASSES:
            return (await self._storage_api.list_storage_class(_request_timeout=timeout)).items
        if kind is ResourceKind.SERVICES:
            return (await self._core_api.list_service_for_all_namespaces(_request_timeout=timeout)).items
        if kind is ResourceKind.NODE_METRICS:
            payload = await self._custom_api.list_cluster_custom_object(
                METRICS_GROUP, METRICS_VERSION, "nodes", _request_timeout=timeout
            )
            return self._parse_node_metrics(payload)
        raise ValueError(f"Unsupported resource kind: {kind}")

    @staticmethod
    def _parse_node_metrics(payload: Optional[dict]) -> Dict[str, NodeUsage]:
        """Converts a metrics.k8s.io NodeMetricsList payload into node name -> usage."""
        usage: Dict[str, NodeUsage] = {}
        for item in (payload or {}).get("items", []):
            name = (item.get("metadata") or {}).get("name")
            if not name:
                continue
            raw = item.get("usage") or {}
            usage[name] = NodeUsage(
                cpu_cores=parse_cpu_cores(raw.get("cpu")),
                memory_bytes=parse_memory_bytes(raw.get("memory")),
            )
        return usage

    @staticmethod
    def _classify_error(kind: ResourceKind, error: Exception) -> FetchError:
        if isinstance(error, FetchError):
            return error
        if isinstance(error, ApiException):
            reason = error.reason or str(error)
            if error.status == 404:
                return ResourceNotFoundError(kind.value, reason, error.status)
            if error.status in (401, 403):
                return ClusterAccessError(kind.value, reason, error.status)
            return ClusterConnectionError(kind.value, f"API returned {error.status}: {reason}", error.status)
        return ClusterConnectionError(kind.value, str(error) or type(error).__name__)

    async def close(self):
        """Close the Kubernetes API client if this fetcher created it."""
        if self._api_client:
            await self._api_client.close()
            logger.debug("ResourceFetcher Kubernetes client closed.")
            self._api_client = None
            self._core_api = self._apps_api = self._storage_api = self._custom_api = None
