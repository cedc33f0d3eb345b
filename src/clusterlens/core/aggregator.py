# src/clusterlens/core/aggregator.py
"""
Folds pod container requests and limits into per-node totals and joins live
usage from the metrics API.

All accumulation maps are local to a single call; nothing survives between
runs.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from ..models.node import NodeRecord, NodeUsage, ResourceTotals
from ..utils.k8s_utils import parse_cpu_cores, parse_memory_bytes

logger = logging.getLogger(__name__)

RUNNING_PHASE = "Running"
REGION_LABEL = "topology.kubernetes.io/region"
INSTANCE_TYPE_LABELS = ("node.kubernetes.io/instance-type", "beta.kubernetes.io/instance-type")


def node_instance_type(node) -> Optional[str]:
    labels = node.metadata.labels or {}
    for label in INSTANCE_TYPE_LABELS:
        if labels.get(label):
            return labels[label]
    return None


def node_region(node) -> Optional[str]:
    return (node.metadata.labels or {}).get(REGION_LABEL)


def scheduled_node(pod, known_nodes: Set[str]) -> Optional[str]:
    """
    Returns the node a running pod is scheduled on, or None when the pod
    should not be counted (not running, unscheduled, or on an unknown node).
    """
    if not pod.status or pod.status.phase != RUNNING_PHASE:
        return None
    node_name = pod.spec.node_name if pod.spec else None
    if not node_name or node_name not in known_nodes:
        return None
    return node_name


def pod_resource_totals(pod) -> ResourceTotals:
    """Sums CPU and memory requests and limits over a pod's containers."""
    totals = ResourceTotals()
    for container in pod.spec.containers or []:
        resources = container.resources
        if resources is None:
            continue
        requests = resources.requests or {}
        limits = resources.limits or {}
        totals.cpu_requests += parse_cpu_cores(requests.get("cpu"))
        totals.memory_requests += parse_memory_bytes(requests.get("memory"))
        totals.cpu_limits += parse_cpu_cores(limits.get("cpu"))
        totals.memory_limits += parse_memory_bytes(limits.get("memory"))
    return totals


def _capacity(node) -> dict:
    status = getattr(node, "status", None)
    return (status.capacity if status else None) or {}


def aggregate_nodes(
    nodes: Iterable,
    pods: Iterable,
    node_metrics: Optional[Dict[str, NodeUsage]] = None,
) -> List[NodeRecord]:
    """
    Builds one NodeRecord per node.

    Only running pods scheduled on a listed node contribute. When
    `node_metrics` is None (metrics unavailable) or lacks a node, that node's
    usage stays None.
    """
    nodes = list(nodes)
    totals: Dict[str, ResourceTotals] = {node.metadata.name: ResourceTotals() for node in nodes}
    pod_counts: Dict[str, int] = {name: 0 for name in totals}

    skipped = 0
    for pod in pods:
        node_name = scheduled_node(pod, totals.keys())
        if node_name is None:
            skipped += 1
            continue
        totals[node_name].add(pod_resource_totals(pod))
        pod_counts[node_name] += 1

    if skipped:
        logger.debug("Skipped %d pod(s) that are not running on a known node.", skipped)

    records: List[NodeRecord] = []
    for node in nodes:
        name = node.metadata.name
        capacity = _capacity(node)
        node_totals = totals[name]
        records.append(
            NodeRecord(
                name=name,
                instance_type=node_instance_type(node),
                region=node_region(node),
                cpu_capacity=parse_cpu_cores(capacity.get("cpu")),
                memory_capacity=parse_memory_bytes(capacity.get("memory")),
                cpu_requests=node_totals.cpu_requests,
                cpu_limits=node_totals.cpu_limits,
                memory_requests=node_totals.memory_requests,
                memory_limits=node_totals.memory_limits,
                pod_count=pod_counts[name],
                usage=(node_metrics or {}).get(name),
            )
        )
    return records
