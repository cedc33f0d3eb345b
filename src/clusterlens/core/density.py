# src/clusterlens/core/density.py
"""
Groups the running pods of each node by their logical owner.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..models.density import NodeDensity, OwnerKey, OwnerRecord
from ..models.node import NodeUsage, ResourceTotals
from .aggregator import aggregate_nodes, pod_resource_totals, scheduled_node
from .owner_resolver import OwnerIndex, resolve_owner

logger = logging.getLogger(__name__)


class _OwnerTotals(ResourceTotals):
    pod_count: int = 0


def aggregate_owners(
    pods: Iterable, known_nodes: Iterable[str], owner_index: OwnerIndex
) -> Dict[str, List[OwnerRecord]]:
    """
    Returns node name -> owners on that node, ranked by descending pod count.

    Ranking uses a stable sort, so owners with equal pod counts keep the
    order in which they were first seen.
    """
    groups: Dict[str, Dict[OwnerKey, _OwnerTotals]] = {name: {} for name in known_nodes}

    for pod in pods:
        node_name = scheduled_node(pod, groups.keys())
        if node_name is None:
            continue
        owner_name, owner_type = resolve_owner(pod, owner_index)
        key = OwnerKey(namespace=pod.metadata.namespace, owner_type=owner_type, owner_name=owner_name)
        totals = groups[node_name].setdefault(key, _OwnerTotals())
        totals.pod_count += 1
        totals.add(pod_resource_totals(pod))

    ranked: Dict[str, List[OwnerRecord]] = {}
    for node_name, owners in groups.items():
        records = [
            OwnerRecord(
                node=node_name,
                key=key,
                pod_count=totals.pod_count,
                cpu_requests=totals.cpu_requests,
                cpu_limits=totals.cpu_limits,
                memory_requests=totals.memory_requests,
                memory_limits=totals.memory_limits,
            )
            for key, totals in owners.items()
        ]
        ranked[node_name] = sorted(records, key=lambda record: record.pod_count, reverse=True)
    return ranked


def aggregate_density(
    nodes: Iterable,
    pods: Iterable,
    owner_index: OwnerIndex,
    node_metrics: Optional[Dict[str, NodeUsage]] = None,
) -> List[NodeDensity]:
    """Builds the density view: each node record with its ranked owners."""
    nodes = list(nodes)
    pods = list(pods)
    records = aggregate_nodes(nodes, pods, node_metrics)
    owners_by_node = aggregate_owners(pods, (record.name for record in records), owner_index)

    densities = [NodeDensity(node=record, owners=owners_by_node[record.name]) for record in records]
    for density in densities:
        if density.pod_count != density.node.pod_count:
            logger.error(
                "Pod count mismatch on node '%s': owners=%d node=%d",
                density.node.name,
                density.pod_count,
                density.node.pod_count,
            )
    return densities
