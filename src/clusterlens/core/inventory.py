# src/clusterlens/core/inventory.py
"""
Derives the billable inventory (instances, EBS volumes, load balancers)
from a cluster snapshot.
"""

import logging
from collections import Counter, defaultdict
from typing import Dict

from ..models.cost import CostInventory
from ..models.snapshot import ClusterSnapshot
from ..utils.k8s_utils import GIB, parse_memory_bytes
from .aggregator import node_instance_type, node_region

logger = logging.getLogger(__name__)

EBS_PROVISIONERS = ("ebs.csi.aws.com", "kubernetes.io/aws-ebs")
DEFAULT_EBS_VOLUME_TYPE = "gp3"
LB_TYPE_ANNOTATION = "service.beta.kubernetes.io/aws-load-balancer-type"


def _storage_class_volume_types(storage_classes) -> Dict[str, str]:
    """Maps EBS-backed storage class names to their volume type."""
    volume_types = {}
    for sc in storage_classes:
        if sc.provisioner in EBS_PROVISIONERS:
            parameters = sc.parameters or {}
            volume_types[sc.metadata.name] = parameters.get("type") or DEFAULT_EBS_VOLUME_TYPE
    return volume_types


def _load_balancer_type(service) -> str:
    annotation = ((service.metadata.annotations or {}).get(LB_TYPE_ANNOTATION) or "").lower()
    if "nlb" in annotation:
        return "network"
    if "alb" in annotation:
        return "application"
    return "classic"


def build_cost_inventory(snapshot: ClusterSnapshot) -> CostInventory:
    region = node_region(snapshot.nodes[0]) if snapshot.nodes else None

    instance_counts: Counter = Counter()
    for node in snapshot.nodes:
        instance_type = node_instance_type(node)
        if instance_type:
            instance_counts[instance_type] += 1
        else:
            logger.debug("Node '%s' has no instance-type label; not priced.", node.metadata.name)

    volume_types = _storage_class_volume_types(snapshot.storage_classes)
    volume_sizes: Dict[str, int] = defaultdict(int)
    for pv in snapshot.persistent_volumes:
        spec = pv.spec
        volume_type = volume_types.get(spec.storage_class_name) if spec and spec.storage_class_name else None
        if not volume_type:
            continue
        # Whole GiB per volume.
        volume_sizes[volume_type] += parse_memory_bytes((spec.capacity or {}).get("storage")) // GIB

    lb_counts: Counter = Counter(
        _load_balancer_type(svc) for svc in snapshot.services if svc.spec and svc.spec.type == "LoadBalancer"
    )

    return CostInventory(
        region=region,
        instance_counts=dict(instance_counts),
        volume_sizes_gb=dict(volume_sizes),
        load_balancer_counts=dict(lb_counts),
    )
