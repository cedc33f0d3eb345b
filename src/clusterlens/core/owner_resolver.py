# src/clusterlens/core/owner_resolver.py
"""
Resolves the logical workload that owns a pod.

A pod created by a Deployment references its ReplicaSet, not the
Deployment. The ReplicaSet -> Deployment hop is answered from an index built
once per run, so resolution never touches the network.
"""

import logging
from typing import Dict, Iterable, Tuple

from ..models.density import OwnerType

logger = logging.getLogger(__name__)

OwnerIndex = Dict[Tuple[str, str], str]

UNKNOWN_KIND = "Unknown"


def build_owner_index(replica_sets: Iterable) -> OwnerIndex:
    """Maps (namespace, replicaset name) to the name of the Deployment owning it."""
    index: OwnerIndex = {}
    for rs in replica_sets:
        meta = rs.metadata
        for owner in meta.owner_references or []:
            if owner.kind == OwnerType.DEPLOYMENT.value:
                index[(meta.namespace, meta.name)] = owner.name
                break
    logger.debug("Indexed %d ReplicaSet(s) owned by Deployments.", len(index))
    return index


def resolve_owner(pod, owner_index: OwnerIndex) -> Tuple[str, str]:
    """
    Returns (owner_name, owner_type) for a pod.

    Only the first owner reference is considered. A ReplicaSet missing from
    the index resolves to itself; kinds other than ReplicaSet are returned
    verbatim; a pod with no owner is its own owner.
    """
    meta = pod.metadata
    references = meta.owner_references or []
    if not references:
        return meta.name, OwnerType.POD.value

    owner = references[0]
    kind = owner.kind or UNKNOWN_KIND
    name = owner.name or meta.name

    if kind == OwnerType.REPLICA_SET.value:
        deployment = owner_index.get((meta.namespace, name))
        if deployment is not None:
            return deployment, OwnerType.DEPLOYMENT.value
        return name, OwnerType.REPLICA_SET.value

    return name, kind
