# src/clusterlens/core/processor.py

import logging
from typing import List, Optional

from ..collectors.resource_fetcher import ResourceFetcher
from ..models.cost import ClusterCostSummary, PricingTable
from ..models.density import NodeDensity
from ..models.node import NodeRecord
from ..models.snapshot import ResourceKind
from .aggregator import aggregate_nodes
from .density import aggregate_density
from .inventory import build_cost_inventory
from .owner_resolver import build_owner_index
from .pricing import estimate_cost

logger = logging.getLogger(__name__)

NODE_USAGE_KINDS = (ResourceKind.NODES, ResourceKind.PODS, ResourceKind.NODE_METRICS)
DENSITY_KINDS = (ResourceKind.NODES, ResourceKind.PODS, ResourceKind.REPLICA_SETS, ResourceKind.NODE_METRICS)
COST_KINDS = (
    ResourceKind.NODES,
    ResourceKind.PERSISTENT_VOLUMES,
    ResourceKind.STORAGE_CLASSES,
    ResourceKind.SERVICES,
)


class ClusterProcessor:
    """
    Runs the fetch-then-aggregate pipeline for each view.

    Every call fetches a fresh snapshot; nothing is cached between calls.
    Fetch failures propagate as FetchError.
    """

    def __init__(self, fetcher: ResourceFetcher, pricing: PricingTable):
        self.fetcher = fetcher
        self.pricing = pricing

    async def node_usage(self) -> List[NodeRecord]:
        logger.info("Fetching node resource usage information...")
        snapshot = await self.fetcher.fetch(NODE_USAGE_KINDS)
        records = aggregate_nodes(snapshot.nodes, snapshot.pods, snapshot.node_metrics)
        logger.info("Aggregated %d node(s).", len(records))
        return records

    async def pod_density(self, namespace: Optional[str] = None) -> List[NodeDensity]:
        """
        Builds the density view. A namespace filter restricts which pods are
        counted on each node, so node requests and limits cover that namespace
        only; capacity and usage stay node-wide.
        """
        logger.info("Fetching pod density information...")
        snapshot = await self.fetcher.fetch(DENSITY_KINDS)
        pods = snapshot.pods
        if namespace:
            pods = [pod for pod in pods if pod.metadata.namespace == namespace]
        owner_index = build_owner_index(snapshot.replica_sets)
        densities = aggregate_density(snapshot.nodes, pods, owner_index, snapshot.node_metrics)
        logger.info("Aggregated owners for %d node(s).", len(densities))
        return densities

    async def cost_estimate(self) -> ClusterCostSummary:
        logger.info("Fetching billable cluster inventory...")
        snapshot = await self.fetcher.fetch(COST_KINDS)
        inventory = build_cost_inventory(snapshot)
        logger.info("Analyzing cluster in region: %s", inventory.region or "unknown")
        return estimate_cost(inventory, self.pricing)

    async def close(self):
        await self.fetcher.close()
