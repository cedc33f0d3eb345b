"""
Defines the abstract base class for all reporters.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.cost import ClusterCostSummary
from ..models.density import NodeDensity
from ..models.node import NodeRecord


class BaseReporter(ABC):
    """
    Abstract Base Class for all reporters. One method per view.
    """

    @abstractmethod
    def report_node_usage(self, nodes: List[NodeRecord], sort_by: str = "name"):
        pass

    @abstractmethod
    def report_density(
        self, densities: List[NodeDensity], top: Optional[int] = None, namespace: Optional[str] = None
    ):
        pass

    @abstractmethod
    def report_cost(self, summary: ClusterCostSummary):
        pass
