# src/clusterlens/core/factory.py
"""
Factory functions to instantiate the ClusterProcessor and its collaborators.
"""

import logging
from functools import lru_cache

from ..collectors.resource_fetcher import ResourceFetcher
from ..data.pricing import load_pricing_table
from ..models.cost import PricingTable
from .config import config
from .processor import ClusterProcessor

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_pricing_table() -> PricingTable:
    """
    Loads the price table once per process; it is read-only reference data.
    """
    if config.PRICING_FILE:
        logger.info("Using pricing file %s.", config.PRICING_FILE)
    return load_pricing_table(config.PRICING_FILE)


def get_processor() -> ClusterProcessor:
    """
    Returns a ClusterProcessor with a fresh ResourceFetcher. The caller owns
    it and must close it.
    """
    logger.debug("Initializing resource fetcher and processor...")
    return ClusterProcessor(fetcher=ResourceFetcher(), pricing=get_pricing_table())
