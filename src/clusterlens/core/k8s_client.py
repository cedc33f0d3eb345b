# src/clusterlens/core/k8s_client.py
"""
Loads the Kubernetes client configuration once per process and hands out
ApiClient instances built from it.
"""

import asyncio
import logging
from typing import Optional

from kubernetes_asyncio import client, config

from .config import config as app_config

logger = logging.getLogger(__name__)

IN_CLUSTER = "in-cluster"
KUBECONFIG = "kubeconfig"

# Guards the one-time load when several fetchers start together.
_CONFIG_LOCK = asyncio.Lock()
_CONFIG_SOURCE: Optional[str] = None


async def _load_config() -> Optional[str]:
    """
    Tries service account credentials, then the local kubeconfig with
    KUBE_CONTEXT. Returns the source that worked, or None.
    """
    try:
        config.load_incluster_config()
        return IN_CLUSTER
    except config.ConfigException:
        logger.debug("Not running inside a cluster; trying kubeconfig.")
    except Exception as e:
        logger.warning(f"Unexpected error loading in-cluster config: {e}")

    context = app_config.KUBE_CONTEXT
    try:
        await config.load_kube_config(context=context)
        return KUBECONFIG
    except config.ConfigException as e:
        logger.warning("Could not load kubeconfig (context=%s): %s", context or "current", e)
    except Exception as e:
        logger.warning(f"Unexpected error loading kubeconfig: {e}")
    return None


async def ensure_k8s_config() -> bool:
    """
    Loads the client configuration on first use.

    Returns:
        bool: True when a configuration is loaded, False when none could be found.
    """
    global _CONFIG_SOURCE

    if _CONFIG_SOURCE is not None:
        return True

    async with _CONFIG_LOCK:
        if _CONFIG_SOURCE is None:
            _CONFIG_SOURCE = await _load_config()
            if _CONFIG_SOURCE is not None:
                logger.info("Loaded Kubernetes configuration from %s.", _CONFIG_SOURCE)

    return _CONFIG_SOURCE is not None


async def get_api_client() -> Optional[client.ApiClient]:
    """Returns a new ApiClient, or None when no configuration is available."""
    if await ensure_k8s_config():
        return client.ApiClient()
    logger.warning("Failed to load any Kubernetes configuration.")
    return None
