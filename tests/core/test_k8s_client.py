# tests/core/test_k8s_client.py

from unittest.mock import AsyncMock, MagicMock

import pytest

from clusterlens.core import k8s_client


@pytest.fixture(autouse=True)
def reset_config_source(monkeypatch):
    monkeypatch.setattr(k8s_client, "_CONFIG_SOURCE", None)


@pytest.fixture
def mock_config(mocker):
    mocked = mocker.patch.object(k8s_client, "config")
    mocked.ConfigException = type("ConfigException", (Exception,), {})
    mocked.load_kube_config = AsyncMock()
    return mocked


@pytest.mark.asyncio
async def test_in_cluster_config_is_preferred(mock_config):
    assert await k8s_client.ensure_k8s_config() is True

    mock_config.load_incluster_config.assert_called_once()
    mock_config.load_kube_config.assert_not_called()
    assert k8s_client._CONFIG_SOURCE == k8s_client.IN_CLUSTER


@pytest.mark.asyncio
async def test_falls_back_to_kubeconfig_with_context(mocker, mock_config):
    mock_config.load_incluster_config.side_effect = mock_config.ConfigException("not in cluster")
    mocker.patch.object(k8s_client.app_config, "KUBE_CONTEXT", "staging")

    assert await k8s_client.ensure_k8s_config() is True

    mock_config.load_kube_config.assert_awaited_once_with(context="staging")
    assert k8s_client._CONFIG_SOURCE == k8s_client.KUBECONFIG


@pytest.mark.asyncio
async def test_config_is_loaded_once(mock_config):
    await k8s_client.ensure_k8s_config()
    await k8s_client.ensure_k8s_config()

    mock_config.load_incluster_config.assert_called_once()


@pytest.mark.asyncio
async def test_no_config_returns_no_client(mock_config):
    mock_config.load_incluster_config.side_effect = mock_config.ConfigException("not in cluster")
    mock_config.load_kube_config.side_effect = mock_config.ConfigException("no kubeconfig")

    assert await k8s_client.get_api_client() is None
    assert k8s_client._CONFIG_SOURCE is None


@pytest.mark.asyncio
async def test_client_is_built_once_config_loaded(mocker):
    mocker.patch.object(k8s_client, "_CONFIG_SOURCE", k8s_client.KUBECONFIG)
    mock_client = mocker.patch.object(k8s_client, "client")
    mock_client.ApiClient.return_value = MagicMock()

    assert await k8s_client.get_api_client() is mock_client.ApiClient.return_value
