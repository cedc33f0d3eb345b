# tests/conftest.py

from decimal import Decimal

import pytest
from kubernetes_asyncio.client import models as k8s

from clusterlens.models.node import NodeUsage


def build_node(name, cpu="4", memory="8Gi", labels=None):
    """Builds a V1Node with the given capacity and labels."""
    return k8s.V1Node(
        metadata=k8s.V1ObjectMeta(name=name, labels=labels or {}),
        status=k8s.V1NodeStatus(capacity={"cpu": cpu, "memory": memory}),
    )


def build_pod(
    name,
    node="node-1",
    namespace="default",
    phase="Running",
    requests=None,
    limits=None,
    owner_kind=None,
    owner_name=None,
    containers=1,
):
    """
    Builds a V1Pod with `containers` identical containers, each carrying the
    given requests/limits, optionally owned by a single controller.
    """
    owner_references = None
    if owner_kind:
        owner_references = [
            k8s.V1OwnerReference(api_version="apps/v1", kind=owner_kind, name=owner_name, uid=f"uid-{owner_name}")
        ]
    return k8s.V1Pod(
        metadata=k8s.V1ObjectMeta(name=name, namespace=namespace, owner_references=owner_references),
        spec=k8s.V1PodSpec(
            node_name=node,
            containers=[
                k8s.V1Container(
                    name=f"c{i}",
                    resources=k8s.V1ResourceRequirements(requests=requests, limits=limits),
                )
                for i in range(containers)
            ],
        ),
        status=k8s.V1PodStatus(phase=phase),
    )


def build_replica_set(name, namespace="default", deployment=None):
    owner_references = None
    if deployment:
        owner_references = [
            k8s.V1OwnerReference(api_version="apps/v1", kind="Deployment", name=deployment, uid=f"uid-{deployment}")
        ]
    return k8s.V1ReplicaSet(metadata=k8s.V1ObjectMeta(name=name, namespace=namespace, owner_references=owner_references))


@pytest.fixture
def make_node():
    return build_node


@pytest.fixture
def make_pod():
    return build_pod


@pytest.fixture
def make_replica_set():
    return build_replica_set


@pytest.fixture
def make_usage():
    def _make(cpu="1", memory_gib=1):
        return NodeUsage(cpu_cores=Decimal(cpu), memory_bytes=memory_gib * 1024**3)

    return _make
