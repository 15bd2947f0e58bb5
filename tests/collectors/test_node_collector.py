# tests/collectors/test_node_collector.py

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from kubernetes_asyncio.client import models as k8s
from kubernetes_asyncio.client.rest import ApiException

from kubesize.collectors.node_collector import NodeCollector, derive_roles
from kubesize.core.exceptions import QueryError
from kubesize.utils.k8s_utils import parse_quantity


def test_derive_roles_from_node_role_labels():
    labels = {
        "node-role.kubernetes.io/master": "",
        "node-role.kubernetes.io/etcd": "",
        "kubernetes.io/hostname": "cp-1",
    }
    assert derive_roles(labels) == frozenset({"master", "etcd"})


def test_derive_roles_from_legacy_label():
    assert derive_roles({"kubernetes.io/role": "infra"}) == frozenset({"infra"})


def test_derive_roles_deduplicates():
    labels = {"node-role.kubernetes.io/worker": "", "kubernetes.io/role": "worker"}
    assert derive_roles(labels) == frozenset({"worker"})


def test_derive_roles_ignores_empty_suffix_and_value():
    labels = {"node-role.kubernetes.io/": "x", "kubernetes.io/role": ""}
    assert derive_roles(labels) == frozenset({"<none>"})


def test_derive_roles_without_labels():
    assert derive_roles(None) == frozenset({"<none>"})
    assert derive_roles({"topology.kubernetes.io/zone": "eu-west-1a"}) == frozenset({"<none>"})


async def test_collect_parses_nodes(fake_api, make_node):
    api = fake_api(
        nodes=[
            make_node(
                "worker-1",
                labels={"node-role.kubernetes.io/worker": ""},
                cpu="4",
                memory="8Gi",
                allocatable_cpu="3500m",
                allocatable_memory="7Gi",
            ),
            make_node("worker-2", ready=False, unschedulable=True),
        ]
    )

    nodes = await NodeCollector(api).collect()

    assert [n.name for n in nodes] == ["worker-1", "worker-2"]
    first, second = nodes
    assert first.roles == frozenset({"worker"})
    assert first.ready is True
    assert first.unschedulable is False
    assert first.capacity_cpu == 4
    assert first.allocatable_cpu == Decimal("3.5")
    assert first.allocatable_memory == parse_quantity("7Gi")
    assert first.allocatable_pods == 110
    assert second.roles == frozenset({"<none>"})
    assert second.ready is False
    assert second.unschedulable is True


async def test_collect_node_without_status_counts_zero():
    api = MagicMock()
    node = k8s.V1Node(metadata=k8s.V1ObjectMeta(name="bare"))
    api.list_node = AsyncMock(return_value=k8s.V1NodeList(items=[node]))

    nodes = await NodeCollector(api).collect()

    assert nodes[0].ready is False
    assert nodes[0].capacity_cpu == 0
    assert nodes[0].allocatable_memory == 0


async def test_collect_passes_request_timeout(fake_api, make_node):
    api = fake_api(nodes=[make_node("n1")])

    await NodeCollector(api, request_timeout=5).collect()

    api.list_node.assert_awaited_once_with(watch=False, _request_timeout=5)


async def test_collect_api_error_raises_query_error():
    api = MagicMock()
    api.list_node = AsyncMock(side_effect=ApiException(status=403, reason="Forbidden"))

    with pytest.raises(QueryError, match=r"failed to list nodes: \(403\) Forbidden"):
        await NodeCollector(api).collect()


async def test_collect_timeout_raises_query_error():
    api = MagicMock()
    api.list_node = AsyncMock(side_effect=asyncio.TimeoutError())

    with pytest.raises(QueryError, match="failed to list nodes: TimeoutError"):
        await NodeCollector(api).collect()
