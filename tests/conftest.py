# tests/conftest.py

from unittest.mock import AsyncMock, MagicMock

import pytest
from kubernetes_asyncio.client import models as k8s

from kubesize.utils.selectors import parse_field_selector


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Keeps the config module predictable and isolated from the actual
    environment for every test.
    """
    for key in ("KUBECONFIG", "KUBESIZE_CONTEXT", "KUBESIZE_REQUEST_TIMEOUT", "KUBESIZE_OUTPUT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


@pytest.fixture
def make_node():
    """Factory for V1Node objects with capacity, allocatable and readiness."""

    def _make_node(
        name,
        labels=None,
        cpu="4",
        memory="8Gi",
        pods="110",
        allocatable_cpu=None,
        allocatable_memory=None,
        allocatable_pods=None,
        ready=True,
        unschedulable=False,
    ):
        conditions = [
            k8s.V1NodeCondition(type="MemoryPressure", status="False"),
            k8s.V1NodeCondition(type="Ready", status="True" if ready else "False"),
        ]
        return k8s.V1Node(
            metadata=k8s.V1ObjectMeta(name=name, labels=labels or {}),
            spec=k8s.V1NodeSpec(unschedulable=unschedulable or None),
            status=k8s.V1NodeStatus(
                capacity={"cpu": cpu, "memory": memory, "pods": pods},
                allocatable={
                    "cpu": allocatable_cpu or cpu,
                    "memory": allocatable_memory or memory,
                    "pods": allocatable_pods or pods,
                },
                conditions=conditions,
            ),
        )

    return _make_node


@pytest.fixture
def make_pod():
    """Factory for V1Pod objects. ``containers`` is a list of (requests, limits) tuples."""

    def _make_pod(name, node_name=None, phase="Running", containers=None, namespace="default"):
        specs = [
            k8s.V1Container(
                name=f"{name}-c{i}",
                resources=k8s.V1ResourceRequirements(requests=requests, limits=limits),
            )
            for i, (requests, limits) in enumerate(containers or [])
        ]
        return k8s.V1Pod(
            metadata=k8s.V1ObjectMeta(name=name, namespace=namespace),
            spec=k8s.V1PodSpec(containers=specs, node_name=node_name),
            status=k8s.V1PodStatus(phase=phase),
        )

    return _make_pod


class FakeCoreV1Api:
    """
    Stand-in for CoreV1Api serving a fixed set of nodes and pods.

    Pod listings honour ``spec.nodeName`` and ``status.phase`` field selectors
    the way the API server does.
    """

    _FIELD_GETTERS = {
        "spec.nodeName": lambda pod: pod.spec.node_name or "",
        "status.phase": lambda pod: pod.status.phase or "",
    }

    def __init__(self, nodes, pods):
        self.nodes = nodes
        self.pods = pods
        self.list_node = AsyncMock(side_effect=self._list_node)
        self.list_pod_for_all_namespaces = AsyncMock(side_effect=self._list_pods)
        self.api_client = MagicMock()
        self.api_client.close = AsyncMock()

    def _list_node(self, **kwargs):
        return k8s.V1NodeList(items=list(self.nodes))

    def _list_pods(self, field_selector=None, **kwargs):
        items = list(self.pods)
        for key, operator, value in parse_field_selector(field_selector or ""):
            getter = self._FIELD_GETTERS[key]
            if operator == "!=":
                items = [pod for pod in items if getter(pod) != value]
            else:
                items = [pod for pod in items if getter(pod) == value]
        return k8s.V1PodList(items=items)


@pytest.fixture
def fake_api():
    """Factory building a FakeCoreV1Api from nodes and pods."""

    def _fake_api(nodes=(), pods=()):
        return FakeCoreV1Api(list(nodes), list(pods))

    return _fake_api
