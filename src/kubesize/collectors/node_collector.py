# src/kubesize/collectors/node_collector.py

import logging
from typing import Dict, List, Optional

from ..models.capacity import NO_ROLE, NodeCapacity
from ..utils.k8s_utils import resource_quantity
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"
LEGACY_ROLE_LABEL = "kubernetes.io/role"


def derive_roles(labels: Optional[Dict[str, str]]) -> frozenset:
    """
    Derive the set of roles for a node from its labels.

    ``node-role.kubernetes.io/<role>`` contributes ``<role>`` when the suffix is
    non-empty, and ``kubernetes.io/role=<role>`` contributes its value when
    non-empty. A node without any role gets ``<none>``.
    """
    roles = set()
    for key, value in (labels or {}).items():
        if key.startswith(ROLE_LABEL_PREFIX):
            role = key[len(ROLE_LABEL_PREFIX) :]
            if role:
                roles.add(role)
        elif key == LEGACY_ROLE_LABEL and value:
            roles.add(value)
    return frozenset(roles or {NO_ROLE})


class NodeCollector(BaseCollector):
    """Collects node readiness, schedulability and capacity from the Kubernetes cluster."""

    async def collect(self) -> List[NodeCapacity]:
        """
        Lists every node in the cluster.

        Returns:
            list: One NodeCapacity per node, in API order.

        Raises:
            QueryError: If the node listing fails.
        """
        node_list = await self._call("list nodes", self._api.list_node(watch=False, **self._request_kwargs()))
        if not node_list.items:
            logger.warning("No nodes found in the cluster.")

        nodes = [self._parse_node(node) for node in node_list.items]
        logger.info("Collected %d nodes.", len(nodes))
        return nodes

    def _parse_node(self, node) -> NodeCapacity:
        status = node.status
        capacity = (status.capacity if status else None) or {}
        allocatable = (status.allocatable if status else None) or {}

        parsed = NodeCapacity(
            name=node.metadata.name,
            roles=derive_roles(node.metadata.labels),
            ready=self._is_ready(node),
            unschedulable=bool(node.spec and node.spec.unschedulable),
            capacity_pods=resource_quantity(capacity, "pods"),
            capacity_cpu=resource_quantity(capacity, "cpu"),
            capacity_memory=resource_quantity(capacity, "memory"),
            allocatable_pods=resource_quantity(allocatable, "pods"),
            allocatable_cpu=resource_quantity(allocatable, "cpu"),
            allocatable_memory=resource_quantity(allocatable, "memory"),
        )
        logger.debug(
            " -> Node '%s': roles=%s, ready=%s, unschedulable=%s, cpu=%s, mem=%s",
            parsed.name,
            ",".join(sorted(parsed.roles)),
            parsed.ready,
            parsed.unschedulable,
            parsed.allocatable_cpu,
            parsed.allocatable_memory,
        )
        return parsed

    @staticmethod
    def _is_ready(node) -> bool:
        conditions = (node.status.conditions if node.status else None) or []
        return any(c.type == "Ready" and c.status == "True" for c in conditions)
