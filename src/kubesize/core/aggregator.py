# src/kubesize/core/aggregator.py
"""
Builds capacity records from the nodes and pods of a cluster.

Both reports issue their API calls strictly one after another and own the
record(s) they build. Any failed call propagates and no record is returned.
"""

import logging
from typing import Optional

from kubernetes_asyncio import client

from ..collectors.node_collector import NodeCollector
from ..collectors.pod_collector import PodCollector
from ..models.capacity import CapacityData, NodeRoleCapacityData
from ..utils.selectors import node_pods_selector, non_terminated_pods_selector

logger = logging.getLogger(__name__)


async def aggregate_cluster(api: client.CoreV1Api, request_timeout: Optional[float] = None) -> CapacityData:
    """
    Aggregates the whole cluster into a single CapacityData.

    The raw pod count includes terminated pods; requests and limits only come
    from non-terminated pods, which may include pending pods that are not yet
    bound to a node.
    """
    node_collector = NodeCollector(api, request_timeout)
    pod_collector = PodCollector(api, request_timeout)

    data = CapacityData()
    for node in await node_collector.collect():
        data.add_node(node)

    total_pod_count = await pod_collector.count(step="list pods")
    non_terminated = await pod_collector.collect(
        field_selector=non_terminated_pods_selector(),
        step="list non-terminated pods",
    )
    data.add_pods(total_pod_count, non_terminated)
    data.finalize()

    logger.info(
        "Cluster: %d nodes (%d ready), %d pods (%d non-terminated).",
        data.total_node_count,
        data.total_ready_node_count,
        data.total_pod_count,
        data.total_non_term_pod_count,
    )
    return data


async def aggregate_node_roles(
    api: client.CoreV1Api, request_timeout: Optional[float] = None
) -> NodeRoleCapacityData:
    """
    Aggregates the cluster into one CapacityData per node role.

    Every node contributes its full figures to each of its roles, so a node
    with two roles is counted in two records. Pods are queried per node, which
    leaves unbound pending pods out of every role.
    """
    node_collector = NodeCollector(api, request_timeout)
    pod_collector = PodCollector(api, request_timeout)

    data = NodeRoleCapacityData()
    for node in await node_collector.collect():
        total_pod_count = await pod_collector.count(
            field_selector=node_pods_selector(node.name),
            step=f"list pods on node {node.name}",
        )
        non_terminated = await pod_collector.collect(
            field_selector=node_pods_selector(node.name, non_terminated=True),
            step=f"list non-terminated pods on node {node.name}",
        )
        data.add_node(node, total_pod_count, non_terminated)
    data.finalize()

    logger.info("Aggregated %d node roles: %s", len(data.role_names), ", ".join(data.role_names))
    return data
