# src/kubesize/collectors/pod_collector.py
"""
Collects pod counts and container resource requests/limits (CPU, memory)
from the Kubernetes API.
"""

import logging
from typing import Optional

from ..models.capacity import PodResources
from ..utils.k8s_utils import exact_arithmetic, resource_quantity
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class PodCollector(BaseCollector):
    """
    Lists pods across all namespaces, optionally narrowed by a field selector.
    """

    async def _list(self, step: str, field_selector: Optional[str]):
        kwargs = self._request_kwargs()
        if field_selector:
            kwargs["field_selector"] = field_selector
        return await self._call(step, self._api.list_pod_for_all_namespaces(watch=False, **kwargs))

    async def count(self, field_selector: Optional[str] = None, step: str = "list pods") -> int:
        """Returns the number of pods matching ``field_selector`` (all pods when None)."""
        pod_list = await self._list(step, field_selector)
        logger.debug("Counted %d pods for selector %r.", len(pod_list.items), field_selector)
        return len(pod_list.items)

    async def collect(self, field_selector: Optional[str] = None, step: str = "list pods") -> PodResources:
        """
        Lists the matching pods and sums the requests and limits of their containers.

        Only ``spec.containers`` are counted; missing requests or limits count as zero.
        """
        pod_list = await self._list(step, field_selector)

        totals = PodResources(pod_count=len(pod_list.items))
        for pod in pod_list.items:
            if not pod.spec or not pod.spec.containers:
                continue

            for container in pod.spec.containers:
                resources = container.resources
                requests = (resources.requests if resources else None) or {}
                limits = (resources.limits if resources else None) or {}

                with exact_arithmetic():
                    totals.requests_cpu += resource_quantity(requests, "cpu")
                    totals.requests_memory += resource_quantity(requests, "memory")
                    totals.limits_cpu += resource_quantity(limits, "cpu")
                    totals.limits_memory += resource_quantity(limits, "memory")

        logger.debug(
            "Collected %d pods for selector %r: requests cpu=%s mem=%s",
            totals.pod_count,
            field_selector,
            totals.requests_cpu,
            totals.requests_memory,
        )
        return totals
