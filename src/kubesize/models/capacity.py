# src/kubesize/models/capacity.py
"""
Pydantic models shared by both report generators.

``CapacityData`` is the accumulator every report fills in a single pass and
finalizes once. ``NodeCapacity`` and ``PodResources`` are the parsed views of
the Kubernetes objects that feed it.
"""

from decimal import ROUND_CEILING, Decimal
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from ..utils.k8s_utils import exact_arithmetic

NO_ROLE = "<none>"


class NodeCapacity(BaseModel):
    """
    Capacity view of a single Kubernetes node.

    Attributes:
        name: Node name
        roles: Roles derived from the node labels (``<none>`` when unlabeled)
        ready: True when the node reports a Ready=True condition
        unschedulable: Mirrors ``spec.unschedulable``
        capacity_*: Declared capacity (pods count, cpu cores, memory bytes)
        allocatable_*: Allocatable capacity (pods count, cpu cores, memory bytes)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Node name")
    roles: frozenset[str] = Field(default_factory=lambda: frozenset({NO_ROLE}), description="Node roles")
    ready: bool = Field(False, description="Ready condition is True")
    unschedulable: bool = Field(False, description="Node is cordoned")
    capacity_pods: Decimal = Field(Decimal(0), description="Pod capacity")
    capacity_cpu: Decimal = Field(Decimal(0), description="CPU capacity in cores")
    capacity_memory: Decimal = Field(Decimal(0), description="Memory capacity in bytes")
    allocatable_pods: Decimal = Field(Decimal(0), description="Allocatable pods")
    allocatable_cpu: Decimal = Field(Decimal(0), description="Allocatable CPU in cores")
    allocatable_memory: Decimal = Field(Decimal(0), description="Allocatable memory in bytes")


class PodResources(BaseModel):
    """Summed container requests and limits over a set of non-terminated pods."""

    pod_count: int = 0
    requests_cpu: Decimal = Decimal(0)
    requests_memory: Decimal = Decimal(0)
    limits_cpu: Decimal = Decimal(0)
    limits_memory: Decimal = Decimal(0)


class CapacityData(BaseModel):
    """
    Aggregated size and capacity figures for a cluster or a node role.

    Counters and quantities are only ever added during accumulation. The
    derived fields (unready nodes and everything ``total_available_*``) are
    set by ``finalize`` and may be negative when the cluster is overcommitted.
    """

    total_node_count: int = 0
    total_ready_node_count: int = 0
    total_unready_node_count: int = 0
    total_unschedulable_node_count: int = 0
    total_pod_count: int = 0
    total_non_term_pod_count: int = 0
    total_available_pods: int = 0

    total_capacity_pods: Decimal = Decimal(0)
    total_capacity_cpu: Decimal = Decimal(0)
    total_capacity_memory: Decimal = Decimal(0)

    total_allocatable_pods: Decimal = Decimal(0)
    total_allocatable_cpu: Decimal = Decimal(0)
    total_allocatable_memory: Decimal = Decimal(0)

    total_requests_cpu: Decimal = Decimal(0)
    total_requests_memory: Decimal = Decimal(0)

    total_limits_cpu: Decimal = Decimal(0)
    total_limits_memory: Decimal = Decimal(0)

    total_available_cpu: Decimal = Decimal(0)
    total_available_memory: Decimal = Decimal(0)

    def add_node(self, node: NodeCapacity) -> None:
        """Adds a node's counters, capacity and allocatable quantities."""
        self.total_node_count += 1
        if node.ready:
            self.total_ready_node_count += 1
        if node.unschedulable:
            self.total_unschedulable_node_count += 1
        with exact_arithmetic():
            self.total_capacity_pods += node.capacity_pods
            self.total_capacity_cpu += node.capacity_cpu
            self.total_capacity_memory += node.capacity_memory
            self.total_allocatable_pods += node.allocatable_pods
            self.total_allocatable_cpu += node.allocatable_cpu
            self.total_allocatable_memory += node.allocatable_memory

    def add_pods(self, total_pod_count: int, non_terminated: PodResources) -> None:
        """Adds a raw pod count and the non-terminated pod totals."""
        self.total_pod_count += total_pod_count
        self.total_non_term_pod_count += non_terminated.pod_count
        with exact_arithmetic():
            self.total_requests_cpu += non_terminated.requests_cpu
            self.total_requests_memory += non_terminated.requests_memory
            self.total_limits_cpu += non_terminated.limits_cpu
            self.total_limits_memory += non_terminated.limits_memory

    def finalize(self) -> "CapacityData":
        """Computes the derived fields. Safe to call more than once."""
        self.total_unready_node_count = self.total_node_count - self.total_ready_node_count
        allocatable_pods = int(self.total_allocatable_pods.to_integral_value(rounding=ROUND_CEILING))
        self.total_available_pods = allocatable_pods - self.total_non_term_pod_count
        with exact_arithmetic():
            self.total_available_cpu = self.total_allocatable_cpu - self.total_requests_cpu
            self.total_available_memory = self.total_allocatable_memory - self.total_requests_memory
        return self


class NodeRoleCapacityData(BaseModel):
    """Capacity records keyed by node role, plus the roles in display order."""

    roles: Dict[str, CapacityData] = Field(default_factory=dict)
    role_names: List[str] = Field(default_factory=list)

    def add_node(self, node: NodeCapacity, total_pod_count: int, non_terminated: PodResources) -> None:
        """Fans a node's full contribution out to every role it carries."""
        for role in node.roles:
            record = self.roles.get(role)
            if record is None:
                record = self.roles[role] = CapacityData()
            record.add_node(node)
            record.add_pods(total_pod_count, non_terminated)

    def finalize(self) -> "NodeRoleCapacityData":
        for record in self.roles.values():
            record.finalize()
        self.role_names = sorted(self.roles)
        return self
