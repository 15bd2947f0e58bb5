# src/kubesize/reporters/base_reporter.py
"""
Defines the abstract base class for all reporters and the shared column
layout and value formatting they use.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List, Tuple, Union

from ..models.capacity import CapacityData, NodeRoleCapacityData
from ..models.cli import DisplayOptions
from ..utils.k8s_utils import (
    ceil_int,
    format_cpu_readable,
    format_memory_readable,
    format_quantity,
    to_millicores,
)

# (field, column header, kind)
FIELDS: List[Tuple[str, str, str]] = [
    ("total_node_count", "NODES", "count"),
    ("total_ready_node_count", "READY", "count"),
    ("total_unready_node_count", "UNREADY", "count"),
    ("total_unschedulable_node_count", "UNSCHEDULABLE", "count"),
    ("total_capacity_pods", "PODS CAPACITY", "pods"),
    ("total_allocatable_pods", "PODS ALLOCATABLE", "pods"),
    ("total_pod_count", "PODS", "count"),
    ("total_non_term_pod_count", "NON-TERM PODS", "count"),
    ("total_available_pods", "PODS AVAILABLE", "count"),
    ("total_capacity_cpu", "CPU CAPACITY", "cpu"),
    ("total_allocatable_cpu", "CPU ALLOCATABLE", "cpu"),
    ("total_requests_cpu", "CPU REQUESTS", "cpu"),
    ("total_limits_cpu", "CPU LIMITS", "cpu"),
    ("total_available_cpu", "CPU AVAILABLE", "cpu"),
    ("total_capacity_memory", "MEMORY CAPACITY", "memory"),
    ("total_allocatable_memory", "MEMORY ALLOCATABLE", "memory"),
    ("total_requests_memory", "MEMORY REQUESTS", "memory"),
    ("total_limits_memory", "MEMORY LIMITS", "memory"),
    ("total_available_memory", "MEMORY AVAILABLE", "memory"),
]

_UNIT_SUFFIXES = {
    "raw": {"cpu": " (m)", "memory": " (bytes)"},
    "readable": {"cpu": " (cores)"},
    "default": {},
}

Report = Union[CapacityData, NodeRoleCapacityData]


def column_header(header: str, kind: str, units: str) -> str:
    return header + _UNIT_SUFFIXES[units].get(kind, "")


def format_value(kind: str, value: Any, units: str) -> Union[int, str]:
    """
    Formats one record value.

    ``raw`` gives integers (millicores, bytes), ``readable`` gives cores and
    GiB strings and ``default`` gives Kubernetes quantity strings.
    """
    if kind == "count":
        return int(value)
    value = Decimal(value)
    if units == "default":
        return format_quantity(value, binary=kind == "memory")
    if kind == "pods":
        return ceil_int(value)
    if kind == "cpu":
        return format_cpu_readable(value) if units == "readable" else to_millicores(value)
    if kind == "memory":
        return format_memory_readable(value) if units == "readable" else ceil_int(value)
    raise ValueError(f"Unknown value kind '{kind}'")


def format_record(record: CapacityData, units: str) -> Dict[str, Union[int, str]]:
    """Returns the record as an ordered dict of display values."""
    return {field: format_value(kind, getattr(record, field), units) for field, _, kind in FIELDS}


def format_report(data: Report, units: str) -> Dict[str, Any]:
    """Cluster reports become one flat dict, node-role reports a dict keyed by role in order."""
    if isinstance(data, NodeRoleCapacityData):
        return {role: format_record(data.roles[role], units) for role in data.role_names}
    return format_record(data, units)


class BaseReporter(ABC):
    """
    Abstract Base Class for all reporters.
    """

    @abstractmethod
    def report(self, data: Report, options: DisplayOptions):
        """
        Takes a finalized cluster or node-role report and presents it in a
        specific format (e.g., table, JSON, YAML).
        """
        pass
