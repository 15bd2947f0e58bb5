"""Collectors that read nodes and pods from the Kubernetes API."""

from .base_collector import BaseCollector
from .node_collector import NodeCollector, derive_roles
from .pod_collector import PodCollector

__all__ = ["BaseCollector", "NodeCollector", "PodCollector", "derive_roles"]
