# src/kubesize/cli/__init__.py
"""
kubesize CLI Package

This package exposes the top-level Typer `app` so tests and the console
entrypoint can import `kubesize.cli.app`.
"""

import logging

from ..core.aggregator import aggregate_cluster, aggregate_node_roles
from .main import app

logger = logging.getLogger(__name__)

__all__ = ["app", "aggregate_cluster", "aggregate_node_roles"]
