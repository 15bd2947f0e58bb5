# src/kubesize/collectors/base_collector.py
"""
This module defines the abstract base class for the Kubernetes collectors.
Collectors share one API client and one request timeout, and turn API
failures into QueryError so a report is never built from partial data.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Optional, TypeVar

import aiohttp
from kubernetes_asyncio import client
from kubernetes_asyncio.client.rest import ApiException

from ..core.exceptions import QueryError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseCollector(ABC):
    """
    Abstract Base Class for the node and pod collectors.
    """

    def __init__(self, api: client.CoreV1Api, request_timeout: Optional[float] = None):
        self._api = api
        self._request_timeout = request_timeout

    def _request_kwargs(self) -> dict:
        if self._request_timeout:
            return {"_request_timeout": self._request_timeout}
        return {}

    async def _call(self, step: str, request: Awaitable[T]) -> T:
        """Awaits an API request, wrapping any failure in a QueryError naming ``step``."""
        try:
            return await request
        except ApiException as e:
            logger.debug("Kubernetes API error during '%s': %s", step, e)
            raise QueryError(f"failed to {step}: ({e.status}) {e.reason}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug("Transport error during '%s': %r", step, e)
            raise QueryError(f"failed to {step}: {str(e) or type(e).__name__}") from e

    @abstractmethod
    async def collect(self, *args, **kwargs) -> Any:
        """
        Fetches objects from the API and returns them parsed into the
        kubesize models.
        """
        pass
