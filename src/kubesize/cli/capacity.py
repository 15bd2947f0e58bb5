# src/kubesize/cli/capacity.py
"""
Implements the `cluster` and `node-role` capacity commands.
"""

import asyncio
import logging
import traceback
from typing import Awaitable, Callable, Optional

import typer
from kubernetes_asyncio import client

from ..core import aggregator
from ..core.exceptions import KubeSizeError
from ..core.k8s_client import create_core_v1_api
from ..models.capacity import CapacityData, NodeRoleCapacityData
from ..models.cli import (
    CertificateAuthorityOption,
    ConnectionOptions,
    ContextOption,
    DefaultFormatOption,
    DisplayOptions,
    InsecureOption,
    KubeconfigOption,
    NoHeadersOption,
    OutputOption,
    ReadableOption,
    RequestTimeoutOption,
    ServerOption,
    TokenOption,
)
from ..reporters import get_reporter

logger = logging.getLogger(__name__)

Aggregate = Callable[[client.CoreV1Api, Optional[float]], Awaitable[CapacityData | NodeRoleCapacityData]]


def _fail(message: str):
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _build_options(connection_kwargs: dict, display_kwargs: dict) -> tuple[ConnectionOptions, DisplayOptions]:
    try:
        return ConnectionOptions(**connection_kwargs), DisplayOptions(**display_kwargs)
    except typer.BadParameter as e:
        _fail(str(e))


def _run_report(aggregate: Aggregate, connection: ConnectionOptions, display: DisplayOptions):
    """Builds the report in one pass, then renders it. Nothing is rendered on failure."""

    async def _report_async():
        api = await create_core_v1_api(connection)
        try:
            return await aggregate(api, connection.timeout)
        finally:
            await api.api_client.close()

    try:
        data = asyncio.run(_report_async())
    except KubeSizeError as e:
        logger.debug("Report generation failed: %s", traceback.format_exc())
        _fail(str(e))
    except Exception as e:
        logger.error("Report generation failed: %s", traceback.format_exc())
        _fail(f"unexpected error: {e}")

    get_reporter(display.output).report(data, display)


def cluster(
    kubeconfig: KubeconfigOption = None,
    context: ContextOption = None,
    server: ServerOption = None,
    token: TokenOption = None,
    certificate_authority: CertificateAuthorityOption = None,
    insecure_skip_tls_verify: InsecureOption = False,
    request_timeout: RequestTimeoutOption = None,
    readable: ReadableOption = False,
    default_format: DefaultFormatOption = False,
    no_headers: NoHeadersOption = False,
    output: OutputOption = None,
):
    """
    Get Kubernetes cluster size and capacity metrics.
    """
    connection, display = _build_options(
        dict(
            kubeconfig=kubeconfig,
            context=context,
            server=server,
            token=token,
            certificate_authority=certificate_authority,
            insecure_skip_tls_verify=insecure_skip_tls_verify,
            request_timeout=request_timeout,
        ),
        dict(readable=readable, default_format=default_format, no_headers=no_headers, output=output),
    )
    _run_report(aggregator.aggregate_cluster, connection, display)


def node_role(
    kubeconfig: KubeconfigOption = None,
    context: ContextOption = None,
    server: ServerOption = None,
    token: TokenOption = None,
    certificate_authority: CertificateAuthorityOption = None,
    insecure_skip_tls_verify: InsecureOption = False,
    request_timeout: RequestTimeoutOption = None,
    readable: ReadableOption = False,
    default_format: DefaultFormatOption = False,
    no_headers: NoHeadersOption = False,
    output: OutputOption = None,
):
    """
    Get Kubernetes cluster size and capacity metrics grouped by node role.
    """
    connection, display = _build_options(
        dict(
            kubeconfig=kubeconfig,
            context=context,
            server=server,
            token=token,
            certificate_authority=certificate_authority,
            insecure_skip_tls_verify=insecure_skip_tls_verify,
            request_timeout=request_timeout,
        ),
        dict(readable=readable, default_format=default_format, no_headers=no_headers, output=output),
    )
    _run_report(aggregator.aggregate_node_roles, connection, display)
