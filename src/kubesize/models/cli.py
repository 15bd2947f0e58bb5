# src/kubesize/models/cli.py
"""
Data models for kubesize CLI command options using Typer.

The ``Annotated`` option types are shared by the option models and the
command signatures so every subcommand exposes the same flags.
"""

from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.config import OUTPUT_FORMATS, config

# --- Connection flags ---
KubeconfigOption = Annotated[
    Optional[str],
    typer.Option("--kubeconfig", help="Path to the kubeconfig file to use."),
]
ContextOption = Annotated[
    Optional[str],
    typer.Option("--context", help="The name of the kubeconfig context to use."),
]
ServerOption = Annotated[
    Optional[str],
    typer.Option("--server", "-s", help="The address and port of the Kubernetes API server."),
]
TokenOption = Annotated[
    Optional[str],
    typer.Option("--token", help="Bearer token for authentication to the API server."),
]
CertificateAuthorityOption = Annotated[
    Optional[str],
    typer.Option("--certificate-authority", help="Path to a cert file for the certificate authority."),
]
InsecureOption = Annotated[
    bool,
    typer.Option("--insecure-skip-tls-verify", help="Do not check the server's certificate for validity."),
]
RequestTimeoutOption = Annotated[
    Optional[float],
    typer.Option("--request-timeout", help="Seconds to wait for each API request. 0 means no timeout."),
]

# --- Display flags ---
ReadableOption = Annotated[
    bool,
    typer.Option("--readable", "-r", help="Display cores and GiB instead of millicores and bytes."),
]
DefaultFormatOption = Annotated[
    bool,
    typer.Option(
        "--default-format",
        "-d",
        help="Display quantities as Kubernetes quantity strings (e.g. 3500m, 7Gi).",
    ),
]
NoHeadersOption = Annotated[
    bool,
    typer.Option("--no-headers", help="Do not print table headers."),
]
OutputOption = Annotated[
    Optional[str],
    typer.Option("--output", "-o", help="Output format (table/json/yaml).", case_sensitive=False),
]


class ConnectionOptions:
    """Dependency-injectable model for cluster connection options."""

    def __init__(
        self,
        kubeconfig: KubeconfigOption = None,
        context: ContextOption = None,
        server: ServerOption = None,
        token: TokenOption = None,
        certificate_authority: CertificateAuthorityOption = None,
        insecure_skip_tls_verify: InsecureOption = False,
        request_timeout: RequestTimeoutOption = None,
    ):
        self.kubeconfig = kubeconfig or config.KUBECONFIG
        self.context = context or config.KUBE_CONTEXT
        self.server = server
        self.token = token
        self.certificate_authority = certificate_authority
        self.insecure_skip_tls_verify = insecure_skip_tls_verify
        self.request_timeout = config.REQUEST_TIMEOUT if request_timeout is None else request_timeout
        self._validate()

    def _validate(self):
        if self.request_timeout < 0:
            raise typer.BadParameter("--request-timeout must not be negative.")

    @property
    def timeout(self) -> Optional[float]:
        """The per-request timeout to pass to the API client, None when disabled."""
        return self.request_timeout or None


class DisplayOptions:
    """Dependency-injectable model for report display options."""

    def __init__(
        self,
        readable: ReadableOption = False,
        default_format: DefaultFormatOption = False,
        no_headers: NoHeadersOption = False,
        output: OutputOption = None,
    ):
        self.readable = readable
        self.default_format = default_format
        self.no_headers = no_headers
        self.output = (output or config.DEFAULT_OUTPUT).lower()
        self._validate()

    def _validate(self):
        """Validates the output format and the unit flags."""
        if self.output not in OUTPUT_FORMATS:
            raise typer.BadParameter(
                f"Invalid output format '{self.output}'. Must be one of: {', '.join(OUTPUT_FORMATS)}."
            )
        if self.readable and self.default_format:
            raise typer.BadParameter("--readable and --default-format cannot be used together.")

    @property
    def units(self) -> str:
        """One of 'raw', 'readable' or 'default'."""
        if self.readable:
            return "readable"
        if self.default_format:
            return "default"
        return "raw"
