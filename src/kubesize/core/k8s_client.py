import logging

from kubernetes_asyncio import client, config

from ..models.cli import ConnectionOptions
from .exceptions import ConnectionSetupError

logger = logging.getLogger(__name__)


async def _load_configuration(configuration: client.Configuration, options: ConnectionOptions) -> None:
    """
    Fills ``configuration`` from a kubeconfig file or the in-cluster service account.

    An explicit kubeconfig path or context always wins. Otherwise in-cluster
    config is tried first, then the default kubeconfig location.
    """
    if not options.kubeconfig and not options.context:
        try:
            logger.debug("Attempting to load in-cluster Kubernetes config...")
            config.load_incluster_config(client_configuration=configuration)
            logger.info("Loaded in-cluster Kubernetes configuration.")
            return
        except config.ConfigException:
            logger.debug("In-cluster config not found.")

    try:
        logger.debug("Attempting to load kubeconfig %s...", options.kubeconfig or "(default location)")
        await config.load_kube_config(
            config_file=options.kubeconfig,
            context=options.context,
            client_configuration=configuration,
            persist_config=False,
        )
        logger.info("Loaded Kubernetes configuration from kubeconfig file.")
    except (config.ConfigException, OSError) as e:
        if options.server and not options.kubeconfig and not options.context:
            logger.warning("No kubeconfig loaded (%s); using --server %s only.", e, options.server)
            return
        raise ConnectionSetupError(f"failed to load Kubernetes configuration: {e}") from e


async def create_core_v1_api(options: ConnectionOptions) -> client.CoreV1Api:
    """
    Returns a configured CoreV1Api instance for the given connection flags.

    Flags override whatever the kubeconfig provides. The caller owns the
    returned client and must close ``api.api_client``.

    Raises:
        ConnectionSetupError: If no usable configuration could be assembled.
    """
    configuration = client.Configuration()
    await _load_configuration(configuration, options)

    if options.server:
        configuration.host = options.server.rstrip("/")
    if options.token:
        configuration.api_key = {"BearerToken": f"Bearer {options.token}"}
        configuration.api_key_prefix = {}
    if options.certificate_authority:
        configuration.ssl_ca_cert = options.certificate_authority
    if options.insecure_skip_tls_verify:
        configuration.verify_ssl = False

    logger.debug("Using Kubernetes API server %s", configuration.host)
    return client.CoreV1Api(client.ApiClient(configuration=configuration))
