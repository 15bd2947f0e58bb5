class KubeSizeError(Exception):
    """Base exception for kubesize."""

    pass


class ConnectionSetupError(KubeSizeError):
    """Raised when no working Kubernetes client can be built."""

    pass


class QueryError(KubeSizeError):
    """Raised when a node or pod listing is rejected by the API server."""

    pass


class SelectorError(KubeSizeError):
    """Raised when a field selector string cannot be parsed."""

    pass


class QuantityError(KubeSizeError, ValueError):
    """Raised when a resource quantity string is malformed."""

    pass
