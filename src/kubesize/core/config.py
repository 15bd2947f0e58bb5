# src/kubesize/core/config.py

import logging
import os

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

OUTPUT_FORMATS = ("table", "json", "yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """
    Handles the application's configuration by loading values from environment variables.

    Values are resolved at access time so tests (and callers) can change the
    environment after import.
    """

    # --- Logging variables ---
    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv("LOG_LEVEL", "WARNING").upper()

    # --- Kubernetes connection variables ---
    @property
    def KUBECONFIG(self) -> str | None:
        return os.getenv("KUBECONFIG") or None

    @property
    def KUBE_CONTEXT(self) -> str | None:
        return os.getenv("KUBESIZE_CONTEXT") or None

    @property
    def REQUEST_TIMEOUT(self) -> float:
        """Per-request timeout in seconds. 0 disables the timeout."""
        return float(os.getenv("KUBESIZE_REQUEST_TIMEOUT", "0"))

    # --- Display variables ---
    @property
    def DEFAULT_OUTPUT(self) -> str:
        return os.getenv("KUBESIZE_OUTPUT", "table").lower()

    def validate_instance(self):
        """
        Validates the configuration values.
        """
        if self.LOG_LEVEL not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}.")
        try:
            timeout = self.REQUEST_TIMEOUT
        except ValueError:
            raise ValueError("KUBESIZE_REQUEST_TIMEOUT must be a number of seconds.") from None
        if timeout < 0:
            raise ValueError("KUBESIZE_REQUEST_TIMEOUT must not be negative.")
        if self.DEFAULT_OUTPUT not in OUTPUT_FORMATS:
            raise ValueError(f"KUBESIZE_OUTPUT must be one of {', '.join(OUTPUT_FORMATS)}.")
        if self.KUBECONFIG and not os.path.exists(os.path.expanduser(self.KUBECONFIG.split(os.pathsep)[0])):
            logging.getLogger(__name__).warning("KUBECONFIG points to a missing file: %s", self.KUBECONFIG)


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
