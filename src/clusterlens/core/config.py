# src/clusterlens/core/config.py

import logging
import os
import re

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)


def _env_flag(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() in ("true", "1", "t", "y", "yes")


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- Kubernetes variables ---
    # Empty means the kubeconfig's current context.
    KUBE_CONTEXT = os.getenv("KUBE_CONTEXT") or None
    FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "30"))
    METRICS_ENABLED = _env_flag("METRICS_ENABLED", "True")

    # --- Pricing variables ---
    PRICING_FILE = os.getenv("PRICING_FILE") or None

    # --- Refresh variables ---
    REFRESH_INTERVAL = os.getenv("REFRESH_INTERVAL", "30s")

    def validate_instance(self):
        if self.FETCH_TIMEOUT_SECONDS <= 0:
            raise ValueError("FETCH_TIMEOUT_SECONDS must be a positive number of seconds.")
        if self.PRICING_FILE and not os.path.exists(self.PRICING_FILE):
            raise ValueError(f"PRICING_FILE '{self.PRICING_FILE}' does not exist.")
        if not re.match(r"^(\d+)([smh])$", self.REFRESH_INTERVAL.lower()):
            raise ValueError("REFRESH_INTERVAL format is invalid. Use 's', 'm', or 'h'.")
        if not self.METRICS_ENABLED:
            logging.getLogger(__name__).info("METRICS_ENABLED is off; usage figures will be unavailable.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
