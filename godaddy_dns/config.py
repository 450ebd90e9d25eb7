"""
Configuration loading and logging setup.

Configuration is a YAML document; credentials missing from it fall back
to the GODADDY_API_KEY and GODADDY_API_SECRET environment variables.
"""

import logging
import os
import sys
from typing import Dict

import yaml

from .exceptions import ConfigurationError
from .providers.transport import DEFAULT_INTERVAL

logger = logging.getLogger(__name__)

ENV_API_KEY = "GODADDY_API_KEY"
ENV_API_SECRET = "GODADDY_API_SECRET"
ENV_BASE_URL = "GODADDY_BASE_URL"

DEFAULT_LOG_FILE = "godaddy_dns.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_config(config_path: str) -> Dict:
    """Load configuration from YAML file."""
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
        return config
    except FileNotFoundError:
        logger.warning(f"Config file {config_path} not found, using defaults")
        return get_default_config()
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing config file {config_path}: {e}") from e


def get_default_config() -> Dict:
    """Return default configuration."""
    return {
        "dns_providers": {"mock": {}},
        "default_provider": "mock",
        "logging": {"level": "INFO", "file": DEFAULT_LOG_FILE},
    }


def godaddy_settings(provider_config: Dict) -> Dict:
    """Resolve GoDaddy connection settings, filling gaps from the environment.

    ``rate_limit`` may only slow calls down; the registrar's quota allows
    one call per DEFAULT_INTERVAL seconds.
    """
    rate_limit = provider_config.get("rate_limit", DEFAULT_INTERVAL)
    try:
        rate_limit = float(rate_limit)
    except (TypeError, ValueError):
        raise ConfigurationError(f"rate_limit must be a number, got '{rate_limit}'") from None
    if rate_limit < DEFAULT_INTERVAL:
        raise ConfigurationError(
            f"rate_limit must be at least {DEFAULT_INTERVAL} seconds, got {rate_limit}"
        )

    return {
        "base_url": provider_config.get("base_url")
        or os.environ.get(ENV_BASE_URL, "https://api.godaddy.com"),
        "key": provider_config.get("key") or os.environ.get(ENV_API_KEY, ""),
        "secret": provider_config.get("secret") or os.environ.get(ENV_API_SECRET, ""),
        "rate_limit": rate_limit,
    }


def config_logger(config: Dict, verbose: bool = False):
    """Configure logging."""
    logging_config = config.get("logging", None)
    if logging_config:
        log_level = "DEBUG" if verbose else logging_config.get("level", "INFO")
        log_file = logging_config.get("file", DEFAULT_LOG_FILE)

        logging.basicConfig(
            level=log_level,
            format=LOG_FORMAT,
            handlers=[
                logging.FileHandler(log_file),
                logging.StreamHandler(sys.stdout),
            ],
        )
        return

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
