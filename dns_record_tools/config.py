"""
Configuration loading and logging setup.
"""

import logging
import sys
from typing import Dict

import yaml

from .constants import CHARACTER_LIMIT, DEFAULT_FETCH_PAGE_SIZE, DEFAULT_PER_PAGE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/config.yaml"


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict:
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
        logger.error(f"Error parsing config file: {e}")
        sys.exit(1)


def get_default_config() -> Dict:
    """Return default configuration."""
    return {
        "directory_providers": {"cloudflare": {"api_token": ""}},
        "default_provider": "cloudflare",
        "limits": {
            "character_limit": CHARACTER_LIMIT,
            "default_per_page": DEFAULT_PER_PAGE,
            "fetch_page_size": DEFAULT_FETCH_PAGE_SIZE,
        },
        "output": {"format": "json"},
        "logging": {"level": "INFO"},
    }


def config_logger(config: Dict):
    """Configure logging."""
    logging_config = config.get("logging", None)
    if logging_config:
        log_level = logging_config.get("level", "INFO")
        log_file = logging_config.get("file")

        handlers = [logging.StreamHandler(sys.stderr)]
        if log_file:
            handlers.append(logging.FileHandler(log_file))

        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=handlers,
        )
        return

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
