"""
Behave environment configuration for DNS record tools integration tests.
"""

import logging
import shutil
import tempfile
from pathlib import Path

logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.base_dir = Path(__file__).parent.parent
    context.test_data_dir = Path(tempfile.mkdtemp(prefix="dns_record_tools_"))

    context.test_zone_id = "zone-test"
    context.test_zone = "test.example.com"

    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario with a fresh memory Directory config."""
    context.scenario_name = scenario.name
    context.seed_records = []
    context.test_config = {
        "default_provider": "memory",
        "directory_providers": {
            "memory": {
                "zones": [
                    {
                        "id": context.test_zone_id,
                        "name": context.test_zone,
                        "records": context.seed_records,
                    }
                ]
            }
        },
        "logging": {"level": "WARNING"},
    }
    context.response = None
    context.output = None

    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    logger.info(f"Completed scenario: {scenario.name}")


def after_all(context):
    """Clean up test environment after all tests."""
    shutil.rmtree(context.test_data_dir, ignore_errors=True)
    logger.info("Test environment cleanup complete")
