"""
Behave environment configuration for GoDaddy DNS Records Manager integration tests.

Scenarios run against the in-memory registrar, so no credentials or
network access are needed.
"""

import logging
import shutil
from pathlib import Path

import yaml

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.base_dir = Path(__file__).parent.parent
    context.test_data_dir = context.base_dir / "test_data"
    context.test_data_dir.mkdir(exist_ok=True)

    context.test_domain = "test.example.com"
    context.test_domain_id = 1001

    context.test_config = {
        "dns_providers": {
            "mock": {"domains": {context.test_domain: context.test_domain_id}}
        },
        "default_provider": "mock",
        "logging": {
            "level": "DEBUG",
            "file": str(context.test_data_dir / "test_dns_manager.log"),
        },
    }

    context.test_config_file = context.test_data_dir / "test_config.yaml"
    with open(context.test_config_file, "w") as f:
        yaml.dump(context.test_config, f)

    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.scenario_name = scenario.name
    context.result = None
    context.error = None
    context.desired_records = []
    context.addresses = []
    context.nameservers = []

    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    logger.info(f"Completed scenario: {scenario.name}")


def after_all(context):
    """Clean up test environment after all tests."""
    if context.test_data_dir.exists():
        shutil.rmtree(context.test_data_dir)

    logger.info("Test environment cleanup complete")
