"""
Behave environment configuration for IPAM DNS Sync scenarios.

Scenarios run the full webhook pipeline against the in-memory mock
provider, so no DNS server is needed.
"""

import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.skip_forward = False
    context.skip_reverse = False
    context.fail_on = []
    context.plan = None
    context.error = None
    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    logger.info(f"Completed scenario: {scenario.name}")
