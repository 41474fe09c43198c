"""Fixtures for end-to-end tests of the CLI logging options.

Registers a test-only ``log-demo`` command on the top-level group and runs
each test inside an isolated filesystem so log files land in a scratch dir.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from tenantcat.entrypoints.cli.main import tenantcat

# pylint: disable=redefined-outer-name

LEVELS = ("debug", "info", "warning", "error", "critical")


@click.command()
def log_demo():
    """Log one message per level on 'tenantcat.demo' and a few third-party ones.

    The last message is a DEBUG record logged after every WARNING+, so it only
    reaches the flight-recorder file when the buffer is flushed on exit.
    """
    logger = logging.getLogger("tenantcat.demo")
    for level in LEVELS:
        logger.log(logging.getLevelName(level.upper()), "This is a %s-level test message.", level)
    third_party = logging.getLogger("some.thirdparty")
    for level in LEVELS[:3]:
        third_party.log(
            logging.getLevelName(level.upper()),
            "This is a %s-level third-party test message.",
            level,
        )
    logger.debug("This is a final debug-level test message.")


def _unregister(group: click.Group, name: str) -> None:
    """Drop `name` from `group`, including click-extra's help sections."""
    group.commands.pop(name, None)
    for section in getattr(group, "_section_set", []):
        getattr(section, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Make ``tenantcat log-demo`` available for the duration of a test."""
    tenantcat.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _unregister(tenantcat, "log-demo")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside a temporary working directory."""
    with runner.isolated_filesystem():
        yield
