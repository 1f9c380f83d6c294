"""
Pytest configuration and shared fixtures for SkyCast testing.

Provides frozen clocks, extractors and configuration directories so that no
test depends on the real wall clock or the machine's timezone.
"""

import logging
import os
from datetime import datetime

import pytest
import yaml
from dateutil.tz import gettz, tzutc

from skycast.core.logging_manager import LoggingManager, PACKAGE_LOGGER
from skycast.processors.core.clock import FrozenClock
from skycast.processors.core.interval_extractor import IntervalExtractor
from tests.fixtures.sample_data import FROZEN_TIMESTAMP, SAMPLE_CONFIGURATIONS

NEW_YORK = gettz("America/New_York")
UTC = tzutc()


@pytest.fixture
def frozen_now():
    """2019-02-22 06:43:08.763 in New York"""
    return datetime.fromtimestamp(FROZEN_TIMESTAMP, tz=NEW_YORK)


@pytest.fixture
def frozen_clock(frozen_now):
    return FrozenClock(frozen_now)


@pytest.fixture
def start_of_today():
    """Local midnight of the frozen day, in UTC"""
    return datetime(2019, 2, 22, 5, 0, tzinfo=UTC)


@pytest.fixture
def extractor(frozen_clock):
    """IntervalExtractor bound to the frozen clock with a five day horizon"""
    return IntervalExtractor(clock=frozen_clock, forecast_days=5)


@pytest.fixture
def temp_config_dir(tmp_path):
    """Temporary directory holding default and testing configuration files"""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    with open(config_dir / "default_config.yaml", "w") as f:
        yaml.dump(SAMPLE_CONFIGURATIONS["default"], f)
    with open(config_dir / "testing.yaml", "w") as f:
        yaml.dump(SAMPLE_CONFIGURATIONS["testing"], f)

    return config_dir


@pytest.fixture
def clean_environment(monkeypatch):
    """Remove SkyCast environment overrides inherited from the shell"""
    for key in list(os.environ):
        if key.startswith("SKYCAST_"):
            monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def fresh_logging_manager():
    """New LoggingManager singleton; package handlers removed afterwards"""
    LoggingManager._instance = None
    manager = LoggingManager()
    yield manager

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    LoggingManager._instance = None
