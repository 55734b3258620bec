"""Test configuration and fixtures for PortSniff test suite"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Isolate from the developer's ~/.portsniff/.env before portsniff is imported
os.environ['PORTSNIFF_HOME'] = tempfile.mkdtemp(prefix='portsniff_test_home_')

# Add project root and test helpers to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(Path(__file__).parent))

from portsniff.logger import PortSniffLogger
from utils import listening_ports, unused_ports, FakeProbe


@pytest.fixture
def project_root():
    """Fixture providing path to project root directory"""
    return PROJECT_ROOT


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so each test starts clean"""
    yield
    PortSniffLogger.reset()


@pytest.fixture
def open_ports():
    """Two loopback ports with listening sockets"""
    with listening_ports(2) as ports:
        yield ports


@pytest.fixture
def closed_ports(open_ports):
    """Three loopback ports with nothing listening"""
    return unused_ports(3, exclude=open_ports)


@pytest.fixture
def fake_probe():
    """Probe that reports ports 22 and 8080 open without touching the network"""
    return FakeProbe(open_ports={22, 8080})


@pytest.fixture
def mock_environment(monkeypatch):
    """Set PortSniff environment variables for a single test"""
    def _set(**values):
        for key, value in values.items():
            monkeypatch.setenv(key, str(value))
    return _set


# Pytest hooks for better test organization
def pytest_configure(config):
    """Configure pytest with custom markers and settings"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")
    config.addinivalue_line("markers", "network: Tests that open loopback sockets")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        if "open_ports" in getattr(item, 'fixturenames', ()):
            item.add_marker(pytest.mark.network)
