"""
Pytest configuration and shared fixtures for the memstatsd test suite.

This module provides common fixtures, test doubles, and configuration
for all test modules in the project.
"""

import shutil
import sys
import tempfile
import threading
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from memstatsd.collectors.base import AbstractStatsProvider  # noqa: E402
from memstatsd.models.snapshot import MemorySnapshot  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Test Doubles
# ============================================================================


class RecordingClient:
    """Metrics client that records every call in order."""

    def __init__(self):
        self.calls: List[Tuple[str, str, Any]] = []
        self._lock = threading.Lock()

    def gauge(self, name: str, value: int) -> None:
        with self._lock:
            self.calls.append(("gauge", name, value))

    def timing(self, name: str, delta: timedelta) -> None:
        with self._lock:
            self.calls.append(("timing", name, delta))

    def values(self) -> Dict[str, Any]:
        """Last recorded value per metric name."""
        with self._lock:
            return {name: value for _kind, name, value in self.calls}

    def names(self) -> List[str]:
        with self._lock:
            return [name for _kind, name, _value in self.calls]

    def clear(self) -> None:
        with self._lock:
            self.calls.clear()


class FakeStatsProvider(AbstractStatsProvider):
    """Provider that returns a scripted sequence of snapshots."""

    def __init__(self, snapshots: Optional[Iterable[MemorySnapshot]] = None):
        self._snapshots = list(snapshots or [])
        self.reads = 0
        self.started = False
        self.stopped = False

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def read_snapshot(self) -> MemorySnapshot:
        self.reads += 1
        if self._snapshots:
            if len(self._snapshots) > 1:
                return self._snapshots.pop(0)
            return self._snapshots[0]
        return MemorySnapshot.zero()


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def recording_client():
    return RecordingClient()


@pytest.fixture
def fake_provider():
    return FakeStatsProvider()


@pytest.fixture
def make_snapshot():
    """Build a MemorySnapshot with only the given fields set."""
    def _make(**kwargs) -> MemorySnapshot:
        return MemorySnapshot(**kwargs)
    return _make


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "agent": {
            "prefix": "app.",
            "interval_seconds": 5.0,
            "debug": False,
            "stop_timeout": 2.0,
            "latency": {
                "wait_ms": 50,
                "size_bytes": 4096,
            },
        },
        "statsd": {
            "host": "statsd.local",
            "port": 8125,
            "prefix": "",
            "max_udp_size": 512,
            "ipv6": False,
        },
    }


@pytest.fixture
def config_files(temp_dir, sample_config_data):
    """Create a temporary configuration file for testing."""
    import toml

    config_file = temp_dir / "config.toml"
    with open(config_file, "w") as f:
        toml.dump(sample_config_data, f)

    return {
        "config": config_file,
        "dir": temp_dir,
    }


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically reset the configuration singleton after each test."""
    from memstatsd.config import get_config_path

    original_config_path = get_config_path()

    yield

    from memstatsd.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(original_config_path)


@pytest.fixture
def provider_factory():
    """Create a FakeStatsProvider that returns the given snapshots in order."""
    def _create(*snapshots: MemorySnapshot) -> FakeStatsProvider:
        return FakeStatsProvider(snapshots)
    return _create


@pytest.fixture
def client_factory():
    """Create additional independent RecordingClient instances."""
    return RecordingClient
