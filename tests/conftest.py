"""Shared pytest fixtures for cpuguard tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from cpuguard.config.settings import Settings
from cpuguard.models.container import ContainerSummary, CpuSample
from cpuguard.runtime.base_client import BaseRuntimeClient


@pytest.fixture
def mock_settings() -> Settings:
    """Return a Settings object with safe test defaults."""
    return Settings(
        TRACKED_CONTAINER="web",
        RESTARTED_CONTAINER="worker",
        SLEEP_INTERVAL=0,
        CPU_THRESHOLD=50.0,
        LOG_LEVEL="DEBUG",
        LOG_FILE="",
        _env_file=None,
    )


@pytest.fixture
def containers() -> list[ContainerSummary]:
    """Return a running-container listing in runtime order."""
    return [
        ContainerSummary(id="aaa111", names=["/db-1"]),
        ContainerSummary(id="bbb222", names=["/app-web-1"]),
        ContainerSummary(id="ccc333", names=["/app-worker-1", "/worker-alias"]),
    ]


@pytest.fixture
def hot_sample() -> CpuSample:
    """Return a sample at 80% CPU (200 / 1000 * 4 cores)."""
    return CpuSample(
        cpu_total=1200,
        pre_cpu_total=1000,
        system_total=11000,
        pre_system_total=10000,
        online_cpus=4,
    )


@pytest.fixture
def cool_sample() -> CpuSample:
    """Return a sample at 40% CPU (100 / 1000 * 4 cores)."""
    return CpuSample(
        cpu_total=1100,
        pre_cpu_total=1000,
        system_total=11000,
        pre_system_total=10000,
        online_cpus=4,
    )


@pytest.fixture
def mock_runtime_client(
    containers: list[ContainerSummary], cool_sample: CpuSample
) -> AsyncMock:
    """Return an AsyncMock of BaseRuntimeClient."""
    client = AsyncMock(spec=BaseRuntimeClient)
    client.list_containers.return_value = containers
    client.get_cpu_sample.return_value = cool_sample
    client.restart_container.return_value = None
    return client
