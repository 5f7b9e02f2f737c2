"""Abstract container-runtime client interface for cpuguard."""

from __future__ import annotations

from abc import ABC, abstractmethod

from cpuguard.models.container import ContainerSummary, CpuSample


class RuntimeClientError(Exception):
    """Raised when a container-runtime call fails."""

    def __init__(self, message: str, original: Exception | None = None):
        super().__init__(message)
        self.original = original


class BaseRuntimeClient(ABC):
    """Abstract base class that every container-runtime adapter must implement."""

    @abstractmethod
    async def connect(self) -> None:
        """Establish the connection to the runtime."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Gracefully close the connection."""
        ...

    @abstractmethod
    async def list_containers(self) -> list[ContainerSummary]:
        """Return running containers in the order the runtime lists them."""
        ...

    @abstractmethod
    async def get_cpu_sample(self, container_id: str) -> CpuSample:
        """Return a one-shot CPU sample for *container_id*."""
        ...

    @abstractmethod
    async def restart_container(self, container_id: str) -> None:
        """Restart *container_id* using the runtime's default stop timeout."""
        ...
