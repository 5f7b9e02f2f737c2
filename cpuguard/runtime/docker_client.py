"""Docker runtime client for cpuguard.

Uses the ``docker`` SDK against whatever daemon ``docker.from_env()``
resolves (``DOCKER_HOST``, TLS variables, or the local unix socket).

- ``list_containers`` uses a sparse listing: ids and names straight from
  ``GET /containers/json`` without a per-container inspect.
- ``get_cpu_sample`` asks for non-streaming stats. The daemon waits for a
  second reading before answering, so ``precpu_stats`` is populated and the
  CPU delta can be computed from one call.
- ``restart_container`` keeps the SDK's default stop timeout.

SDK calls are blocking; the monitor loop is sequential so they are invoked
directly.
"""

from __future__ import annotations

import docker
from loguru import logger

from cpuguard.models.container import ContainerSummary, CpuSample
from cpuguard.runtime.base_client import BaseRuntimeClient, RuntimeClientError


class DockerRuntimeClient(BaseRuntimeClient):
    """``BaseRuntimeClient`` backed by the Docker SDK."""

    def __init__(self) -> None:
        self._client: docker.DockerClient | None = None

    async def connect(self) -> None:
        """Build the SDK client from the environment.

        The SDK negotiates the API version here, so an unreachable daemon
        fails at startup rather than on the first list call.
        """
        try:
            self._client = docker.from_env()
        except Exception as exc:
            raise RuntimeClientError(
                f"Failed to create Docker client: {exc}", original=exc
            ) from exc
        logger.info("Docker client ready | base_url={}", self._client.api.base_url)

    async def close(self) -> None:
        if self._client is not None:
            try:
                self._client.close()
            finally:
                self._client = None

    def _ensure_connected(self) -> docker.DockerClient:
        if self._client is None:
            raise RuntimeClientError("Docker client not connected, call connect() first")
        return self._client

    async def list_containers(self) -> list[ContainerSummary]:
        client = self._ensure_connected()
        try:
            containers = client.containers.list(sparse=True)
        except Exception as exc:
            raise RuntimeClientError(
                f"Failed to list containers: {exc}", original=exc
            ) from exc

        return [
            ContainerSummary(id=c.id, names=c.attrs.get("Names") or [])
            for c in containers
        ]

    async def get_cpu_sample(self, container_id: str) -> CpuSample:
        client = self._ensure_connected()
        try:
            stats = client.api.stats(container_id, stream=False)
        except Exception as exc:
            raise RuntimeClientError(
                f"Failed to fetch stats for {container_id[:12]}: {exc}", original=exc
            ) from exc

        try:
            return CpuSample.from_stats(stats)
        except ValueError as exc:
            raise RuntimeClientError(
                f"Failed to decode stats for {container_id[:12]}: {exc}", original=exc
            ) from exc

    async def restart_container(self, container_id: str) -> None:
        client = self._ensure_connected()
        try:
            client.api.restart(container_id)
        except Exception as exc:
            raise RuntimeClientError(
                f"Failed to restart {container_id[:12]}: {exc}", original=exc
            ) from exc
