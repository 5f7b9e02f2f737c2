"""Monitor loop: measure the tracked container, restart the other one.

Every iteration:
  1. List containers and resolve the tracked name fragment
  2. Fetch a one-shot stats snapshot and compute CPU % (no rate: stop here)
  3. Above threshold: resolve the restarted name fragment and restart it
  4. Wait SLEEP_INTERVAL seconds

Failures inside an iteration are logged and the loop carries on after the
normal wait. Nothing is cached between iterations, so a container recreated
under a new id is picked up on the next pass.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from cpuguard.config.settings import Settings
from cpuguard.guardian.policy import (
    compute_cpu_percent,
    exceeds_threshold,
    resolve_container_id,
)
from cpuguard.runtime.base_client import BaseRuntimeClient, RuntimeClientError


class ContainerNotFoundError(Exception):
    """Raised when no running container name contains the fragment."""

    def __init__(self, fragment: str):
        super().__init__(f"container {fragment} not found")
        self.fragment = fragment


class IterationOutcome(str, Enum):
    """How a single monitor iteration ended."""

    TRACKED_UNRESOLVED = "tracked_unresolved"
    STATS_FAILED = "stats_failed"
    NO_RATE = "no_rate"  # zero or negative system delta
    BELOW_THRESHOLD = "below_threshold"
    RESTART_TARGET_UNRESOLVED = "restart_target_unresolved"
    RESTARTED = "restarted"
    RESTART_FAILED = "restart_failed"
    ERROR = "error"  # unexpected exception


@dataclass
class IterationResult:
    """What a single iteration did."""

    outcome: IterationOutcome
    tracked_id: str | None = None
    restarted_id: str | None = None
    cpu_percent: float | None = None
    error: str = ""

    def __str__(self) -> str:
        cpu = f"{self.cpu_percent:.2f}%" if self.cpu_percent is not None else "-"
        text = f"[{self.outcome.value}] cpu={cpu}"
        if self.error:
            text += f" | {self.error}"
        return text


class MonitorLoop:
    """Sequential watchdog loop over a ``BaseRuntimeClient``."""

    def __init__(self, settings: Settings, client: BaseRuntimeClient) -> None:
        self.settings = settings
        self.client = client

        self._shutdown = False
        self._wake = asyncio.Event()

        self.last_result: IterationResult | None = None
        self._iterations = 0
        self._restarts = 0

    async def run(self, max_iterations: int | None = None) -> None:
        """Run iterations until shutdown (or *max_iterations* have run)."""
        logger.info(
            "Monitor starting | tracked='{}' restarted='{}' interval={}s threshold={}%",
            self.settings.TRACKED_CONTAINER,
            self.settings.RESTARTED_CONTAINER,
            self.settings.SLEEP_INTERVAL,
            self.settings.CPU_THRESHOLD,
        )

        while not self._shutdown:
            try:
                result = await self.run_once()
            except Exception as e:
                logger.exception("Monitor iteration error: {}", e)
                result = IterationResult(IterationOutcome.ERROR, error=str(e))

            self.last_result = result
            self._iterations += 1
            logger.debug("Iteration {} | {}", self._iterations, result)
            if result.outcome is IterationOutcome.RESTARTED:
                self._restarts += 1

            await self._sleep()

            if max_iterations is not None and self._iterations >= max_iterations:
                break

        logger.info(
            "Monitor stopped | iterations={} restarts={}",
            self._iterations, self._restarts,
        )

    async def run_once(self) -> IterationResult:
        """Run a single measure-and-maybe-restart pass."""
        try:
            tracked_id = await self._resolve(self.settings.TRACKED_CONTAINER)
        except (RuntimeClientError, ContainerNotFoundError) as e:
            logger.error("Error getting tracked container ID: {}", e)
            return IterationResult(IterationOutcome.TRACKED_UNRESOLVED, error=str(e))

        try:
            sample = await self.client.get_cpu_sample(tracked_id)
        except RuntimeClientError as e:
            logger.error("Error getting CPU usage: {}", e)
            return IterationResult(
                IterationOutcome.STATS_FAILED, tracked_id=tracked_id, error=str(e)
            )

        cpu_percent = compute_cpu_percent(sample)
        if cpu_percent is None:
            logger.debug(
                "No CPU rate for {} (system delta {}), skipping",
                tracked_id[:12], sample.system_delta,
            )
            return IterationResult(IterationOutcome.NO_RATE, tracked_id=tracked_id)

        if not exceeds_threshold(cpu_percent, self.settings.CPU_THRESHOLD):
            logger.debug(
                "CPU {:.2f}% <= {}% on {}", cpu_percent,
                self.settings.CPU_THRESHOLD, tracked_id[:12],
            )
            return IterationResult(
                IterationOutcome.BELOW_THRESHOLD,
                tracked_id=tracked_id,
                cpu_percent=cpu_percent,
            )

        logger.warning(
            "CPU {:.2f}% > {}% on {}, restarting '{}'",
            cpu_percent, self.settings.CPU_THRESHOLD,
            tracked_id[:12], self.settings.RESTARTED_CONTAINER,
        )

        try:
            restarted_id = await self._resolve(self.settings.RESTARTED_CONTAINER)
        except (RuntimeClientError, ContainerNotFoundError) as e:
            logger.error("Error getting restarted container ID: {}", e)
            return IterationResult(
                IterationOutcome.RESTART_TARGET_UNRESOLVED,
                tracked_id=tracked_id,
                cpu_percent=cpu_percent,
                error=str(e),
            )

        try:
            await self.client.restart_container(restarted_id)
        except RuntimeClientError as e:
            logger.error("Error restarting restarted container: {}", e)
            return IterationResult(
                IterationOutcome.RESTART_FAILED,
                tracked_id=tracked_id,
                restarted_id=restarted_id,
                cpu_percent=cpu_percent,
                error=str(e),
            )

        logger.info("Restarted container {}", restarted_id[:12])
        return IterationResult(
            IterationOutcome.RESTARTED,
            tracked_id=tracked_id,
            restarted_id=restarted_id,
            cpu_percent=cpu_percent,
        )

    async def _resolve(self, fragment: str) -> str:
        containers = await self.client.list_containers()
        container_id = resolve_container_id(containers, fragment)
        if container_id is None:
            raise ContainerNotFoundError(fragment)
        return container_id

    async def _sleep(self) -> None:
        """Wait SLEEP_INTERVAL seconds, returning early on shutdown."""
        try:
            await asyncio.wait_for(
                self._wake.wait(), timeout=max(0, self.settings.SLEEP_INTERVAL)
            )
        except asyncio.TimeoutError:
            pass

    def shutdown(self) -> None:
        """Signal the loop to stop after the current iteration."""
        logger.info("Monitor shutdown requested")
        self._shutdown = True
        self._wake.set()
