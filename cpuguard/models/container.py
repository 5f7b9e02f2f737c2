"""Container listing and CPU stats models for cpuguard."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ContainerSummary(BaseModel):
    """A running container as reported by the runtime's list call."""

    id: str
    names: list[str] = Field(default_factory=list)  # Docker prefixes each with "/"


class CpuSample(BaseModel):
    """Two consecutive readings of cumulative CPU counters for a container.

    ``cpu_total`` / ``system_total`` come from the latest reading and the
    ``pre_*`` fields from the one before it, so a single stats call is
    enough to compute a rate.
    """

    cpu_total: int = 0
    pre_cpu_total: int = 0
    system_total: int = 0
    pre_system_total: int = 0
    online_cpus: int = 1

    @property
    def cpu_delta(self) -> int:
        """Container CPU time consumed between the two readings."""
        return self.cpu_total - self.pre_cpu_total

    @property
    def system_delta(self) -> int:
        """Host CPU time elapsed between the two readings."""
        return self.system_total - self.pre_system_total

    @classmethod
    def from_stats(cls, stats: dict[str, Any]) -> "CpuSample":
        """Build a sample from a Docker stats payload.

        Raises:
            ValueError: If the payload has no ``cpu_stats`` section.
        """
        if not isinstance(stats, dict) or not isinstance(stats.get("cpu_stats"), dict):
            raise ValueError("stats payload has no cpu_stats section")

        cpu_stats = stats["cpu_stats"]
        precpu_stats = stats.get("precpu_stats") or {}
        cpu_usage = cpu_stats.get("cpu_usage") or {}
        precpu_usage = precpu_stats.get("cpu_usage") or {}

        # online_cpus is absent on older kernels/daemons
        online_cpus = cpu_stats.get("online_cpus") or 0
        if online_cpus <= 0:
            online_cpus = len(cpu_usage.get("percpu_usage") or []) or 1

        return cls(
            cpu_total=cpu_usage.get("total_usage") or 0,
            pre_cpu_total=precpu_usage.get("total_usage") or 0,
            system_total=cpu_stats.get("system_cpu_usage") or 0,
            pre_system_total=precpu_stats.get("system_cpu_usage") or 0,
            online_cpus=online_cpus,
        )
