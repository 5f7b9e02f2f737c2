"""Pure decision helpers for the monitor loop.

Nothing here touches the runtime, so every rule can be tested with plain
data:

- name resolution is a first-match substring search in listing order, with
  no attempt to disambiguate several matches;
- CPU % is ``cpu_delta / system_delta * online_cpus * 100``;
- a sample without elapsed system time has no CPU % at all;
- a restart triggers only when CPU % is strictly above the threshold.
"""

from __future__ import annotations

from collections.abc import Iterable

from cpuguard.models.container import ContainerSummary, CpuSample


def resolve_container_id(
    containers: Iterable[ContainerSummary], fragment: str
) -> str | None:
    """Return the id of the first container whose any name contains *fragment*.

    Args:
        containers: Containers in the order the runtime listed them.
        fragment: Substring to look for in each container name.

    Returns:
        The matching container id, or ``None`` when nothing matches.
    """
    for container in containers:
        for name in container.names:
            if fragment in name:
                return container.id
    return None


def compute_cpu_percent(sample: CpuSample) -> float | None:
    """CPU utilization of a sample, in percent of one core.

    Returns ``None`` when the system delta is zero or negative (first
    reading, counter reset). There is no rate to compare in that case, and
    callers must not hand it to ``exceeds_threshold``.
    """
    if sample.system_delta <= 0:
        return None
    return (sample.cpu_delta / sample.system_delta) * sample.online_cpus * 100.0


def exceeds_threshold(cpu_percent: float, threshold: float) -> bool:
    """True when *cpu_percent* is strictly above *threshold*."""
    return cpu_percent > threshold
