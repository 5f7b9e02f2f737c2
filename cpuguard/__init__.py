"""cpuguard: container CPU watchdog.

Measures the CPU utilization of one container on a fixed interval and
restarts another container whenever it goes above a threshold.
"""

__version__ = "0.1.0"
