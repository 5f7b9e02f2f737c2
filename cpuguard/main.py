"""cpuguard entry point."""

from __future__ import annotations

import asyncio
import signal
import sys

from loguru import logger
from pydantic import ValidationError

from cpuguard.config.settings import Settings
from cpuguard.guardian.monitor import MonitorLoop
from cpuguard.runtime.base_client import RuntimeClientError
from cpuguard.runtime.docker_client import DockerRuntimeClient
from cpuguard.utils.logger import setup_logger


def load_settings() -> Settings:
    """Load settings, exiting with status 1 on misconfiguration."""
    try:
        return Settings()
    except ValidationError as e:
        for error in e.errors():
            logger.error("Configuration error: {}", error["msg"])
        sys.exit(1)


async def main(settings: Settings) -> None:
    """Connect to the runtime and run the monitor loop until signalled."""
    client = DockerRuntimeClient()
    try:
        await client.connect()
    except RuntimeClientError as e:
        logger.error("{}", e)
        sys.exit(1)

    monitor = MonitorLoop(settings, client)

    loop = asyncio.get_running_loop()
    # Register signal handlers (Unix). On Windows we rely on KeyboardInterrupt.
    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, monitor.shutdown)

    try:
        await monitor.run()
    finally:
        await client.close()


def run() -> None:
    """Synchronous wrapper suitable for ``python -m`` or console_scripts."""
    setup_logger()
    settings = load_settings()
    setup_logger(settings.LOG_LEVEL, settings.LOG_FILE)

    try:
        asyncio.run(main(settings))
    except KeyboardInterrupt:
        logger.info("cpuguard interrupted, shutting down")
    sys.exit(0)


if __name__ == "__main__":
    run()
