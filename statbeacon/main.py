from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
import sys
from collections.abc import Sequence

from statbeacon.cli import config_path
from statbeacon.collectors import MetricsProvider, PsutilMetricsProvider
from statbeacon.config import BeaconConfig, ConfigError, load_config
from statbeacon.engine import Beacon, ClientBuildError, Notifier, build_client

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


async def serve(config: BeaconConfig, notifier: Notifier, provider: MetricsProvider) -> None:
    """Run the beacon until SIGINT/SIGTERM, then close the HTTP client."""
    beacon = Beacon(config, provider, notifier)
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # add_signal_handler is unavailable on Windows event loops.
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, beacon.request_stop)
    try:
        await beacon.run()
    finally:
        await notifier.aclose()
    logger.info("Beacon [%s] shut down", config.name)


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    path = config_path(argv)
    logger.info("Config path: %s", path)

    try:
        config = load_config(path)
        logging.getLogger().setLevel(config.log_level)
        logger.info("Configuration: %s", config.model_dump())
        client = build_client(config)
    except (ConfigError, ClientBuildError) as exc:
        logger.error("Fatal: %s", exc)
        return 1

    notifier = Notifier(
        client,
        max_retries=config.max_retries,
        retry_backoff_seconds=config.retry_backoff_seconds,
    )
    provider = PsutilMetricsProvider()
    asyncio.run(serve(config, notifier, provider))
    return 0


if __name__ == "__main__":
    sys.exit(main())
