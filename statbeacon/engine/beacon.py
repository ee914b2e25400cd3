from __future__ import annotations

import asyncio
import logging

from pydantic import BaseModel

from statbeacon.collectors.base import MetricsProvider
from statbeacon.config import BeaconConfig
from statbeacon.engine.notifier import Notifier
from statbeacon.engine.thresholds import ThresholdPolicy
from statbeacon.models import Level, Report, Sample, encode_payload

logger = logging.getLogger(__name__)


class Cycle(BaseModel):
    """Outcome of one sample/report/alert pass."""

    sample: Sample
    breaches: list[str] = []
    stat_delivered: bool = False
    alert_delivered: bool | None = None  # None when no alert was due


class Beacon:
    """Samples the host every ``interval_seconds`` and reports it.

    Each cycle posts an ``info`` report to the stat endpoint and, when any
    threshold is breached, a ``warn`` report to the alert endpoint. Delivery
    is best effort: failures are logged by the notifier and the loop carries
    on. The sleep between cycles is interrupted by ``request_stop()``.
    """

    def __init__(
        self,
        config: BeaconConfig,
        provider: MetricsProvider,
        notifier: Notifier,
    ) -> None:
        self.config = config
        self.provider = provider
        self.notifier = notifier
        self.policy = ThresholdPolicy.from_config(config)
        self._stopping = asyncio.Event()
        self._task: asyncio.Task | None = None

    # ── lifecycle ────────────────────────────────────────

    async def start(self) -> None:
        if self.running:
            return
        self._stopping.clear()
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self.request_stop()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Beacon [%s] stopped", self.config.name)

    def request_stop(self) -> None:
        """Ask the loop to exit at its next sleep (or right away if sleeping)."""
        self._stopping.set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    # ── loop ────────────────────────────────────────────

    async def run(self) -> None:
        logger.info(
            "Beacon [%s] started (provider=%s, interval=%ds)",
            self.config.name, self.provider.name, self.config.interval_seconds,
        )
        while not self._stopping.is_set():
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Beacon [%s] error during cycle", self.config.name)
            await self._sleep(self.config.interval_seconds)

    async def run_once(self) -> Cycle:
        sample = await self.provider.refresh()
        name = self.config.name

        stats = Report.from_sample(name, sample, Level.INFO)
        stat_delivered = await self.notifier.post(
            self.config.target_stat_url,
            encode_payload(stats, self.config.stat_payload),
            stop=self._stopping,
        )
        logger.debug("Posted stats cpu=%s mem=%s temp=%s", stats.cpu, stats.mem, stats.temp)

        breaches = self.policy.breaches(sample)
        if not breaches:
            return Cycle(sample=sample, stat_delivered=stat_delivered)

        alert = Report.from_sample(name, sample, Level.WARN)
        logger.warning(
            "Alerting (%s) CPU: %s, Memory: %s, Temperature: %s",
            ", ".join(breaches), alert.cpu, alert.mem, alert.temp,
        )
        alert_delivered = await self.notifier.post(
            self.config.target_alert_url,
            encode_payload(alert, self.config.alert_payload),
            stop=self._stopping,
        )
        return Cycle(
            sample=sample,
            breaches=breaches,
            stat_delivered=stat_delivered,
            alert_delivered=alert_delivered,
        )

    # ── internals ───────────────────────────────────────

    async def _sleep(self, seconds: float) -> None:
        try:
            await asyncio.wait_for(self._stopping.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass
