"""Per-provider health bookkeeping that gates live API calls.

A failed probe puts the provider into a one hour cool-down so that every trip
query after the first observed failure skips straight to mock data. Successful
or stale statuses are re-probed at most every five minutes.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Dict, Iterable, Optional, Tuple

import httpx

from tirthyatra.core.schemas import ApiHealthStatus, HealthSummary

logger = logging.getLogger(__name__)

PROBE_TIMEOUT_S = 5.0
PROBE_INTERVAL_MS = 5 * 60 * 1000
FAILURE_COOLDOWN_MS = 60 * 60 * 1000
REACHABLE_AUTH_STATUSES = {401, 403}

ProbeTarget = Tuple[str, str, Optional[Dict[str, str]]]


class ApiHealthTracker:
    """Records the last connectivity check per provider.

    Construct one instance per process and pass it to every fetcher.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.time,
        client: Optional[httpx.AsyncClient] = None,
        timeout_s: float = PROBE_TIMEOUT_S,
    ) -> None:
        self._clock = clock
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_s))
        self._statuses: Dict[str, ApiHealthStatus] = {}

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    async def aclose(self) -> None:
        await self._client.aclose()

    def record(self, provider: str, working: bool, error: Optional[str] = None) -> ApiHealthStatus:
        """Overwrite the status for ``provider`` with a fresh data point."""

        status = ApiHealthStatus(provider=provider, working=working, last_checked=self._now_ms(), error=error)
        self._statuses[provider] = status
        if not working:
            logger.warning(f"Provider {provider} marked unhealthy: {error or 'unknown error'}")
        return status

    async def probe(self, provider: str, test_url: str, headers: Optional[Dict[str, str]] = None) -> bool:
        """Issue a bounded GET against ``test_url`` and record whether the provider is reachable.

        Authentication failures still count as reachable: the network path works
        and only the credential is wrong.
        """

        try:
            response = await self._client.get(test_url, headers=headers)
        except httpx.HTTPError as exc:
            self.record(provider, False, f"{type(exc).__name__}: {exc}")
            return False

        status_code = response.status_code
        working = 200 <= status_code < 300 or status_code in REACHABLE_AUTH_STATUSES
        self.record(provider, working, None if working else f"HTTP {status_code}")
        logger.info(f"Probe {provider}: HTTP {status_code} -> {'working' if working else 'failed'}")
        return working

    def status(self, provider: str) -> Optional[ApiHealthStatus]:
        return self._statuses.get(provider)

    def statuses(self) -> Dict[str, ApiHealthStatus]:
        return dict(self._statuses)

    def should_attempt_live(self, provider: str) -> bool:
        """False only while a recorded failure is younger than the cool-down window."""

        status = self._statuses.get(provider)
        if status is None or status.working:
            return True
        return self._now_ms() - status.last_checked >= FAILURE_COOLDOWN_MS

    def needs_probe(self, provider: str) -> bool:
        status = self._statuses.get(provider)
        if status is None:
            return True
        return self._now_ms() - status.last_checked >= PROBE_INTERVAL_MS

    async def ensure_live(self, provider: str, test_url: str, headers: Optional[Dict[str, str]] = None) -> bool:
        """Decide whether a live call to ``provider`` should be attempted right now."""

        if not self.should_attempt_live(provider):
            logger.info(f"Skipping {provider}: in cool-down after failure")
            return False
        if self.needs_probe(provider):
            return await self.probe(provider, test_url, headers)
        return True

    async def probe_all(self, targets: Iterable[ProbeTarget]) -> Dict[str, ApiHealthStatus]:
        """Probe several providers concurrently, used by diagnostics tooling."""

        targets = list(targets)
        await asyncio.gather(*(self.probe(provider, url, headers) for provider, url, headers in targets))
        return {provider: self._statuses[provider] for provider, _, _ in targets}

    def summary(self) -> HealthSummary:
        providers = {name: status.working for name, status in self._statuses.items()}
        working = sum(1 for ok in providers.values() if ok)
        return HealthSummary(
            total=len(providers),
            working=working,
            failed=len(providers) - working,
            providers=providers,
        )

    def reset(self) -> None:
        """Forget every recorded status so the next call probes again."""

        logger.info("Resetting API health status cache")
        self._statuses.clear()
