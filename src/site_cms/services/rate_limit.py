"""In-process fixed-window rate limiter."""

import logging
import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from site_cms.domain.rate_limit import (
    Allowed,
    RateLimitConfig,
    RateLimitDecision,
    RateLimitWindow,
    Rejected,
)

_logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class RateLimiter:
    """Per-client, per-route request counter with a fixed window.

    Counters live in this process only: they reset on restart and are not
    shared between instances.
    """

    clock: Callable[[], int] = _now_ms
    sweep_interval_ms: int = 5 * 60 * 1000
    _windows: dict[str, RateLimitWindow] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)
    _next_sweep_ms: int | None = field(default=None, init=False)

    def check_and_record(
        self, client_identifier: str, route_key: str, config: RateLimitConfig
    ) -> RateLimitDecision:
        """Count a request and decide whether it may proceed."""
        key = f"{client_identifier}:{route_key}"
        with self._lock:
            now = self.clock()
            self._maybe_sweep(now)
            window = self._windows.get(key)
            if window is None or window.reset_time_ms < now:
                window = RateLimitWindow(
                    count=0, reset_time_ms=now + config.interval_ms
                )
                self._windows[key] = window
            window.count += 1
            count = window.count
            reset_seconds = math.ceil((window.reset_time_ms - now) / 1000)

        if count > config.max_requests:
            _logger.warning(
                "Rate limit exceeded: client=%s route=%s count=%s limit=%s",
                client_identifier,
                route_key,
                count,
                config.max_requests,
            )
            return Rejected(
                limit=config.max_requests,
                retry_after_seconds=max(1, reset_seconds),
            )
        return Allowed(
            limit=config.max_requests,
            remaining=max(0, config.max_requests - count),
            reset_seconds=reset_seconds,
        )

    def sweep_expired(self) -> int:
        """Drop every window whose reset time has passed."""
        with self._lock:
            return self._sweep(self.clock())

    def active_windows(self) -> int:
        with self._lock:
            return len(self._windows)

    def _maybe_sweep(self, now: int) -> None:
        if self._next_sweep_ms is None:
            self._next_sweep_ms = now + self.sweep_interval_ms
            return
        if now >= self._next_sweep_ms:
            self._sweep(now)
            self._next_sweep_ms = now + self.sweep_interval_ms

    def _sweep(self, now: int) -> int:
        expired = [
            key for key, window in self._windows.items() if window.reset_time_ms < now
        ]
        for key in expired:
            del self._windows[key]
        if expired:
            _logger.debug("Rate limiter purged %s expired windows", len(expired))
        return len(expired)
