"""Rate limiting domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitConfig:
    """Limit of `max_requests` per `interval_ms` window."""

    interval_ms: int
    max_requests: int


@dataclass
class RateLimitWindow:
    """Request counter for one client and route."""

    count: int
    reset_time_ms: int


@dataclass(frozen=True)
class Allowed:
    """The request may proceed."""

    limit: int
    remaining: int
    reset_seconds: int


@dataclass(frozen=True)
class Rejected:
    """The request exceeded its quota for the current window."""

    limit: int
    retry_after_seconds: int


RateLimitDecision = Allowed | Rejected
