"""
Login Rate Limiter.

Config-driven sliding-window limits on login attempts.
Reads limits from config/settings/security.yaml (rate_limiting.login).
Uses in-memory storage, so limits are per process.
"""

import time
from collections import defaultdict

from kashmir_tours.backend.core.config import get_app_config
from kashmir_tours.backend.core.logging import get_logger

logger = get_logger(__name__)


class RateLimitResult:
    """Result of a rate limit check."""

    def __init__(self, allowed: bool, retry_after_seconds: int = 0) -> None:
        self.allowed = allowed
        self.retry_after_seconds = retry_after_seconds


class LoginRateLimiter:
    """
    Per-key login attempt limiter.

    Each key (client address, account email) has its own per-minute and
    per-hour window. An attempt is recorded only when it is allowed.
    """

    def __init__(self) -> None:
        self._minute_attempts: dict[str, list[float]] = defaultdict(list)
        self._hour_attempts: dict[str, list[float]] = defaultdict(list)

    def check(self, key: str, now: float | None = None) -> RateLimitResult:
        """
        Check whether another login attempt for this key is within limits.

        Args:
            key: Attempt key, e.g. ``ip:10.0.0.1`` or ``email:guest@example.com``
            now: Monotonic timestamp override (tests)

        Returns:
            RateLimitResult indicating whether the attempt is allowed
        """
        limits = get_app_config().security.rate_limiting.login
        now = time.monotonic() if now is None else now

        result = self._check_window(
            key, self._minute_attempts, now, 60, limits.attempts_per_minute,
        )
        if not result.allowed:
            logger.warning(
                "Login rate limit exceeded (per-minute)",
                extra={"key": key, "limit": limits.attempts_per_minute},
            )
            return result

        result = self._check_window(
            key, self._hour_attempts, now, 3600, limits.attempts_per_hour,
        )
        if not result.allowed:
            logger.warning(
                "Login rate limit exceeded (per-hour)",
                extra={"key": key, "limit": limits.attempts_per_hour},
            )
            return result

        self._minute_attempts[key].append(now)
        self._hour_attempts[key].append(now)
        return RateLimitResult(allowed=True)

    def reset(self) -> None:
        """Forget every recorded attempt."""
        self._minute_attempts.clear()
        self._hour_attempts.clear()

    def _check_window(
        self,
        key: str,
        store: dict[str, list[float]],
        now: float,
        window_seconds: int,
        max_attempts: int,
    ) -> RateLimitResult:
        """Check a single rate limit window."""
        cutoff = now - window_seconds
        store[key] = [ts for ts in store[key] if ts > cutoff]

        if len(store[key]) >= max_attempts:
            oldest = min(store[key]) if store[key] else now
            retry_after = int(window_seconds - (now - oldest)) + 1
            return RateLimitResult(allowed=False, retry_after_seconds=retry_after)

        return RateLimitResult(allowed=True)


_rate_limiter: LoginRateLimiter | None = None


def get_rate_limiter() -> LoginRateLimiter:
    """Get or create the login rate limiter singleton."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = LoginRateLimiter()
    return _rate_limiter
