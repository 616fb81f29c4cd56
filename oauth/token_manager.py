"""Time-based memoization of bearer tokens shared by concurrent requests"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from settings import TOKEN_SAFETY_MARGIN
from .models import TokenGrant

logger = logging.getLogger(__name__)

Refresher = Callable[[], Awaitable[TokenGrant]]


class TokenCache:
    """Caches one bearer token and refreshes it before it expires

    The lock is held for the whole check-and-refresh sequence, so at most one
    refresh is in flight and later callers wait for its result instead of
    starting their own.
    """

    def __init__(
        self,
        refresher: Refresher,
        clock: Callable[[], float] = time.time,
        safety_margin: float = TOKEN_SAFETY_MARGIN,
    ):
        """
        Args:
            refresher: Coroutine function performing one token exchange
            clock: Time source returning epoch seconds
            safety_margin: Seconds of remaining validity required at hand-off
        """
        self._refresher = refresher
        self._clock = clock
        self._safety_margin = safety_margin
        self._value = ""
        self._expires_at = 0.0
        self._lock = asyncio.Lock()
        self.refresh_count = 0

    def _needs_refresh(self, now: float) -> bool:
        return not self._value or now + self._safety_margin >= self._expires_at

    async def get_token(self) -> str:
        """Return a bearer token valid for at least the safety margin

        Raises:
            CredentialError: If a needed refresh fails; the cache is left unchanged
        """
        async with self._lock:
            if not self._needs_refresh(self._clock()):
                return self._value

            logger.info("Access token missing or near expiry, refreshing...")
            grant = await self._refresher()

            # Measured after the exchange so a slow endpoint cannot stretch the lifetime
            self._value = grant.access_token
            self._expires_at = self._clock() + grant.expires_in
            self.refresh_count += 1
            logger.debug(f"Cached access token until {self._expires_at:.0f}")
            return self._value

    async def invalidate(self):
        """Drop the cached token so the next call refreshes"""
        async with self._lock:
            self._value = ""
            self._expires_at = 0.0

    def status(self) -> Dict[str, Any]:
        """Cache status without exposing the token"""
        if not self._value:
            return {"has_token": False, "expires_in_seconds": None, "refresh_count": self.refresh_count}

        remaining = int(self._expires_at - self._clock())
        return {
            "has_token": True,
            "expires_in_seconds": max(remaining, 0),
            "needs_refresh": self._needs_refresh(self._clock()),
            "refresh_count": self.refresh_count,
        }

    @property
    def expires_at(self) -> Optional[float]:
        return self._expires_at if self._value else None
