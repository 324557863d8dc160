"""Flag checks that go through the cache before asking a provider.

``FeatureToggle`` receives its cache, local provider and backend client by
injection.  Frontend checks are keyed by the flag name; backend checks use a
``backend-`` prefix so both sources of the same flag are cached separately.
"""

import asyncio
import logging
from enum import Enum

from pydantic import BaseModel

from feature_toggle.cache import FeatureFlagCache
from feature_toggle.providers.backend import BackendCheckError, BackendFlagClient
from feature_toggle.providers.provider import FlagProvider

logger = logging.getLogger(__name__)

BACKEND_KEY_PREFIX = "backend-"
BACKEND_ERROR_MESSAGE = "Backend API call failed, please check that the backend service is running"


class FlagSource(str, Enum):
    FRONTEND = "frontend"
    BACKEND = "backend"


_SOURCE_LABELS = {
    FlagSource.FRONTEND: "Frontend check",
    FlagSource.BACKEND: "Backend check",
}


class ToggleStatus(BaseModel):
    """Outcome of one flag check, with the text to display for it."""

    flag: str
    source: FlagSource
    enabled: bool | None = None
    cached: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        if self.error is not None:
            return BACKEND_ERROR_MESSAGE
        label = _SOURCE_LABELS[self.source]
        if self.enabled:
            return f"{label}:\nNew feature enabled!"
        return f"{label}:\nFalling back to legacy logic"


def backend_cache_key(flag_name: str) -> str:
    return BACKEND_KEY_PREFIX + flag_name


class FeatureToggle:
    """Answer frontend and backend flag checks, memoising each result."""

    def __init__(self, cache: FeatureFlagCache, provider: FlagProvider, backend: BackendFlagClient) -> None:
        self._cache = cache
        self._provider = provider
        self._backend = backend

    def check_frontend(self, flag_name: str) -> ToggleStatus:
        """Evaluate ``flag_name`` with the local provider."""
        cached = self._cache.get(flag_name)
        if cached is not None:
            logger.info(
                "Using cached value for feature %s",
                flag_name,
                extra={"flag": flag_name, "source": "frontend", "cached": True},
            )
            return ToggleStatus(flag=flag_name, source=FlagSource.FRONTEND, enabled=cached, cached=True)

        try:
            enabled = self._provider.is_enabled(flag_name)
        except Exception:
            logger.exception("Error evaluating feature flag %s", flag_name)
            return ToggleStatus(flag=flag_name, source=FlagSource.FRONTEND, enabled=False)
        logger.info(
            "Feature %s enabled (from provider): %s", flag_name, enabled, extra={"flag": flag_name, "source": "frontend"}
        )
        self._cache.set(flag_name, enabled)
        return ToggleStatus(flag=flag_name, source=FlagSource.FRONTEND, enabled=enabled)

    async def check_backend(self, flag_name: str) -> ToggleStatus:
        """Ask the backend endpoint for ``flag_name``.

        The HTTP call runs in a worker thread.  Concurrent calls for the same
        flag are not coalesced: each miss issues its own request.  Failures
        are logged and returned as an error status; nothing is cached.
        """
        key = backend_cache_key(flag_name)
        cached = self._cache.get(key)
        if cached is not None:
            logger.info(
                "Using cached value for backend feature %s",
                flag_name,
                extra={"flag": flag_name, "source": "backend", "cached": True},
            )
            return ToggleStatus(flag=flag_name, source=FlagSource.BACKEND, enabled=cached, cached=True)

        try:
            enabled = await asyncio.to_thread(self._backend.fetch)
        except BackendCheckError as exc:
            logger.exception("Backend API error for feature %s", flag_name)
            return ToggleStatus(flag=flag_name, source=FlagSource.BACKEND, error=str(exc))

        logger.info(
            "Backend feature %s enabled: %s", flag_name, enabled, extra={"flag": flag_name, "source": "backend"}
        )
        # Last completed request wins when checks overlap.
        self._cache.set(key, enabled)
        return ToggleStatus(flag=flag_name, source=FlagSource.BACKEND, enabled=enabled)
