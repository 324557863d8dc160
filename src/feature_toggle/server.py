"""FastAPI app serving the backend feature check."""

import logging
from typing import Any

from feature_toggle import __version__
from feature_toggle.cache import FeatureFlagCache
from feature_toggle.providers.provider import FlagProvider

logger = logging.getLogger(__name__)


def create_app(
    cache: FeatureFlagCache,
    provider: FlagProvider,
    *,
    flag_name: str,
    cors_origins: list[str] | None = None,
) -> Any:
    """Create and return the FastAPI application.

    Args:
        cache: Cache consulted before the provider, keyed by flag name.
        provider: Flag provider evaluated on cache misses.
        flag_name: The flag reported by ``/api/feature-check``.
        cors_origins: Browser origins allowed to call the API.

    Returns:
        A FastAPI application instance.
    """
    from fastapi import FastAPI  # noqa: PLC0415
    from fastapi.middleware.cors import CORSMiddleware  # noqa: PLC0415
    from fastapi.responses import JSONResponse  # noqa: PLC0415

    app = FastAPI(title="Feature Toggle Backend", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or [],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    def api_health() -> JSONResponse:
        return JSONResponse({"status": "ok", "version": __version__})

    @app.get("/api/feature-check")
    def api_feature_check() -> JSONResponse:
        return JSONResponse(_check_feature(cache, provider, flag_name))

    return app


def _check_feature(cache: FeatureFlagCache, provider: FlagProvider, flag_name: str) -> bool:
    """Return the cached flag state, evaluating and caching on a miss.

    Provider errors are logged and reported as ``False``; the result is not
    cached in that case.
    """
    logger.debug("Checking feature flag: %s", flag_name)
    cached = cache.get(flag_name)
    if cached is not None:
        logger.debug("Using cached value for feature %s: %s", flag_name, cached)
        return bool(cached)
    try:
        enabled = provider.is_enabled(flag_name)
    except Exception:
        logger.exception("Error checking feature flag %s", flag_name)
        return False
    logger.debug("Feature flag %s status (from provider): %s", flag_name, enabled)
    cache.set(flag_name, enabled)
    return enabled
