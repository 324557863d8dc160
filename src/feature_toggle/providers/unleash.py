"""Unleash SDK provider for feature flag evaluation."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class UnleashFlagProvider:
    """Evaluate flags with the ``UnleashClient`` SDK.

    The client fetches toggles once on construction and then refreshes every
    ``refresh_interval`` seconds in the background.  If the SDK is not
    installed or no API token is given, every flag evaluates to off.
    """

    def __init__(
        self,
        url: str,
        *,
        app_name: str = "default",
        instance_id: str = "feature-toggle",
        api_token: str | None = None,
        refresh_interval: int = 5,
    ) -> None:
        self._client: Any = None
        if not api_token:
            logger.info("No Unleash API token configured, UnleashFlagProvider disabled")
            return
        try:
            from UnleashClient import UnleashClient  # type: ignore[import-untyped]  # noqa: PLC0415
        except ImportError:
            logger.warning("UnleashClient not installed, UnleashFlagProvider disabled")
            return

        client = UnleashClient(
            url=url,
            app_name=app_name,
            instance_id=instance_id,
            refresh_interval=refresh_interval,
            custom_headers={"Authorization": api_token},
        )
        try:
            client.initialize_client()
        except Exception:
            logger.exception("Failed to initialise Unleash client for %s", url)
            return
        self._client = client

    @property
    def ready(self) -> bool:
        return self._client is not None

    def is_enabled(self, flag_name: str) -> bool:
        if self._client is None:
            return False
        try:
            return bool(self._client.is_enabled(flag_name))
        except Exception:
            logger.exception("Unleash evaluation failed for flag %s", flag_name)
            return False

    def close(self) -> None:
        if self._client is not None:
            self._client.destroy()
            self._client = None
