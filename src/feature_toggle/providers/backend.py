"""Client for the backend ``/api/feature-check`` endpoint.

The endpoint answers with a bare JSON boolean.  Anything else, and any
network failure, is reported as :class:`BackendCheckError`; retrying is left
to the caller.
"""

import http.client
import json
import logging
import urllib.error
import urllib.request

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = "http://localhost:8080/api/feature-check"


class BackendCheckError(RuntimeError):
    """The backend feature check could not produce a boolean."""


class BackendFlagClient:
    """Blocking HTTP client for the backend feature check."""

    def __init__(self, url: str = DEFAULT_BACKEND_URL, *, timeout: float | None = None) -> None:
        self._url = url
        self._timeout = timeout

    @property
    def url(self) -> str:
        return self._url

    def fetch(self) -> bool:
        """Return the flag state reported by the backend."""
        req = urllib.request.Request(self._url, headers={"Accept": "application/json"}, method="GET")
        try:
            with urllib.request.urlopen(req, **self._urlopen_kwargs()) as resp:  # noqa: S310
                body = resp.read()
        except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
            msg = f"backend feature check failed: {exc}"
            raise BackendCheckError(msg) from exc

        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            msg = f"backend returned invalid JSON: {body[:100]!r}"
            raise BackendCheckError(msg) from exc
        if not isinstance(payload, bool):
            msg = f"backend returned non-boolean payload: {payload!r}"
            raise BackendCheckError(msg)
        logger.debug("Backend %s reported %s", self._url, payload)
        return payload

    def _urlopen_kwargs(self) -> dict[str, float]:
        # urlopen's own default applies when no timeout is configured
        return {"timeout": self._timeout} if self._timeout is not None else {}
