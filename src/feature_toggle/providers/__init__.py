"""Flag-evaluation providers and the remote feature-check client."""

from feature_toggle.providers.backend import BackendCheckError, BackendFlagClient
from feature_toggle.providers.provider import FlagProvider
from feature_toggle.providers.static import StaticFlagProvider
from feature_toggle.providers.unleash import UnleashFlagProvider

__all__ = ["BackendCheckError", "BackendFlagClient", "FlagProvider", "StaticFlagProvider", "UnleashFlagProvider"]
