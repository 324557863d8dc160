"""Flag provider backed by a fixed mapping, useful without an Unleash server."""

from collections.abc import Mapping


class StaticFlagProvider:
    """Evaluate flags from a mapping; unknown flags are off."""

    def __init__(self, flags: Mapping[str, bool] | None = None) -> None:
        self._flags = dict(flags or {})

    def is_enabled(self, flag_name: str) -> bool:
        return bool(self._flags.get(flag_name, False))

    def set_flag(self, flag_name: str, enabled: bool) -> None:
        self._flags[flag_name] = enabled
