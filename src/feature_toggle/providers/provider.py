"""FlagProvider protocol defining the evaluation interface."""

from typing import Protocol


class FlagProvider(Protocol):
    """Structural protocol for synchronous flag evaluation."""

    def is_enabled(self, flag_name: str) -> bool: ...
