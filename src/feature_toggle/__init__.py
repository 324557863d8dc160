"""Feature flag checks with a short-lived cache in front of each lookup."""

__version__ = "0.1.0"
