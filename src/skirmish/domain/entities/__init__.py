"""Runtime entity exports."""

from .stats import Stats

__all__ = [
    "Stats",
]
