"""Turn-based team combat with reversible actions."""

__version__ = "0.1.0"
