"""Domain-layer exceptions."""


class SkirmishError(Exception):
    """Base exception for combat domain failures."""


class ActionNotExecutedError(SkirmishError):
    """Raised when an action is undone without a prior successful execute."""


class ConfigurationError(SkirmishError):
    """Raised when a battle is set up with inconsistent teams or strategies."""
