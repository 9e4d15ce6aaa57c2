"""Decision strategy implementations."""

from .console import ConsoleStrategy
from .deadline import DeadlineStrategy
from .oracle import Oracle, OracleStrategy, command_oracle
from .rule_based import RuleBasedStrategy

__all__ = [
    "ConsoleStrategy",
    "DeadlineStrategy",
    "Oracle",
    "OracleStrategy",
    "RuleBasedStrategy",
    "command_oracle",
]
