"""
Exception hierarchy for evm-chest

Assertion and type errors subclass the matching builtins so test runners
report them the usual way.
"""

from typing import Any, Optional


class ChestError(Exception):
    """Base exception for evm-chest errors"""


class ConfigurationError(ChestError):
    """Raised when no provider is bound or the configuration is invalid"""


class RpcError(ChestError):
    """Raised when a node request fails at the transport or JSON-RPC level"""

    def __init__(self, message: str, method: Optional[str] = None, payload: Any = None):
        super().__init__(message)
        self.method = method
        self.payload = payload


class ChestAssertionError(ChestError, AssertionError):
    """Raised when an assertion helper's condition does not hold"""


class InvalidAmountError(ChestError, TypeError):
    """Raised when an amount is neither an int nor a base-10 string"""


class NotFoundError(ChestError, LookupError):
    """Raised when an event or event argument is missing from a transaction"""


__all__ = [
    "ChestError",
    "ConfigurationError",
    "RpcError",
    "ChestAssertionError",
    "InvalidAmountError",
    "NotFoundError",
]
