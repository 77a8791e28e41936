"""
Module-level helpers bound to one globally configured client

Call ``set_provider(w3)`` once (e.g. in a conftest fixture) before using
any chain-touching helper. Pure converters and balance assertions work
without a provider. Prefer ``create_chest(w3)`` when more than one node is
in play.
"""

from typing import Any, Awaitable, Callable, List, Optional, Tuple

from .config import ChestSettings
from .core import assertions, inspection
from .core.assertions import Amount
from .core.chest import TestChest
from .core.models import TransactionOutcome
from .exceptions import ConfigurationError
from .utils.converters import (
    ZERO_ADDRESS,
    to_hex,
    to_int,
    to_gwei,
    to_ether,
    number_to_evm_word,
    address_to_evm_word,
    bytes32_to_evm_word,
    sleep
)

_chest: Optional[TestChest] = None


def set_provider(w3, settings: Optional[ChestSettings] = None) -> TestChest:
    """Bind the module-level helpers to ``w3``"""
    global _chest
    _chest = TestChest(w3, settings)
    return _chest


def reset_provider() -> None:
    """Unbind the module-level helpers"""
    global _chest
    _chest = None


def provider():
    """The bound web3 client"""
    return _current().w3


def _current() -> TestChest:
    if _chest is None:
        raise ConfigurationError(
            "evm-chest: no web3 provider set, initialize it using set_provider(w3) first"
        )
    return _chest


async def mine_block() -> Any:
    return await _current().mine_block()


async def increase_time(seconds: int) -> Any:
    return await _current().increase_time(seconds)


async def advance_time_and_mine(seconds: int) -> Any:
    return await _current().advance_time_and_mine(seconds)


async def current_block_timestamp() -> int:
    return await _current().current_block_timestamp()


def assert_equal(actual: int, expected: int) -> None:
    assertions.assert_equal(actual, expected)


def assert_native_balance_changed(before: Amount,
                                  after: Amount,
                                  expected_delta: Amount,
                                  tolerance: Optional[Amount] = None) -> None:
    """Uses the bound chest's settings when a provider is set"""
    if _chest is not None:
        _chest.assert_native_balance_changed(before, after, expected_delta, tolerance)
        return
    if tolerance is None:
        tolerance = assertions.DEFAULT_TOLERANCE
    assertions.assert_native_balance_changed(before, after, expected_delta, tolerance)


def assert_token_balance_changed(before: Amount, after: Amount, delta: Amount) -> None:
    assertions.assert_token_balance_changed(before, after, delta)


async def assert_invalid_opcode(pending: Awaitable[Any]) -> BaseException:
    return await assertions.assert_invalid_opcode(pending)


async def assert_revert(pending: Awaitable[Any],
                        expected: str = "",
                        match_as_regex: bool = True) -> BaseException:
    return await assertions.assert_revert(pending, expected, match_as_regex)


async def dump_storage(address: str,
                       from_slot: Optional[int] = None,
                       to_slot: Optional[int] = None,
                       sink: Optional[Callable[[str], None]] = None) -> List[Tuple[int, str]]:
    return await _current().dump_storage(address, from_slot, to_slot, sink=sink)


def extract_event_arg(outcome: Any, event_name: str, arg_name: str) -> Any:
    return inspection.extract_event_arg(outcome, event_name, arg_name)


def decode_logs(contract, receipt) -> TransactionOutcome:
    return inspection.decode_logs(contract, receipt)


__all__ = [
    "set_provider",
    "reset_provider",
    "provider",
    "ZERO_ADDRESS",
    "to_hex",
    "to_int",
    "to_gwei",
    "to_ether",
    "number_to_evm_word",
    "address_to_evm_word",
    "bytes32_to_evm_word",
    "sleep",
    "mine_block",
    "increase_time",
    "advance_time_and_mine",
    "current_block_timestamp",
    "assert_equal",
    "assert_native_balance_changed",
    "assert_token_balance_changed",
    "assert_invalid_opcode",
    "assert_revert",
    "dump_storage",
    "extract_event_arg",
    "decode_logs"
]
