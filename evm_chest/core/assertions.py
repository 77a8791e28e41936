"""
Assertion helpers for balance deltas and expected transaction failures

Balance helpers compare Python ints, never floats. Native-currency checks
allow a bounded drift so gas costs do not make them brittle; token checks
are exact.
"""

import logging
import re
from typing import Any, Awaitable, Union

from ..exceptions import ChestAssertionError, InvalidAmountError
from ..utils.converters import from_wei_to_ether

logger = logging.getLogger(__name__)

# 0.01 ether
DEFAULT_TOLERANCE = 10 ** 16
TOLERANCE_CEILING = 10 ** 16

REVERT_MARKER = "revert"
INVALID_OPCODE_MARKER = "invalid opcode"

Amount = Union[int, str]


def normalize_amount(value: Amount, name: str = "amount") -> int:
    """
    Turn an amount argument into an int

    Args:
        value: int or base-10 string
        name: Argument name used in the error message

    Returns:
        The amount as an int

    Raises:
        InvalidAmountError: value is neither an int nor a base-10 string
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"{name} is a bool, expected an int or a base-10 string")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        digits = text[1:] if text[:1] in ("-", "+") else text
        if digits.isascii() and digits.isdigit():
            return int(text, 10)
        raise InvalidAmountError(f"{name} is not a base-10 string: {value!r}")
    raise InvalidAmountError(
        f"{name} is neither an int nor a string: {type(value).__name__}"
    )


def assert_equal(actual: int, expected: int) -> None:
    """Fail unless two wei amounts are exactly equal"""
    for name, value in (("actual", actual), ("expected", expected)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidAmountError(f"{name} value is not an int: {value!r}")

    if actual != expected:
        raise ChestAssertionError(
            f"Expected {from_wei_to_ether(actual)} (actual) ether to be equal "
            f"{from_wei_to_ether(expected)} ether (expected)"
        )


def assert_native_balance_changed(before: Amount,
                                  after: Amount,
                                  expected_delta: Amount,
                                  tolerance: Amount = DEFAULT_TOLERANCE,
                                  ceiling: Amount = TOLERANCE_CEILING) -> None:
    """
    Check a native-currency balance moved by roughly the expected delta

    The drift ``after - expected_delta - before + tolerance`` must land in
    ``(0, ceiling]``. With the defaults this accepts a balance that ended up
    to 0.01 ether below the expected value (gas) but never above it.

    Args:
        before: Balance before the operation, in wei
        after: Balance after the operation, in wei
        expected_delta: Expected change, in wei (negative for spending)
        tolerance: Allowed shortfall, in wei
        ceiling: Upper bound on the drift, in wei
    """
    before = normalize_amount(before, "before")
    after = normalize_amount(after, "after")
    expected_delta = normalize_amount(expected_delta, "expected_delta")
    tolerance = normalize_amount(tolerance, "tolerance")
    ceiling = normalize_amount(ceiling, "ceiling")

    drift = after - expected_delta - before + tolerance

    if drift > ceiling:
        raise ChestAssertionError(
            f"Balance changed by more than expected: drift "
            f"{from_wei_to_ether(drift)} ether ({drift} wei) is above the "
            f"{from_wei_to_ether(ceiling)} ether ceiling"
        )

    if drift <= 0:
        raise ChestAssertionError(
            f"Balance changed by less than expected: drift "
            f"{from_wei_to_ether(drift)} ether ({drift} wei) is not greater than 0 "
            f"(shortfall exceeds the {from_wei_to_ether(tolerance)} ether tolerance)"
        )

    logger.debug(f"Native balance drift {drift} wei within (0, {ceiling}]")


def assert_token_balance_changed(before: Amount, after: Amount, delta: Amount) -> None:
    """Check a token balance moved by exactly ``delta`` base units"""
    before = normalize_amount(before, "before")
    after = normalize_amount(after, "after")
    delta = normalize_amount(delta, "delta")

    assert_equal(after, before + delta)


async def assert_invalid_opcode(pending: Awaitable[Any]) -> BaseException:
    """
    Await an operation that must fail with an INVALID (0xfe) opcode

    Returns:
        The exception the operation raised
    """
    try:
        await pending
    except Exception as error:
        if INVALID_OPCODE_MARKER not in str(error):
            raise ChestAssertionError(
                f"Expected INVALID (0xfe), got '{error}' instead"
            ) from error
        return error

    raise ChestAssertionError("Expected INVALID (0xfe) failure, none received")


async def assert_revert(pending: Awaitable[Any],
                        expected: str = "",
                        match_as_regex: bool = True) -> BaseException:
    """
    Await an operation that must revert

    Args:
        pending: Coroutine, task or future performing the call
        expected: Text the revert message must also contain
        match_as_regex: Treat ``expected`` as a regular expression

    Returns:
        The exception the operation raised
    """
    try:
        await pending
    except Exception as error:
        message = str(error)

        if expected and not _message_matches(message, expected, match_as_regex):
            raise ChestAssertionError(
                f'Expected throw with "{expected}" message, got "{error}" instead'
            ) from error

        if not _message_matches(message, REVERT_MARKER, match_as_regex):
            raise ChestAssertionError(
                f"Expected revert, got '{error}' instead"
            ) from error

        return error

    raise ChestAssertionError(
        f"Expected revert not received: {expected or 'without a message'}"
    )


def _message_matches(message: str, pattern: str, as_regex: bool) -> bool:
    if as_regex:
        return re.search(pattern, message) is not None
    return pattern in message
