"""
Unit and encoding converters for evm-chest

Translates between human units (ether, gwei) and on-chain integer / hex
encodings. All amount arithmetic is done on Python ints.
"""

import asyncio
from decimal import Decimal, localcontext
from typing import Union

from eth_utils import is_hex, is_hex_address, remove_0x_prefix
from eth_utils.currency import units
from web3 import Web3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

EVM_WORD_HEX_LENGTH = 64
MAX_UINT256 = 2 ** 256 - 1

Numeric = Union[int, str, Decimal]


def to_hex(value: Union[int, str, bytes]) -> str:
    """
    Hex-encode a number, a byte string or text

    Args:
        value: int, bytes, a ``0x`` hex string (returned normalized),
            a base-10 string (encoded as a number) or any other text
            (encoded as UTF-8)

    Returns:
        ``0x`` prefixed hex string
    """
    if isinstance(value, str):
        if value.startswith(("0x", "0X")) and is_hex(value):
            return Web3.to_hex(hexstr=value)
        if value.isdigit():
            return Web3.to_hex(int(value))
        return Web3.to_hex(text=value)
    return Web3.to_hex(value)


def to_int(value: Union[int, str]) -> int:
    """Parse a base-10 integer"""
    if isinstance(value, bool):
        raise TypeError("Booleans are not integers here")
    if isinstance(value, int):
        return value
    return int(str(value).strip(), 10)


def to_gwei(number: Numeric) -> str:
    """
    Convert a gwei quantity to wei

    Args:
        number: Quantity in gwei (int, Decimal or numeric string)

    Returns:
        Wei amount as a base-10 string
    """
    return _scale_to_wei(number, "gwei")


def to_ether(number: Numeric) -> str:
    """
    Convert an ether quantity to wei

    Args:
        number: Quantity in ether (int, Decimal or numeric string)

    Returns:
        Wei amount as a base-10 string
    """
    return _scale_to_wei(number, "ether")


def from_wei_to_ether(amount: int) -> str:
    """Render a signed wei amount in ether without exponent notation"""
    magnitude = Decimal(Web3.from_wei(abs(amount), "ether"))
    rendered = format(magnitude.normalize() if magnitude else magnitude, "f")
    return f"-{rendered}" if amount < 0 else rendered


def number_to_evm_word(number: Union[int, str]) -> str:
    """
    Encode a number as a 32-byte EVM word

    Args:
        number: Non-negative int or base-10 string

    Returns:
        ``0x`` followed by 64 hex characters, left zero-padded
    """
    value = to_int(number)
    if value < 0:
        raise ValueError(f"Cannot encode negative number {value} as an EVM word")
    if value > MAX_UINT256:
        raise ValueError(f"Number {value} does not fit in 256 bits")

    digits = remove_0x_prefix(Web3.to_hex(value))
    return "0x" + digits.rjust(EVM_WORD_HEX_LENGTH, "0")


def address_to_evm_word(address: str) -> str:
    """
    Encode a 20-byte address as a 32-byte EVM word

    Args:
        address: Hex address, with or without ``0x``

    Returns:
        ``0x`` followed by 64 hex characters, left zero-padded
    """
    if not isinstance(address, str) or not is_hex_address(address):
        raise ValueError(f"Not a 20-byte hex address: {address!r}")

    digits = remove_0x_prefix(address)
    return "0x" + digits.rjust(EVM_WORD_HEX_LENGTH, "0")


def bytes32_to_evm_word(value: Union[bytes, str]) -> str:
    """
    Encode a byte string of at most 32 bytes as an EVM word

    Args:
        value: Raw bytes or a hex string

    Returns:
        ``0x`` followed by 64 hex characters, right zero-padded
    """
    if isinstance(value, (bytes, bytearray)):
        digits = bytes(value).hex()
    elif isinstance(value, str) and is_hex(value):
        digits = remove_0x_prefix(value)
    else:
        raise ValueError(f"Not a byte string or hex string: {value!r}")

    if len(digits) > EVM_WORD_HEX_LENGTH:
        raise ValueError(f"Value is longer than 32 bytes: {len(digits) // 2} bytes")

    return "0x" + digits.ljust(EVM_WORD_HEX_LENGTH, "0")


async def sleep(ms: float) -> None:
    """Suspend the caller for ``ms`` milliseconds"""
    await asyncio.sleep(ms / 1000)


def _scale_to_wei(number: Numeric, unit: str) -> str:
    quantity = _as_wei_input(number)
    if quantity < 0:
        raise ValueError(f"Cannot convert negative quantity {number!r} to wei")

    # Precision wide enough that the product is never rounded
    with localcontext() as ctx:
        ctx.prec = 999
        wei = Decimal(quantity) * units[unit]

    if wei != wei.to_integral_value():
        raise ValueError(f"{number!r} {unit} is not a whole number of wei")
    return str(int(wei))


def _as_wei_input(number: Numeric) -> Union[int, Decimal]:
    # Floats would round before scaling
    if isinstance(number, bool):
        raise TypeError("Booleans are not quantities")
    if isinstance(number, float):
        return Decimal(repr(number))
    if isinstance(number, str):
        return Decimal(number.strip())
    return number
