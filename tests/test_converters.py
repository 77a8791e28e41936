import asyncio
from decimal import Decimal

import pytest

from evm_chest.utils.converters import (
    ZERO_ADDRESS,
    address_to_evm_word,
    bytes32_to_evm_word,
    from_wei_to_ether,
    number_to_evm_word,
    sleep,
    to_ether,
    to_gwei,
    to_hex,
    to_int,
)


@pytest.mark.parametrize("n", [0, 1, 7, 12345, 10 ** 30])
def test_gwei_and_ether_scale_by_fixed_multipliers(n):
    assert to_gwei(n) == str(n * 10 ** 9)
    assert to_ether(n) == str(n * 10 ** 18)


def test_fractional_and_string_quantities():
    assert to_ether("1.5") == "1500000000000000000"
    assert to_gwei("0.5") == "500000000"
    assert to_ether(Decimal("0.01")) == "10000000000000000"
    assert to_gwei(" 20 ") == "20000000000"


def test_malformed_quantity_raises():
    with pytest.raises(Exception):
        to_ether("lots")


def test_sub_wei_quantities_raise_instead_of_truncating():
    with pytest.raises(ValueError, match="whole number of wei"):
        to_gwei("0.0000000015")
    with pytest.raises(ValueError, match="whole number of wei"):
        to_ether("0.0000000000000000001")
    assert to_gwei("0.000000001") == "1"


def test_negative_quantity_raises():
    with pytest.raises(ValueError):
        to_ether(-1)


def test_quantities_beyond_uint256_are_scaled_exactly():
    assert to_gwei(10 ** 70) == str(10 ** 79)
    assert to_ether(str(10 ** 80)) == str(10 ** 98)


def test_from_wei_to_ether_renders_signed_amounts():
    assert from_wei_to_ether(0) == "0"
    assert from_wei_to_ether(10 ** 20) == "100"
    assert from_wei_to_ether(5 * 10 ** 17) == "0.5"
    assert from_wei_to_ether(-5 * 10 ** 17) == "-0.5"
    assert from_wei_to_ether(20) == "0.00000000000000002"


def test_number_to_evm_word_left_pads():
    word = number_to_evm_word(255)
    assert word == "0x" + "0" * 62 + "ff"
    assert len(word) == 66
    assert number_to_evm_word("16") == "0x" + "0" * 62 + "10"
    assert number_to_evm_word(2 ** 256 - 1) == "0x" + "f" * 64


def test_number_to_evm_word_rejects_out_of_range():
    with pytest.raises(ValueError):
        number_to_evm_word(-1)
    with pytest.raises(ValueError):
        number_to_evm_word(2 ** 256)


def test_address_to_evm_word_left_pads_and_keeps_digits():
    address = "0x5B38Da6a701c568545dCfcB03FcB875f56beddC4"
    word = address_to_evm_word(address)
    assert word == "0x" + "0" * 24 + address[2:]
    assert len(word) - 2 == 64
    assert address_to_evm_word(ZERO_ADDRESS) == "0x" + "0" * 64


def test_address_to_evm_word_rejects_non_addresses():
    with pytest.raises(ValueError):
        address_to_evm_word("0x1234")
    with pytest.raises(ValueError):
        address_to_evm_word(1234)


def test_bytes32_to_evm_word_right_pads():
    assert bytes32_to_evm_word("0x1234") == "0x1234" + "0" * 60
    assert bytes32_to_evm_word(b"\x01\x02") == "0x0102" + "0" * 60
    assert bytes32_to_evm_word(b"\xaa" * 32) == "0x" + "aa" * 32


def test_bytes32_to_evm_word_rejects_oversized_values():
    with pytest.raises(ValueError):
        bytes32_to_evm_word(b"\x00" * 33)
    with pytest.raises(ValueError):
        bytes32_to_evm_word("not hex")


def test_to_hex_and_to_int():
    assert to_hex(255) == "0xff"
    assert to_hex("10") == "0xa"
    assert to_hex("hi") == "0x6869"
    assert to_hex("0xABCD") == "0xabcd"
    assert to_hex(b"\x01") == "0x01"
    assert to_int("42") == 42
    assert to_int(7) == 7
    with pytest.raises(ValueError):
        to_int("4.2")


@pytest.mark.asyncio
async def test_sleep_suspends_for_milliseconds():
    loop = asyncio.get_running_loop()
    started = loop.time()
    await sleep(20)
    assert loop.time() - started >= 0.015
