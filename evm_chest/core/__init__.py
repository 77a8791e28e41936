"""
Core helpers for evm-chest

This module provides the helper groups bound to a web3 client:
- Chain control (mine, advance time, block timestamp)
- Balance and revert assertions
- Storage dumps and event log parsing
"""

from .models import EventLogEntry, TransactionOutcome
from .chain import ChainController
from .assertions import (
    Amount,
    DEFAULT_TOLERANCE,
    TOLERANCE_CEILING,
    normalize_amount,
    assert_equal,
    assert_native_balance_changed,
    assert_token_balance_changed,
    assert_invalid_opcode,
    assert_revert
)
from .inspection import dump_storage, extract_event_arg, decode_logs
from .chest import TestChest, create_chest

__all__ = [
    "EventLogEntry",
    "TransactionOutcome",
    "ChainController",
    "Amount",
    "DEFAULT_TOLERANCE",
    "TOLERANCE_CEILING",
    "normalize_amount",
    "assert_equal",
    "assert_native_balance_changed",
    "assert_token_balance_changed",
    "assert_invalid_opcode",
    "assert_revert",
    "dump_storage",
    "extract_event_arg",
    "decode_logs",
    "TestChest",
    "create_chest"
]
