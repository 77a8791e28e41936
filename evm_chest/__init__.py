"""
evm-chest: helpers for testing smart contracts on a local EVM test node

This package provides:
- Unit and EVM-word converters (wei/gwei/ether, padded hex words)
- Async wrappers for test-node control calls (mine, advance time)
- Assertions for balance deltas and expected reverts
- Storage dumps and event-argument extraction for debugging

Construction modes:
- TestChest / create_chest: helpers bound to an injected web3 client
- evm_chest.default: module-level helpers after set_provider(w3)
"""

__version__ = "0.1.0"

from .exceptions import (
    ChestError,
    ConfigurationError,
    RpcError,
    ChestAssertionError,
    InvalidAmountError,
    NotFoundError
)

from .config import ChestSettings, ConfigManager, load_settings

from .core import (
    TestChest,
    create_chest,
    ChainController,
    EventLogEntry,
    TransactionOutcome,
    normalize_amount,
    assert_equal,
    assert_native_balance_changed,
    assert_token_balance_changed,
    assert_invalid_opcode,
    assert_revert,
    dump_storage,
    extract_event_arg,
    decode_logs
)

from .utils import (
    ZERO_ADDRESS,
    to_hex,
    to_int,
    to_gwei,
    to_ether,
    number_to_evm_word,
    address_to_evm_word,
    bytes32_to_evm_word,
    sleep,
    setup_logging,
    connect_to_network
)

__all__ = [
    "__version__",

    # Errors
    "ChestError",
    "ConfigurationError",
    "RpcError",
    "ChestAssertionError",
    "InvalidAmountError",
    "NotFoundError",

    # Configuration
    "ChestSettings",
    "ConfigManager",
    "load_settings",

    # Core
    "TestChest",
    "create_chest",
    "ChainController",
    "EventLogEntry",
    "TransactionOutcome",
    "normalize_amount",
    "assert_equal",
    "assert_native_balance_changed",
    "assert_token_balance_changed",
    "assert_invalid_opcode",
    "assert_revert",
    "dump_storage",
    "extract_event_arg",
    "decode_logs",

    # Utils
    "ZERO_ADDRESS",
    "to_hex",
    "to_int",
    "to_gwei",
    "to_ether",
    "number_to_evm_word",
    "address_to_evm_word",
    "bytes32_to_evm_word",
    "sleep",
    "setup_logging",
    "connect_to_network"
]
