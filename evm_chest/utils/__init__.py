"""
Utility functions for evm-chest

- Unit and EVM-word converters
- Logging configuration
- Web3 client construction
"""

from .converters import (
    ZERO_ADDRESS,
    to_hex,
    to_int,
    to_gwei,
    to_ether,
    from_wei_to_ether,
    number_to_evm_word,
    address_to_evm_word,
    bytes32_to_evm_word,
    sleep
)

from .helpers import setup_logging, Timer

from .blockchain import connect_to_network

__all__ = [
    # Converters
    "ZERO_ADDRESS",
    "to_hex",
    "to_int",
    "to_gwei",
    "to_ether",
    "from_wei_to_ether",
    "number_to_evm_word",
    "address_to_evm_word",
    "bytes32_to_evm_word",
    "sleep",

    # Helpers
    "setup_logging",
    "Timer",

    # Blockchain utilities
    "connect_to_network"
]
