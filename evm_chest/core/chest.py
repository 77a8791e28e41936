"""
TestChest: every helper bound to one web3 client

Instances hold no state besides the injected client and its settings, so
several chests (one per node) can coexist in a test session.
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

from ..config import ChestSettings, load_settings
from ..exceptions import ConfigurationError
from ..utils import converters
from . import assertions, inspection
from .assertions import Amount
from .chain import ChainController
from .models import TransactionOutcome

logger = logging.getLogger(__name__)


class TestChest:
    """Converters, chain control, assertions and inspection against one client"""

    # Keep pytest from collecting this class
    __test__ = False

    ZERO_ADDRESS = converters.ZERO_ADDRESS

    def __init__(self, w3, settings: Optional[ChestSettings] = None):
        """
        Args:
            w3: AsyncWeb3 instance
            settings: Tolerances and defaults; loaded from chest.yaml and
                the environment if omitted
        """
        if w3 is None:
            raise ConfigurationError("evm-chest: a web3 client must be injected")

        self.w3 = w3
        self.settings = settings or load_settings()
        self.chain = ChainController(w3)

        logger.debug(f"TestChest bound to {type(w3).__name__}")

    # -- converters ----------------------------------------------------------

    to_hex = staticmethod(converters.to_hex)
    to_int = staticmethod(converters.to_int)
    to_gwei = staticmethod(converters.to_gwei)
    to_ether = staticmethod(converters.to_ether)
    number_to_evm_word = staticmethod(converters.number_to_evm_word)
    address_to_evm_word = staticmethod(converters.address_to_evm_word)
    bytes32_to_evm_word = staticmethod(converters.bytes32_to_evm_word)
    sleep = staticmethod(converters.sleep)

    # -- chain control -------------------------------------------------------

    async def mine_block(self) -> Any:
        return await self.chain.mine_block()

    async def increase_time(self, seconds: int) -> Any:
        return await self.chain.increase_time(seconds)

    async def advance_time_and_mine(self, seconds: int) -> Any:
        return await self.chain.advance_time_and_mine(seconds)

    async def current_block_timestamp(self) -> int:
        return await self.chain.current_block_timestamp()

    # -- assertions ----------------------------------------------------------

    assert_equal = staticmethod(assertions.assert_equal)
    assert_token_balance_changed = staticmethod(assertions.assert_token_balance_changed)
    assert_invalid_opcode = staticmethod(assertions.assert_invalid_opcode)
    assert_revert = staticmethod(assertions.assert_revert)

    def assert_native_balance_changed(self,
                                      before: Amount,
                                      after: Amount,
                                      expected_delta: Amount,
                                      tolerance: Optional[Amount] = None) -> None:
        """Native balance check using this chest's tolerance settings"""
        if tolerance is None:
            tolerance = self.settings.default_tolerance_wei
        assertions.assert_native_balance_changed(
            before, after, expected_delta,
            tolerance=tolerance,
            ceiling=self.settings.tolerance_ceiling_wei
        )

    # -- inspection ----------------------------------------------------------

    async def dump_storage(self,
                           address: str,
                           from_slot: Optional[int] = None,
                           to_slot: Optional[int] = None,
                           sink: Optional[Callable[[str], None]] = None) -> List[Tuple[int, str]]:
        if from_slot is None:
            from_slot = self.settings.storage_from_slot
        if to_slot is None:
            to_slot = self.settings.storage_to_slot
        return await inspection.dump_storage(self.w3, address, from_slot, to_slot, sink=sink)

    extract_event_arg = staticmethod(inspection.extract_event_arg)

    def decode_logs(self, contract, receipt) -> TransactionOutcome:
        return inspection.decode_logs(contract, receipt)


def create_chest(w3, settings: Optional[ChestSettings] = None) -> TestChest:
    """Factory returning a TestChest bound to ``w3``"""
    return TestChest(w3, settings)
