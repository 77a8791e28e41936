"""
Test-node control-plane calls

Wraps the ``evm_mine`` / ``evm_increaseTime`` requests understood by Anvil,
Hardhat and Ganache, plus reading the latest block timestamp.
"""

import asyncio
import logging
from typing import Any, List, Optional

import aiohttp
from web3.exceptions import Web3Exception

from ..exceptions import RpcError

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (Web3Exception, aiohttp.ClientError, OSError, asyncio.TimeoutError)


class ChainController:
    """Issues control-plane requests against an injected async web3 client"""

    def __init__(self, w3):
        """
        Args:
            w3: AsyncWeb3 instance, or anything exposing an async
                ``provider.make_request`` and ``eth.get_block``
        """
        self.w3 = w3

    async def mine_block(self) -> Any:
        """
        Force the node to produce one block

        Returns:
            The node's raw ``result`` member
        """
        return await self._request("evm_mine", [])

    async def increase_time(self, seconds: int) -> Any:
        """
        Shift the node's clock forward

        Args:
            seconds: Number of seconds to add

        Returns:
            The node's raw ``result`` member
        """
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 0:
            raise ValueError(f"seconds must be a non-negative int, got {seconds!r}")
        return await self._request("evm_increaseTime", [seconds])

    async def advance_time_and_mine(self, seconds: int) -> Any:
        """Shift the clock, then mine so the new time is visible on-chain"""
        await self.increase_time(seconds)
        return await self.mine_block()

    async def current_block_timestamp(self) -> int:
        """Timestamp of the latest block"""
        try:
            block = await self.w3.eth.get_block("latest")
        except TRANSPORT_ERRORS as e:
            raise RpcError(f"eth_getBlockByNumber failed: {e}",
                           method="eth_getBlockByNumber") from e
        return int(block["timestamp"])

    async def _request(self, method: str, params: Optional[List[Any]]) -> Any:
        logger.debug(f"RPC request {method} params={params}")

        try:
            response = await self.w3.provider.make_request(method, params)
        except TRANSPORT_ERRORS as e:
            raise RpcError(f"{method} failed: {e}", method=method) from e

        error = response.get("error") if response else None
        if error:
            message = error.get("message", error) if isinstance(error, dict) else error
            raise RpcError(f"{method} failed: {message}", method=method, payload=error)

        return response.get("result") if response else None
