"""
Web3 client construction for evm-chest

Builds the async web3 client the helpers are bound to.
"""

import logging
from typing import Any, Dict, Union

from web3 import AsyncHTTPProvider, AsyncWeb3

from ..config import ChestSettings

logger = logging.getLogger(__name__)


def connect_to_network(settings: Union[ChestSettings, Dict[str, Any]]) -> AsyncWeb3:
    """
    Create an async web3 client for a test node

    Args:
        settings: ChestSettings or a dictionary with ``rpc_url`` and
            optionally ``request_timeout``

    Returns:
        AsyncWeb3 bound to an HTTP provider
    """
    if isinstance(settings, dict):
        settings = ChestSettings.from_dict(settings)

    w3 = AsyncWeb3(AsyncHTTPProvider(
        settings.rpc_url,
        request_kwargs={'timeout': settings.request_timeout}
    ))

    logger.info(f"Initialized web3 client: {settings.rpc_url}")
    return w3
