"""Shared fixtures: a fake async web3 client that never touches a node."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from evm_chest import default


@pytest.fixture
def fake_w3():
    w3 = MagicMock()
    w3.provider.make_request = AsyncMock(
        return_value={"jsonrpc": "2.0", "id": 0, "result": "0x0"}
    )
    w3.eth.get_block = AsyncMock(return_value={"number": 12, "timestamp": 1700000000})
    w3.eth.get_storage_at = AsyncMock(return_value=b"\x00" * 32)
    return w3


@pytest.fixture(autouse=True)
def unbound_default_provider():
    default.reset_provider()
    yield
    default.reset_provider()
