import pytest

from evm_chest import ChestSettings, ConfigManager, TestChest, create_chest, default
from evm_chest.config import RPC_URL_ENV_VAR
from evm_chest.exceptions import ChestAssertionError, ConfigurationError, RpcError


def test_factory_requires_client():
    with pytest.raises(ConfigurationError):
        create_chest(None)


@pytest.mark.asyncio
async def test_chest_exposes_chain_helpers(fake_w3):
    chest = create_chest(fake_w3)

    await chest.advance_time_and_mine(30)
    timestamp = await chest.current_block_timestamp()

    assert timestamp == 1700000000
    assert fake_w3.provider.make_request.await_count == 2


@pytest.mark.asyncio
async def test_chest_dump_storage_uses_settings_range(fake_w3):
    chest = TestChest(fake_w3, ChestSettings(storage_from_slot=4, storage_to_slot=6))

    listing = await chest.dump_storage("0x5b38da6a701c568545dcfcb03fcb875f56beddc4",
                                       sink=lambda line: None)

    assert [slot for slot, _ in listing] == [4, 5]


def test_chest_native_balance_uses_settings_tolerance(fake_w3):
    shortfall = 5 * 10 ** 16
    strict = create_chest(fake_w3)
    loose = create_chest(fake_w3, ChestSettings(default_tolerance_wei=10 ** 17,
                                                 tolerance_ceiling_wei=10 ** 17))

    with pytest.raises(ChestAssertionError):
        strict.assert_native_balance_changed("0", str(10 ** 18 - shortfall), str(10 ** 18))
    loose.assert_native_balance_changed("0", str(10 ** 18 - shortfall), str(10 ** 18))


def test_chest_converters_and_extractors(fake_w3):
    chest = create_chest(fake_w3)

    assert chest.to_gwei(2) == "2000000000"
    assert chest.number_to_evm_word(1).endswith("01")
    assert chest.ZERO_ADDRESS == "0x" + "0" * 40
    assert chest.extract_event_arg({"logs": [{"event": "E", "args": {"a": 1}}]}, "E", "a") == 1


@pytest.mark.asyncio
async def test_default_helpers_require_provider():
    with pytest.raises(ConfigurationError, match="set_provider"):
        await default.mine_block()
    with pytest.raises(ConfigurationError):
        default.provider()
    with pytest.raises(ConfigurationError):
        await default.dump_storage("0x5b38da6a701c568545dcfcb03fcb875f56beddc4")


def test_default_pure_helpers_work_without_provider():
    assert default.to_ether(1) == str(10 ** 18)
    default.assert_token_balance_changed("1", "3", "2")
    default.assert_native_balance_changed(10 ** 18, 2 * 10 ** 18, 10 ** 18)


@pytest.mark.asyncio
async def test_default_helpers_after_set_provider(fake_w3):
    chest = default.set_provider(fake_w3)

    assert default.provider() is fake_w3
    assert isinstance(chest, TestChest)
    await default.increase_time(5)
    fake_w3.provider.make_request.assert_awaited_once_with("evm_increaseTime", [5])

    fake_w3.provider.make_request.return_value = {"error": {"message": "boom"}}
    with pytest.raises(RpcError, match="boom"):
        await default.mine_block()


@pytest.mark.asyncio
async def test_default_revert_helper():
    async def rejects():
        raise RuntimeError("execution reverted: Ownable: caller is not the owner")

    await default.assert_revert(rejects(), "caller is not the owner")


def test_chest_without_settings_reads_config_file(fake_w3, tmp_path, monkeypatch):
    import evm_chest.config

    (tmp_path / "chest.yaml").write_text(
        "assertions:\n  default_tolerance_wei: \"30000000000000000\"\n"
        "  tolerance_ceiling_wei: \"30000000000000000\"\n"
        "storage:\n  from_slot: 1\n  to_slot: 3\n"
    )
    monkeypatch.setattr(evm_chest.config, "config_manager",
                        ConfigManager(tmp_path, env_file=None))

    chest = create_chest(fake_w3)

    assert chest.settings.storage_from_slot == 1
    assert chest.settings.storage_to_slot == 3
    chest.assert_native_balance_changed("0", str(10 ** 18 - 2 * 10 ** 16), str(10 ** 18))


def test_chest_without_settings_honours_rpc_url_env(fake_w3, tmp_path, monkeypatch):
    import evm_chest.config

    (tmp_path / "chest.yaml").write_text("network:\n  rpc_url: http://from-file:8545\n")
    monkeypatch.setenv(RPC_URL_ENV_VAR, "http://from-env:8545")
    monkeypatch.setattr(evm_chest.config, "config_manager",
                        ConfigManager(tmp_path, env_file=None))

    assert create_chest(fake_w3).settings.rpc_url == "http://from-env:8545"
