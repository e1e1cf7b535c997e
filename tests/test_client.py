import pytest

from chains import registery
from chains.ethereum import ethereum
from clients.evm.nft import NftContractClient
from config import settings


def test_registry_lookup():
    assert registery.get(1) is ethereum
    assert registery.get_by_name("bsc").chain_id == 56
    assert registery.get(999) is None
    assert {cfg.chain_id for cfg in registery.list()} == {1, 8453, 56}


def test_for_chain_by_name():
    assert NftContractClient.for_chain("bsc").chain_config.chain_id == 56
    assert NftContractClient.for_chain(1).chain_config is ethereum


def test_for_chain_defaults_to_settings(monkeypatch):
    monkeypatch.setattr(settings, "CHAIN_ID", 8453)

    client = NftContractClient.for_chain()

    assert client.chain_config.name == "base"


def test_for_unknown_chain():
    with pytest.raises(ValueError):
        NftContractClient.for_chain(999)
    with pytest.raises(ValueError):
        NftContractClient.for_chain("solana")


def test_rpc_url_override(monkeypatch):
    client = NftContractClient(ethereum)
    assert client.rpc_url == ethereum.rpc_url

    monkeypatch.setattr(settings, "RPC_URL", "http://localhost:8545")
    assert client.rpc_url == "http://localhost:8545"


def test_w3_requires_context():
    with pytest.raises(RuntimeError):
        NftContractClient(ethereum).w3


async def test_enter_builds_connection():
    client = NftContractClient(ethereum)

    assert await client.__aenter__() is client
    assert client.w3.provider.endpoint_uri == ethereum.rpc_url


async def test_methods_use_bound_connection(make_w3, nft_address):
    client = NftContractClient(ethereum)
    client._w3 = make_w3(code=b"", responses={"name": "Doodles"})

    result = await client.validate_contract(nft_address)
    info = await client.get_contract_info(nft_address)
    mint = await client.detect_mint_function(
        nft_address, abi=[{"type": "function", "name": "mint", "inputs": [{"type": "uint256"}]}]
    )

    assert result.reason == "Contract not deployed at this address"
    assert info.name == "Doodles"
    assert mint == "mint(uint256)"
