import asyncio
from typing import Any

import pytest
from web3.exceptions import ContractLogicError

NFT_ADDRESS = "0x" + "ab" * 20


class FakeCall:
    def __init__(self, outcome: Any):
        self._outcome = outcome

    async def call(self):
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome


class FakeFunctions:
    """Answers ``contract.functions.<name>(*args).call()`` from a response map.

    Missing names revert. A callable response receives the call arguments.
    """

    def __init__(self, responses: dict[str, Any]):
        self._responses = responses
        self.calls: list[tuple[str, tuple]] = []

    def __getattr__(self, name: str):
        def build(*args):
            self.calls.append((name, args))
            outcome = self._responses.get(name, ContractLogicError("execution reverted"))
            if callable(outcome) and not isinstance(outcome, BaseException):
                outcome = outcome(*args)
            return FakeCall(outcome)

        return build


class FakeContract:
    def __init__(self, address: str, abi: list, responses: dict[str, Any]):
        self.address = address
        self.abi = abi
        self.functions = FakeFunctions(responses)


class FakeEth:
    def __init__(self, code: Any = b"", responses: dict[str, Any] | None = None,
                 code_delay: float = 0, contract_error: Exception | None = None):
        self.code = code
        self.responses = responses or {}
        self.code_delay = code_delay
        self.contract_error = contract_error
        self.get_code_calls: list[str] = []
        self.contracts: list[FakeContract] = []

    async def get_code(self, address: str):
        self.get_code_calls.append(address)
        if self.code_delay:
            await asyncio.sleep(self.code_delay)
        if isinstance(self.code, BaseException):
            raise self.code
        return self.code

    def contract(self, address: str, abi: list):
        if self.contract_error is not None:
            raise self.contract_error
        contract = FakeContract(address, abi, self.responses)
        self.contracts.append(contract)
        return contract


class FakeWeb3:
    def __init__(self, **kwargs):
        self.eth = FakeEth(**kwargs)


@pytest.fixture
def make_w3():
    return FakeWeb3


@pytest.fixture
def nft_address():
    return NFT_ADDRESS
