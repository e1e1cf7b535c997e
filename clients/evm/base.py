from web3 import AsyncWeb3
from web3.providers import AsyncHTTPProvider
from chains.dto import ChainConfig
from config import settings


class BaseWeb3Client:
    NFT_PROBE_ABI = [
        {
            "inputs": [{"name": "interfaceId", "type": "bytes4"}],
            "name": "supportsInterface",
            "outputs": [{"name": "", "type": "bool"}],
            "stateMutability": "view",
            "type": "function",
        },
        {
            "inputs": [{"name": "owner", "type": "address"}],
            "name": "balanceOf",
            "outputs": [{"name": "", "type": "uint256"}],
            "stateMutability": "view",
            "type": "function",
        },
        {
            "inputs": [{"name": "tokenId", "type": "uint256"}],
            "name": "ownerOf",
            "outputs": [{"name": "", "type": "address"}],
            "stateMutability": "view",
            "type": "function",
        },
        {
            "inputs": [
                {"name": "accounts", "type": "address[]"},
                {"name": "ids", "type": "uint256[]"},
            ],
            "name": "balanceOfBatch",
            "outputs": [{"name": "", "type": "uint256[]"}],
            "stateMutability": "view",
            "type": "function",
        },
    ]

    NFT_METADATA_ABI = [
        {
            "inputs": [],
            "name": "name",
            "outputs": [{"name": "", "type": "string"}],
            "stateMutability": "view",
            "type": "function",
        },
        {
            "inputs": [],
            "name": "symbol",
            "outputs": [{"name": "", "type": "string"}],
            "stateMutability": "view",
            "type": "function",
        },
        {
            "inputs": [],
            "name": "totalSupply",
            "outputs": [{"name": "", "type": "uint256"}],
            "stateMutability": "view",
            "type": "function",
        },
    ]

    def __init__(self, chain_config: ChainConfig):
        self.chain_config = chain_config
        self._w3: AsyncWeb3 | None = None

    async def __aenter__(self):
        if self._w3 is None:
            self._w3 = AsyncWeb3(
                AsyncHTTPProvider(
                    self.rpc_url,
                    request_kwargs={"timeout": settings.RPC_REQUEST_TIMEOUT},
                )
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._w3 is not None:
            await self._w3.provider.disconnect()

            self._w3 = None

    @property
    def rpc_url(self) -> str:
        return settings.RPC_URL or self.chain_config.rpc_url

    @property
    def w3(self) -> AsyncWeb3:
        if self._w3 is None:
            raise RuntimeError(f"{type(self).__name__} must be used as an async context manager")
        return self._w3

    @staticmethod
    def get_probe_contract(w3: AsyncWeb3, contract_address: str):
        return w3.eth.contract(
            AsyncWeb3.to_checksum_address(contract_address), abi=BaseWeb3Client.NFT_PROBE_ABI
        )

    @staticmethod
    def get_metadata_contract(w3: AsyncWeb3, contract_address: str):
        return w3.eth.contract(
            AsyncWeb3.to_checksum_address(contract_address), abi=BaseWeb3Client.NFT_METADATA_ABI
        )
