import asyncio
import logging
from collections.abc import Awaitable
from typing import Any

from eth_utils.address import is_checksum_address, is_hex_address
from eth_utils.hexadecimal import remove_0x_prefix
from web3 import AsyncWeb3

from chains import registery
from chains.dto import ChainConfig
from clients.evm.base import BaseWeb3Client
from clients.evm.dto import ContractInfo, MintCandidate, ValidationResult
from config import settings

module_logger = logging.getLogger(__name__)

ERC721_INTERFACE_ID = bytes.fromhex("80ac58cd")
ERC1155_INTERFACE_ID = bytes.fromhex("d9b67a26")

PLACEHOLDER_OWNER = "0x0000000000000000000000000000000000000001"
PLACEHOLDER_TOKEN_ID = 1

# Matched against the text form of the bytecode, kept as is
TRANSFER_EVENT_MARKERS = ("Transfer(", "5RANSFERE")

# Order is priority: the first structural match is returned
MINT_CANDIDATES = (
    MintCandidate("mint", ("uint256",)),
    MintCandidate("mint", ("address", "uint256")),
    MintCandidate("publicMint", ("uint256",)),
    MintCandidate("publicMint", ("address", "uint256")),
    MintCandidate("mintPublic", ("uint256",)),
    MintCandidate("mintPublic", ("address", "uint256")),
)

PUSH4 = b"\x63"

INVALID_FORMAT = ValidationResult(False, "Invalid Ethereum address format")
NETWORK_ISSUES = ValidationResult(False, "Failed to verify contract deployment - network issues")
NOT_DEPLOYED = ValidationResult(False, "Contract not deployed at this address")
NOT_NFT = ValidationResult(False, "Contract does not appear to be an ERC721 or ERC1155 NFT")
TRANSFER_EVENTS = ValidationResult(True, "Contract appears to implement transfer events")
# Returned when the probes themselves fail
INCONCLUSIVE = ValidationResult(True, inconclusive=True)


def is_valid_address(contract_address: str | None) -> bool:
    if not isinstance(contract_address, str) or not is_hex_address(contract_address):
        return False

    digits = remove_0x_prefix(contract_address)
    # Mixed case carries an EIP-55 checksum
    if digits != digits.lower() and digits != digits.upper():
        return is_checksum_address(contract_address)
    return True


async def fetch_code(w3: AsyncWeb3, contract_address: str) -> bytes:
    return await asyncio.wait_for(
        w3.eth.get_code(AsyncWeb3.to_checksum_address(contract_address)),
        timeout=settings.CODE_FETCH_TIMEOUT,
    )


def bytecode_text(code: Any) -> str:
    if isinstance(code, (bytes, bytearray)):
        return "0x" + bytes(code).hex()
    return str(code)


async def _call_succeeds(call: Awaitable[Any], label: str) -> tuple[bool, Any]:
    try:
        return True, await call
    except Exception as e:
        module_logger.debug(f"{label} failed: {e}")
        return False, None


async def _run_probes(w3: AsyncWeb3, contract_address: str, code: bytes) -> ValidationResult:
    contract = BaseWeb3Client.get_probe_contract(w3, contract_address)

    ok, is_erc721 = await _call_succeeds(
        contract.functions.supportsInterface(ERC721_INTERFACE_ID).call(),
        "supportsInterface(ERC721)",
    )
    is_erc721 = ok and bool(is_erc721)

    ok, is_erc1155 = await _call_succeeds(
        contract.functions.supportsInterface(ERC1155_INTERFACE_ID).call(),
        "supportsInterface(ERC1155)",
    )
    is_erc1155 = ok and bool(is_erc1155)

    if is_erc721 or is_erc1155:
        module_logger.info(
            f"{contract_address} supports {'ERC721' if is_erc721 else 'ERC1155'} interface"
        )
        return ValidationResult(True)

    has_balance_of, _ = await _call_succeeds(
        contract.functions.balanceOf(PLACEHOLDER_OWNER).call(), "balanceOf"
    )
    has_owner_of, _ = await _call_succeeds(
        contract.functions.ownerOf(PLACEHOLDER_TOKEN_ID).call(), "ownerOf"
    )

    if has_balance_of or has_owner_of:
        module_logger.info(f"{contract_address} answers NFT read methods")
        return ValidationResult(True)

    text = bytecode_text(code)
    if any(marker in text for marker in TRANSFER_EVENT_MARKERS):
        return TRANSFER_EVENTS

    return NOT_NFT


async def validate_nft_contract(contract_address: str, w3: AsyncWeb3) -> ValidationResult:
    """Decide whether ``contract_address`` hosts an ERC721 or ERC1155 contract.

    Never raises. Probe failures count as negative signals; a failure of the
    probing itself yields ``INCONCLUSIVE`` (valid, flagged inconclusive).
    """
    try:
        if not is_valid_address(contract_address):
            return INVALID_FORMAT

        try:
            code = await fetch_code(w3, contract_address)
        except asyncio.TimeoutError:
            module_logger.error(f"Timeout checking contract code for {contract_address}")
            return NETWORK_ISSUES
        except Exception as e:
            module_logger.error(f"Error checking contract code for {contract_address}: {e}")
            return NETWORK_ISSUES

        if not code or code == "0x":
            return NOT_DEPLOYED

        try:
            return await _run_probes(w3, contract_address, code)
        except Exception as e:
            module_logger.warning(f"NFT probes inconclusive for {contract_address}: {e}")
            return INCONCLUSIVE

    except Exception as e:
        module_logger.error(f"Error validating NFT contract {contract_address}: {e}")
        return ValidationResult(False, f"Validation error: {e}")


async def get_nft_contract_info(contract_address: str, w3: AsyncWeb3) -> ContractInfo:
    if not is_valid_address(contract_address):
        return ContractInfo()

    try:
        contract = BaseWeb3Client.get_metadata_contract(w3, contract_address)

        name, symbol, supply = await asyncio.gather(
            contract.functions.name().call(),
            contract.functions.symbol().call(),
            contract.functions.totalSupply().call(),
            return_exceptions=True,
        )
    except Exception as e:
        module_logger.error(f"Error getting NFT contract info for {contract_address}: {e}")
        return ContractInfo()

    for label, result in (("name", name), ("symbol", symbol), ("totalSupply", supply)):
        if isinstance(result, BaseException):
            module_logger.debug(f"{label}() failed for {contract_address}: {result}")

    return ContractInfo(
        name=name if isinstance(name, str) else None,
        symbol=symbol if isinstance(symbol, str) else None,
        total_supply=supply if isinstance(supply, int) and not isinstance(supply, bool) else None,
    )


def _candidate_in_abi(candidate: MintCandidate, abi: list[dict[str, Any]]) -> bool:
    return any(isinstance(item, dict) and candidate.matches_abi_entry(item) for item in abi)


def _candidate_in_bytecode(candidate: MintCandidate, code: bytes) -> bool:
    return PUSH4 + candidate.selector in code


async def detect_mint_function(
    contract_address: str,
    w3: AsyncWeb3,
    abi: list[dict[str, Any]] | None = None,
) -> str | None:
    """Return the signature of the first ``MINT_CANDIDATES`` entry the contract exposes.

    With ``abi`` the lookup runs against it, otherwise against the dispatcher
    in the deployed bytecode.
    """
    try:
        if abi is not None:
            def lookup(candidate: MintCandidate) -> bool:
                return _candidate_in_abi(candidate, abi)
        else:
            if not is_valid_address(contract_address):
                return None

            code = bytes(await fetch_code(w3, contract_address))
            if not code:
                return None

            def lookup(candidate: MintCandidate) -> bool:
                return _candidate_in_bytecode(candidate, code)

        for candidate in MINT_CANDIDATES:
            try:
                if lookup(candidate):
                    module_logger.info(f"{contract_address} exposes {candidate.signature}")
                    return candidate.signature
            except Exception as e:
                module_logger.debug(f"Skip {candidate.signature}: {e}")
                continue

        return None
    except Exception as e:
        module_logger.error(f"Error detecting mint function for {contract_address}: {e}")
        return None


class NftContractClient(BaseWeb3Client):
    @classmethod
    def for_chain(cls, chain: int | str | None = None) -> "NftContractClient":
        chain = chain if chain is not None else settings.CHAIN_ID
        chain_config: ChainConfig | None = (
            registery.get_by_name(chain) if isinstance(chain, str) else registery.get(chain)
        )

        if chain_config is None:
            raise ValueError(f"Unknown chain: {chain}")

        return cls(chain_config)

    async def validate_contract(self, contract_address: str) -> ValidationResult:
        return await validate_nft_contract(contract_address, self.w3)

    async def get_contract_info(self, contract_address: str) -> ContractInfo:
        return await get_nft_contract_info(contract_address, self.w3)

    async def detect_mint_function(
        self, contract_address: str, abi: list[dict[str, Any]] | None = None
    ) -> str | None:
        return await detect_mint_function(contract_address, self.w3, abi)
