from dataclasses import dataclass
from typing import Any

from eth_utils import function_signature_to_4byte_selector


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: str | None = None
    # Set when the probes could not run and the address is let through
    inconclusive: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"valid": self.valid}
        if self.reason is not None:
            data["reason"] = self.reason
        return data


@dataclass
class ContractInfo:
    name: str | None = None
    symbol: str | None = None
    total_supply: int | None = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.symbol is None and self.total_supply is None

    def to_dict(self) -> dict[str, Any]:
        return {
            key: value
            for key, value in (
                ("name", self.name),
                ("symbol", self.symbol),
                ("total_supply", self.total_supply),
            )
            if value is not None
        }


@dataclass(frozen=True)
class MintCandidate:
    name: str
    inputs: tuple[str, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    def matches_abi_entry(self, item: dict[str, Any]) -> bool:
        if item.get("type", "function") != "function":
            return False
        if item.get("name") != self.name:
            return False
        return tuple(i.get("type") for i in item.get("inputs", [])) == self.inputs
