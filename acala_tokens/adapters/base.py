from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol


class CurrencyKind:
    TOKEN = "Token"
    DEX_SHARE = "DEXShare"
    ERC20 = "ERC20"

    ALL = (TOKEN, DEX_SHARE, ERC20)


@dataclass(frozen=True)
class TokenSymbol:
    """Decoded `TokenSymbol` enum value; `str()` yields the symbol."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class CurrencyId:
    kind: str
    value: Any

    @property
    def is_token(self) -> bool:
        return self.kind == CurrencyKind.TOKEN

    @property
    def as_token(self) -> TokenSymbol:
        if not self.is_token:
            raise ValueError(f"currency is {self.kind}, not {CurrencyKind.TOKEN}")
        return self.value

    @property
    def is_dex_share(self) -> bool:
        return self.kind == CurrencyKind.DEX_SHARE

    @property
    def as_dex_share(self) -> tuple[CurrencyId, CurrencyId]:
        if not self.is_dex_share:
            raise ValueError(f"currency is {self.kind}, not {CurrencyKind.DEX_SHARE}")
        return self.value

    @classmethod
    def from_chain_data(cls, data: Mapping[str, Any]) -> CurrencyId:
        if not isinstance(data, Mapping) or len(data) != 1:
            raise ValueError(f"currency id must have exactly one variant, got {data!r}")
        kind, payload = next(iter(data.items()))
        if kind == CurrencyKind.TOKEN:
            symbol = str(payload).strip()
            if not symbol:
                raise ValueError("token symbol cannot be empty")
            return cls(kind=kind, value=TokenSymbol(symbol))
        if kind == CurrencyKind.DEX_SHARE:
            if not isinstance(payload, (list, tuple)) or len(payload) != 2:
                raise ValueError(f"DEXShare requires a pair of currencies, got {payload!r}")
            return cls(kind=kind, value=tuple(cls.from_chain_data(item) for item in payload))
        if kind == CurrencyKind.ERC20:
            address = str(payload).strip()
            if not address:
                raise ValueError("ERC20 address cannot be empty")
            return cls(kind=kind, value=address)
        raise ValueError(f"unknown currency kind: {kind}")

    def to_chain_data(self) -> dict[str, Any]:
        if self.is_token:
            return {self.kind: str(self.value)}
        if self.is_dex_share:
            return {self.kind: [item.to_chain_data() for item in self.value]}
        return {self.kind: self.value}


class ChainClient(Protocol):
    def create_type(self, type_name: str, value: Any) -> Any:
        ...
