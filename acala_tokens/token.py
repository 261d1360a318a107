from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from .adapters.base import ChainClient, CurrencyId, CurrencyKind
from .token_config import TokenConfig, default_home_chain, default_token_config

logger = logging.getLogger(__name__)

DEFAULT_DECIMAL = 18


class InvalidCurrencyKindError(ValueError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"Token.from_chain_currency requires a Token currency, got {kind}")
        self.kind = kind


@dataclass(frozen=True)
class TokenParams:
    name: str | None = None
    chain: str | None = None
    symbol: str | None = None
    decimal: int | None = None


@dataclass(frozen=True, eq=False)
class Token:
    """Canonical descriptor of a fungible asset.

    Identity is ``(chain, symbol)``: two tokens that differ only by ``name``
    or ``decimal`` compare equal.
    """

    name: str
    chain: str | None = None
    symbol: str | None = None
    decimal: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbol", self.symbol or self.name)
        object.__setattr__(self, "decimal", self.decimal or DEFAULT_DECIMAL)
        object.__setattr__(self, "chain", self.chain or default_home_chain())

    @classmethod
    def from_params(cls, params: TokenParams) -> Token:
        return cls(name=params.name or "", chain=params.chain, symbol=params.symbol, decimal=params.decimal)

    @classmethod
    def from_chain_currency(cls, value: Any, config: TokenConfig | None = None) -> Token:
        if isinstance(value, Mapping):
            if len(value) == 1 and CurrencyKind.TOKEN not in value:
                kind = next(iter(value))
                logger.warning("rejected non-token currency %r", value)
                raise InvalidCurrencyKindError(str(kind))
            value = CurrencyId.from_chain_data(value)
        if not getattr(value, "is_token", False):
            kind = getattr(value, "kind", type(value).__name__)
            logger.warning("rejected non-token currency %r", value)
            raise InvalidCurrencyKindError(str(kind))
        return cls._from_config(str(value.as_token), config)

    @classmethod
    def from_symbol_value(cls, value: Any, config: TokenConfig | None = None) -> Token:
        return cls._from_config(str(value), config)

    @classmethod
    def _from_config(cls, symbol: str, config: TokenConfig | None) -> Token:
        entry = (config or default_token_config()).get(symbol)
        logger.debug("resolved token %s on %s", symbol, entry.chain)
        return cls(name=entry.name, chain=entry.chain, symbol=symbol, decimal=entry.decimal)

    @staticmethod
    def sort(*tokens: Token, config: TokenConfig | None = None) -> list[Token]:
        return _sort_by_rank(tokens, config)

    def is_equal(self, other: Token) -> bool:
        return self.chain == other.chain and self.symbol == other.symbol

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.is_equal(other)

    def __hash__(self) -> int:
        return hash((self.chain, self.symbol))

    def __str__(self) -> str:
        return self.name

    def to_chain_encoding(self) -> dict[str, str]:
        return {"Token": self.symbol}

    def to_currency_id(self, client: ChainClient) -> Any:
        return client.create_type("CurrencyId", self.to_chain_encoding())

    def clone(self, overrides: TokenParams | None = None) -> Token:
        # falsy overrides fall through to the receiver, then to hard defaults
        overrides = overrides or TokenParams()
        return Token(
            name=overrides.name or self.name or "",
            chain=overrides.chain or self.chain or "",
            decimal=overrides.decimal or self.decimal or DEFAULT_DECIMAL,
            symbol=overrides.symbol or self.symbol or "",
        )


def sort_tokens(token1: Token, token2: Token, *others: Token, config: TokenConfig | None = None) -> list[Token]:
    return _sort_by_rank((token1, token2, *others), config)


def _sort_by_rank(tokens: Iterable[Token], config: TokenConfig | None) -> list[Token]:
    table = config or default_token_config()
    return sorted(tokens, key=lambda token: table.rank(token.symbol))


class TokenSet:
    """Insertion-ordered tokens without duplicates under ``Token.is_equal``.

    Not safe for concurrent mutation; callers sharing a set across threads
    must serialize ``add`` and ``delete``.
    """

    def __init__(self, tokens: Iterable[Token] = ()) -> None:
        self._list: list[Token] = []
        for token in tokens:
            self.add(token)

    @property
    def values(self) -> tuple[Token, ...]:
        return tuple(self._list)

    def add(self, target: Token) -> None:
        if not any(item.is_equal(target) for item in self._list):
            self._list.append(target)

    def delete(self, target: Token) -> None:
        for index, item in enumerate(self._list):
            if item.is_equal(target):
                del self._list[index]
                return

    def clear(self) -> None:
        self._list = []

    def __len__(self) -> int:
        return len(self._list)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.values)

    def __contains__(self, target: object) -> bool:
        return isinstance(target, Token) and any(item.is_equal(target) for item in self._list)
