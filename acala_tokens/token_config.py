from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from .settings import get_settings

logger = logging.getLogger(__name__)


class UnknownSymbolError(ValueError):
    def __init__(self, symbol: str, table: str = "token configuration") -> None:
        super().__init__(f"unknown token symbol in {table}: {symbol}")
        self.symbol = symbol


@dataclass(frozen=True)
class TokenConfigEntry:
    symbol: str
    chain: str
    name: str
    decimal: int


class TokenConfig:
    """Read-only symbol lookup for chain/name/decimal plus the canonical rank table.

    Ranks mirror the index of the chain's ``TokenSymbol`` enum and define the
    order used when sorting tokens.
    """

    def __init__(self, entries: Iterable[TokenConfigEntry], ranks: Mapping[str, int] | None = None) -> None:
        self._entries: dict[str, TokenConfigEntry] = {}
        for entry in entries:
            self._entries[entry.symbol] = entry
        if ranks is None:
            ranks = {symbol: index for index, symbol in enumerate(self._entries)}
        self._ranks: dict[str, int] = {str(symbol): int(rank) for symbol, rank in ranks.items()}

    @classmethod
    def from_mapping(
        cls,
        entries: Mapping[str, Mapping[str, Any]],
        ranks: Mapping[str, int] | None = None,
    ) -> TokenConfig:
        parsed = []
        for symbol, raw in entries.items():
            try:
                parsed.append(
                    TokenConfigEntry(
                        symbol=symbol,
                        chain=str(raw["chain"]),
                        name=str(raw["name"]),
                        decimal=int(raw["decimal"]),
                    )
                )
            except KeyError as exc:
                raise ValueError(f"token configuration for {symbol} is missing {exc.args[0]}") from exc
        return cls(parsed, ranks)

    @classmethod
    def from_json_file(cls, path: str | Path) -> TokenConfig:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        if "tokens" not in payload:
            raise ValueError(f"token configuration file has no 'tokens' table: {path}")
        config = cls.from_mapping(payload["tokens"], payload.get("ranks"))
        logger.info("loaded %d tokens from %s", len(config), path)
        return config

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._entries

    def get(self, symbol: str) -> TokenConfigEntry:
        entry = self._entries.get(symbol)
        if entry is None:
            raise UnknownSymbolError(symbol)
        return entry

    def get_chain(self, symbol: str) -> str:
        return self.get(symbol).chain

    def get_name(self, symbol: str) -> str:
        return self.get(symbol).name

    def get_decimal(self, symbol: str) -> int:
        return self.get(symbol).decimal

    def rank(self, symbol: str) -> int:
        rank = self._ranks.get(symbol)
        if rank is None:
            raise UnknownSymbolError(symbol, table="rank table")
        return rank

    def has_rank(self, symbol: str) -> bool:
        return symbol in self._ranks

    def entries(self) -> list[TokenConfigEntry]:
        return [self._entries[symbol] for symbol in self.symbols()]

    def symbols(self) -> list[str]:
        # unranked symbols trail in insertion order
        ranked = sorted((s for s in self._entries if s in self._ranks), key=self._ranks.__getitem__)
        return ranked + [s for s in self._entries if s not in self._ranks]


DEFAULT_TOKEN_CONFIG = TokenConfig.from_mapping(
    {
        "ACA": {"chain": "acala", "name": "ACA", "decimal": 13},
        "AUSD": {"chain": "acala", "name": "aUSD", "decimal": 12},
        "DOT": {"chain": "polkadot", "name": "DOT", "decimal": 10},
        "XBTC": {"chain": "chainx", "name": "XBTC", "decimal": 8},
        "LDOT": {"chain": "acala", "name": "LDOT", "decimal": 10},
        "RENBTC": {"chain": "ethereum", "name": "renBTC", "decimal": 8},
    }
)


@lru_cache(maxsize=1)
def default_token_config() -> TokenConfig:
    settings = get_settings()
    if settings.token_config_path:
        return TokenConfig.from_json_file(settings.token_config_path)
    if settings.token_config_db:
        from .sqlite_backend import SQLiteTokenConfigStore

        store = SQLiteTokenConfigStore(settings.token_config_db)
        try:
            config = store.load_config()
        finally:
            store.close()
        logger.info("loaded %d tokens from %s", len(config), settings.token_config_db)
        return config
    return DEFAULT_TOKEN_CONFIG


@lru_cache(maxsize=1)
def default_home_chain() -> str:
    return get_settings().home_chain
