from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ..models import BondingLedger, NomineeId, UnlockChunk
from ..token_config import default_token_config
from .base import CurrencyId, TokenSymbol

logger = logging.getLogger(__name__)


class StaticTypeRegistry:
    """Deterministic in-process stand-in for a chain client's type constructor."""

    def __init__(self, symbols: Iterable[str] | None = None) -> None:
        self.symbols = frozenset(symbols if symbols is not None else default_token_config().symbols())
        self._builders = {
            "CurrencyId": self._currency_id,
            "TokenSymbol": self._token_symbol,
            "BondingLedger": BondingLedger.from_chain_data,
            "UnlockChunk": UnlockChunk.from_chain_data,
            "HomaUnlockChunk": UnlockChunk.from_chain_data,
            "NomineeId": self._nominee_id,
        }

    def create_type(self, type_name: str, value: Any) -> Any:
        builder = self._builders.get(type_name)
        if builder is None:
            raise ValueError(f"unknown type: {type_name}")
        created = builder(value)
        logger.debug("created %s from %r", type_name, value)
        return created

    def _currency_id(self, value: Any) -> CurrencyId:
        currency = value if isinstance(value, CurrencyId) else CurrencyId.from_chain_data(value)
        self._check_symbols(currency)
        return currency

    def _token_symbol(self, value: Any) -> TokenSymbol:
        symbol = str(value).strip()
        if symbol not in self.symbols:
            raise ValueError(f"unknown token symbol: {symbol}")
        return TokenSymbol(symbol)

    def _check_symbols(self, currency: CurrencyId) -> None:
        if currency.is_token:
            self._token_symbol(currency.as_token)
        elif currency.is_dex_share:
            for item in currency.as_dex_share:
                self._check_symbols(item)

    @staticmethod
    def _nominee_id(value: Any) -> NomineeId:
        account = str(value).strip()
        if not account:
            raise ValueError("nominee account id cannot be empty")
        return NomineeId(account)
