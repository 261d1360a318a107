from .base import ChainClient, CurrencyId, CurrencyKind, TokenSymbol
from .type_registry import StaticTypeRegistry

__all__ = ["ChainClient", "CurrencyId", "CurrencyKind", "StaticTypeRegistry", "TokenSymbol"]
