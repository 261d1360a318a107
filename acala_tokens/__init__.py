from .adapters import ChainClient, CurrencyId, CurrencyKind, StaticTypeRegistry, TokenSymbol
from .models import BondingLedger, NomineeId, UnlockChunk
from .settings import HOME_CHAIN, Settings, get_settings
from .sqlite_backend import RankConflictError, SQLiteTokenConfigStore
from .token import DEFAULT_DECIMAL, InvalidCurrencyKindError, Token, TokenParams, TokenSet, sort_tokens
from .token_config import (
    DEFAULT_TOKEN_CONFIG,
    TokenConfig,
    TokenConfigEntry,
    UnknownSymbolError,
    default_token_config,
)

__all__ = [
    "BondingLedger",
    "ChainClient",
    "CurrencyId",
    "CurrencyKind",
    "DEFAULT_DECIMAL",
    "DEFAULT_TOKEN_CONFIG",
    "HOME_CHAIN",
    "InvalidCurrencyKindError",
    "NomineeId",
    "RankConflictError",
    "SQLiteTokenConfigStore",
    "Settings",
    "StaticTypeRegistry",
    "Token",
    "TokenConfig",
    "TokenConfigEntry",
    "TokenParams",
    "TokenSet",
    "TokenSymbol",
    "UnknownSymbolError",
    "UnlockChunk",
    "default_token_config",
    "get_settings",
    "sort_tokens",
]
