from __future__ import annotations

import json
from pathlib import Path

import pytest

from acala_tokens import (
    DEFAULT_TOKEN_CONFIG,
    RankConflictError,
    SQLiteTokenConfigStore,
    StaticTypeRegistry,
    Token,
    TokenConfig,
    TokenConfigEntry,
    UnknownSymbolError,
    default_token_config,
    get_settings,
)
from acala_tokens.token_config import default_home_chain


@pytest.fixture
def reset_defaults():
    default_token_config.cache_clear()
    default_home_chain.cache_clear()
    yield
    default_token_config.cache_clear()
    default_home_chain.cache_clear()


def test_builtin_table_and_rank_order() -> None:
    assert DEFAULT_TOKEN_CONFIG.symbols() == ["ACA", "AUSD", "DOT", "XBTC", "LDOT", "RENBTC"]
    assert DEFAULT_TOKEN_CONFIG.rank("ACA") == 0
    assert DEFAULT_TOKEN_CONFIG.rank("RENBTC") == 5
    assert DEFAULT_TOKEN_CONFIG.get_chain("DOT") == "polkadot"
    assert DEFAULT_TOKEN_CONFIG.get_decimal("XBTC") == 8


def test_lookup_miss_raises_unknown_symbol() -> None:
    with pytest.raises(UnknownSymbolError):
        DEFAULT_TOKEN_CONFIG.get_name("XYZ")
    with pytest.raises(UnknownSymbolError):
        DEFAULT_TOKEN_CONFIG.rank("XYZ")
    assert "XYZ" not in DEFAULT_TOKEN_CONFIG


def test_explicit_ranks_override_insertion_order() -> None:
    config = TokenConfig.from_mapping(
        {
            "ACA": {"chain": "acala", "name": "Acala", "decimal": 12},
            "DOT": {"chain": "polkadot", "name": "Polkadot", "decimal": 10},
            "KSM": {"chain": "kusama", "name": "Kusama", "decimal": 12},
        },
        ranks={"DOT": 0, "ACA": 1},
    )

    assert config.symbols() == ["DOT", "ACA", "KSM"]
    assert not config.has_rank("KSM")
    assert config.get("KSM").name == "Kusama"


def test_incomplete_entry_is_rejected() -> None:
    with pytest.raises(ValueError, match="decimal"):
        TokenConfig.from_mapping({"ACA": {"chain": "acala", "name": "Acala"}})


def test_from_json_file(tmp_path: Path) -> None:
    path = tmp_path / "tokens.json"
    path.write_text(
        json.dumps(
            {
                "tokens": {"KAR": {"chain": "karura", "name": "Karura", "decimal": 12}},
                "ranks": {"KAR": 7},
            }
        ),
        encoding="utf-8",
    )

    config = TokenConfig.from_json_file(path)

    assert config.get("KAR") == TokenConfigEntry(symbol="KAR", chain="karura", name="Karura", decimal=12)
    assert config.rank("KAR") == 7


def test_sqlite_store_round_trips_config() -> None:
    store = SQLiteTokenConfigStore()
    store.seed(DEFAULT_TOKEN_CONFIG)

    loaded = store.load_config()

    assert loaded.symbols() == DEFAULT_TOKEN_CONFIG.symbols()
    assert loaded.get("AUSD") == DEFAULT_TOKEN_CONFIG.get("AUSD")
    store.close()


def test_sqlite_store_upsert_keeps_rank_and_appends_new() -> None:
    store = SQLiteTokenConfigStore()
    assert store.upsert_entry(TokenConfigEntry(symbol="ACA", chain="acala", name="ACA", decimal=13)) == 0
    assert store.upsert_entry(TokenConfigEntry(symbol="DOT", chain="polkadot", name="DOT", decimal=10)) == 1
    assert store.upsert_entry(TokenConfigEntry(symbol="ACA", chain="acala", name="Acala", decimal=12)) == 0

    assert store.get_entry("ACA") == TokenConfigEntry(symbol="ACA", chain="acala", name="Acala", decimal=12)
    assert [entry.symbol for entry in store.list_entries()] == ["ACA", "DOT"]

    assert store.delete_entry("ACA") is True
    assert store.delete_entry("ACA") is False
    assert store.get_entry("ACA") is None
    store.close()


def test_default_config_from_json_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, reset_defaults) -> None:
    path = tmp_path / "tokens.json"
    path.write_text(
        json.dumps({"tokens": {"KAR": {"chain": "karura", "name": "Karura", "decimal": 12}}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("ACALA_TOKENS_CONFIG_PATH", str(path))
    monkeypatch.setenv("ACALA_TOKENS_HOME_CHAIN", "karura")

    assert get_settings().token_config_path == str(path)
    token = Token.from_symbol_value("KAR")

    assert token.chain == "karura"
    assert Token(name="LKSM").chain == "karura"


def test_default_config_from_sqlite_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, reset_defaults) -> None:
    db_path = str(tmp_path / "tokens.db")
    store = SQLiteTokenConfigStore(db_path)
    store.upsert_entry(TokenConfigEntry(symbol="KSM", chain="kusama", name="Kusama", decimal=12))
    store.close()
    monkeypatch.delenv("ACALA_TOKENS_CONFIG_PATH", raising=False)
    monkeypatch.setenv("ACALA_TOKENS_CONFIG_DB", db_path)

    config = default_token_config()

    assert config.symbols() == ["KSM"]
    assert config is default_token_config()


def test_sqlite_store_reseeds_reordered_ranks() -> None:
    store = SQLiteTokenConfigStore()
    store.seed(DEFAULT_TOKEN_CONFIG)
    ranks = {"DOT": 0, "AUSD": 1, "ACA": 2, "XBTC": 3, "LDOT": 4, "RENBTC": 5}

    store.seed(TokenConfig(DEFAULT_TOKEN_CONFIG.entries(), ranks=ranks))

    loaded = store.load_config()
    assert loaded.symbols() == ["DOT", "AUSD", "ACA", "XBTC", "LDOT", "RENBTC"]
    assert loaded.rank("ACA") == 2
    store.close()


def test_sqlite_store_seed_rolls_back_on_rank_conflict() -> None:
    store = SQLiteTokenConfigStore()
    store.seed(DEFAULT_TOKEN_CONFIG)
    clashing = TokenConfig(DEFAULT_TOKEN_CONFIG.entries(), ranks={"ACA": 0, "DOT": 0})

    with pytest.raises(RankConflictError):
        store.seed(clashing)

    assert store.load_config().symbols() == DEFAULT_TOKEN_CONFIG.symbols()
    store.close()


def test_sqlite_store_upsert_rejects_taken_rank() -> None:
    store = SQLiteTokenConfigStore()
    store.upsert_entry(TokenConfigEntry(symbol="ACA", chain="acala", name="ACA", decimal=13))
    store.upsert_entry(TokenConfigEntry(symbol="DOT", chain="polkadot", name="DOT", decimal=10))

    with pytest.raises(RankConflictError, match="rank 0"):
        store.upsert_entry(TokenConfigEntry(symbol="DOT", chain="polkadot", name="Polkadot", decimal=10), rank=0)

    assert store.get_entry("DOT") == TokenConfigEntry(symbol="DOT", chain="polkadot", name="DOT", decimal=10)
    store.close()


def test_type_registry_follows_configured_tokens(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, reset_defaults) -> None:
    path = tmp_path / "tokens.json"
    path.write_text(
        json.dumps({"tokens": {"KAR": {"chain": "karura", "name": "Karura", "decimal": 12}}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("ACALA_TOKENS_CONFIG_PATH", str(path))

    currency = Token.from_symbol_value("KAR").to_currency_id(StaticTypeRegistry())

    assert currency.is_token
    assert str(currency.as_token) == "KAR"
