from __future__ import annotations

import logging
import sqlite3

from .models import utcnow_iso
from .token_config import TokenConfig, TokenConfigEntry

logger = logging.getLogger(__name__)


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS token_config (
  symbol TEXT PRIMARY KEY,
  chain TEXT NOT NULL,
  name TEXT NOT NULL,
  decimal INTEGER NOT NULL,
  rank INTEGER NOT NULL UNIQUE,
  updated_at TEXT NOT NULL
);
"""


class RankConflictError(ValueError):
    pass


class SQLiteTokenConfigStore:
    def __init__(self, db_path: str = ":memory:") -> None:
        self.db_path = db_path
        self.conn = sqlite3.connect(db_path)
        self.conn.row_factory = sqlite3.Row
        self.conn.executescript(SCHEMA_SQL)
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    def _entry_from_row(self, row: sqlite3.Row) -> TokenConfigEntry:
        return TokenConfigEntry(
            symbol=str(row["symbol"]),
            chain=str(row["chain"]),
            name=str(row["name"]),
            decimal=int(row["decimal"]),
        )

    def upsert_entry(self, entry: TokenConfigEntry, rank: int | None = None) -> int:
        """Insert or update ``entry``; returns the rank it is stored under.

        An existing symbol keeps its rank unless one is given explicitly. A new
        symbol without a rank is appended after the highest stored rank.
        """
        now = utcnow_iso()
        existing = self.conn.execute(
            "SELECT rank FROM token_config WHERE symbol = ?",
            (entry.symbol,),
        ).fetchone()
        if existing:
            stored_rank = int(existing["rank"]) if rank is None else rank
            self._write(
                "UPDATE token_config SET chain = ?, name = ?, decimal = ?, rank = ?, updated_at = ? WHERE symbol = ?",
                (entry.chain, entry.name, entry.decimal, stored_rank, now, entry.symbol),
                rank=stored_rank,
            )
            return stored_rank

        if rank is None:
            row = self.conn.execute("SELECT COALESCE(MAX(rank) + 1, 0) AS next_rank FROM token_config").fetchone()
            rank = int(row["next_rank"])
        self._write(
            "INSERT INTO token_config(symbol, chain, name, decimal, rank, updated_at) VALUES (?, ?, ?, ?, ?, ?)",
            (entry.symbol, entry.chain, entry.name, entry.decimal, rank, now),
            rank=rank,
        )
        return rank

    def _write(self, sql: str, params: tuple[object, ...], *, rank: int) -> None:
        try:
            with self.conn:
                self.conn.execute(sql, params)
        except sqlite3.IntegrityError as exc:
            raise RankConflictError(f"rank {rank} is already taken") from exc

    def get_entry(self, symbol: str) -> TokenConfigEntry | None:
        row = self.conn.execute("SELECT * FROM token_config WHERE symbol = ?", (symbol,)).fetchone()
        if not row:
            return None
        return self._entry_from_row(row)

    def list_entries(self) -> list[TokenConfigEntry]:
        rows = self.conn.execute("SELECT * FROM token_config ORDER BY rank").fetchall()
        return [self._entry_from_row(row) for row in rows]

    def delete_entry(self, symbol: str) -> bool:
        cursor = self.conn.execute("DELETE FROM token_config WHERE symbol = ?", (symbol,))
        self.conn.commit()
        return cursor.rowcount > 0

    def seed(self, config: TokenConfig) -> None:
        """Replace the stored table with ``config`` in a single transaction.

        Unranked symbols are appended after the highest rank in ``config``.
        """
        now = utcnow_iso()
        next_rank = max((config.rank(symbol) for symbol in config.symbols() if config.has_rank(symbol)), default=-1) + 1
        rows = []
        for entry in config.entries():
            if config.has_rank(entry.symbol):
                rank = config.rank(entry.symbol)
            else:
                rank = next_rank
                next_rank += 1
            rows.append((entry.symbol, entry.chain, entry.name, entry.decimal, rank, now))
        try:
            with self.conn:
                self.conn.execute("DELETE FROM token_config")
                self.conn.executemany(
                    "INSERT INTO token_config(symbol, chain, name, decimal, rank, updated_at) VALUES (?, ?, ?, ?, ?, ?)",
                    rows,
                )
        except sqlite3.IntegrityError as exc:
            raise RankConflictError(f"token configuration has duplicate ranks: {exc}") from exc
        logger.info("seeded %d tokens into %s", len(rows), self.db_path)

    def load_config(self) -> TokenConfig:
        rows = self.conn.execute("SELECT * FROM token_config ORDER BY rank").fetchall()
        entries = [self._entry_from_row(row) for row in rows]
        ranks = {str(row["symbol"]): int(row["rank"]) for row in rows}
        return TokenConfig(entries, ranks)
