from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, NewType


NomineeId = NewType("NomineeId", str)


@dataclass(frozen=True)
class UnlockChunk:
    value: int
    era: int

    @classmethod
    def from_chain_data(cls, data: Mapping[str, Any]) -> UnlockChunk:
        return cls(
            value=parse_balance(_require(data, "value"), field="value"),
            era=parse_balance(_require(data, "era"), field="era"),
        )

    def to_chain_data(self) -> dict[str, int]:
        return {"value": self.value, "era": self.era}


@dataclass(frozen=True)
class BondingLedger:
    total: int
    active: int
    unlocking: tuple[UnlockChunk, ...] = ()

    @classmethod
    def from_chain_data(cls, data: Mapping[str, Any]) -> BondingLedger:
        chunks = _require(data, "unlocking")
        if not isinstance(chunks, (list, tuple)):
            raise ValueError(f"unlocking must be a list of chunks, got {chunks!r}")
        for chunk in chunks:
            if not isinstance(chunk, Mapping):
                raise ValueError(f"unlock chunk must be a mapping, got {chunk!r}")
        return cls(
            total=parse_balance(_require(data, "total"), field="total"),
            active=parse_balance(_require(data, "active"), field="active"),
            unlocking=tuple(UnlockChunk.from_chain_data(chunk) for chunk in chunks),
        )

    def to_chain_data(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "active": self.active,
            "unlocking": [chunk.to_chain_data() for chunk in self.unlocking],
        }


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def parse_balance(value: int | str, *, field: str = "balance") -> int:
    """Chain JSON renders large balances as decimal or 0x-prefixed hex strings."""
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer, got {value!r}")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            raise ValueError(f"{field} cannot be empty")
        parsed = int(text, 16) if text.lower().startswith("0x") else int(text)
    else:
        raise ValueError(f"{field} must be an integer, got {value!r}")
    if parsed < 0:
        raise ValueError(f"{field} cannot be negative: {parsed}")
    return parsed


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field: {key}")
    return data[key]
