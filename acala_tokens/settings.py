from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


HOME_CHAIN = "acala"


def _env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name, default)
    if value is not None:
        value = value.strip()
    return value or default


@dataclass(frozen=True)
class Settings:
    home_chain: str
    token_config_path: str | None
    token_config_db: str | None


def get_settings() -> Settings:
    load_dotenv()
    return Settings(
        home_chain=_env("ACALA_TOKENS_HOME_CHAIN", HOME_CHAIN),
        token_config_path=_env("ACALA_TOKENS_CONFIG_PATH"),
        token_config_db=_env("ACALA_TOKENS_CONFIG_DB"),
    )
