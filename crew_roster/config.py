# config.py
# Runtime settings read from environment variables, plus logging setup.

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError

DEFAULT_ROSTER_RANGE = "Gullinbursti!A8:W49"
DEFAULT_VOYAGE_RANGE = "Time/Voyage Awards!A1:AH34"
DEFAULT_ROLE_COIN_RANGE = "Role/Coin Awards!A1:O34"
DEFAULT_REFRESH_MINUTES = 5

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _int_env(env: Mapping[str, str], key: str, default: int) -> int:
    raw = str(env.get(key, "")).strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


@dataclass
class Settings:
    spreadsheet_id: str = ""
    roster_range: str = DEFAULT_ROSTER_RANGE
    voyage_range: str = DEFAULT_VOYAGE_RANGE
    role_coin_range: str = DEFAULT_ROLE_COIN_RANGE
    refresh_minutes: int = DEFAULT_REFRESH_MINUTES
    data_dir: Path = field(default_factory=lambda: Path("data"))
    service_account_json: Optional[str] = None
    service_account_key_path: Optional[str] = None
    log_level: str = "INFO"

    @property
    def ranges(self) -> list[str]:
        return [r for r in (self.roster_range, self.voyage_range, self.role_coin_range) if r]

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            spreadsheet_id=env.get("CREW_SPREADSHEET_ID", "").strip(),
            roster_range=env.get("CREW_ROSTER_RANGE", DEFAULT_ROSTER_RANGE),
            voyage_range=env.get("CREW_VOYAGE_RANGE", DEFAULT_VOYAGE_RANGE),
            role_coin_range=env.get("CREW_ROLE_COIN_RANGE", DEFAULT_ROLE_COIN_RANGE),
            refresh_minutes=_int_env(env, "CREW_REFRESH_MINUTES", DEFAULT_REFRESH_MINUTES),
            data_dir=Path(env.get("CREW_DATA_DIR", "data")),
            service_account_json=env.get("GOOGLE_SERVICE_ACCOUNT_JSON") or None,
            service_account_key_path=env.get("GOOGLE_SERVICE_ACCOUNT_KEY_PATH") or None,
            log_level=env.get("CREW_LOG_LEVEL", "INFO").upper(),
        )

    def require_spreadsheet(self) -> str:
        if not self.spreadsheet_id:
            raise ConfigError("CREW_SPREADSHEET_ID is not set.")
        return self.spreadsheet_id


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)
