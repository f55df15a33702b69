# ranks.py
# Rank classifier driven by the static rank table in constants.RANKS.
# Lookup order: exact code, exact title / alt title, known abbreviation, and
# finally the legacy substring rules used for free-text rank cells.

from __future__ import annotations

from typing import Optional

from .constants import RANKS, RANK_ABBREVIATIONS
from .schemas import RankDefinition

RANK_TABLE = [RankDefinition(*r) for r in RANKS]
RANK_BY_CODE = {r.code.lower(): r for r in RANK_TABLE}

_BY_TITLE = {}
for _r in RANK_TABLE:
    _BY_TITLE.setdefault(_r.title.lower(), _r)
    if _r.alt_title:
        _BY_TITLE.setdefault(_r.alt_title.lower(), _r)

COMMAND_TIERS = {"senior-officer", "admiralty"}


def _legacy_code(r: str) -> Optional[str]:
    """Substring rules for free-text cells such as 'Lt. Commander Smith'."""
    if "admiral of the navy" in r:
        return "O-10"
    if "vice admiral" in r:
        return "O-9"
    if "rear admiral" in r:
        return "O-8"
    if "commodore" in r or "brigadier" in r:
        return "O-7"
    if "captain" in r and "marine" not in r:
        return "O-6"
    if "lt. commander" in r or "lieutenant commander" in r:
        return "O-4"
    if "commander" in r and "lt" not in r and "lieutenant" not in r:
        return "O-5"
    if "lieutenant" in r and "commander" not in r and "colonel" not in r:
        return "O-3"
    if "midship" in r:
        return "O-1"
    if "senior chief" in r:
        return "E-8"
    if "chief petty" in r:
        return "E-7"
    if "junior petty" in r or "jr. petty" in r or "jr petty" in r:
        return "E-4"
    if "petty officer" in r:
        return "E-6"
    if "able seaman" in r or "able seawoman" in r:
        return "E-3"
    if "seaman" in r and "apprentice" not in r:
        return "E-2"
    if "recruit" in r:
        return "E-1"
    if "warrant" in r:
        return "WO"
    return None


def resolve_rank(raw_rank) -> Optional[RankDefinition]:
    """Return the RankDefinition for a raw sheet value, or None if unknown."""
    if raw_rank is None:
        return None
    r = " ".join(str(raw_rank).split()).lower()
    if not r:
        return None

    if r in RANK_BY_CODE:
        return RANK_BY_CODE[r]
    if r in _BY_TITLE:
        return _BY_TITLE[r]
    if r in RANK_ABBREVIATIONS:
        return RANK_BY_CODE[RANK_ABBREVIATIONS[r].lower()]

    code = _legacy_code(r)
    return RANK_BY_CODE.get(code.lower()) if code else None


def rank_code(raw_rank) -> str:
    rank = resolve_rank(raw_rank)
    return rank.code if rank else ""


def rank_tier(raw_rank) -> str:
    rank = resolve_rank(raw_rank)
    return rank.tier if rank else "unknown"


def rank_level(raw_rank) -> int:
    rank = resolve_rank(raw_rank)
    return rank.level if rank else 0


def seniority_key(raw_rank) -> int:
    """Sort key; smaller means more senior. Unknown ranks sort last."""
    rank = resolve_rank(raw_rank)
    return -rank.level if rank else 10_000


def is_rank_at_or_above(raw_rank, threshold_code: str) -> bool:
    rank = resolve_rank(raw_rank)
    threshold = RANK_BY_CODE.get(str(threshold_code).lower())
    if not rank or not threshold:
        return False
    return rank.level >= threshold.level


def is_command_rank(raw_rank) -> bool:
    """Senior officers, admiralty and senior chiefs sit in Command Staff."""
    rank = resolve_rank(raw_rank)
    if rank is None:
        return False
    return rank.tier in COMMAND_TIERS or rank.code in {"E-8", "O-1"}
