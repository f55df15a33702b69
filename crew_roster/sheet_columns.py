# sheet_columns.py
# -----------------------------------------------------------------------------
# Column mapping for the three sheet shapes:
#   - crew roster sheet (ship roster, compliance, leadership notes)
#   - time/voyage awards sheet (host / voyage counts and dates)
#   - role/coin awards sheet (subclass progress, challenge coins)
# Each semantic field maps to its legacy column position plus header aliases.
# Lookups never raise: sheets are user-edited and columns come and go.
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from .constants import (
    HOSTING_APPLIES_TO, LOA_KEYWORDS, SAILING_APPLIES_TO,
)
from .ranks import resolve_rank


class ColumnSpec(NamedTuple):
    position: int
    headers: tuple
    fuzzy: bool = True


CREW_ROSTER_COLUMNS = {
    "rank": ColumnSpec(0, ("Rank",), fuzzy=False),
    "name": ColumnSpec(1, ("Name", "Sailor", "Sailor Name"), fuzzy=False),
    "discord_username": ColumnSpec(2, ("Discord Username", "Discord"), fuzzy=False),
    "in_guild": ColumnSpec(3, ("In Guild", "In Guild Indicator")),
    "xbox_gamertag": ColumnSpec(5, ("Xbox Gamertag", "Gamertag")),
    "timezone": ColumnSpec(7, ("Timezone", "Time Zone", "TZ")),
    "compliance_status": ColumnSpec(8, ("LOA Status", "Compliance", "Status", "LOA"), fuzzy=False),
    "loa_return_date": ColumnSpec(9, ("LOA Return Date", "Return Date")),
    "chat_activity": ColumnSpec(10, ("Chat Activity", "Stars")),
    "sailing_compliance": ColumnSpec(11, ("Sailing Compliance", "Sailing")),
    "hosting_compliance": ColumnSpec(12, ("Hosting Compliance", "Hosting")),
    "squad_leader_comments": ColumnSpec(13, ("Squad Leader Comments", "SL Comments")),
    "birthday": ColumnSpec(14, ("Birthday",)),
    "discord_id": ColumnSpec(16, ("Discord ID",)),
    "spd_name": ColumnSpec(18, ("SPD Name", "SPD")),
    "service_stripe": ColumnSpec(19, ("Service Stripe",)),
    "promotion_eligible": ColumnSpec(21, ("Promotion Eligible",)),
    "cos_notes": ColumnSpec(22, ("COS Notes", "Chief of Ship Notes")),
    # not in the original roster layout; header lookup only
    "squad": ColumnSpec(-1, ("Squad", "Squad Name"), fuzzy=False),
    "last_voyage_date": ColumnSpec(-1, ("Last Voyage Date", "Last Voyage")),
    "last_host_date": ColumnSpec(-1, ("Last Host Date", "Last Host", "Last Hosted")),
    "days_inactive": ColumnSpec(-1, ("Days Inactive", "Days Since Last Voyage")),
}

VOYAGE_AWARDS_COLUMNS = {
    "role": ColumnSpec(0, ("Role",)),
    "name": ColumnSpec(1, ("Name", "Sailor"), fuzzy=False),
    "discord_id": ColumnSpec(2, ("Discord ID",)),
    "discord_username": ColumnSpec(4, ("Discord Username",)),
    "in_guild": ColumnSpec(5, ("In Guild",)),
    "rank": ColumnSpec(6, ("Rank",), fuzzy=False),
    "timezone": ColumnSpec(7, ("Timezone", "TZ")),
    "join_date": ColumnSpec(8, ("Join Date", "Joined")),
    "days_inactive": ColumnSpec(9, ("Days Inactive", "Days Since Last Voyage")),
    "last_host_date": ColumnSpec(10, ("Last Host Date", "Last Host", "Last Hosted")),
    "host_count": ColumnSpec(11, ("Host Count", "Hosts", "Times Hosted")),
    "last_voyage_date": ColumnSpec(12, ("Last Voyage Date", "Last Voyage", "Last Official Voyage")),
    "total_voyages": ColumnSpec(13, ("Total Voyages", "Voyages", "Official Voyages")),
    "birthday": ColumnSpec(33, ("Birthday",)),
}

ROLE_COIN_COLUMNS = {
    "role": ColumnSpec(0, ("Role",)),
    "name": ColumnSpec(1, ("Name", "Sailor"), fuzzy=False),
    "fo_notes": ColumnSpec(2, ("FO Notes", "First Officer Notes")),
    "total_voyages": ColumnSpec(3, ("Total Voyages", "Voyages")),
    "unaccounted_subclass": ColumnSpec(4, ("Unaccounted",)),
    "carpenter": ColumnSpec(5, ("Carpenter", "Carp")),
    "flex": ColumnSpec(6, ("Flex",)),
    "cannoneer": ColumnSpec(7, ("Cannoneer", "Cannons")),
    "helm": ColumnSpec(8, ("Helm", "Helmsman")),
    "grenadier_points": ColumnSpec(9, ("Grenadier", "Grenadier Points")),
    "field_surgeon_points": ColumnSpec(10, ("Field Surgeon", "Field Surgeon Points")),
    "pirate_legend": ColumnSpec(11, ("Pirate Legend",)),
    "commander_coin": ColumnSpec(12, ("Commander Challenge Coin", "Commander's Challenge Coin", "Commander Coin")),
    "officer_coin": ColumnSpec(13, ("Officer Challenge Coin", "Officer's Challenge Coin", "Officer Coin")),
}

# Fuzzy (contains) matching only for aliases at least this long
MIN_FUZZY_LEN = 4

# ----- Helpers ---------------------------------------------------------------


def _text(value) -> str:
    if value is None:
        return ""
    return str(value)


def normalize_header(value) -> str:
    """Fold case and drop whitespace/underscores: 'Host_Count ' -> 'hostcount'."""
    return re.sub(r"[\s_]+", "", _text(value)).lower()


def matches_keyword(header, keyword) -> bool:
    """Case-insensitive substring test used for the host/voyage count columns."""
    kw = _text(keyword).strip().lower()
    if not kw:
        return False
    return kw in _text(header).lower()


def resolve_column(table: dict, field: str, headers) -> Optional[int]:
    """
    Return the column index for a semantic field, or None.
    Exact header match first, then a header containing an alias, then the
    legacy position (only for tables without a header row).
    """
    spec = table.get(field) if table else None
    if spec is None:
        return None
    norm_headers = [normalize_header(h) for h in (headers or [])]
    aliases = [normalize_header(a) for a in spec.headers]

    for alias in aliases:
        for i, h in enumerate(norm_headers):
            if h and h == alias:
                return i
    for alias in aliases if spec.fuzzy else ():
        if len(alias) < MIN_FUZZY_LEN:
            continue
        for i, h in enumerate(norm_headers):
            if alias in h:
                return i
    if not any(norm_headers) and spec.position >= 0:
        return spec.position
    return None


def resolve_columns(table: dict, headers) -> dict[str, Optional[int]]:
    """Resolve every field of a mapping table once per sheet."""
    return {f: resolve_column(table, f, headers) for f in table}


def headers_of(sheet) -> list[str]:
    """Header row of a RawSheetTable; dict rows without headers use their keys."""
    if sheet.headers:
        return [_text(h) for h in sheet.headers]
    if sheet.rows and isinstance(sheet.rows[0], dict):
        return [_text(k) for k in sheet.rows[0].keys()]
    return []


def row_values(row, headers) -> list[str]:
    """Positional view of a row; dict rows are read in header order."""
    if isinstance(row, dict):
        if headers:
            return [_text(row.get(h, "")) for h in headers]
        return [_text(v) for v in row.values()]
    if row is None:
        return []
    return [_text(v) for v in row]


def cell(values: list, index: Optional[int]) -> str:
    if index is None or index < 0 or index >= len(values):
        return ""
    return _text(values[index]).strip()


# ----- Predicates ------------------------------------------------------------


def is_on_loa(raw_value) -> bool:
    v = _text(raw_value).strip().lower()
    if not v:
        return False
    return any(k in v for k in LOA_KEYWORDS)


def can_host(rank) -> bool:
    resolved = resolve_rank(rank)
    return bool(resolved) and resolved.code in HOSTING_APPLIES_TO


def must_sail(rank) -> bool:
    resolved = resolve_rank(rank)
    return bool(resolved) and resolved.code in SAILING_APPLIES_TO
