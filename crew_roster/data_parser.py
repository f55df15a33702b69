# data_parser.py
# -----------------------------------------------------------------------------
# Normalizes raw sheet tables into typed records:
#   - crew roster rows     -> CrewMember
#   - voyage/award rows    -> LeaderboardEntry (matched against known crew names)
#   - enrichment           -> CrewMember overlaid with leaderboard evidence
# Nothing here raises for data-shape reasons: a bad cell degrades to a default
# for that field only and the rest of the row survives.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
import warnings
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

import pandas as pd

from .constants import (
    CHECK_GLYPHS, COMMAND_SQUAD, COMPLIANT_MARKERS, DEFAULT_COMPLIANCE_STATUS,
    DEFAULT_SQUAD, HOSTING_WINDOW_DAYS, MAX_CHAT_STARS, NAME_PLACEHOLDERS,
    SAILING_WINDOW_DAYS, STAR_GLYPHS,
)
from .ranks import is_command_rank
from .schemas import CrewMember, LeaderboardEntry, RawSheetTable
from .sheet_columns import (
    CREW_ROSTER_COLUMNS, VOYAGE_AWARDS_COLUMNS, can_host, cell, headers_of,
    is_on_loa, matches_keyword, must_sail, resolve_columns, row_values,
)

log = logging.getLogger(__name__)

HOST_KEYWORD = "host"
VOYAGE_KEYWORD = "voyage"

_NEGATIVE_MARKERS = ("not ", "outside", "overdue")

# --------------------------- Cell parsers ------------------------------------


def is_placeholder_name(name) -> bool:
    v = str(name or "").strip()
    return not v or v.lower() in NAME_PLACEHOLDERS


def parse_date(value) -> Optional[str]:
    """Lenient date parse -> 'YYYY-MM-DD', or None when the cell is not a date."""
    s = str(value or "").strip()
    if not s or s.lower() in {"-", "n/a", "na", "none"}:
        return None
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            ts = pd.to_datetime(s, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts.date().isoformat()


def parse_count(value) -> Optional[int]:
    """Non-negative integer from a cell ('7', '7.0', '1,204'), else None."""
    s = str(value or "").strip().replace(",", "")
    if not s:
        return None
    try:
        n = float(s)
    except ValueError:
        return None
    if n != n or n in (float("inf"), float("-inf")) or n < 0:
        return None
    return int(n)


def parse_chat_activity(value) -> int:
    """
    Chat activity as 0..5 stars. Star glyphs are counted when present,
    otherwise the first integer in the cell is used. Anything else is 0.
    """
    s = str(value or "")
    stars = sum(s.count(g) for g in STAR_GLYPHS)
    if stars > 0:
        return min(stars, MAX_CHAT_STARS)
    m = re.search(r"-?\d+", s)
    if not m:
        return 0
    try:
        n = int(m.group(0))
    except ValueError:
        return 0
    return max(0, min(n, MAX_CHAT_STARS))


def parse_flag(value) -> bool:
    v = str(value or "").strip().lower()
    return "yes" in v or v in {"true", "y", "x"} or v in CHECK_GLYPHS


def compliance_marker(value, allow_na: bool = False) -> Optional[bool]:
    """Read an explicit compliance cell; None when the cell is empty."""
    v = str(value or "").strip().lower()
    if not v:
        return None
    if v in CHECK_GLYPHS:
        return True
    if any(m in v for m in _NEGATIVE_MARKERS):
        return False
    if allow_na and v in {"n/a", "na"}:
        return True
    return any(m in v for m in COMPLIANT_MARKERS)


def days_since(iso_date: Optional[str], today: date) -> Optional[int]:
    if not iso_date:
        return None
    try:
        return (today - date.fromisoformat(iso_date)).days
    except ValueError:
        return None


def cadence_compliance(last_date: Optional[str], window: int,
                       days_inactive: Optional[int], today: date) -> Optional[bool]:
    """
    True/False when there is evidence (a dated activity, else an inactivity
    counter), None when there is nothing to judge by.
    """
    since = days_since(last_date, today)
    if since is not None:
        return since <= window
    if days_inactive is not None:
        return days_inactive <= window
    return None


# --------------------------- Crew roster -------------------------------------


def parse_crew_member(row, headers, today: Optional[date] = None,
                      columns: Optional[dict] = None) -> Optional[CrewMember]:
    """
    Convert one roster row into a CrewMember, or None when the name cell is
    empty or a placeholder ('-', a repeated 'Name' header).
    """
    headers = list(headers or [])
    today = today or date.today()
    if columns is None:
        columns = resolve_columns(CREW_ROSTER_COLUMNS, headers)
    values = row_values(row, headers)

    def get(field: str) -> str:
        return cell(values, columns.get(field))

    name = get("name")
    if is_placeholder_name(name):
        return None

    rank = get("rank")
    status = get("compliance_status")
    loa = is_on_loa(status)
    host_rank = can_host(rank)

    last_voyage = parse_date(get("last_voyage_date"))
    last_host = parse_date(get("last_host_date"))
    inactive_raw = parse_count(get("days_inactive"))

    sailing = compliance_marker(get("sailing_compliance"))
    if sailing is None:
        sailing = cadence_compliance(last_voyage, SAILING_WINDOW_DAYS, inactive_raw, today)

    if not host_rank:
        hosting = True
    else:
        hosting = compliance_marker(get("hosting_compliance"), allow_na=True)
        if hosting is None:
            hosting = cadence_compliance(last_host, HOSTING_WINDOW_DAYS, None, today)

    if loa:
        # Leave of absence overrides the activity requirements
        sailing = hosting = True

    return CrewMember(
        name=name,
        rank=rank,
        squad=get("squad") or DEFAULT_SQUAD,
        timezone=get("timezone"),
        discord_username=get("discord_username"),
        sailing_compliant=True if sailing is None else sailing,
        hosting_compliant=True if hosting is None else hosting,
        loa_status=loa,
        compliance_status=status or DEFAULT_COMPLIANCE_STATUS,
        loa_return_date=parse_date(get("loa_return_date")),
        last_voyage_date=last_voyage,
        last_host_date=last_host,
        days_inactive=inactive_raw or 0,
        can_host_rank=host_rank,
        must_sail_rank=must_sail(rank),
        chat_activity=parse_chat_activity(get("chat_activity")),
        discord_id=get("discord_id"),
        in_guild=parse_flag(get("in_guild")),
        xbox_gamertag=get("xbox_gamertag"),
        squad_leader_comments=get("squad_leader_comments"),
        cos_notes=get("cos_notes"),
        birthday=get("birthday"),
        spd_name=get("spd_name"),
        service_stripe=parse_flag(get("service_stripe")),
        promotion_eligible=parse_flag(get("promotion_eligible")),
    )


def _is_squad_header(rank: str, name: str) -> bool:
    # any label in the rank column with nothing in the name column, e.g. "Shade Squad"
    return bool(rank) and not name


def parse_crew_table(table: RawSheetTable, today: Optional[date] = None) -> list[CrewMember]:
    """
    Parse the whole roster sheet. Source order is preserved and duplicate
    names are kept. Rows with a squad label in the rank column and an empty
    name set the squad for the rows below them.
    """
    headers = headers_of(table)
    columns = resolve_columns(CREW_ROSTER_COLUMNS, headers)
    today = today or date.today()

    crew = []
    current_squad = None
    for row in table.rows:
        values = row_values(row, headers)
        rank = cell(values, columns["rank"])
        name = cell(values, columns["name"])

        if not rank and not name:
            continue
        if rank.lower() == "rank" and name.lower() == "name":
            continue
        if _is_squad_header(rank, name):
            current_squad = rank
            continue

        member = parse_crew_member(values, headers, today, columns)
        if member is None:
            continue
        if not cell(values, columns["squad"]):
            if current_squad:
                squad = current_squad
            elif is_command_rank(rank):
                squad = COMMAND_SQUAD
            else:
                squad = DEFAULT_SQUAD
            member = replace(member, squad=squad)
        crew.append(member)

    log.debug("Parsed %d crew members from %d rows", len(crew), len(table.rows))
    return crew


# --------------------------- Leaderboard -------------------------------------


def parse_leaderboard_row(row, headers, known_names, columns: Optional[dict] = None) -> Optional[LeaderboardEntry]:
    """
    One voyage/award row -> LeaderboardEntry. The name is the first cell equal
    (exactly, case-sensitive) to a known crew name. Host/voyage counts are the
    maximum integer found under any header containing 'host' / 'voyage'.
    """
    headers = list(headers or [])
    if columns is None:
        columns = resolve_columns(VOYAGE_AWARDS_COLUMNS, headers)
    values = row_values(row, headers)

    matched = ""
    for v in values:
        v = v.strip()
        if v and v in known_names:
            matched = v
            break

    host_count = voyage_count = 0
    for header, value in zip(headers, values):
        n = parse_count(value)
        if n is None:
            continue
        if matches_keyword(header, HOST_KEYWORD):
            host_count = max(host_count, n)
        if matches_keyword(header, VOYAGE_KEYWORD):
            voyage_count = max(voyage_count, n)

    if not matched or (host_count == 0 and voyage_count == 0):
        return None

    return LeaderboardEntry(
        name=matched,
        host_count=host_count,
        voyage_count=voyage_count,
        last_voyage_date=parse_date(cell(values, columns["last_voyage_date"])),
        last_host_date=parse_date(cell(values, columns["last_host_date"])),
        days_inactive=parse_count(cell(values, columns["days_inactive"])),
        rank=cell(values, columns["rank"]),
        join_date=parse_date(cell(values, columns["join_date"])),
    )


def parse_leaderboard_table(table: RawSheetTable, known_names: Iterable[str]) -> list[LeaderboardEntry]:
    """Rows without a crew-name match, or with no counts at all, are dropped."""
    headers = headers_of(table)
    columns = resolve_columns(VOYAGE_AWARDS_COLUMNS, headers)
    names = {str(n) for n in known_names if n}

    entries = []
    for row in table.rows:
        entry = parse_leaderboard_row(row, headers, names, columns)
        if entry is not None:
            entries.append(entry)

    log.debug("Matched %d leaderboard entries out of %d rows", len(entries), len(table.rows))
    return entries


# --------------------------- Enrichment --------------------------------------


def find_leaderboard_entry(name: str, leaderboard: Iterable[LeaderboardEntry]) -> Optional[LeaderboardEntry]:
    """First entry in array order whose name equals `name` exactly."""
    for entry in leaderboard:
        if entry.name == name:
            return entry
    return None


def enrich_crew_member(member: CrewMember, leaderboard: Iterable[LeaderboardEntry],
                       today: Optional[date] = None) -> CrewMember:
    """
    Overlay leaderboard counts, dates and inactivity on a crew member and
    recompute compliance from them. Without a matching entry the member is
    returned as-is.
    """
    entry = find_leaderboard_entry(member.name, leaderboard)
    if entry is None:
        return member
    today = today or date.today()

    sailing = member.sailing_compliant
    hosting = member.hosting_compliant
    if not member.loa_status:
        s = cadence_compliance(entry.last_voyage_date, SAILING_WINDOW_DAYS, entry.days_inactive, today)
        if s is not None:
            sailing = s
        if member.can_host_rank:
            h = cadence_compliance(entry.last_host_date, HOSTING_WINDOW_DAYS, None, today)
            if h is not None:
                hosting = h

    return replace(
        member,
        voyage_count=entry.voyage_count,
        host_count=entry.host_count,
        last_voyage_date=entry.last_voyage_date or member.last_voyage_date,
        last_host_date=entry.last_host_date or member.last_host_date,
        days_inactive=member.days_inactive if entry.days_inactive is None else entry.days_inactive,
        sailing_compliant=sailing,
        hosting_compliant=hosting,
    )


def enrich_crew(members: Iterable[CrewMember], leaderboard: Iterable[LeaderboardEntry],
                today: Optional[date] = None) -> list[CrewMember]:
    leaderboard = list(leaderboard)
    today = today or date.today()
    enriched = [enrich_crew_member(m, leaderboard, today) for m in members]
    unmatched = [m.name for m in enriched if find_leaderboard_entry(m.name, leaderboard) is None]
    if unmatched:
        log.debug("No leaderboard entry for: %s", ", ".join(unmatched))
    return enriched
