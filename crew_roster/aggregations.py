# aggregations.py
# Pure reducers over normalized crew / leaderboard records.

from __future__ import annotations

from typing import Callable, Iterable, Sequence

import pandas as pd

from .constants import RANK_TIERS
from .ranks import rank_tier, seniority_key
from .schemas import CrewMember, LeaderboardEntry

DEFAULT_TOP_N = 5

CREW_FRAME_COLUMNS = [
    "name", "rank", "squad", "timezone", "discord_username",
    "compliance_status", "loa_status", "loa_return_date",
    "sailing_compliant", "hosting_compliant", "can_host_rank",
    "chat_activity", "voyage_count", "host_count",
    "last_voyage_date", "last_host_date", "days_inactive",
]


def compliance_percentage(compliant: int, total: int) -> int:
    """round(compliant / total * 100) with halves rounded up; 0 for an empty crew."""
    if total <= 0:
        return 0
    # integer form of floor(x + 0.5) avoids float and banker's rounding
    return (200 * compliant + total) // (2 * total)


def is_compliant(member: CrewMember) -> bool:
    """LOA members are exempt; everyone else must meet sailing and hosting."""
    if member.loa_status:
        return True
    return member.sailing_compliant and member.hosting_compliant


def compliance_count(members: Iterable[CrewMember]) -> int:
    return sum(1 for m in members if is_compliant(m))


def compliance_rate(members: Sequence[CrewMember]) -> int:
    members = list(members)
    return compliance_percentage(compliance_count(members), len(members))


def squad_breakdown(members: Iterable[CrewMember]) -> dict[str, int]:
    """Members per squad, squads in order of first appearance."""
    out: dict[str, int] = {}
    for m in members:
        out[m.squad] = out.get(m.squad, 0) + 1
    return out


def timezone_breakdown(members: Iterable[CrewMember]) -> dict[str, int]:
    out: dict[str, int] = {}
    for m in members:
        tz = m.timezone or "Unknown"
        out[tz] = out.get(tz, 0) + 1
    return out


def rank_distribution(members: Iterable[CrewMember]) -> dict[str, int]:
    """Members per rank tier, tiers in rank table order, empty tiers omitted."""
    counts: dict[str, int] = {}
    for m in members:
        tier = rank_tier(m.rank)
        counts[tier] = counts.get(tier, 0) + 1
    ordered = {t: counts[t] for t in RANK_TIERS if t in counts}
    if "unknown" in counts:
        ordered["unknown"] = counts["unknown"]
    return ordered


def top_n(entries: Iterable, key: Callable, limit: int = DEFAULT_TOP_N) -> list:
    """
    Highest `key` first. sorted() is stable, so equal counts keep their input
    order from one run to the next. Zero counts are left out.
    """
    ranked = sorted((e for e in entries if key(e) > 0), key=key, reverse=True)
    return ranked[:limit] if limit is not None else ranked


def top_hosts(entries: Iterable[LeaderboardEntry], limit: int = DEFAULT_TOP_N) -> list[LeaderboardEntry]:
    return top_n(entries, lambda e: e.host_count, limit)


def top_voyagers(entries: Iterable[LeaderboardEntry], limit: int = DEFAULT_TOP_N) -> list[LeaderboardEntry]:
    return top_n(entries, lambda e: e.voyage_count, limit)


def squad_compliance(members: Iterable[CrewMember]) -> dict[str, int]:
    """Compliance percentage per squad (first-appearance order)."""
    groups: dict[str, list[CrewMember]] = {}
    for m in members:
        groups.setdefault(m.squad, []).append(m)
    return {squad: compliance_rate(ms) for squad, ms in groups.items()}


def crew_frame(members: Iterable[CrewMember]) -> pd.DataFrame:
    """Crew as a DataFrame (one row per member, source order)."""
    rows = [{c: getattr(m, c) for c in CREW_FRAME_COLUMNS} for m in members]
    return pd.DataFrame(rows, columns=CREW_FRAME_COLUMNS)


def sort_by_seniority(members: Iterable[CrewMember]) -> list[CrewMember]:
    """Most senior first, then by name."""
    return sorted(members, key=lambda m: (seniority_key(m.rank), m.name.lower()))


def dashboard_summary(members: Sequence[CrewMember]) -> dict:
    members = list(members)
    compliant = compliance_count(members)
    return {
        "total_crew": len(members),
        "compliance_count": compliant,
        "compliance_rate": compliance_percentage(compliant, len(members)),
        "on_loa": sum(1 for m in members if m.loa_status),
        "sailing_compliant": sum(1 for m in members if m.sailing_compliant),
        "hosting_required": sum(1 for m in members if m.can_host_rank),
        "hosting_compliant": sum(1 for m in members if m.can_host_rank and m.hosting_compliant),
        "no_chat_activity": sum(1 for m in members if m.chat_activity == 0),
        "squads": squad_breakdown(members),
    }
