# schemas.py
# Defines data structures for sheet tables, crew records and derived reports

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

Row = Union[list, dict]


@dataclass
class RawSheetTable:
    headers: list[str] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class RankDefinition:
    code: str
    title: str
    alt_title: str
    tier: str
    level: int


@dataclass(frozen=True)
class CrewMember:
    name: str
    rank: str = ""
    squad: str = "Unassigned"
    timezone: str = ""
    discord_username: str = ""
    sailing_compliant: bool = True
    hosting_compliant: bool = True
    loa_status: bool = False
    compliance_status: str = "Active Duty"
    loa_return_date: Optional[str] = None
    last_voyage_date: Optional[str] = None
    last_host_date: Optional[str] = None
    days_inactive: int = 0
    can_host_rank: bool = False
    must_sail_rank: bool = False
    chat_activity: int = 0
    discord_id: str = ""
    in_guild: bool = False
    xbox_gamertag: str = ""
    squad_leader_comments: str = ""
    cos_notes: str = ""
    birthday: str = ""
    spd_name: str = ""
    service_stripe: bool = False
    promotion_eligible: bool = False
    voyage_count: int = 0
    host_count: int = 0


@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    host_count: int = 0
    voyage_count: int = 0
    last_voyage_date: Optional[str] = None
    last_host_date: Optional[str] = None
    days_inactive: Optional[int] = None
    rank: str = ""
    join_date: Optional[str] = None


@dataclass(frozen=True)
class SubclassProgress:
    name: str
    total_voyages: int = 0
    carpenter: int = 0
    flex: int = 0
    cannoneer: int = 0
    helm: int = 0
    grenadier_points: int = 0
    field_surgeon_points: int = 0
    is_pirate_legend: bool = False
    has_commander_coin: bool = False
    has_officer_coin: bool = False


@dataclass(frozen=True)
class ActionItem:
    id: str
    type: str
    severity: str  # "high" | "medium" | "low"
    sailor: str
    squad: str
    responsible: str
    description: str
    details: str
    source: str  # "compliance" | "activity" | "comment"
    deadline: Optional[str] = None


@dataclass(frozen=True)
class AwardRule:
    id: str
    name: str
    category: str  # "voyages" | "hosting" | "conduct"
    voyages: Optional[int] = None
    hosted: Optional[int] = None
    chat_activity_min: Optional[int] = None
    prerequisite: Optional[str] = None


@dataclass(frozen=True)
class Prerequisite:
    id: str
    label: str
    auto_detect: bool
    voyages: Optional[int] = None
    hosted: Optional[int] = None
    chat_activity_min: Optional[int] = None


@dataclass(frozen=True)
class PromotionPath:
    from_rank: str
    to_rank: str
    label: str
    responsible_rank: str
    prerequisites: tuple = ()


@dataclass
class MonthlySnapshot:
    date: str   # YYYY-MM-DD
    month: str  # YYYY-MM
    crew: list[dict]
    total_crew: int
    compliance_count: int
    squad_breakdown: dict[str, int]
