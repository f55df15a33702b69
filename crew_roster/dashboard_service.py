# dashboard_service.py
# Turns the three raw sheet tables into everything the dashboard shows.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .actions import generate_actions, sort_actions
from .aggregations import dashboard_summary, sort_by_seniority, top_hosts, top_voyagers
from .awards import PromotionCheck, check_promotion, eligible_awards, parse_role_coin_table
from .config import Settings
from .data_parser import enrich_crew, parse_crew_table, parse_leaderboard_table
from .schemas import ActionItem, CrewMember, LeaderboardEntry, RawSheetTable, SubclassProgress
from .sheets_service import batch_read

log = logging.getLogger(__name__)


@dataclass
class DashboardData:
    crew: list[CrewMember] = field(default_factory=list)
    leaderboard: list[LeaderboardEntry] = field(default_factory=list)
    enriched: list[CrewMember] = field(default_factory=list)
    subclasses: list[SubclassProgress] = field(default_factory=list)
    summary: dict = field(default_factory=dict)
    top_hosts: list[LeaderboardEntry] = field(default_factory=list)
    top_voyagers: list[LeaderboardEntry] = field(default_factory=list)
    actions: list[ActionItem] = field(default_factory=list)
    # sailor -> award ids they qualify for and have not been given
    awards: dict[str, list[str]] = field(default_factory=dict)
    promotions: dict[str, PromotionCheck] = field(default_factory=dict)
    generated_on: str = ""

    @property
    def by_seniority(self) -> list[CrewMember]:
        return sort_by_seniority(self.enriched)


def build_dashboard(roster: RawSheetTable, voyage: RawSheetTable,
                    role_coin: Optional[RawSheetTable] = None,
                    today: Optional[date] = None) -> DashboardData:
    today = today or date.today()
    crew = parse_crew_table(roster, today)
    # Only names present on the roster are matched on the leaderboard
    leaderboard = parse_leaderboard_table(voyage, [m.name for m in crew])
    enriched = enrich_crew(crew, leaderboard, today)
    subclasses = parse_role_coin_table(role_coin) if role_coin is not None else []

    awards = {}
    promotions = {}
    for m in enriched:
        ids = [a.id for a in eligible_awards(m)]
        if ids:
            awards.setdefault(m.name, ids)
        check = check_promotion(m)
        if check is not None:
            promotions.setdefault(m.name, check)

    data = DashboardData(
        crew=crew,
        leaderboard=leaderboard,
        enriched=enriched,
        subclasses=subclasses,
        summary=dashboard_summary(enriched),
        top_hosts=top_hosts(leaderboard),
        top_voyagers=top_voyagers(leaderboard),
        actions=sort_actions(generate_actions(enriched, today)),
        awards=awards,
        promotions=promotions,
        generated_on=today.isoformat(),
    )
    log.info("Dashboard built: %d crew, %d leaderboard entries, %d actions",
             len(crew), len(leaderboard), len(data.actions))
    return data


def fetch_dashboard(settings: Settings, service=None, today: Optional[date] = None) -> DashboardData:
    """Batch-read the configured ranges and build the dashboard from them."""
    spreadsheet_id = settings.require_spreadsheet()
    ranges = settings.ranges
    tables = batch_read(spreadsheet_id, ranges, service=service, settings=settings)
    empty = RawSheetTable(headers=[], rows=[])
    role_coin = tables.get(settings.role_coin_range) if settings.role_coin_range else None
    return build_dashboard(
        tables.get(settings.roster_range, empty),
        tables.get(settings.voyage_range, empty),
        role_coin,
        today,
    )
