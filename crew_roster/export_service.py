# export_service.py
# -----------------------------------------------------------------------------
# Exports for:
#   1) Crew roster Excel (one row per sailor, seniority order)
#   2) Monthly ship report Excel (Summary + breakdown / top lists / roster /
#      outstanding actions)
#
# Requirements: pandas, openpyxl
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Iterable

import pandas as pd
from openpyxl.utils import get_column_letter

from .aggregations import crew_frame, rank_distribution, sort_by_seniority, squad_compliance
from .schemas import CrewMember, LeaderboardEntry

# --------------------------- Helpers (formatting) ----------------------------

def _autofit_worksheet(ws):
    """Auto-fit column widths based on content length (capped)."""
    for col_idx, col in enumerate(ws.columns, start=1):
        max_len = 0
        for cell in col:
            if cell.value is None:
                continue
            max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, 60)


def _freeze_and_fit(ws):
    """Freeze header row, add filter, and auto-fit columns."""
    ws.freeze_panes = "A2"
    ws.auto_filter.ref = ws.dimensions
    _autofit_worksheet(ws)


def _write_sheet(xw, df: pd.DataFrame, name: str):
    df.to_excel(xw, sheet_name=name, index=False)
    _freeze_and_fit(xw.book[name])


def _yes_no(v) -> str:
    return "Yes" if v else "No"


# English headers for the roster sheets
ROSTER_HEADERS = {
    "rank": "Rank",
    "name": "Name",
    "squad": "Squad",
    "timezone": "Timezone",
    "discord_username": "Discord",
    "compliance_status": "Status",
    "loa_status": "On LOA",
    "loa_return_date": "LOA Return",
    "sailing_compliant": "Sailing OK",
    "hosting_compliant": "Hosting OK",
    "chat_activity": "Chat Activity",
    "voyage_count": "Voyages",
    "host_count": "Hosted",
    "last_voyage_date": "Last Voyage",
    "last_host_date": "Last Hosted",
    "days_inactive": "Days Inactive",
}

_BOOL_COLS = ("loa_status", "sailing_compliant", "hosting_compliant")


def _roster_df(members: Iterable[CrewMember]) -> pd.DataFrame:
    df = crew_frame(sort_by_seniority(members))
    for c in _BOOL_COLS:
        df[c] = df[c].map(_yes_no)
    return df[list(ROSTER_HEADERS.keys())].rename(columns=ROSTER_HEADERS)


def _leaderboard_df(entries: Iterable[LeaderboardEntry], count_field: str, label: str) -> pd.DataFrame:
    rows = [
        {"#": i, "Name": e.name, label: getattr(e, count_field)}
        for i, e in enumerate(entries, start=1)
    ]
    return pd.DataFrame(rows, columns=["#", "Name", label])


# ------------------------ 1) Crew roster Excel export ------------------------

def export_crew_excel(members: Iterable[CrewMember], outfile: str | Path) -> Path:
    """Single 'Roster' sheet, most senior first."""
    outfile = Path(outfile)
    outfile.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(outfile, engine="openpyxl") as xw:
        _write_sheet(xw, _roster_df(members), "Roster")
    return outfile


# ---------------------- 2) Monthly ship report export ------------------------

def export_monthly_report(data, outfile: str | Path, notes: str = "") -> Path:
    """
    Build a single Excel file from a DashboardData:
      - 'Summary': headline numbers (+ free-text notes, if any)
      - 'Squad Breakdown': members and compliance % per squad
      - 'Top Hosts' / 'Top Voyagers'
      - 'Roster': the enriched crew
      - 'Actions': outstanding action items, most severe first
    """
    members = list(data.enriched)
    summary = data.summary
    rows = [
        ("Report date", data.generated_on),
        ("Total crew", summary.get("total_crew", 0)),
        ("Compliant", summary.get("compliance_count", 0)),
        ("Compliance %", summary.get("compliance_rate", 0)),
        ("On LOA", summary.get("on_loa", 0)),
        ("Sailing compliant", summary.get("sailing_compliant", 0)),
        ("Hosting required", summary.get("hosting_required", 0)),
        ("Hosting compliant", summary.get("hosting_compliant", 0)),
        ("No chat activity", summary.get("no_chat_activity", 0)),
        ("Open actions", len(data.actions)),
    ]
    for tier, n in rank_distribution(members).items():
        rows.append((f"Rank tier: {tier}", n))
    if notes.strip():
        rows.append(("Notes", notes.strip()))
    summary_df = pd.DataFrame(rows, columns=["Metric", "Value"])

    per_squad = squad_compliance(members)
    squads_df = pd.DataFrame(
        [
            {"Squad": squad, "Members": n, "Compliance %": per_squad.get(squad, 0)}
            for squad, n in summary.get("squads", {}).items()
        ],
        columns=["Squad", "Members", "Compliance %"],
    )

    action_cols = ["id", "severity", "type", "sailor", "squad", "responsible",
                   "description", "details", "deadline"]
    actions_df = pd.DataFrame([asdict(a) for a in data.actions], columns=action_cols + ["source"])
    actions_df = actions_df[action_cols].rename(columns=lambda c: c.replace("_", " ").title())

    outfile = Path(outfile)
    outfile.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(outfile, engine="openpyxl") as xw:
        _write_sheet(xw, summary_df, "Summary")
        _write_sheet(xw, squads_df, "Squad Breakdown")
        _write_sheet(xw, _leaderboard_df(data.top_hosts, "host_count", "Hosted"), "Top Hosts")
        _write_sheet(xw, _leaderboard_df(data.top_voyagers, "voyage_count", "Voyages"), "Top Voyagers")
        _write_sheet(xw, _roster_df(members), "Roster")
        _write_sheet(xw, actions_df, "Actions")

    return outfile
