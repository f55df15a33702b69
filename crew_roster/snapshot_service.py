# snapshot_service.py
# Monthly crew snapshots kept in an injected Store under one key.

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Iterable, Optional

from .aggregations import compliance_count, squad_breakdown
from .schemas import CrewMember, MonthlySnapshot
from .store import Store

SNAPSHOTS_KEY = "monthly-snapshots"

SNAPSHOT_CREW_FIELDS = ("rank", "name", "squad", "compliance_status", "timezone", "chat_activity")


def create_snapshot(members: Iterable[CrewMember], today: Optional[date] = None) -> MonthlySnapshot:
    members = list(members)
    day = (today or date.today()).isoformat()
    crew = [{f: getattr(m, f) for f in SNAPSHOT_CREW_FIELDS} for m in members]
    return MonthlySnapshot(
        date=day,
        month=day[:7],
        crew=crew,
        total_crew=len(members),
        compliance_count=compliance_count(members),
        squad_breakdown=squad_breakdown(members),
    )


def _from_dict(d: dict) -> MonthlySnapshot:
    return MonthlySnapshot(
        date=str(d.get("date", "")),
        month=str(d.get("month", "")),
        crew=list(d.get("crew") or []),
        total_crew=int(d.get("total_crew") or 0),
        compliance_count=int(d.get("compliance_count") or 0),
        squad_breakdown=dict(d.get("squad_breakdown") or {}),
    )


def load_snapshots(store: Store) -> list[MonthlySnapshot]:
    """Newest first. Malformed entries are skipped."""
    raw = store.get(SNAPSHOTS_KEY) or []
    out = []
    for d in raw:
        if isinstance(d, dict) and d.get("date"):
            out.append(_from_dict(d))
    return sorted(out, key=lambda s: s.date, reverse=True)


def _write(store: Store, snapshots: list[MonthlySnapshot]) -> None:
    store.set(SNAPSHOTS_KEY, [asdict(s) for s in snapshots])


def save_snapshot(store: Store, snapshot: MonthlySnapshot) -> str:
    """Add a snapshot; one per date, a second one on the same day replaces the first."""
    snapshots = [s for s in load_snapshots(store) if s.date != snapshot.date]
    snapshots.append(snapshot)
    snapshots.sort(key=lambda s: s.date, reverse=True)
    _write(store, snapshots)
    return f"✅ Snapshot saved for {snapshot.date} ({snapshot.total_crew} crew)."


def snapshot_for_month(store: Store, month: str) -> Optional[MonthlySnapshot]:
    """Latest snapshot taken in `month` ('YYYY-MM')."""
    for s in load_snapshots(store):
        if s.month == month:
            return s
    return None


def delete_snapshot(store: Store, day: str) -> str:
    snapshots = load_snapshots(store)
    kept = [s for s in snapshots if s.date != day]
    if len(kept) == len(snapshots):
        return f"❌ Error: no snapshot for {day}."
    _write(store, kept)
    return f"✅ Snapshot for {day} deleted."
