from datetime import date

from crew_roster.schemas import CrewMember
from crew_roster.snapshot_service import (
    SNAPSHOTS_KEY,
    create_snapshot,
    delete_snapshot,
    load_snapshots,
    save_snapshot,
    snapshot_for_month,
)
from crew_roster.store import JsonFileStore, MemoryStore


def _crew() -> list[CrewMember]:
    return [
        CrewMember(name="Jet", rank="PO2", squad="Shade Squad", chat_activity=2),
        CrewMember(name="Finn", rank="Seaman", squad="Shade Squad", sailing_compliant=False),
        CrewMember(name="Boss", rank="Captain", squad="Command Staff"),
    ]


def test_create_snapshot(today) -> None:
    snap = create_snapshot(_crew(), today)
    assert snap.date == "2024-06-30"
    assert snap.month == "2024-06"
    assert snap.total_crew == 3
    assert snap.compliance_count == 2
    assert snap.squad_breakdown == {"Shade Squad": 2, "Command Staff": 1}
    assert snap.crew[0] == {
        "rank": "PO2", "name": "Jet", "squad": "Shade Squad",
        "compliance_status": "Active Duty", "timezone": "", "chat_activity": 2,
    }


def test_one_snapshot_per_date_newest_first() -> None:
    store = MemoryStore()
    assert save_snapshot(store, create_snapshot(_crew(), date(2024, 5, 31))).startswith("✅")
    save_snapshot(store, create_snapshot(_crew(), date(2024, 6, 30)))
    save_snapshot(store, create_snapshot(_crew()[:1], date(2024, 6, 30)))

    snaps = load_snapshots(store)
    assert [s.date for s in snaps] == ["2024-06-30", "2024-05-31"]
    assert snaps[0].total_crew == 1


def test_snapshot_for_month() -> None:
    store = MemoryStore()
    save_snapshot(store, create_snapshot(_crew(), date(2024, 6, 1)))
    save_snapshot(store, create_snapshot(_crew()[:2], date(2024, 6, 15)))
    assert snapshot_for_month(store, "2024-06").date == "2024-06-15"
    assert snapshot_for_month(store, "2024-07") is None


def test_delete_snapshot() -> None:
    store = MemoryStore()
    save_snapshot(store, create_snapshot(_crew(), date(2024, 6, 1)))
    assert delete_snapshot(store, "2024-06-01").startswith("✅")
    assert load_snapshots(store) == []
    assert delete_snapshot(store, "2024-06-01").startswith("❌")


def test_malformed_entries_are_skipped() -> None:
    store = MemoryStore({SNAPSHOTS_KEY: ["junk", {"month": "2024-06"}, {"date": "2024-06-02", "total_crew": "4"}]})
    [snap] = load_snapshots(store)
    assert snap.date == "2024-06-02"
    assert snap.total_crew == 4
    assert snap.crew == []


def test_snapshots_survive_reopening_file_store(tmp_path, today) -> None:
    path = tmp_path / "shared-state.json"
    save_snapshot(JsonFileStore(path), create_snapshot(_crew(), today))
    [snap] = load_snapshots(JsonFileStore(path))
    assert snap.squad_breakdown == {"Shade Squad": 2, "Command Staff": 1}
    assert snap.crew[1]["name"] == "Finn"
