from crew_roster.data_parser import enrich_crew, enrich_crew_member, parse_leaderboard_table
from crew_roster.schemas import CrewMember, LeaderboardEntry, RawSheetTable


def test_duplicate_leaderboard_rows_use_the_first(today) -> None:
    sheet = RawSheetTable(headers=["Name", "Host Count"], rows=[["Jet", "2"], ["Jet", "5"]])
    board = parse_leaderboard_table(sheet, ["Jet"])
    member = CrewMember(name="Jet", rank="PO2", can_host_rank=True)
    assert enrich_crew_member(member, board, today).host_count == 2


def test_enrichment_overlays_counts_and_dates(today) -> None:
    member = CrewMember(name="Jet", rank="PO2", can_host_rank=True)
    entry = LeaderboardEntry(name="Jet", host_count=4, voyage_count=12,
                             last_voyage_date="2024-06-20", last_host_date="2024-06-01")
    enriched = enrich_crew_member(member, [entry], today)
    assert enriched.host_count == 4
    assert enriched.voyage_count == 12
    assert enriched.last_voyage_date == "2024-06-20"
    assert enriched.sailing_compliant is True
    # 29 days since last host, window is 14
    assert enriched.hosting_compliant is False


def test_enrichment_uses_days_inactive_without_dates(today) -> None:
    member = CrewMember(name="Finn", rank="Seaman")
    entry = LeaderboardEntry(name="Finn", voyage_count=3, days_inactive=45)
    enriched = enrich_crew_member(member, [entry], today)
    assert enriched.sailing_compliant is False
    assert enriched.days_inactive == 45


def test_enrichment_without_evidence_keeps_flags(today) -> None:
    member = CrewMember(name="Jet", rank="PO2", can_host_rank=True, sailing_compliant=False,
                        days_inactive=12)
    entry = LeaderboardEntry(name="Jet", host_count=1)
    enriched = enrich_crew_member(member, [entry], today)
    assert enriched.sailing_compliant is False
    assert enriched.hosting_compliant is True
    assert enriched.days_inactive == 12
    assert enriched.host_count == 1


def test_loa_member_stays_compliant(today) -> None:
    member = CrewMember(name="Jet", rank="PO2", can_host_rank=True, loa_status=True)
    entry = LeaderboardEntry(name="Jet", voyage_count=1, last_voyage_date="2023-01-01",
                             last_host_date="2023-01-01")
    enriched = enrich_crew_member(member, [entry], today)
    assert enriched.sailing_compliant is True
    assert enriched.hosting_compliant is True
    assert enriched.voyage_count == 1


def test_non_hosting_rank_ignores_host_dates(today) -> None:
    member = CrewMember(name="Finn", rank="Seaman")
    entry = LeaderboardEntry(name="Finn", host_count=1, last_host_date="2023-01-01")
    assert enrich_crew_member(member, [entry], today).hosting_compliant is True


def test_unmatched_member_is_returned_unchanged(today) -> None:
    member = CrewMember(name="Ghost", rank="PO2")
    entry = LeaderboardEntry(name="Jet", host_count=3)
    assert enrich_crew_member(member, [entry], today) is member


def test_enrich_crew_preserves_order(today) -> None:
    crew = [CrewMember(name="Jet"), CrewMember(name="Finn"), CrewMember(name="Jet")]
    board = [LeaderboardEntry(name="Jet", voyage_count=7)]
    enriched = enrich_crew(crew, board, today)
    assert [(m.name, m.voyage_count) for m in enriched] == [("Jet", 7), ("Finn", 0), ("Jet", 7)]
