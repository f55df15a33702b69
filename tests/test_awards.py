from crew_roster.awards import (
    check_promotion,
    eligible_awards,
    known_awards_for,
    parse_role_coin_table,
    promotion_path_for,
    subclass_tier,
    subclass_tiers,
)
from crew_roster.schemas import CrewMember, RawSheetTable

ROLE_COIN_HEADERS = [
    "Role", "Name", "FO Notes", "Total Voyages", "Unaccounted", "Carpenter", "Flex",
    "Cannoneer", "Helm", "Grenadier", "Field Surgeon", "Pirate Legend",
    "Commander Challenge Coin", "Officer Challenge Coin",
]


def _ids(rules) -> list[str]:
    return [r.id for r in rules]


def test_eligible_awards_chain_through_prerequisites() -> None:
    member = CrewMember(name="Newbie", voyage_count=30, chat_activity=3)
    assert _ids(eligible_awards(member)) == [
        "citation-of-voyages", "legion-of-voyages", "citation-of-conduct", "legion-of-conduct",
    ]


def test_eligible_awards_respect_chat_minimum() -> None:
    member = CrewMember(name="Newbie", voyage_count=30, chat_activity=2)
    assert _ids(eligible_awards(member)) == [
        "citation-of-voyages", "citation-of-conduct", "legion-of-conduct",
    ]


def test_eligible_awards_skip_awards_already_given() -> None:
    assert "legion-of-voyages" in known_awards_for("Hoit")
    member = CrewMember(name="Hoit", voyage_count=30, chat_activity=3)
    assert eligible_awards(member) == []


def test_eligible_awards_hosting_tiers() -> None:
    member = CrewMember(name="Host", host_count=60, chat_activity=3)
    ids = _ids(eligible_awards(member, known=[]))
    assert "sea-service-ribbon" in ids
    assert "maritime-service" in ids
    assert "legendary-service" not in ids


def test_subclass_tier() -> None:
    assert subclass_tier(25) == "Master"
    assert subclass_tier("17") == "Pro"
    assert subclass_tier(5) == "Adept"
    assert subclass_tier(4) == ""
    assert subclass_tier("") == ""


def test_parse_role_coin_table() -> None:
    sheet = RawSheetTable(headers=ROLE_COIN_HEADERS, rows=[
        ["Crew", "Jet", "", "30", "", "26", "16", "5", "0", "3", "0", "Yes", "", "✓"],
        ["", "-", "", "", "", "", "", "", "", "", "", "", "", ""],
    ])
    [jet] = parse_role_coin_table(sheet)
    assert jet.name == "Jet"
    assert jet.total_voyages == 30
    assert jet.grenadier_points == 3
    assert jet.is_pirate_legend is True
    assert jet.has_commander_coin is False
    assert jet.has_officer_coin is True
    assert subclass_tiers(jet) == {"carpenter": "Master", "flex": "Pro", "cannoneer": "Adept", "helm": ""}


def test_check_promotion_auto_prerequisites() -> None:
    ready = check_promotion(CrewMember(name="Finn", rank="Seaman", voyage_count=6, chat_activity=1))
    assert ready.path.to_rank == "E-3"
    assert (ready.met, ready.total) == (2, 2)
    assert ready.ready

    short = check_promotion(CrewMember(name="Finn", rank="Seaman", voyage_count=4, chat_activity=1))
    assert short.details == {"e3-voyages": False, "e3-chat": True}
    assert not short.ready


def test_check_promotion_manual_only_path_is_never_ready() -> None:
    check = check_promotion(CrewMember(name="Chief", rank="E-7"))
    assert check.total == 0
    assert not check.ready


def test_no_promotion_path_for_top_rank() -> None:
    assert promotion_path_for("Admiral of the Navy") is None
    assert check_promotion(CrewMember(name="Top", rank="O-10")) is None
