import pytest

from crew_roster.sheet_columns import (
    CREW_ROSTER_COLUMNS,
    VOYAGE_AWARDS_COLUMNS,
    can_host,
    cell,
    headers_of,
    is_on_loa,
    matches_keyword,
    must_sail,
    normalize_header,
    resolve_column,
    resolve_columns,
    row_values,
)
from crew_roster.schemas import RawSheetTable


def test_resolve_columns_by_exact_header() -> None:
    cols = resolve_columns(CREW_ROSTER_COLUMNS, ["Rank", "Name", "Squad", "Compliance"])
    assert cols["rank"] == 0
    assert cols["name"] == 1
    assert cols["squad"] == 2
    assert cols["compliance_status"] == 3
    assert cols["timezone"] is None


def test_name_is_not_taken_from_discord_username() -> None:
    headers = ["Discord Username", "Name"]
    assert resolve_column(CREW_ROSTER_COLUMNS, "name", headers) == 1
    assert resolve_column(CREW_ROSTER_COLUMNS, "discord_username", headers) == 0


def test_compliance_status_is_not_taken_from_sailing_compliance() -> None:
    headers = ["Rank", "Name", "Sailing Compliance"]
    assert resolve_column(CREW_ROSTER_COLUMNS, "compliance_status", headers) is None
    assert resolve_column(CREW_ROSTER_COLUMNS, "sailing_compliance", headers) == 2


def test_fuzzy_match_on_decorated_header() -> None:
    headers = ["Name", "Sailing Compliance (30d)", "Host_Count "]
    assert resolve_column(CREW_ROSTER_COLUMNS, "sailing_compliance", headers) == 1
    assert resolve_column(VOYAGE_AWARDS_COLUMNS, "host_count", headers) == 2


def test_positional_fallback_only_without_headers() -> None:
    assert resolve_column(CREW_ROSTER_COLUMNS, "timezone", []) == 7
    assert resolve_column(CREW_ROSTER_COLUMNS, "timezone", ["Rank", "Name"]) is None
    # header-only fields have no legacy position
    assert resolve_column(CREW_ROSTER_COLUMNS, "squad", []) is None


def test_unknown_field_resolves_to_none() -> None:
    assert resolve_column(CREW_ROSTER_COLUMNS, "shoe_size", ["Rank"]) is None
    assert resolve_column({}, "name", ["Name"]) is None


def test_normalize_header() -> None:
    assert normalize_header("Host_Count ") == "hostcount"
    assert normalize_header("  Last  Voyage Date") == "lastvoyagedate"
    assert normalize_header(None) == ""


def test_matches_keyword() -> None:
    assert matches_keyword("Hosted (old)", "host")
    assert matches_keyword("TOTAL VOYAGES", "voyage")
    assert not matches_keyword("Name", "host")
    assert not matches_keyword(None, "host")
    assert not matches_keyword("Host", "")


def test_headers_of_dict_rows_and_row_values() -> None:
    sheet = RawSheetTable(headers=[], rows=[{"Name": "Jet", "Rank": "PO2"}])
    headers = headers_of(sheet)
    assert headers == ["Name", "Rank"]
    assert row_values({"Rank": "PO2"}, headers) == ["", "PO2"]
    assert row_values(None, headers) == []
    assert row_values(["a", None, 3], []) == ["a", "", "3"]


def test_cell_out_of_range_is_empty() -> None:
    assert cell([" Jet "], 0) == "Jet"
    assert cell(["Jet"], 4) == ""
    assert cell(["Jet"], None) == ""
    assert cell(["Jet"], -1) == ""


@pytest.mark.parametrize("value", ["", None, "ñandú", "⚓", 5, "   "])
def test_predicates_return_bool_and_never_raise(value) -> None:
    assert isinstance(is_on_loa(value), bool)
    assert isinstance(can_host(value), bool)
    assert isinstance(must_sail(value), bool)


def test_is_on_loa() -> None:
    assert is_on_loa("LOA")
    assert is_on_loa("On Leave")
    assert is_on_loa("Yes")
    assert not is_on_loa("Active Duty")
    assert not is_on_loa("")


def test_can_host_and_must_sail_by_rank() -> None:
    assert can_host("PO2")
    assert not can_host("Junior Petty Officer")
    assert not can_host("Seaman")
    assert must_sail("Seaman")
    assert not must_sail("Recruit")
    assert not must_sail("Shade Squad")


def test_discord_username_does_not_fall_back_to_discord_id() -> None:
    headers = ["Rank", "Name", "Discord ID"]
    assert resolve_column(CREW_ROSTER_COLUMNS, "discord_username", headers) is None
    assert resolve_column(CREW_ROSTER_COLUMNS, "discord_id", headers) == 2
    assert resolve_column(CREW_ROSTER_COLUMNS, "discord_username", ["Rank", "Name", "Discord"]) == 2
