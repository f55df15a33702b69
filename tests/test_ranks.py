from crew_roster.ranks import (
    is_command_rank,
    is_rank_at_or_above,
    rank_code,
    rank_level,
    rank_tier,
    resolve_rank,
    seniority_key,
)


def test_resolve_rank_lookup_order() -> None:
    assert resolve_rank("E-6").title == "Petty Officer"
    assert resolve_rank("petty officer").code == "E-6"
    assert resolve_rank("  PO2 ").code == "E-6"
    assert resolve_rank("Lieutenant Commander").code == "O-4"
    # alt title wins over the legacy "captain" substring rule
    assert resolve_rank("Marine Captain").code == "O-3"


def test_resolve_rank_legacy_free_text() -> None:
    assert rank_code("Lt. Commander Smith") == "O-4"
    assert rank_code("Senior Chief Petty Officer (acting)") == "E-8"
    assert rank_code("Able Seawoman") == "E-3"
    assert rank_code("Seaman Apprentice") == "SA"


def test_unknown_ranks() -> None:
    assert resolve_rank(None) is None
    assert resolve_rank("") is None
    assert resolve_rank("Shade Squad") is None
    assert rank_code("Shade Squad") == ""
    assert rank_tier("Shade Squad") == "unknown"
    assert rank_level("Shade Squad") == 0


def test_seniority_key_orders_most_senior_first() -> None:
    ranks = ["E-2", "O-6", "Shade Squad", "E-7"]
    assert sorted(ranks, key=seniority_key) == ["O-6", "E-7", "E-2", "Shade Squad"]


def test_is_rank_at_or_above() -> None:
    assert is_rank_at_or_above("E-7", "E-6")
    assert is_rank_at_or_above("PO2", "E-6")
    assert not is_rank_at_or_above("E-4", "E-6")
    assert not is_rank_at_or_above("Shade Squad", "E-6")
    assert not is_rank_at_or_above("E-7", "E-99")


def test_is_command_rank() -> None:
    assert is_command_rank("Captain")
    assert is_command_rank("O-4")
    assert is_command_rank("E-8")
    assert not is_command_rank("E-7")
    assert not is_command_rank(None)
