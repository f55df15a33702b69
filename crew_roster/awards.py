# awards.py
# -----------------------------------------------------------------------------
# Award and promotion eligibility as flat rule tables:
#   - tiered voyage / hosting / conduct awards with prerequisites
#   - subclass progress (role/coin sheet) and its Adept/Pro/Master tiers
#   - promotion paths with auto-detectable prerequisites
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import KNOWN_AWARDS, SUBCLASS_TIERS
from .data_parser import is_placeholder_name, parse_count, parse_flag
from .ranks import rank_code
from .schemas import (
    AwardRule, CrewMember, Prerequisite, PromotionPath, RawSheetTable, SubclassProgress,
)
from .sheet_columns import ROLE_COIN_COLUMNS, cell, headers_of, resolve_columns, row_values

# Ordered so that a prerequisite always comes before the award that needs it.
AWARD_RULES = [
    AwardRule("citation-of-voyages", "Citation of Voyages", "voyages", voyages=5),
    AwardRule("legion-of-voyages", "Legion of Voyages", "voyages", voyages=25,
              chat_activity_min=3, prerequisite="citation-of-voyages"),
    AwardRule("honorable-voyager", "Honorable Voyager Medal", "voyages", voyages=50,
              prerequisite="legion-of-voyages"),
    AwardRule("meritorious-voyager", "Meritorious Voyager Medal", "voyages", voyages=100,
              prerequisite="honorable-voyager"),
    AwardRule("admirable-voyager", "Admirable Voyager Medal", "voyages", voyages=200,
              prerequisite="meritorious-voyager"),
    AwardRule("sea-service-ribbon", "Sea Service Ribbon", "hosting", hosted=25, chat_activity_min=3),
    AwardRule("maritime-service", "Maritime Service Medal", "hosting", hosted=50,
              prerequisite="sea-service-ribbon"),
    AwardRule("legendary-service", "Legendary Service Medal", "hosting", hosted=100,
              prerequisite="maritime-service"),
    AwardRule("admirable-service", "Admirable Service Medal", "hosting", hosted=200,
              prerequisite="legendary-service"),
    AwardRule("citation-of-conduct", "Citation of Conduct", "conduct", chat_activity_min=1),
    AwardRule("legion-of-conduct", "Legion of Conduct", "conduct", chat_activity_min=2,
              prerequisite="citation-of-conduct"),
]

PROMOTION_PATHS = [
    PromotionPath("E-2", "E-3", "Seaman → Able Seaman", "SL", (
        Prerequisite("e3-voyages", "Attend 5 official voyages", True, voyages=5),
        Prerequisite("e3-chat", "Decent activity in squad chat", True, chat_activity_min=1),
        Prerequisite("e3-medal", "Citation of Combat OR Citation of Conduct", False),
    )),
    PromotionPath("E-3", "E-4", "Able Seaman → Junior Petty Officer", "SL", (
        Prerequisite("e4-2fa", "2FA enabled", False),
        Prerequisite("e4-jla", "JLA completed", False),
        Prerequisite("e4-voyages", "15 voyages + 2 weeks as E-3", True, voyages=15),
        Prerequisite("e4-conduct", "Citation of Conduct", False),
    )),
    PromotionPath("E-4", "E-6", "Junior Petty Officer → Petty Officer", "CoS", (
        Prerequisite("e6-hosted", "10 hosted voyages", True, hosted=10),
        Prerequisite("e6-spd", "Join an SPD or be a Squad Leader", False),
        Prerequisite("e6-time", "E-4 for 2 weeks", False),
    )),
    PromotionPath("E-6", "E-7", "Petty Officer → Chief Petty Officer", "CO", (
        Prerequisite("e7-hosted", "20 hosted voyages as Squad Leader", True, hosted=20),
        Prerequisite("e7-time", "1 month as Squad Leader", False),
        Prerequisite("e7-snla", "SNLA complete", False),
        Prerequisite("e7-board", "SNCO board passed", False),
    )),
    PromotionPath("E-7", "E-8", "Chief Petty Officer → Senior Chief Petty Officer", "CO", (
        Prerequisite("e8-conduct", "Honorable Conduct Medal", False),
        Prerequisite("e8-time", "1 month as E-6 or E-7", False),
    )),
    PromotionPath("E-8", "O-1", "Senior Chief Petty Officer → Midshipman", "BOA", (
        Prerequisite("o1-board", "Officer Board passed", False),
        Prerequisite("o1-hosted", "35 hosted voyages", True, hosted=35),
        Prerequisite("o1-conduct", "Honorable Conduct Medal", False),
    )),
    PromotionPath("O-1", "O-3", "Midshipman → Lieutenant", "CO", (
        Prerequisite("o3-ocs", "OCS completed", False),
        Prerequisite("o3-time", "2 weeks as O-1", False),
    )),
    PromotionPath("O-3", "O-4", "Lieutenant → Lieutenant Commander", "BOA", (
        Prerequisite("o4-socs", "SOCS completed", False),
        Prerequisite("o4-vote", "Voted on by Board of Admiralty", False),
    )),
    PromotionPath("O-4", "O-5", "Lieutenant Commander → Commander", "Fleet", (
        Prerequisite("o5-time", "4 weeks as O-4", False),
        Prerequisite("o5-recruit", "Recruit and maintain 4 external members on ship", False),
    )),
    PromotionPath("O-5", "O-6", "Commander → Captain", "Fleet", (
        Prerequisite("o6-time", "O-5 for 3 months", False),
        Prerequisite("o6-maritime", "Maritime Service Medal", True, hosted=50),
    )),
]
PATHS_BY_RANK = {p.from_rank: p for p in PROMOTION_PATHS}


@dataclass(frozen=True)
class PromotionCheck:
    path: PromotionPath
    met: int
    total: int
    details: dict

    @property
    def ready(self) -> bool:
        """All auto-detectable prerequisites met (manual ones still need review)."""
        return self.total > 0 and self.met == self.total


# ----- Awards ----------------------------------------------------------------


def _meets(voyages: int, hosted: int, chat: int, *, need_voyages=None,
           need_hosted=None, need_chat=None) -> bool:
    if need_voyages is not None and voyages < need_voyages:
        return False
    if need_hosted is not None and hosted < need_hosted:
        return False
    if need_chat is not None and chat < need_chat:
        return False
    return True


def known_awards_for(name: str, known: Iterable = KNOWN_AWARDS) -> set[str]:
    return {award_id for award_id, sailor in known if sailor == name}


def eligible_awards(member: CrewMember, known: Iterable = KNOWN_AWARDS) -> list[AwardRule]:
    """
    Awards the member qualifies for but has not been given yet. A prerequisite
    counts as held when already awarded or earned earlier in the same pass.
    """
    held = known_awards_for(member.name, known)
    earned: set[str] = set()
    out = []
    for rule in AWARD_RULES:
        if not _meets(member.voyage_count, member.host_count, member.chat_activity,
                      need_voyages=rule.voyages, need_hosted=rule.hosted,
                      need_chat=rule.chat_activity_min):
            continue
        if rule.prerequisite and rule.prerequisite not in held | earned:
            continue
        earned.add(rule.id)
        if rule.id not in held:
            out.append(rule)
    return out


# ----- Subclasses ------------------------------------------------------------


def subclass_tier(count) -> str:
    n = count if isinstance(count, int) else (parse_count(count) or 0)
    for threshold, label in SUBCLASS_TIERS:
        if n >= threshold:
            return label
    return ""


def parse_role_coin_table(table: RawSheetTable) -> list[SubclassProgress]:
    headers = headers_of(table)
    columns = resolve_columns(ROLE_COIN_COLUMNS, headers)
    out = []
    for row in table.rows:
        values = row_values(row, headers)

        def get(field: str) -> str:
            return cell(values, columns.get(field))

        def num(field: str) -> int:
            return parse_count(get(field)) or 0

        name = get("name")
        if is_placeholder_name(name):
            continue
        out.append(SubclassProgress(
            name=name,
            total_voyages=num("total_voyages"),
            carpenter=num("carpenter"),
            flex=num("flex"),
            cannoneer=num("cannoneer"),
            helm=num("helm"),
            grenadier_points=num("grenadier_points"),
            field_surgeon_points=num("field_surgeon_points"),
            is_pirate_legend=parse_flag(get("pirate_legend")),
            has_commander_coin=parse_flag(get("commander_coin")),
            has_officer_coin=parse_flag(get("officer_coin")),
        ))
    return out


def subclass_tiers(progress: SubclassProgress) -> dict[str, str]:
    return {
        "carpenter": subclass_tier(progress.carpenter),
        "flex": subclass_tier(progress.flex),
        "cannoneer": subclass_tier(progress.cannoneer),
        "helm": subclass_tier(progress.helm),
    }


# ----- Promotions ------------------------------------------------------------


def promotion_path_for(rank) -> Optional[PromotionPath]:
    return PATHS_BY_RANK.get(rank_code(rank))


def check_promotion(member: CrewMember) -> Optional[PromotionCheck]:
    path = promotion_path_for(member.rank)
    if path is None:
        return None
    details = {}
    for p in path.prerequisites:
        if not p.auto_detect:
            continue
        details[p.id] = _meets(member.voyage_count, member.host_count, member.chat_activity,
                               need_voyages=p.voyages, need_hosted=p.hosted,
                               need_chat=p.chat_activity_min)
    met = sum(1 for ok in details.values() if ok)
    return PromotionCheck(path=path, met=met, total=len(details), details=details)
