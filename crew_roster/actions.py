# actions.py
# -----------------------------------------------------------------------------
# Follow-up actions for the command team:
#   - compliance: sailing / hosting requirements not met, no chat activity
#   - comments: keywords in Chief of Ship notes and squad leader comments
# Ids are sequential per call so the same crew always yields the same list.
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from datetime import date
from typing import Iterable, Optional

from .constants import HOSTING_WINDOW_DAYS, SAILING_WINDOW_DAYS
from .data_parser import days_since
from .schemas import ActionItem, CrewMember

COMMAND = "Chief of Ship / Command"
FIRST_OFFICER = "First Officer"

# keyword -> (action type, severity, responsible; None means the squad leader)
COMMENT_KEYWORDS = {
    "deckhand": ("deckhand-action", "high", COMMAND),
    "demote": ("demotion-pending", "high", COMMAND),
    "suspend": ("suspension-pending", "high", COMMAND),
    "promote": ("promotion-eligible", "medium", FIRST_OFFICER),
    "sail": ("encourage-sailing", "medium", None),
    "host": ("encourage-hosting", "medium", None),
    "engage": ("engagement-needed", "low", None),
    "chat": ("chat-activity", "low", None),
}

COMMAND_ACTIONS = {
    "compliance-issue", "sailing-issue", "hosting-issue",
    "deckhand-action", "demotion-pending", "suspension-pending",
}
AWARD_ACTIONS = {"award-eligible", "subclass-ready", "promotion-eligible"}
SQUAD_ACTIONS = {
    "no-chat-activity", "low-chat-activity", "encourage-sailing",
    "encourage-hosting", "engagement-needed", "chat-activity",
}

_DEADLINE_RE = re.compile(r"(\d{1,2}[/\-]\d{1,2}|by\s+\d{1,2}(?:st|nd|rd|th)?)", re.IGNORECASE)


def responsible_staff(action_type: str, squad: str) -> str:
    if action_type in COMMAND_ACTIONS:
        return COMMAND
    if action_type in AWARD_ACTIONS:
        return "Awards Officer"
    if action_type in SQUAD_ACTIONS:
        return f"{squad} Squad Leader"
    return FIRST_OFFICER


def extract_deadline(text: str) -> Optional[str]:
    m = _DEADLINE_RE.search(text or "")
    return m.group(0) if m else None


def _describe(action_type: str) -> str:
    return action_type.replace("-", " ").capitalize()


class _Ids:
    def __init__(self, start: int = 0):
        self.n = start

    def next(self) -> str:
        out = str(self.n)
        self.n += 1
        return out


def compliance_actions(members: Iterable[CrewMember], today: Optional[date] = None,
                       start: int = 0) -> list[ActionItem]:
    """Sailing, hosting and chat activity actions. LOA members are exempt."""
    today = today or date.today()
    ids = _Ids(start)
    actions = []

    for m in members:
        if m.loa_status:
            continue

        if not m.sailing_compliant:
            severity, detail = "medium", ""
            since = days_since(m.last_voyage_date, today)
            if since is not None:
                if since >= SAILING_WINDOW_DAYS:
                    severity = "high"
                detail = f" ({since} days since last voyage)"
            elif m.days_inactive > 0:
                if m.days_inactive >= SAILING_WINDOW_DAYS:
                    severity = "high"
                detail = f" ({m.days_inactive} days inactive)"
            actions.append(ActionItem(
                id=ids.next(),
                type="sailing-noncompliant",
                severity=severity,
                sailor=m.name,
                squad=m.squad,
                responsible=responsible_staff("sailing-issue", m.squad),
                description="Sailing: Requires Action" if severity == "high" else "Sailing: Requires Attention",
                details=f"{m.name} is not within sailing regulations{detail}. Review and encourage participation.",
                source="compliance",
            ))

        if m.can_host_rank and not m.hosting_compliant:
            severity, detail = "medium", ""
            since = days_since(m.last_host_date, today)
            if since is not None:
                if since >= HOSTING_WINDOW_DAYS:
                    severity = "high"
                detail = f" ({since} days since last host)"
            actions.append(ActionItem(
                id=ids.next(),
                type="hosting-noncompliant",
                severity=severity,
                sailor=m.name,
                squad=m.squad,
                responsible=responsible_staff("hosting-issue", m.squad),
                description="Hosting: Requires Action" if severity == "high" else "Hosting: Requires Attention",
                details=f"{m.name} ({m.rank}) is eligible to host but not within hosting regulations{detail}.",
                source="compliance",
            ))

        if m.chat_activity == 0:
            actions.append(ActionItem(
                id=ids.next(),
                type="no-chat-activity",
                severity="low",
                sailor=m.name,
                squad=m.squad,
                responsible=responsible_staff("no-chat-activity", m.squad),
                description="No Chat Activity",
                details=f"{m.name} has no recorded chat activity. Encourage participation in squad channels.",
                source="activity",
            ))

    return actions


def comment_actions(members: Iterable[CrewMember], start: int = 0) -> list[ActionItem]:
    """One action per keyword found in each comment field (COS notes first)."""
    ids = _Ids(start)
    actions = []
    for m in members:
        for text in (m.cos_notes, m.squad_leader_comments):
            if not text:
                continue
            lower = text.lower()
            for keyword, (action_type, severity, responsible) in COMMENT_KEYWORDS.items():
                if keyword not in lower:
                    continue
                actions.append(ActionItem(
                    id=ids.next(),
                    type=action_type,
                    severity=severity,
                    sailor=m.name,
                    squad=m.squad,
                    responsible=responsible or f"{m.squad} Squad Leader",
                    description=_describe(action_type),
                    details=text,
                    source="comment",
                    deadline=extract_deadline(text),
                ))
    return actions


SEVERITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def generate_actions(members: Iterable[CrewMember], today: Optional[date] = None) -> list[ActionItem]:
    """Compliance actions followed by comment actions, ids continuing across both."""
    members = list(members)
    first = compliance_actions(members, today)
    return first + comment_actions(members, start=len(first))


def sort_actions(actions: Iterable[ActionItem]) -> list[ActionItem]:
    return sorted(actions, key=lambda a: SEVERITY_ORDER.get(a.severity, 3))
