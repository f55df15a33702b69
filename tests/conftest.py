from datetime import date

import pytest

from crew_roster.dashboard_service import build_dashboard
from crew_roster.schemas import RawSheetTable

TODAY = date(2024, 6, 30)


class _Request:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error

    def execute(self):
        if self.error is not None:
            raise self.error
        return self.payload


class FakeSheetsService:
    """Stands in for googleapiclient's spreadsheets() resource chain."""

    def __init__(self, values=None, batch=None, metadata=None, error=None):
        self.values_payload = values or {}
        self.batch_payload = batch or {}
        self.metadata_payload = metadata or {}
        self.error = error
        self.calls = []

    def spreadsheets(self):
        return self

    def values(self):
        return self

    def get(self, spreadsheetId, range=None):
        self.calls.append(("get", spreadsheetId, range))
        payload = self.values_payload if range is not None else self.metadata_payload
        return _Request(payload, self.error)

    def batchGet(self, spreadsheetId, ranges):
        self.calls.append(("batchGet", spreadsheetId, list(ranges)))
        return _Request(self.batch_payload, self.error)


ROSTER_VALUES = [
    ["Rank", "Name", "Squad", "Compliance", "Chat Activity"],
    ["Captain", "Boss", "Command Staff", "Active Duty", "★★★"],
    ["PO2", "Jet", "Shade Squad", "Active Duty", "★"],
    ["Seaman", "Finn", "Shade Squad", "LOA", ""],
]

VOYAGE_VALUES = [
    ["Name", "Host Count", "Total Voyages", "Last Voyage Date", "Last Host Date"],
    ["Jet", "4", "12", "2024-06-20", "2024-06-01"],
    ["Boss", "0", "3", "2024-04-01", ""],
    ["Stranger", "9", "9", "", ""],
]


def table(values) -> RawSheetTable:
    return RawSheetTable(headers=list(values[0]), rows=[list(r) for r in values[1:]])


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def fake_service():
    return FakeSheetsService


@pytest.fixture
def roster_table() -> RawSheetTable:
    return table(ROSTER_VALUES)


@pytest.fixture
def voyage_table() -> RawSheetTable:
    return table(VOYAGE_VALUES)


@pytest.fixture
def dashboard(roster_table, voyage_table, today):
    return build_dashboard(roster_table, voyage_table, today=today)
