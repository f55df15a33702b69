# sheets_service.py
# -----------------------------------------------------------------------------
# Read-only Google Sheets access through a service account.
# Every read returns a RawSheetTable: first row = headers, the rest = rows.
# Credentials come from GOOGLE_SERVICE_ACCOUNT_JSON (full JSON payload) or the
# key file at GOOGLE_SERVICE_ACCOUNT_KEY_PATH.
# -----------------------------------------------------------------------------

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .config import Settings
from .errors import ConfigError, SheetsError
from .schemas import RawSheetTable

log = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

# API errors, token refresh failures and network failures (resets, timeouts, DNS)
REQUEST_ERRORS = (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError)

# --------------------------- Credentials -------------------------------------


def _parse_json_with_private_key_newlines(s: str) -> dict:
    """Parse JSON whose 'private_key' value holds literal newlines (invalid strict JSON)."""
    key = '"private_key"'
    i = s.find(key)
    if i == -1:
        raise json.JSONDecodeError("No 'private_key' key found", s, 0)
    i = s.find('"', i + len(key) + 1)
    if i == -1:
        raise json.JSONDecodeError("Malformed private_key", s, 0)
    start = end = i + 1
    while end < len(s):
        if s[end] == "\\" and end + 1 < len(s):
            end += 2
            continue
        if s[end] == '"':
            break
        end += 1
    fixed = s[start:end].replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t")
    return json.loads(s[:start] + fixed + s[end:])


def load_service_account_info(raw: str) -> dict:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        if "control character" not in str(exc).lower():
            raise ConfigError("GOOGLE_SERVICE_ACCOUNT_JSON is not valid JSON.") from exc
    try:
        return _parse_json_with_private_key_newlines(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError("GOOGLE_SERVICE_ACCOUNT_JSON is not valid JSON.") from exc


def get_credentials(settings: Settings) -> Credentials:
    if settings.service_account_json:
        info = load_service_account_info(settings.service_account_json)
        try:
            return Credentials.from_service_account_info(info, scopes=SCOPES)
        except (ValueError, KeyError) as exc:
            log.exception("Failed to build credentials from GOOGLE_SERVICE_ACCOUNT_JSON")
            raise ConfigError(f"Invalid service account payload: {exc}") from exc

    path = settings.service_account_key_path
    if not path:
        raise ConfigError(
            "No credentials configured. Set GOOGLE_SERVICE_ACCOUNT_JSON to the key JSON "
            "or GOOGLE_SERVICE_ACCOUNT_KEY_PATH to a key file."
        )
    if not Path(path).exists():
        raise ConfigError(f"Credentials file not found at {path}")
    return Credentials.from_service_account_file(path, scopes=SCOPES)


def build_service(settings: Settings):
    creds = get_credentials(settings)
    log.debug("Google Sheets client initialised")
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


# --------------------------- Reads -------------------------------------------


def values_to_table(values) -> RawSheetTable:
    values = values or []
    if not values:
        return RawSheetTable(headers=[], rows=[])
    headers = [str(h) for h in values[0]]
    rows = [[str(c) for c in r] for r in values[1:]]
    return RawSheetTable(headers=headers, rows=rows)


def read_sheet(spreadsheet_id: str, range_: str, service=None,
               settings: Optional[Settings] = None) -> RawSheetTable:
    if not spreadsheet_id or not range_:
        raise ValueError("Missing spreadsheet id or range")
    service = service or build_service(settings or Settings.from_env())
    try:
        resp = service.spreadsheets().values().get(
            spreadsheetId=spreadsheet_id, range=range_,
        ).execute()
    except REQUEST_ERRORS as exc:
        log.exception("Failed to read %s from %s", range_, spreadsheet_id)
        raise SheetsError(f"Failed to read sheet range {range_}: {exc}") from exc
    table = values_to_table(resp.get("values"))
    log.info("Read %s: %d rows", range_, table.row_count)
    return table


def batch_read(spreadsheet_id: str, ranges: list[str], service=None,
               settings: Optional[Settings] = None) -> dict[str, RawSheetTable]:
    if not spreadsheet_id or not ranges:
        raise ValueError("Missing spreadsheet id or ranges")
    service = service or build_service(settings or Settings.from_env())
    try:
        resp = service.spreadsheets().values().batchGet(
            spreadsheetId=spreadsheet_id, ranges=list(ranges),
        ).execute()
    except REQUEST_ERRORS as exc:
        log.exception("Failed batch read of %d ranges from %s", len(ranges), spreadsheet_id)
        raise SheetsError(f"Failed to read sheets: {exc}") from exc

    value_ranges = resp.get("valueRanges", [])
    out = {}
    for i, range_ in enumerate(ranges):
        vr = value_ranges[i] if i < len(value_ranges) else {}
        out[range_] = values_to_table(vr.get("values"))
    log.info("Batch read %d ranges", len(out))
    return out


def get_metadata(spreadsheet_id: str, service=None, settings: Optional[Settings] = None) -> dict:
    if not spreadsheet_id:
        raise ValueError("Missing spreadsheet id")
    service = service or build_service(settings or Settings.from_env())
    try:
        resp = service.spreadsheets().get(spreadsheetId=spreadsheet_id).execute()
    except REQUEST_ERRORS as exc:
        log.exception("Failed to read metadata of %s", spreadsheet_id)
        raise SheetsError(f"Failed to get metadata: {exc}") from exc
    sheets = [
        {"name": s.get("properties", {}).get("title"), "sheet_id": s.get("properties", {}).get("sheetId")}
        for s in resp.get("sheets", [])
    ]
    return {"title": resp.get("properties", {}).get("title"), "sheets": sheets}
