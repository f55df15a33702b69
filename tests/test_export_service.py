from openpyxl import load_workbook

from crew_roster.export_service import export_crew_excel, export_monthly_report


def _rows(ws) -> list[tuple]:
    return [tuple(r) for r in ws.iter_rows(values_only=True)]


def test_export_crew_excel(tmp_path, dashboard) -> None:
    out = export_crew_excel(dashboard.enriched, tmp_path / "out" / "Crew.xlsx")
    assert out.exists()

    wb = load_workbook(out)
    assert wb.sheetnames == ["Roster"]
    ws = wb["Roster"]
    assert ws.freeze_panes == "A2"
    assert ws["A1"].value == "Rank"
    assert ws["B1"].value == "Name"
    # most senior first
    assert [r[1] for r in _rows(ws)[1:]] == ["Boss", "Jet", "Finn"]
    assert _rows(ws)[3][6] == "Yes"  # Finn on LOA


def test_export_crew_excel_empty(tmp_path) -> None:
    out = export_crew_excel([], tmp_path / "Empty.xlsx")
    ws = load_workbook(out)["Roster"]
    assert ws.max_row == 1


def test_export_monthly_report_sheets(tmp_path, dashboard) -> None:
    out = export_monthly_report(dashboard, tmp_path / "Report.xlsx", notes="Fleet week next month")
    wb = load_workbook(out)
    assert wb.sheetnames == ["Summary", "Squad Breakdown", "Top Hosts", "Top Voyagers", "Roster", "Actions"]
    for ws in wb.worksheets:
        assert ws.freeze_panes == "A2"

    summary = dict(_rows(wb["Summary"])[1:])
    assert summary["Report date"] == "2024-06-30"
    assert summary["Total crew"] == 3
    assert summary["Compliance %"] == 33
    assert summary["Notes"] == "Fleet week next month"

    squads = _rows(wb["Squad Breakdown"])
    assert squads[0] == ("Squad", "Members", "Compliance %")
    assert ("Shade Squad", 2, 50) in squads

    assert _rows(wb["Top Hosts"])[1] == (1, "Jet", 4)
    assert [r[1] for r in _rows(wb["Top Voyagers"])[1:]] == ["Jet", "Boss"]
    assert len(_rows(wb["Actions"])) == 1 + len(dashboard.actions)


def test_export_monthly_report_without_notes(tmp_path, dashboard) -> None:
    out = export_monthly_report(dashboard, tmp_path / "Report.xlsx")
    metrics = [r[0] for r in _rows(load_workbook(out)["Summary"])]
    assert "Notes" not in metrics
