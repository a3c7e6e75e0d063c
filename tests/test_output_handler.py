import json

import pytest
from openpyxl import load_workbook

from src.output_handler import ExcelExporter, JSONExporter, OutputHandler
from src.utils.exceptions import ExcelExportError, JSONExportError


@pytest.fixture
def results(standard_result, biometric_result):
    return [standard_result, biometric_result]


@pytest.fixture
def drafts(post_processor, results):
    return [post_processor.process(r) for r in results]


def test_save_writes_json_and_excel(tmp_path, results, drafts):
    info = OutputHandler().save(
        results,
        drafts=drafts,
        json_filename="out.json",
        excel_filename="out.xlsx",
        output_dir=str(tmp_path)
    )

    assert info['json_path'] == str(tmp_path / "out.json")
    assert info['excel_path'] == str(tmp_path / "out.xlsx")


def test_json_document(tmp_path, results, drafts):
    path = JSONExporter().export(results, "out.json", str(tmp_path), drafts=drafts)

    with open(path, encoding="utf-8") as f:
        document = json.load(f)

    assert document['count'] == 2
    first = document['records'][0]
    assert first['extraction']['format_type'] == "standard"
    assert first['extraction']['employee_info']['employee_id'] == "EMP-042"
    assert first['draft']['time_in'] == "08:00"
    assert first['template'] is None
    assert document['records'][1]['draft']['needs_review'] is True


def test_excel_sheets(tmp_path, results, drafts):
    path = ExcelExporter().export(results, "out.xlsx", str(tmp_path), drafts=drafts)

    workbook = load_workbook(path)
    assert workbook.sheetnames == ["DTR Extractions", "Times", "Review"]

    data = workbook["DTR Extractions"]
    assert data["A1"].value == "Source File"
    assert data["C2"].value == "standard"
    assert data["D2"].value == "EMP-042"
    assert data["E2"].value == "Juan Dela Cruz"
    assert data["H3"].value is True

    times = workbook["Times"]
    assert times["B3"].value == "8:01am"
    assert times["C3"].value == "5:03pm"

    review = workbook["Review"]
    assert review["D2"].value == "2024-01-15"
    assert review["H2"].value == 8.0
    assert review["I2"].value is False
    assert review["J2"].value is True
    assert "Required field missing: employee" in review["K3"].value


def test_excel_without_drafts_has_no_review_sheet(tmp_path, results):
    path = ExcelExporter().export(results, "out.xlsx", str(tmp_path))
    assert "Review" not in load_workbook(path).sheetnames


def test_export_nothing_raises(tmp_path):
    with pytest.raises(ExcelExportError):
        ExcelExporter().export([], "out.xlsx", str(tmp_path))
    with pytest.raises(JSONExportError):
        JSONExporter().export([], "out.json", str(tmp_path))


def test_save_continues_after_failed_output(tmp_path):
    info = OutputHandler().save([], output_dir=str(tmp_path))
    assert info == {'json_path': None, 'excel_path': None}


def test_disabled_outputs(tmp_path, results):
    info = OutputHandler(json_enabled=False, excel_enabled=True).save(
        results, excel_filename="only.xlsx", output_dir=str(tmp_path)
    )

    assert info['json_path'] is None
    assert (tmp_path / "only.xlsx").exists()
    assert not list(tmp_path.glob("*.json"))
