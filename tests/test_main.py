import json

from main import main, run_extraction
from src.templates import DEFAULT_TEMPLATES


def test_run_extraction_over_directory(tmp_path, standard_text, biometric_text):
    input_dir = tmp_path / "dtrs"
    input_dir.mkdir()
    (input_dir / "a_standard.txt").write_text(standard_text, encoding="utf-8")
    (input_dir / "b_biometric.txt").write_text(biometric_text, encoding="utf-8")
    output_dir = tmp_path / "out"

    records = run_extraction(str(input_dir), str(output_dir))

    assert len(records) == 2
    assert records[0]['extraction']['format_type'] == "standard"
    assert records[0]['draft']['auto_submit'] is True
    assert records[1]['draft']['needs_review'] is True
    assert records[0]['template'] is None
    assert len(list(output_dir.glob("*.json"))) == 1
    assert len(list(output_dir.glob("*.xlsx"))) == 1


def test_run_extraction_with_templates(tmp_path):
    acme = next(t for t in DEFAULT_TEMPLATES if t['company_id'] == 2)
    path = tmp_path / "acme.txt"
    path.write_text(acme['example'], encoding="utf-8")
    output_file = tmp_path / "results.json"

    records = run_extraction(
        str(path),
        str(output_file),
        company_id=2,
        use_templates=True,
        enable_excel=False
    )

    assert records[0]['extraction']['company_id'] == 2
    assert records[0]['template']['template_name'] == "Acme Corporation Format"
    assert records[0]['template']['time_out'] == "18:00"

    with open(output_file, encoding="utf-8") as f:
        document = json.load(f)
    assert document['records'][0]['template']['employee_id'] == "54321"
    assert not (tmp_path / "results.xlsx").exists()


def test_main_returns_error_for_missing_input(tmp_path):
    assert main(["--input", str(tmp_path / "missing.txt"), "--quiet"]) == 1


def test_main_success(tmp_path, standard_text):
    path = tmp_path / "dtr.txt"
    path.write_text(standard_text, encoding="utf-8")

    exit_code = main([
        "--input", str(path),
        "--output", str(tmp_path / "out"),
        "--no-excel",
        "--quiet"
    ])

    assert exit_code == 0
    assert len(list((tmp_path / "out").glob("*.json"))) == 1
