import pytest

from src.extraction import (
    NEW_FORMAT_THRESHOLD,
    ExtractionResult,
    FormatType,
    extract_dtr,
)
from src.utils.exceptions import InputError, InvalidInputError


def test_standard_document(extractor, standard_text):
    result = extractor.extract(standard_text)

    assert result.format_type == FormatType.STANDARD
    assert result.employee_id == "EMP-042"
    assert result.name == "Juan Dela Cruz"
    assert result.dates == ["01/15/2024"]
    assert result.time_in == ["8:00am"]
    assert result.time_out == ["5:00pm"]
    assert result.confidence_score == 1.0
    assert result.is_new_format is False


def test_unrecognized_document(extractor, noise_text):
    result = extractor.extract(noise_text)

    assert result.format_type == FormatType.UNKNOWN
    assert result.employee_id is None
    assert result.name is None
    assert result.dates == []
    assert result.time_in == []
    assert result.time_out == []
    assert result.confidence_score == 0.0
    assert result.is_new_format is True


def test_biometric_document(extractor, biometric_text):
    result = extractor.extract(biometric_text)

    assert result.format_type == FormatType.BIOMETRIC
    assert result.time_in == ["8:01am"]
    assert result.time_out == ["5:03pm"]
    assert result.confidence_score == pytest.approx(1 / 3)
    assert result.is_new_format is True


def test_empty_text(extractor):
    result = extractor.extract("")
    assert result.format_type == FormatType.UNKNOWN
    assert result.confidence_score == 0.0


def test_blank_lines_are_ignored(extractor):
    text = "\n\n   \nTime In: 8:00am\n\t\nTime Out: 5:00pm\n"
    result = extractor.extract(text)
    assert result.time_in == ["8:00am"]
    assert result.time_out == ["5:00pm"]


def test_idempotent(extractor, standard_text):
    assert extractor.extract(standard_text) == extractor.extract(standard_text)


@pytest.mark.parametrize("text", [
    "",
    "asdf",
    "Name: Ana\n01/02/2024",
    "Clock In 9:00\nClock Out 18:00\nEmployee 5\n2024-01-01",
    "Biometric Log\n8:01am 5:03pm",
])
def test_new_format_flag_matches_threshold(extractor, text):
    result = extractor.extract(text)
    assert result.confidence_score in (0.0, 1 / 3, 2 / 3, 1.0)
    assert result.is_new_format == (result.confidence_score < NEW_FORMAT_THRESHOLD)


def test_metadata_is_echoed(extractor, standard_text):
    result = extractor.extract(standard_text, company_id=3, source_file="scan.txt")
    assert result.company_id == 3
    assert result.source_file == "scan.txt"


@pytest.mark.parametrize("value", [None, 42, b"Time In 8:00", ["Time In 8:00"]])
def test_non_string_input_raises(extractor, value):
    with pytest.raises(InvalidInputError) as exc_info:
        extractor.extract(value)
    assert isinstance(exc_info.value, InputError)


def test_module_level_extract_dtr(standard_text):
    result = extract_dtr(standard_text, company_id=1)
    assert isinstance(result, ExtractionResult)
    assert result.employee_id == "EMP-042"


# ExtractionResult serialization

def test_to_dict(standard_result):
    data = standard_result.to_dict()

    assert data['format_type'] == "standard"
    assert data['employee_info'] == {'employee_id': "EMP-042", 'name': "Juan Dela Cruz"}
    assert data['times'] == {'time_in': ["8:00am"], 'time_out': ["5:00pm"]}
    assert data['is_new_format'] is False
    assert data['source_file'] == "standard.txt"


def test_from_dict_restores_result(standard_result):
    assert ExtractionResult.from_dict(standard_result.to_dict()) == standard_result


def test_to_flat_dict(extractor):
    result = extractor.extract("Clock In 9:00\nClock Out 18:00\n01/02/2024 01/03/2024")
    flat = result.to_flat_dict()

    assert flat['format_type'] == "timesheet"
    assert flat['dates'] == "01/02/2024, 01/03/2024"
    assert flat['time_in'] == "9:00"
    assert flat['time_out'] == "18:00"
    assert flat['confidence_score'] == 0.67
    assert flat['employee_id'] == ""


def test_new_format_warning_follows_reloaded_config(tmp_path, monkeypatch, noise_text):
    from config import ConfigurationManager
    from src.extraction import extractor as extractor_module

    warnings = []
    monkeypatch.setattr(extractor_module.logger, "warning", warnings.append)

    ConfigurationManager.reset()
    try:
        extract_dtr(noise_text)
        assert len(warnings) == 1

        override = tmp_path / "quiet.yaml"
        override.write_text("extraction:\n  warn_on_new_format: false\n", encoding="utf-8")
        ConfigurationManager.reset()
        ConfigurationManager(str(override))

        extract_dtr(noise_text)
        assert len(warnings) == 1
    finally:
        ConfigurationManager.reset()
