import pytest

from src.postprocessor import DTRDraft
from src.utils.exceptions import PostProcessingError, ValidationError


def test_standard_document_is_auto_submitted(post_processor, standard_result):
    draft = post_processor.process(standard_result)

    assert isinstance(draft, DTRDraft)
    assert draft.employee_id == "EMP-042"
    assert draft.employee_name == "Juan Dela Cruz"
    assert draft.date == "2024-01-15"
    assert draft.time_in == "08:00"
    assert draft.time_out == "17:00"
    assert draft.break_hours == 1.0
    assert draft.regular_hours == 8.0
    assert draft.format_type == "standard"
    assert draft.warnings == []
    assert draft.needs_review is False
    assert draft.auto_submit is True


def test_new_format_needs_review(post_processor, biometric_result):
    draft = post_processor.process(biometric_result)

    assert draft.time_in == "08:01"
    assert draft.time_out == "17:03"
    assert draft.regular_hours == 8.03
    assert draft.needs_review is True
    assert draft.auto_submit is False
    assert "Required field missing: employee" in draft.warnings
    assert "Required field missing: date" in draft.warnings


def test_time_out_before_time_in(extractor, post_processor):
    result = extractor.extract(
        "Employee ID: 7\nTime In: 5:00pm\nTime Out: 8:00am\n01/15/2024"
    )
    draft = post_processor.process(result)

    assert result.confidence_score == 1.0
    assert draft.regular_hours == 14.0
    assert "Time out must be after time in" in draft.warnings
    assert draft.needs_review is True
    assert draft.auto_submit is False


def test_unparseable_time_is_reported(extractor, post_processor):
    result = extractor.extract(
        "Employee ID: 7\nTime In: 25:00\nTime Out: 5:00pm\n01/15/2024"
    )
    draft = post_processor.process(result)

    assert draft.time_in is None
    assert draft.regular_hours is None
    assert "Could not normalize time_in: '25:00'" in draft.warnings
    assert draft.needs_review is True


def test_empty_extraction(extractor, post_processor):
    draft = post_processor.process(extractor.extract(""))

    assert draft.date is None
    assert draft.time_in is None
    assert draft.needs_review is True
    assert draft.auto_submit is False
    assert len(draft.warnings) == 4


def test_draft_to_dict(post_processor, standard_result):
    data = post_processor.process(standard_result).to_dict()

    assert data['date'] == "2024-01-15"
    assert data['auto_submit'] is True
    assert data['source_file'] == "standard.txt"
    assert data['warnings'] == []


def test_ensure_submittable_accepts_valid_draft(post_processor, standard_result):
    draft = post_processor.process(standard_result)
    assert post_processor.ensure_submittable(draft) is draft


def test_ensure_submittable_rechecks_edited_draft(post_processor, standard_result):
    draft = post_processor.process(standard_result)
    draft.time_in = "25:00"

    with pytest.raises(ValidationError) as exc_info:
        post_processor.ensure_submittable(draft)

    assert isinstance(exc_info.value, PostProcessingError)
    assert exc_info.value.details["field"] == "time_in"
    assert exc_info.value.details["value"] == "25:00"


def test_ensure_submittable_missing_fields(post_processor, biometric_result):
    draft = post_processor.process(biometric_result)

    with pytest.raises(ValidationError) as exc_info:
        post_processor.ensure_submittable(draft)

    assert exc_info.value.details["field"] == "draft"
    assert "Required field missing: employee" in exc_info.value.details["reason"]
