"""
Main Post-Processor Module.

This module provides the PostProcessor class that turns a raw
ExtractionResult into a DTRDraft the submission workflow can use.

Operations:
    - Pick the first date / time-in / time-out candidates
    - Normalize the date to ISO and times to 24-hour
    - Compute regular hours after the break
    - Validate fields and decide review / auto-submit
    - Log all transformations

Author: HR Systems Team
"""

from typing import Optional

from config import get_config
from src.utils.logger import get_logger
from src.extraction.extraction_result import ExtractionResult
from src.utils.exceptions import ValidationError
from .dtr_draft import DTRDraft
from .normalizers import DateNormalizer, TimeNormalizer, calculate_regular_hours
from .validators import FieldValidator, TimeValidator, ValidationResult

logger = get_logger(__name__)


class PostProcessor:
    """
    Post-processor for DTR extraction results.

    Attributes:
        date_normalizer: DateNormalizer instance
        time_normalizer: TimeNormalizer instance
        field_validator: FieldValidator instance
        break_hours: Break deducted when computing regular hours
        auto_submit_confidence: Confidence a draft must exceed to
                                skip manual review

    Example:
        >>> processor = PostProcessor()
        >>> draft = processor.process(extraction_result)
        >>> if draft.auto_submit:
        ...     submit(draft)
    """

    def __init__(self) -> None:
        """Initialize the post-processor with all sub-components."""
        self.date_normalizer = DateNormalizer()
        self.time_normalizer = TimeNormalizer()
        self.field_validator = FieldValidator()
        self.time_validator = TimeValidator()

        self.break_hours = float(get_config("postprocessing.default_break_hours", 1.0))
        self.auto_submit_confidence = float(
            get_config("postprocessing.auto_submit_confidence", 0.7)
        )

        logger.info("PostProcessor initialized")

    def process(self, result: ExtractionResult) -> DTRDraft:
        """
        Build a normalized, validated DTR draft from an extraction.

        Only the first candidate of each list is used; the rest stay
        available on the ExtractionResult for review screens.

        Args:
            result: ExtractionResult from the extractor.

        Returns:
            DTRDraft with normalized values and review flags.
        """
        logger.info(f"Post-processing extraction for: {result.source_file or 'document'}")

        draft = DTRDraft(
            employee_id=result.employee_id,
            employee_name=result.name,
            break_hours=self.break_hours,
            format_type=result.format_type.value,
            confidence=result.confidence_score,
            source_file=result.source_file
        )

        draft.date = self._normalize_first(result.dates, self.date_normalizer.normalize, 'date', draft)
        draft.time_in = self._normalize_first(result.time_in, self.time_normalizer.normalize, 'time_in', draft)
        draft.time_out = self._normalize_first(result.time_out, self.time_normalizer.normalize, 'time_out', draft)

        if draft.time_in and draft.time_out:
            draft.regular_hours = calculate_regular_hours(
                draft.time_in, draft.time_out, draft.break_hours
            )

        validation = self._validate_all(draft)
        for error in validation.errors:
            draft.add_warning(error)

        draft.needs_review = result.is_new_format or not validation.is_valid
        draft.auto_submit = (
            draft.confidence > self.auto_submit_confidence and not draft.needs_review
        )

        self._log_processing_summary(draft, validation)
        return draft

    def ensure_submittable(self, draft: DTRDraft) -> DTRDraft:
        """
        Re-validate a draft before it is submitted as a DTR record.

        Drafts are often corrected by hand after process(), so the
        checks run against the current field values.

        Raises:
            ValidationError: If any field check fails.
        """
        validation = self._validate_all(draft)
        if not validation.is_valid:
            failed = [name for name, (ok, _) in validation.field_results.items() if not ok]
            field_name = failed[0] if failed else 'draft'
            raise ValidationError(
                field_name,
                getattr(draft, field_name, None),
                "; ".join(validation.errors)
            )
        return draft

    def _normalize_first(self, candidates, normalize, field_name: str, draft: DTRDraft) -> Optional[str]:
        if not candidates:
            return None

        original = candidates[0]
        normalized = normalize(original)

        if normalized is None:
            draft.add_warning(f"Could not normalize {field_name}: '{original}'")
        elif normalized != original:
            logger.debug(f"Normalized {field_name}: '{original}' -> '{normalized}'")

        return normalized

    def _validate_all(self, draft: DTRDraft) -> ValidationResult:
        """
        Validate all fields of a draft.

        Args:
            draft: DTRDraft to validate.

        Returns:
            ValidationResult with all validation outcomes.
        """
        validation = ValidationResult()

        for field_name in ('date', 'time_in', 'time_out'):
            value = getattr(draft, field_name)
            if value:
                is_valid, message = self.field_validator.validate_field(field_name, value)
                validation.add_field_result(field_name, is_valid, message)

        all_present, missing = self.field_validator.check_required_fields(draft.fields)
        if not all_present:
            for field_name in missing:
                validation.add_error(f"Required field missing: {field_name}")

        if draft.time_in and draft.time_out:
            is_valid, message = self.time_validator.is_out_after_in(draft.time_in, draft.time_out)
            if not is_valid:
                validation.add_error(message)

        return validation

    def _log_processing_summary(self, draft: DTRDraft, validation: ValidationResult) -> None:
        logger.info(
            f"Post-processing complete: "
            f"{len(validation.errors)} errors, "
            f"needs_review={draft.needs_review}, "
            f"auto_submit={draft.auto_submit}"
        )

        for error in validation.errors:
            logger.debug(f"Validation error: {error}")
