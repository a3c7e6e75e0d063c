"""
DTR Extractor Module.

This module provides the DTRExtractor class, the entry point of the
extraction core. It takes raw text produced by an OCR engine and runs
the single-pass pipeline:

    Format Detector → Field Extractors → Confidence Scorer → Result

The extractor holds no per-document state, so one instance can serve
any number of documents, including concurrently.

Author: HR Systems Team
"""

import time
from typing import Any, Optional

from config import get_config
from src.utils.exceptions import InvalidInputError
from src.utils.helpers import split_lines
from src.utils.logger import get_logger
from .confidence import ConfidenceScorer
from .extraction_result import ExtractionResult
from .field_extractors import DateExtractor, EmployeeInfoExtractor, TimeExtractor
from .format_detector import FormatDetector

logger = get_logger(__name__)


class DTRExtractor:
    """
    Heuristic DTR text extractor.

    Attributes:
        detector: FormatDetector used to classify the layout
        employee_extractor: EmployeeInfoExtractor instance
        date_extractor: DateExtractor instance
        time_extractor: TimeExtractor instance
        scorer: ConfidenceScorer instance

    Example:
        >>> extractor = DTRExtractor()
        >>> result = extractor.extract(ocr_text, company_id=3)
        >>> if result.is_new_format:
        ...     queue_for_review(result)
    """

    def __init__(self) -> None:
        """Initialize the extractor and its pipeline stages."""
        self.detector = FormatDetector()
        self.employee_extractor = EmployeeInfoExtractor()
        self.date_extractor = DateExtractor()
        self.time_extractor = TimeExtractor()
        self.scorer = ConfidenceScorer(
            employee_extractor=self.employee_extractor,
            date_extractor=self.date_extractor,
            time_extractor=self.time_extractor
        )

        logger.debug("DTRExtractor initialized")

    @property
    def warn_on_new_format(self) -> bool:
        # Read per call so a reloaded configuration takes effect
        return bool(get_config("extraction.warn_on_new_format", True))

    def extract(
        self,
        raw_text: str,
        company_id: Optional[Any] = None,
        source_file: Optional[str] = None
    ) -> ExtractionResult:
        """
        Extract a structured record from one document's OCR text.

        Malformed or unrecognizable text never raises; it produces
        empty fields and a low confidence score instead.

        Args:
            raw_text: Text recognized from one DTR image.
            company_id: Optional company identifier, echoed in the result.
            source_file: Optional originating file name, echoed in the result.

        Returns:
            ExtractionResult for the document.

        Raises:
            InvalidInputError: If raw_text is not a string.

        Example:
            >>> result = extractor.extract("Biometric Log\\n8:01am 5:03pm")
            >>> result.time_in, result.time_out
            (['8:01am'], ['5:03pm'])
        """
        if not isinstance(raw_text, str):
            raise InvalidInputError(raw_text, "raw_text must be the OCR output string")

        start_time = time.time()

        format_type = self.detector.detect(raw_text, company_id)
        lines = split_lines(raw_text)

        result = ExtractionResult(
            employee_info=self.employee_extractor.extract(lines),
            dates=self.date_extractor.extract(lines),
            times=self.time_extractor.extract(lines, format_type),
            format_type=format_type,
            confidence_score=self.scorer.score(lines, format_type),
            company_id=company_id,
            source_file=source_file
        )

        elapsed = time.time() - start_time
        logger.info(
            f"DTR extracted: format={format_type.value}, "
            f"confidence={result.confidence_score:.2f}, "
            f"lines={len(lines)}, time={elapsed * 1000:.1f}ms"
        )

        if result.is_new_format and self.warn_on_new_format:
            logger.warning(
                f"Low confidence ({result.confidence_score:.2f}), "
                f"flagging {source_file or 'document'} as a possible new DTR format"
            )

        return result


_default_extractor: Optional[DTRExtractor] = None


def extract_dtr(
    raw_text: str,
    company_id: Optional[Any] = None,
    source_file: Optional[str] = None
) -> ExtractionResult:
    """
    Convenience function running a shared DTRExtractor.

    Args:
        raw_text: Text recognized from one DTR image.
        company_id: Optional company identifier.
        source_file: Optional originating file name.

    Returns:
        ExtractionResult for the document.
    """
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = DTRExtractor()
    return _default_extractor.extract(raw_text, company_id, source_file)
