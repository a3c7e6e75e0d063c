"""
Confidence Scorer Module.

Scores an extraction by how many of the three data categories a DTR
should carry (employee identity, dates, time-in/time-out pairs) could
be located in the text.
"""

from typing import Dict, List, Optional, Union

from src.utils.logger import get_logger
from .extraction_result import FormatType
from .field_extractors import DateExtractor, EmployeeInfoExtractor, TimeExtractor

logger = get_logger(__name__)


class ConfidenceScorer:
    """
    Presence-based confidence scoring.

    The scorer runs the field extractors itself instead of reusing the
    values the pipeline already computed, so it can be called on any
    line list in isolation. The score is always one of 0, 1/3, 2/3, 1.

    Example:
        >>> scorer = ConfidenceScorer()
        >>> scorer.score(["Name: Ana", "01/02/2024"], FormatType.UNKNOWN)
        0.6666666666666666
    """

    TOTAL_CHECKS = 3

    def __init__(
        self,
        employee_extractor: Optional[EmployeeInfoExtractor] = None,
        date_extractor: Optional[DateExtractor] = None,
        time_extractor: Optional[TimeExtractor] = None
    ) -> None:
        self.employee_extractor = employee_extractor or EmployeeInfoExtractor()
        self.date_extractor = date_extractor or DateExtractor()
        self.time_extractor = time_extractor or TimeExtractor()

    def checks(
        self,
        lines: List[str],
        format_type: Union[FormatType, str]
    ) -> Dict[str, bool]:
        """
        Run the three presence checks.

        Returns:
            Mapping of check name to whether it passed.
        """
        return {
            'employee': self.employee_extractor.extract(lines).is_present,
            'dates': len(self.date_extractor.extract(lines)) > 0,
            'times': self.time_extractor.extract(lines, format_type).is_complete,
        }

    def score(
        self,
        lines: List[str],
        format_type: Union[FormatType, str]
    ) -> float:
        """
        Compute the confidence score.

        Args:
            lines: Non-blank OCR lines of one document.
            format_type: Detected layout, which drives time extraction.

        Returns:
            Number of passed checks divided by three.
        """
        results = self.checks(lines, format_type)
        passed = sum(1 for ok in results.values() if ok)

        if passed < self.TOTAL_CHECKS:
            missing = [name for name, ok in results.items() if not ok]
            logger.debug(f"Confidence checks failed: {', '.join(missing)}")

        return passed / self.TOTAL_CHECKS
