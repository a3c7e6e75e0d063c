"""
DTR Format Detector.

Classifies raw OCR text into one of the known DTR layouts using an
ordered list of rules. The first rule whose pattern is found anywhere
in the text decides the format; later rules are not consulted.
"""

import re
from typing import Any, NamedTuple, Optional, Pattern, Tuple

from src.utils.logger import get_logger
from .extraction_result import FormatType

logger = get_logger(__name__)

# Patterns search the whole document, so "." must also cross line breaks
_FLAGS = re.IGNORECASE | re.DOTALL | re.ASCII


class FormatRule(NamedTuple):
    """A single (pattern, format) classification rule."""

    pattern: Pattern
    format_type: FormatType

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


class FormatDetector:
    """
    Rule-based DTR layout classifier.

    Rules are evaluated top to bottom and short-circuit on the first
    match, so "Time In ... Time Out" wins over every other keyword in
    the same document.

    Example:
        >>> detector = FormatDetector()
        >>> detector.detect("Clock In 9:00\\nClock Out 18:00")
        <FormatType.TIMESHEET: 'timesheet'>
    """

    RULES: Tuple[FormatRule, ...] = (
        FormatRule(re.compile(r'time\s*in.*time\s*out', _FLAGS), FormatType.STANDARD),
        FormatRule(re.compile(r'clock\s*in.*clock\s*out', _FLAGS), FormatType.TIMESHEET),
        FormatRule(re.compile(r'arrival.*departure', _FLAGS), FormatType.ATTENDANCE_LOG),
        FormatRule(re.compile(r'biometric', _FLAGS), FormatType.BIOMETRIC),
    )

    FALLBACK = FormatType.UNKNOWN

    def detect(self, text: str, company_id: Optional[Any] = None) -> FormatType:
        """
        Classify a document's text.

        Args:
            text: Raw OCR text of the whole document.
            company_id: Reserved for per-company layout lookup; it does
                        not influence the result.

        Returns:
            The FormatType of the first matching rule, or UNKNOWN.
        """
        for rule in self.RULES:
            if rule.matches(text):
                logger.debug(f"Detected DTR format: {rule.format_type.value}")
                return rule.format_type

        logger.debug("No DTR format rule matched")
        return self.FALLBACK
