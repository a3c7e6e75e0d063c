"""
Extraction Module for DTR Extraction System.

This module turns raw OCR text of a Daily Time Record into a
structured best-guess record.

Features:
    - Rule-based layout detection (standard, timesheet,
      attendance-log, biometric, unknown)
    - Employee id/name, date and time-in/time-out extraction
    - Presence-based confidence score with a new-format flag

Author: HR Systems Team
"""

from .extraction_result import (
    NEW_FORMAT_THRESHOLD,
    EmployeeInfo,
    ExtractionResult,
    FormatType,
    TimeCandidates
)
from .format_detector import FormatDetector, FormatRule
from .field_extractors import DateExtractor, EmployeeInfoExtractor, TimeExtractor
from .confidence import ConfidenceScorer
from .extractor import DTRExtractor, extract_dtr

__all__ = [
    'NEW_FORMAT_THRESHOLD',
    'EmployeeInfo',
    'ExtractionResult',
    'FormatType',
    'TimeCandidates',
    'FormatDetector',
    'FormatRule',
    'DateExtractor',
    'EmployeeInfoExtractor',
    'TimeExtractor',
    'ConfidenceScorer',
    'DTRExtractor',
    'extract_dtr'
]
