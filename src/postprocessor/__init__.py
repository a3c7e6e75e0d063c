"""
Post-Processing Module for DTR Extraction System.

This module provides functionality for:
    - Date and time normalization
    - Regular-hours computation
    - Field validation
    - Review / auto-submit decisions

Author: HR Systems Team
"""

from .dtr_draft import DTRDraft
from .processor import PostProcessor
from .validators import DateValidator, TimeValidator, FieldValidator, ValidationResult
from .normalizers import DateNormalizer, TimeNormalizer, calculate_regular_hours

__all__ = [
    'DTRDraft',
    'PostProcessor',
    'DateValidator',
    'TimeValidator',
    'FieldValidator',
    'ValidationResult',
    'DateNormalizer',
    'TimeNormalizer',
    'calculate_regular_hours'
]
