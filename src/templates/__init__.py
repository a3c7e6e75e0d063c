"""
Company Template Module for DTR Extraction System.

Known per-company DTR layouts and the registry that reads records with
them.

Author: HR Systems Team
"""

from .template import DTRTemplate, ParsedDTR, RULE_FIELDS
from .registry import TemplateRegistry, DEFAULT_TEMPLATES, UNRECOGNIZED_REMARK

__all__ = [
    'DTRTemplate',
    'ParsedDTR',
    'RULE_FIELDS',
    'TemplateRegistry',
    'DEFAULT_TEMPLATES',
    'UNRECOGNIZED_REMARK'
]
