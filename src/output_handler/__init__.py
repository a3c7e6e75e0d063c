"""
Output Handler Module for DTR Extraction System.

This module provides functionality for:
    - JSON export of extraction results, drafts and template reads
    - Excel file generation with data, times and review sheets

Author: HR Systems Team
"""

from .handler import OutputHandler
from .excel_exporter import ExcelExporter
from .json_exporter import JSONExporter

__all__ = ['OutputHandler', 'ExcelExporter', 'JSONExporter']
