"""
Utility Module for DTR Extraction System.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Custom exceptions
    - File and text helpers
"""

from .logger import setup_logger, get_logger, set_level
from .helpers import ensure_directory, get_file_extension, generate_timestamp, split_lines

__all__ = [
    'setup_logger',
    'get_logger',
    'set_level',
    'ensure_directory',
    'get_file_extension',
    'generate_timestamp',
    'split_lines'
]
