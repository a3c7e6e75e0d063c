"""
Input Handler Module for DTR Extraction System.

This module provides functionality for:
    - Detecting file types (text vs image)
    - Loading and validating input files
    - Reading image scans through OCR

Supported formats:
    - Plain text (already OCR'd)
    - Images: JPG, JPEG, PNG, TIFF, BMP

Author: HR Systems Team
"""

from .handler import InputHandler, InputResult

__all__ = ['InputHandler', 'InputResult']
