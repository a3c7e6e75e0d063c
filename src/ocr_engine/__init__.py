"""
OCR Engine Module for DTR Extraction System.

This module turns scanned DTR images into raw text using Tesseract.

Author: HR Systems Team
"""

from .engine import OCREngine
from .tesseract_backend import TesseractBackend

__all__ = ['OCREngine', 'TesseractBackend']
