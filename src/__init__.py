"""
DTR Extraction System - Source Package.

This package contains the modules that turn scanned Daily Time Records
into structured, reviewable entries.

Modules:
    - input_handler: Text file and image input
    - ocr_engine: Image to raw text via Tesseract
    - extraction: Format detection, field extraction, confidence
    - templates: Known company DTR layouts
    - postprocessor: Normalization, validation, review decisions
    - output_handler: JSON and Excel output

Architecture:
    Input → OCR → Extraction → Post-Processing → Output
                      ↘ Company Templates ↗
"""

__version__ = "1.0.0"
__author__ = "HR Systems Team"

__all__ = [
    'input_handler',
    'ocr_engine',
    'extraction',
    'templates',
    'postprocessor',
    'output_handler',
    'utils'
]
