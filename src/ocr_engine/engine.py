"""
Main OCR Engine Module.

This module provides the OCREngine class, the thin adapter that turns a
scanned DTR image into the raw text the extraction core reads.

Usage:
    from src.ocr_engine import OCREngine

    engine = OCREngine()
    text = engine.extract_text("scan.png")

Author: HR Systems Team
"""

from typing import Union, List, Dict, Any
from PIL import Image, UnidentifiedImageError
from pathlib import Path

from src.utils.logger import get_logger
from src.utils.exceptions import OCRProcessingError
from .tesseract_backend import TesseractBackend

# Initialize module logger
logger = get_logger(__name__)


class OCREngine:
    """
    OCR engine providing text extraction for DTR scans.

    Attributes:
        backend_name: Name of the active OCR backend
        backend: The active OCR backend instance

    Example:
        >>> engine = OCREngine()
        >>> text = engine.extract_text(image)
        >>> result = extract_dtr(text)
    """

    SUPPORTED_BACKENDS = ['tesseract']

    def __init__(self) -> None:
        self.backend_name = "tesseract"
        self.backend = TesseractBackend()

        logger.info(f"OCR Engine initialized with backend: {self.backend_name}")

    def extract_text(self, image: Union[Image.Image, str, Path]) -> str:
        """
        Extract the text of a DTR image.

        Args:
            image: PIL Image or path to image file.

        Returns:
            Recognized text.

        Raises:
            OCRProcessingError: If the image cannot be read or recognized,
                or if no text was found.

        Example:
            >>> text = engine.extract_text("dtr_scan.jpg")
        """
        source = "image"

        if isinstance(image, (str, Path)):
            source = str(image)
            logger.debug(f"Loading image from: {source}")
            try:
                image = Image.open(source)
                image.load()
            except (OSError, UnidentifiedImageError) as e:
                raise OCRProcessingError(source, f"Failed to load image: {e}")

        if not isinstance(image, Image.Image):
            raise OCRProcessingError(source, "Invalid image input")

        text = self.backend.get_text(image, source=source)

        if not text:
            raise OCRProcessingError(source, "No text recognized")

        return text

    def extract_text_batch(self, images: List[Union[Image.Image, str, Path]]) -> List[str]:
        """
        Extract text from multiple images.

        Failed images yield an empty string so positions line up with
        the input list.

        Args:
            images: List of PIL Images or paths.

        Returns:
            List of recognized texts.
        """
        texts = []

        for i, image in enumerate(images):
            logger.debug(f"Processing image {i+1}/{len(images)}")
            try:
                texts.append(self.extract_text(image))
            except OCRProcessingError as e:
                logger.error(f"Failed to process image {i+1}: {e}")
                texts.append("")

        return texts

    def get_backend_info(self) -> Dict[str, Any]:
        return {
            'backend': self.backend_name,
            'language': self.backend.language,
            'psm': self.backend.psm,
            'oem': self.backend.oem
        }
