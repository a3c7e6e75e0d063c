"""
Tesseract OCR Backend.

Wraps pytesseract's plain-text recognition for DTR scans. Word boxes
are not needed: the extraction core only reads lines of text.

Requirements:
    - Tesseract OCR installed on the system
    - pytesseract Python package

Author: HR Systems Team
"""

from typing import List
from PIL import Image
import pytesseract

from config import get_config
from src.utils.logger import get_logger
from src.utils.exceptions import OCREngineNotAvailableError, OCRProcessingError

logger = get_logger(__name__)


class TesseractBackend:
    """
    Runs Tesseract on one image at a time.

    Attributes:
        language: Tesseract language code (e.g., "eng")
        psm: Page Segmentation Mode (1-13)
        oem: OCR Engine Mode (0-3)
        timeout: Seconds before a recognition run is abandoned (0 = none)
        extra_config: Additional Tesseract command-line options

    Example:
        >>> backend = TesseractBackend()
        >>> text = backend.get_text(Image.open("dtr.png"), source="dtr.png")
    """

    def __init__(self) -> None:
        self.language = get_config("ocr.tesseract.lang", "eng")
        self.psm = get_config("ocr.tesseract.psm", 3)
        self.oem = get_config("ocr.tesseract.oem", 3)
        self.timeout = get_config("ocr.tesseract.timeout", 0)
        self.extra_config = get_config("ocr.tesseract.config", "")

        self.version = self._tesseract_version()

        logger.debug(
            f"TesseractBackend ready (tesseract {self.version}, lang={self.language}, "
            f"psm={self.psm}, oem={self.oem})"
        )

    @staticmethod
    def _tesseract_version() -> str:
        """
        Raises:
            OCREngineNotAvailableError: If the tesseract binary cannot be run.
        """
        try:
            return str(pytesseract.get_tesseract_version())
        except OSError as e:
            raise OCREngineNotAvailableError(
                f"Tesseract OCR (not installed or not in PATH): {e}"
            )

    @property
    def command_options(self) -> str:
        options = f"--psm {self.psm} --oem {self.oem}"
        if self.extra_config:
            options = f"{options} {self.extra_config}"
        return options

    def get_text(self, image: Image.Image, source: str = "image") -> str:
        """
        Recognize the text of an image.

        Args:
            image: PIL Image to process.
            source: Name used in log and error messages.

        Returns:
            Recognized text with surrounding whitespace stripped.

        Raises:
            OCREngineNotAvailableError: If tesseract disappeared since startup.
            OCRProcessingError: If tesseract fails or times out on the image.
        """
        if image.mode not in ('RGB', 'L'):
            image = image.convert('RGB')

        try:
            text = pytesseract.image_to_string(
                image,
                lang=self.language,
                config=self.command_options,
                timeout=self.timeout
            )
        except OSError as e:
            raise OCREngineNotAvailableError(f"Tesseract OCR: {e}")
        except RuntimeError as e:
            logger.error(f"Tesseract failed on {source}: {e}")
            raise OCRProcessingError(source, str(e))

        text = text.strip()
        logger.info(f"OCR read {len(text.splitlines())} lines from {source}")
        return text

    def get_available_languages(self) -> List[str]:
        """Installed Tesseract language packs, without the OSD pseudo-language."""
        try:
            return [lang for lang in pytesseract.get_languages() if lang != 'osd']
        except (OSError, RuntimeError) as e:
            logger.debug(f"Could not list Tesseract languages: {e}")
            return [self.language]
