"""
Main Input Handler Module.

This module provides the InputHandler class that loads DTR documents as
raw text. Plain-text files (already OCR'd) are read directly; image
scans go through the OCR engine.

Usage:
    from src.input_handler import InputHandler

    handler = InputHandler()
    result = handler.load("dtr_scan.png")

    # Process batch
    results = handler.load_batch("./dtrs/")

Classes:
    InputResult: Loaded text of one document
    InputHandler: Main class for file input handling
"""

from pathlib import Path
from typing import Union, List, Optional, Dict, Any
from dataclasses import dataclass, field

from config import get_config
from src.utils.logger import get_logger
from src.utils.helpers import get_file_extension
from src.utils.exceptions import (
    InputError,
    OCRError,
    UnsupportedFileTypeError,
    FileNotFoundError,
    CorruptedFileError
)


# Initialize module logger
logger = get_logger(__name__)


@dataclass
class InputResult:
    """
    Data class representing one loaded DTR document.

    Attributes:
        filepath: Original file path
        filename: Original filename
        file_type: Detected file type ('text' or 'image')
        text: Raw document text
        metadata: Additional file metadata
        success: Whether loading was successful
        error: Error message if loading failed
    """
    filepath: str
    filename: str
    file_type: str
    text: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"InputResult(filename='{self.filename}', "
            f"type='{self.file_type}', "
            f"chars={len(self.text)}, "
            f"success={self.success})"
        )


class InputHandler:
    """
    Main input handler for DTR documents.

    Attributes:
        text_extensions: Extensions read as plain text
        image_extensions: Extensions sent through OCR
        encoding: Encoding used for text files

    Example:
        >>> handler = InputHandler()
        >>> result = handler.load("dtr.txt")
        >>> extraction = extract_dtr(result.text)
    """

    TEXT_EXTENSIONS = {'.txt'}
    IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.tiff', '.tif', '.bmp'}

    def __init__(self, ocr_engine=None) -> None:
        """
        Initialize the InputHandler.

        Args:
            ocr_engine: Optional OCR engine. When omitted, one is created
                        the first time an image is loaded.
        """
        self.text_extensions = {
            ext.lower() for ext in get_config("input.text_extensions", list(self.TEXT_EXTENSIONS))
        }
        self.image_extensions = {
            ext.lower() for ext in get_config("input.image_extensions", list(self.IMAGE_EXTENSIONS))
        }
        self.encoding = get_config("input.encoding", "utf-8")

        self._ocr_engine = ocr_engine

        logger.info(f"InputHandler initialized with extensions: {sorted(self.supported_extensions)}")

    @property
    def supported_extensions(self) -> set:
        return self.text_extensions | self.image_extensions

    @property
    def ocr_engine(self):
        if self._ocr_engine is None:
            from src.ocr_engine import OCREngine
            self._ocr_engine = OCREngine()
        return self._ocr_engine

    def detect_file_type(self, filepath: Union[str, Path]) -> str:
        """
        Detect the type of input file.

        Returns:
            File type string: 'text' or 'image'.

        Raises:
            UnsupportedFileTypeError: If file type is not supported.
        """
        extension = get_file_extension(filepath)

        if extension in self.text_extensions:
            return 'text'
        elif extension in self.image_extensions:
            return 'image'
        else:
            raise UnsupportedFileTypeError(
                extension,
                sorted(self.supported_extensions)
            )

    def validate_file(self, filepath: Union[str, Path]) -> Path:
        """
        Validate that a file exists and is accessible.

        Raises:
            FileNotFoundError: If file doesn't exist.
            UnsupportedFileTypeError: If file type is not supported.
            CorruptedFileError: If the file is empty.
        """
        path = Path(filepath)

        if not path.exists():
            raise FileNotFoundError(str(filepath))

        if not path.is_file():
            raise InputError(f"Path is not a file: {filepath}")

        self.detect_file_type(path)

        if path.stat().st_size == 0:
            raise CorruptedFileError(str(filepath), "File is empty")

        logger.debug(f"File validated: {filepath}")
        return path

    def load(self, filepath: Union[str, Path]) -> InputResult:
        """
        Load one DTR document as raw text.

        Errors are reported on the returned InputResult rather than
        raised, so batch runs keep going.

        Args:
            filepath: Path to a text file or image scan.

        Returns:
            InputResult containing the document text.
        """
        filepath = str(filepath)
        logger.info(f"Loading file: {filepath}")

        try:
            validated_path = self.validate_file(filepath)
            file_type = self.detect_file_type(validated_path)

            if file_type == 'text':
                text = self._read_text(validated_path)
            else:
                text = self.ocr_engine.extract_text(validated_path)

            result = InputResult(
                filepath=filepath,
                filename=validated_path.name,
                file_type=file_type,
                text=text,
                metadata={
                    'size_bytes': validated_path.stat().st_size,
                    'line_count': len(text.splitlines())
                }
            )

            logger.info(f"Successfully loaded: {validated_path.name} ({file_type})")
            return result

        except (InputError, OCRError) as e:
            logger.error(f"Input error for {filepath}: {e}")
            return InputResult(
                filepath=filepath,
                filename=Path(filepath).name,
                file_type='unknown',
                success=False,
                error=str(e)
            )

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            raise CorruptedFileError(str(path), f"Not valid {self.encoding} text: {e}")

    def load_batch(
        self,
        directory: Union[str, Path],
        recursive: bool = False
    ) -> List[InputResult]:
        """
        Load all supported files in a directory.

        Args:
            directory: Path to directory containing DTR files.
            recursive: Whether to search subdirectories.

        Returns:
            List of InputResult objects, sorted by path.

        Raises:
            FileNotFoundError: If the directory does not exist.
            InputError: If the path is not a directory.
        """
        directory = Path(directory)

        if not directory.exists():
            raise FileNotFoundError(str(directory))

        if not directory.is_dir():
            raise InputError(f"Path is not a directory: {directory}")

        pattern = "**/*" if recursive else "*"
        files = sorted(
            path for path in directory.glob(pattern)
            if path.is_file() and get_file_extension(path) in self.supported_extensions
        )

        logger.info(f"Found {len(files)} files to process in {directory}")

        results = []
        for i, filepath in enumerate(files, 1):
            logger.info(f"Processing file {i}/{len(files)}: {filepath.name}")
            results.append(self.load(filepath))

        successful = sum(1 for r in results if r.success)
        failed = len(results) - successful
        logger.info(f"Batch loading complete: {successful} successful, {failed} failed")

        return results
