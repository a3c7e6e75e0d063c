"""
Custom Exceptions Module.

Errors raised by the DTR extraction system. A document that is simply
not recognized is never an error (it comes back with a low confidence
and ``is_new_format`` set); these exceptions cover misuse of the API
and failures of files, OCR, templates and exports.

Exception Hierarchy:
    DTRExtractionError (base)
    ├── InputError
    │   ├── InvalidInputError
    │   ├── UnsupportedFileTypeError
    │   ├── FileNotFoundError
    │   └── CorruptedFileError
    ├── OCRError
    │   ├── OCREngineNotAvailableError
    │   └── OCRProcessingError
    ├── TemplateError
    ├── PostProcessingError
    │   └── ValidationError
    └── OutputError
        ├── JSONExportError
        └── ExcelExportError
"""


class DTRExtractionError(Exception):
    """
    Root of every error raised by this package.

    Attributes:
        message: Short human-readable description.
        details: Structured context (paths, field names, reasons) for logs.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{k}={v}" for k, v in self.details.items() if v is not None)
        return f"{self.message} ({context})" if context else self.message


# -----------------------------------------------------------------------------
# Input
# -----------------------------------------------------------------------------

class InputError(DTRExtractionError):
    """A document could not be loaded, or the API was called with bad input."""


class InvalidInputError(InputError):
    """
    The extractor was handed something other than OCR text.

    Example:
        >>> DTRExtractor().extract(None)
        Traceback (most recent call last):
        ...
        InvalidInputError: Expected raw OCR text (str), got NoneType
    """

    def __init__(self, value, reason: str = None):
        type_name = type(value).__name__
        super().__init__(
            f"Expected raw OCR text (str), got {type_name}",
            {"type": type_name, "reason": reason}
        )


class UnsupportedFileTypeError(InputError):
    """The file extension is neither a text nor an image type."""

    def __init__(self, file_type: str, supported_types: list):
        super().__init__(
            f"Unsupported DTR file type '{file_type}'",
            {"file_type": file_type, "supported_types": supported_types}
        )


class FileNotFoundError(InputError):
    """A DTR file or directory does not exist."""

    def __init__(self, filepath: str):
        super().__init__(f"DTR file not found: {filepath}", {"filepath": filepath})


class CorruptedFileError(InputError):
    """The file exists but is empty or cannot be decoded."""

    def __init__(self, filepath: str, reason: str = None):
        super().__init__(
            f"Corrupted DTR file: {filepath}",
            {"filepath": filepath, "reason": reason}
        )


# -----------------------------------------------------------------------------
# OCR
# -----------------------------------------------------------------------------

class OCRError(DTRExtractionError):
    """Text recognition of a scanned DTR failed."""


class OCREngineNotAvailableError(OCRError):
    """Tesseract (or pytesseract) is missing."""

    def __init__(self, engine_name: str):
        super().__init__(f"OCR engine unavailable: {engine_name}", {"engine": engine_name})


class OCRProcessingError(OCRError):
    """The image could not be opened, or recognition failed or found nothing."""

    def __init__(self, filepath: str, reason: str = None):
        super().__init__(
            f"Could not read text from: {filepath}",
            {"filepath": filepath, "reason": reason}
        )


# -----------------------------------------------------------------------------
# Templates
# -----------------------------------------------------------------------------

class TemplateError(DTRExtractionError):
    """A company DTR template is malformed or unknown."""

    def __init__(self, name: str, reason: str = None):
        super().__init__(f"Invalid DTR template: {name}", {"template": name, "reason": reason})


# -----------------------------------------------------------------------------
# Post-processing
# -----------------------------------------------------------------------------

class PostProcessingError(DTRExtractionError):
    """A draft could not be turned into a submittable DTR."""


class ValidationError(PostProcessingError):
    """A draft field failed validation at submission time."""

    def __init__(self, field: str, value: str, reason: str = None):
        super().__init__(
            f"DTR field '{field}' is not valid",
            {"field": field, "value": value, "reason": reason}
        )


# -----------------------------------------------------------------------------
# Output
# -----------------------------------------------------------------------------

class OutputError(DTRExtractionError):
    """Results could not be exported."""


class JSONExportError(OutputError):

    def __init__(self, filepath: str, reason: str = None):
        super().__init__(
            f"JSON export failed: {filepath}",
            {"filepath": filepath, "reason": reason}
        )


class ExcelExportError(OutputError):

    def __init__(self, filepath: str, reason: str = None):
        super().__init__(
            f"Excel export failed: {filepath}",
            {"filepath": filepath, "reason": reason}
        )


__all__ = [
    'DTRExtractionError',
    'InputError',
    'InvalidInputError',
    'UnsupportedFileTypeError',
    'FileNotFoundError',
    'CorruptedFileError',
    'OCRError',
    'OCREngineNotAvailableError',
    'OCRProcessingError',
    'TemplateError',
    'PostProcessingError',
    'ValidationError',
    'OutputError',
    'JSONExportError',
    'ExcelExportError',
]
