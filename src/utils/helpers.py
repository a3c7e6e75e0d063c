"""
Helper Utilities Module.

Small helpers shared by the input handler, the exporters and the
extraction core.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """Create ``path`` (and parents) if missing and return it as a Path."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Lowercase extension including the dot.

    Example:
        >>> get_file_extension("SCAN_0042.PNG")
        '.png'
        >>> get_file_extension("README")
        ''
    """
    return Path(filepath).suffix.lower()


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """Current local time formatted for use in output filenames."""
    return datetime.now().strftime(format_str)


def split_lines(text: str) -> List[str]:
    """
    Split raw OCR text into lines, dropping lines that are blank.

    Line content is kept as recognized (no stripping), since the
    extractors search inside each line.

    Example:
        >>> split_lines("Time In: 8:00\\n\\n  \\nTime Out: 5:00")
        ['Time In: 8:00', 'Time Out: 5:00']
    """
    return [line for line in text.split('\n') if line.strip() != '']
