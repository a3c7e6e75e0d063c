"""
Main Output Handler Module.

This module provides the unified OutputHandler class that coordinates
all output operations (JSON and Excel).

Author: HR Systems Team
"""

from typing import List, Optional, Dict, Any, Union

from config import get_config
from src.utils.logger import get_logger
from src.utils.exceptions import OutputError
from src.extraction.extraction_result import ExtractionResult
from .excel_exporter import ExcelExporter
from .json_exporter import JSONExporter

# Initialize module logger
logger = get_logger(__name__)


class OutputHandler:
    """
    Unified output handler for extraction results.

    Attributes:
        json_enabled: Whether JSON export is enabled
        excel_enabled: Whether Excel export is enabled

    Example:
        >>> handler = OutputHandler()
        >>> handler.save(results, drafts=drafts)
        >>>
        >>> # Or save to specific outputs
        >>> handler.to_excel(results, "output.xlsx")
        >>> handler.to_json(results, "output.json")
    """

    def __init__(
        self,
        json_enabled: Optional[bool] = None,
        excel_enabled: Optional[bool] = None
    ) -> None:
        """
        Initialize the output handler.

        Args:
            json_enabled: Override config for JSON output.
            excel_enabled: Override config for Excel output.
        """
        self.json_enabled = json_enabled if json_enabled is not None else \
            get_config("output.json.enabled", True)
        self.excel_enabled = excel_enabled if excel_enabled is not None else \
            get_config("output.excel.enabled", True)

        # Initialize exporters (lazy loading)
        self._json_exporter = None
        self._excel_exporter = None

        logger.info(
            f"OutputHandler initialized "
            f"(json={self.json_enabled}, excel={self.excel_enabled})"
        )

    @property
    def json_exporter(self) -> JSONExporter:
        if self._json_exporter is None:
            self._json_exporter = JSONExporter()
        return self._json_exporter

    @property
    def excel_exporter(self) -> ExcelExporter:
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter()
        return self._excel_exporter

    def save(
        self,
        results: Union[ExtractionResult, List[ExtractionResult]],
        drafts: Optional[List[Any]] = None,
        templates: Optional[List[Any]] = None,
        json_filename: Optional[str] = None,
        excel_filename: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Save results to all enabled outputs.

        A failing output is logged and does not stop the others.

        Args:
            results: Single result or list of results.
            drafts: Optional DTRDraft per result.
            templates: Optional ParsedDTR per result (JSON only).
            json_filename: Custom JSON filename (optional).
            excel_filename: Custom Excel filename (optional).
            output_dir: Output directory (optional).

        Returns:
            Dictionary with output details:
            {
                'json_path': 'path/to/file.json',
                'excel_path': 'path/to/file.xlsx'
            }
        """
        if isinstance(results, ExtractionResult):
            results = [results]

        output_info = {
            'json_path': None,
            'excel_path': None
        }

        if self.json_enabled:
            try:
                output_info['json_path'] = self.json_exporter.export(
                    results, json_filename, output_dir, drafts=drafts, templates=templates
                )
            except OutputError as e:
                logger.error(f"JSON export failed: {e}")

        if self.excel_enabled:
            try:
                output_info['excel_path'] = self.excel_exporter.export(
                    results, excel_filename, output_dir, drafts=drafts
                )
            except OutputError as e:
                logger.error(f"Excel export failed: {e}")

        return output_info

    def to_json(
        self,
        results: Union[ExtractionResult, List[ExtractionResult]],
        filename: Optional[str] = None,
        output_dir: Optional[str] = None,
        drafts: Optional[List[Any]] = None
    ) -> str:
        if isinstance(results, ExtractionResult):
            results = [results]

        return self.json_exporter.export(results, filename, output_dir, drafts=drafts)

    def to_excel(
        self,
        results: Union[ExtractionResult, List[ExtractionResult]],
        filename: Optional[str] = None,
        output_dir: Optional[str] = None,
        drafts: Optional[List[Any]] = None
    ) -> str:
        """
        Export results to Excel file.

        Args:
            results: Results to export.
            filename: Output filename.
            output_dir: Output directory.
            drafts: Optional drafts for the review sheet.

        Returns:
            Path to created Excel file.
        """
        if isinstance(results, ExtractionResult):
            results = [results]

        return self.excel_exporter.export(results, filename, output_dir, drafts=drafts)
