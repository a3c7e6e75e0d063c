"""
Excel Exporter Module.

This module provides Excel file generation for DTR extraction results.
Uses openpyxl for modern Excel format support.

Features:
    - Formatted headers
    - Auto-column width
    - Time candidates sheet
    - Review sheet built from post-processed drafts

Author: HR Systems Team
"""

from pathlib import Path
from typing import Any, List, Optional, Union

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from config import get_config
from src.utils.logger import get_logger
from src.utils.helpers import ensure_directory, generate_timestamp
from src.utils.exceptions import ExcelExportError
from src.extraction.extraction_result import ExtractionResult

# Initialize module logger
logger = get_logger(__name__)


class ExcelExporter:
    """
    Exports extraction results to Excel format.

    Attributes:
        output_dir: Directory for output files
        include_times: Whether to include the time candidates sheet
        include_review: Whether to include the review sheet

    Example:
        >>> exporter = ExcelExporter()
        >>> filepath = exporter.export(results, "dtrs.xlsx", drafts=drafts)
    """

    COLUMNS = [
        ('Source File', 'source_file'),
        ('Company ID', 'company_id'),
        ('Format Type', 'format_type'),
        ('Employee ID', 'employee_id'),
        ('Employee Name', 'name'),
        ('Dates', 'dates'),
        ('Confidence', 'confidence_score'),
        ('New Format', 'is_new_format'),
    ]

    TIME_COLUMNS = [
        ('Source File', 'source_file'),
        ('Time In Candidates', 'time_in'),
        ('Time Out Candidates', 'time_out'),
    ]

    REVIEW_COLUMNS = [
        ('Source File', 'source_file'),
        ('Employee ID', 'employee_id'),
        ('Employee Name', 'employee_name'),
        ('Date', 'date'),
        ('Time In', 'time_in'),
        ('Time Out', 'time_out'),
        ('Break Hours', 'break_hours'),
        ('Regular Hours', 'regular_hours'),
        ('Needs Review', 'needs_review'),
        ('Auto Submit', 'auto_submit'),
        ('Warnings', 'warnings'),
    ]

    def __init__(self) -> None:
        """Initialize the Excel exporter with configuration."""
        self.output_dir = Path(get_config("paths.output_dir", "outputs"))
        self.include_times = get_config("output.excel.include_times", True)
        self.include_review = get_config("output.excel.include_review", True)
        self.sheet_name = get_config("output.excel.sheet_name", "DTR Extractions")

        logger.debug(f"ExcelExporter initialized (output_dir: {self.output_dir})")

    def export(
        self,
        results: Union[ExtractionResult, List[ExtractionResult]],
        filename: Optional[str] = None,
        output_dir: Optional[str] = None,
        drafts: Optional[List[Any]] = None
    ) -> str:
        """
        Export extraction results to Excel file.

        Args:
            results: Single result or list of results to export.
            filename: Output filename. If None, auto-generated.
            output_dir: Output directory. If None, uses configured dir.
            drafts: Optional DTRDraft per result for the review sheet.

        Returns:
            Path to the created Excel file.

        Raises:
            ExcelExportError: If export fails.
        """
        if isinstance(results, ExtractionResult):
            results = [results]

        if not results:
            raise ExcelExportError("No results", "No results to export")

        out_dir = ensure_directory(output_dir or self.output_dir)

        if filename is None:
            filename = self.get_default_filename()

        filepath = out_dir / filename

        try:
            workbook = Workbook()

            self._create_data_sheet(workbook, results)

            if self.include_times:
                self._create_times_sheet(workbook, results)

            if self.include_review and drafts:
                self._create_review_sheet(workbook, drafts)

            workbook.save(filepath)

        except OSError as e:
            logger.error(f"Excel export failed: {e}")
            raise ExcelExportError(str(filepath), str(e))

        logger.info(f"Excel file saved: {filepath} ({len(results)} records)")
        return str(filepath)

    def _write_header(self, sheet, columns, color: str) -> None:
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")

        for col, (header_name, _) in enumerate(columns, 1):
            cell = sheet.cell(row=1, column=col, value=header_name)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment

    def _fit_columns(self, sheet, columns) -> None:
        for col, (header_name, _) in enumerate(columns, 1):
            max_length = len(header_name)
            for row in range(2, sheet.max_row + 1):
                cell_value = sheet.cell(row=row, column=col).value
                if cell_value is not None:
                    max_length = max(max_length, len(str(cell_value)))

            sheet.column_dimensions[get_column_letter(col)].width = min(max_length + 2, 50)

    def _create_data_sheet(self, workbook, results: List[ExtractionResult]) -> None:
        """
        Create the main data sheet with one row per document.

        Args:
            workbook: openpyxl Workbook instance.
            results: List of extraction results.
        """
        sheet = workbook.active
        sheet.title = self.sheet_name

        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        self._write_header(sheet, self.COLUMNS, "4472C4")

        for row_num, result in enumerate(results, 2):
            flat = result.to_flat_dict()
            for col, (_, field_name) in enumerate(self.COLUMNS, 1):
                cell = sheet.cell(row=row_num, column=col, value=flat[field_name])
                cell.border = thin_border

        self._fit_columns(sheet, self.COLUMNS)
        sheet.freeze_panes = 'A2'

    def _create_times_sheet(self, workbook, results: List[ExtractionResult]) -> None:
        sheet = workbook.create_sheet(title="Times")
        self._write_header(sheet, self.TIME_COLUMNS, "548235")

        for row_num, result in enumerate(results, 2):
            flat = result.to_flat_dict()
            for col, (_, field_name) in enumerate(self.TIME_COLUMNS, 1):
                sheet.cell(row=row_num, column=col, value=flat[field_name])

        self._fit_columns(sheet, self.TIME_COLUMNS)

    def _create_review_sheet(self, workbook, drafts: List[Any]) -> None:
        """
        Create a sheet with the normalized drafts and their review flags.

        Rows that need review are highlighted.
        """
        sheet = workbook.create_sheet(title="Review")
        self._write_header(sheet, self.REVIEW_COLUMNS, "C65911")

        review_fill = PatternFill(start_color="FCE4D6", end_color="FCE4D6", fill_type="solid")

        for row_num, draft in enumerate(drafts, 2):
            values = draft.to_dict()
            for col, (_, field_name) in enumerate(self.REVIEW_COLUMNS, 1):
                value = values.get(field_name)
                if field_name == 'warnings':
                    value = '; '.join(value)
                elif value is None:
                    value = ''

                cell = sheet.cell(row=row_num, column=col, value=value)
                if draft.needs_review:
                    cell.fill = review_fill

        self._fit_columns(sheet, self.REVIEW_COLUMNS)

    def get_default_filename(self) -> str:
        """
        Generate a default filename with timestamp.

        Returns:
            Default filename string.
        """
        timestamp = generate_timestamp()
        pattern = get_config(
            "output.excel.filename_pattern",
            "dtr_extractions_{timestamp}.xlsx"
        )
        return pattern.format(timestamp=timestamp)
