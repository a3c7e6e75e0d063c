"""
JSON Exporter Module.

Writes extraction results, and the drafts and template reads built from
them, to a single JSON document.

Author: HR Systems Team
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import get_config
from src.utils.logger import get_logger
from src.utils.helpers import ensure_directory, generate_timestamp
from src.utils.exceptions import JSONExportError
from src.extraction.extraction_result import ExtractionResult

logger = get_logger(__name__)


class JSONExporter:
    """
    Exports extraction results to JSON.

    The document has the shape::

        {
            "generated_at": "...",
            "count": 2,
            "records": [
                {"extraction": {...}, "draft": {...}, "template": {...}},
                ...
            ]
        }

    ``draft`` and ``template`` are null when they were not produced.

    Example:
        >>> exporter = JSONExporter()
        >>> path = exporter.export(results, drafts=drafts)
    """

    def __init__(self) -> None:
        self.output_dir = Path(get_config("paths.output_dir", "outputs"))
        self.indent = get_config("output.json.indent", 2)

        logger.debug(f"JSONExporter initialized (output_dir: {self.output_dir})")

    def build_document(
        self,
        results: List[ExtractionResult],
        drafts: Optional[List[Any]] = None,
        templates: Optional[List[Any]] = None
    ) -> Dict[str, Any]:
        records = []
        for i, result in enumerate(results):
            draft = drafts[i] if drafts and i < len(drafts) else None
            parsed = templates[i] if templates and i < len(templates) else None
            records.append({
                'extraction': result.to_dict(),
                'draft': draft.to_dict() if draft is not None else None,
                'template': parsed.to_dict() if parsed is not None else None
            })

        return {
            'generated_at': generate_timestamp("%Y-%m-%dT%H:%M:%S"),
            'count': len(records),
            'records': records
        }

    def export(
        self,
        results: List[ExtractionResult],
        filename: Optional[str] = None,
        output_dir: Optional[str] = None,
        drafts: Optional[List[Any]] = None,
        templates: Optional[List[Any]] = None
    ) -> str:
        """
        Write results to a JSON file.

        Args:
            results: Extraction results to export.
            filename: Output filename. If None, auto-generated.
            output_dir: Output directory. If None, uses configured dir.
            drafts: Optional DTRDraft per result, same order.
            templates: Optional ParsedDTR per result, same order.

        Returns:
            Path to the created JSON file.

        Raises:
            JSONExportError: If there is nothing to export or the write fails.
        """
        if isinstance(results, ExtractionResult):
            results = [results]

        if not results:
            raise JSONExportError("No results", "No results to export")

        out_dir = ensure_directory(output_dir or self.output_dir)
        filepath = out_dir / (filename or self.get_default_filename())

        document = self.build_document(results, drafts, templates)

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=self.indent, ensure_ascii=False)
        except (OSError, TypeError) as e:
            logger.error(f"JSON export failed: {e}")
            raise JSONExportError(str(filepath), str(e))

        logger.info(f"JSON file saved: {filepath} ({len(results)} records)")
        return str(filepath)

    def get_default_filename(self) -> str:
        pattern = get_config(
            "output.json.filename_pattern",
            "dtr_extractions_{timestamp}.json"
        )
        return pattern.format(timestamp=generate_timestamp())
