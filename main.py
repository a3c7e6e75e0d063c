#!/usr/bin/env python3
"""
DTR Extraction System - Main Entry Point.

This is the main entry point for the Daily Time Record extraction
system. It provides both a command-line interface and programmatic
access to the extraction pipeline.

Usage:
    Command Line:
        python main.py --input dtr_scan.png --output results.xlsx
        python main.py --input ./dtrs/ --company-id 2 --templates

    Python:
        from main import run_extraction
        records = run_extraction("dtr.txt")

Author: HR Systems Team
Version: 1.0.0
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, List, Dict, Any

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import project modules
from config import ConfigurationManager
from src.utils.logger import setup_logger_from_config, get_logger, set_level
from src.utils.exceptions import DTRExtractionError


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="DTR (Daily Time Record) Extraction System",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process a single scan:
        python main.py --input dtr_scan.png --output results.xlsx

    Process a directory of OCR text files:
        python main.py --input ./dtrs/ --output ./results/

    Try company templates first:
        python main.py --input ./dtrs/ --company-id 2 --templates
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Input file or directory containing DTR scans or text"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file (.json/.xlsx) or directory (default: configured output dir)"
    )

    parser.add_argument(
        "--company-id",
        type=int,
        default=None,
        help="Company the DTRs belong to"
    )

    parser.add_argument(
        "--templates",
        action="store_true",
        help="Also read each DTR with the known company templates"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--no-excel",
        action="store_true",
        help="Disable Excel output"
    )

    parser.add_argument(
        "--no-json",
        action="store_true",
        help="Disable JSON output"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize the extraction system with configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    if args.config:
        ConfigurationManager.reset()
    config = ConfigurationManager(args.config)

    logger = setup_logger_from_config()

    if args.debug:
        set_level("DEBUG")
    elif args.quiet:
        set_level("WARNING")

    logger.info("=" * 60)
    logger.info("DTR EXTRACTION SYSTEM")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")
    logger.info(f"Output: {args.output or config.get('paths.output_dir')}")

    return config


def _output_targets(output_path: Optional[str]) -> Dict[str, Optional[str]]:
    """Split --output into an output directory and explicit filenames."""
    targets = {'output_dir': None, 'json_filename': None, 'excel_filename': None}

    if not output_path:
        return targets

    output_p = Path(output_path)
    if output_p.suffix.lower() == '.xlsx':
        targets['output_dir'] = str(output_p.parent)
        targets['excel_filename'] = output_p.name
        targets['json_filename'] = output_p.with_suffix('.json').name
    elif output_p.suffix.lower() == '.json':
        targets['output_dir'] = str(output_p.parent)
        targets['json_filename'] = output_p.name
        targets['excel_filename'] = output_p.with_suffix('.xlsx').name
    else:
        targets['output_dir'] = str(output_p)

    return targets


def run_extraction(
    input_path: str,
    output_path: Optional[str] = None,
    company_id: Optional[int] = None,
    use_templates: bool = False,
    enable_excel: bool = True,
    enable_json: bool = True,
    config_path: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Run the DTR extraction pipeline.

    Each document goes through: load (text or OCR) → extract →
    post-process, and optionally a company template read. Results
    are written to the enabled outputs.

    Args:
        input_path: Path to input file or directory.
        output_path: Output file or directory.
        company_id: Company the DTRs belong to.
        use_templates: Whether to also parse with company templates.
        enable_excel: Whether to generate Excel output.
        enable_json: Whether to generate JSON output.
        config_path: Optional custom configuration file path.

    Returns:
        List of per-document dictionaries with 'extraction', 'draft'
        and 'template' keys.

    Raises:
        FileNotFoundError: If the input path does not exist.

    Example:
        >>> records = run_extraction("dtrs/", "outputs/")
        >>> for r in records:
        ...     print(r['draft']['needs_review'])
    """
    logger = get_logger(__name__)

    if config_path:
        ConfigurationManager.reset()
    ConfigurationManager(config_path)

    from src.input_handler import InputHandler
    from src.extraction import DTRExtractor
    from src.postprocessor import PostProcessor
    from src.templates import TemplateRegistry
    from src.output_handler import OutputHandler

    logger.info("Initializing pipeline components...")
    input_handler = InputHandler()
    extractor = DTRExtractor()
    post_processor = PostProcessor()
    registry = TemplateRegistry() if use_templates else None
    output_handler = OutputHandler(
        json_enabled=enable_json,
        excel_enabled=enable_excel
    )

    input_p = Path(input_path)
    if input_p.is_dir():
        documents = input_handler.load_batch(input_p)
    else:
        if not input_p.exists():
            raise FileNotFoundError(f"Input path not found: {input_p}")
        documents = [input_handler.load(input_p)]

    extraction_results = []
    drafts = []
    template_reads = []

    for document in documents:
        if not document.success:
            logger.error(f"Skipping {document.filename}: {document.error}")
            continue

        logger.info(f"Processing: {document.filename}")

        extraction = extractor.extract(
            document.text,
            company_id=company_id,
            source_file=document.filepath
        )
        draft = post_processor.process(extraction)
        parsed = registry.parse(document.text, company_id) if registry else None

        extraction_results.append(extraction)
        drafts.append(draft)
        template_reads.append(parsed)

        logger.info(
            f"  Extracted: employee={extraction.employee_id or extraction.name or 'N/A'}, "
            f"format={extraction.format_type.value}, "
            f"confidence={extraction.confidence_score:.2f}, "
            f"auto_submit={draft.auto_submit}"
        )

    if extraction_results:
        logger.info("Generating outputs...")

        output_info = output_handler.save(
            extraction_results,
            drafts=drafts,
            templates=template_reads if registry else None,
            **_output_targets(output_path)
        )

        if output_info.get('json_path'):
            logger.info(f"JSON output: {output_info['json_path']}")
        if output_info.get('excel_path'):
            logger.info(f"Excel output: {output_info['excel_path']}")
    else:
        logger.warning("No documents were extracted")

    return [
        {
            'extraction': extraction.to_dict(),
            'draft': draft.to_dict(),
            'template': parsed.to_dict() if parsed is not None else None
        }
        for extraction, draft, parsed in zip(extraction_results, drafts, template_reads)
    ]


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_arguments(argv)

    try:
        initialize_system(args)
        logger = get_logger(__name__)

        records = run_extraction(
            input_path=args.input,
            output_path=args.output,
            company_id=args.company_id,
            use_templates=args.templates,
            enable_excel=not args.no_excel,
            enable_json=not args.no_json,
            config_path=args.config
        )

        if not records:
            logger.error("No files were processed")
            return 1

        review_count = sum(1 for r in records if r['draft']['needs_review'])

        logger.info("=" * 60)
        logger.info(
            f"Extraction complete. Processed {len(records)} files, "
            f"{review_count} need review."
        )
        logger.info("=" * 60)

        return 0

    except (FileNotFoundError, DTRExtractionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
