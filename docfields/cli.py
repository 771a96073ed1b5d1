"""Command-line interface for running extraction over OCR text files.

Reads text already produced by an OCR provider, runs the extraction
pipeline and prints the outcome as JSON. Grouping candidates into one
value per field happens here, on the consumer side.
"""

import argparse
import json
import sys
from pathlib import Path

from docfields.extraction.fields import ExtractedField
from docfields.pipeline import ExtractionOutcome, ExtractionSuccess, TextProcessor
from docfields.utils.config import load_config
from docfields.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def best_fields(fields: tuple[ExtractedField, ...]) -> dict[str, dict[str, object]]:
    """Pick the highest-confidence value for each field name.

    Ties keep the candidate that was extracted first.

    Args:
        fields: All field candidates from an extraction outcome.

    Returns:
        Mapping of field name to its chosen value and confidence.
    """
    chosen: dict[str, ExtractedField] = {}
    for f in fields:
        current = chosen.get(f.name)
        if current is None or f.confidence > current.confidence:
            chosen[f.name] = f
    return {
        name: {"value": f.value, "confidence": f.confidence}
        for name, f in chosen.items()
    }


def outcome_to_dict(
    outcome: ExtractionOutcome, best: bool = False
) -> dict[str, object]:
    """Convert an extraction outcome into a JSON-serializable dict."""
    if not isinstance(outcome, ExtractionSuccess):
        return {
            "source": outcome.source_name,
            "success": False,
            "error": outcome.reason,
        }

    fields: object
    if best:
        fields = best_fields(outcome.fields)
    else:
        fields = [
            {
                "name": f.name,
                "value": f.value,
                "confidence": f.confidence,
                "rule": f.source,
            }
            for f in outcome.fields
        ]
    return {
        "source": outcome.source_name,
        "success": True,
        "document_type": str(outcome.category),
        "fields": fields,
    }


def extract_file(
    file_path: Path,
    processor: TextProcessor,
    best: bool = False,
) -> dict[str, object]:
    """Run extraction on a single OCR text file.

    Args:
        file_path: Path to a UTF-8 text file of OCR output.
        processor: Configured text processor.
        best: Whether to reduce candidates to one value per field.

    Returns:
        Dictionary form of the extraction outcome.
    """
    logger.info("Extracting fields from %s", file_path)
    raw_text = file_path.read_text(encoding="utf-8", errors="replace")
    outcome = processor.process(raw_text, source_name=file_path.name)
    return outcome_to_dict(outcome, best)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Structured field extraction from OCR text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (default: configs/config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser(
        "extract", help="Extract fields from an OCR text file"
    )
    extract_parser.add_argument("file", type=Path, help="OCR text file to process")
    extract_parser.add_argument(
        "--best",
        action="store_true",
        help="Keep only the highest-confidence value per field",
    )
    extract_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    args = parser.parse_args(argv)

    config = load_config(args.config)
    # stdout carries the JSON result
    setup_logging(config.log_level, stream=sys.stderr)

    if args.command == "extract":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        processor = TextProcessor(config.extraction)
        result = extract_file(args.file, processor, args.best)
        output_str = json.dumps(result, indent=2)
        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output_str)
            print(f"Output written to {args.output}")
        else:
            print(output_str)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
