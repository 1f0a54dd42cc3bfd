"""Command-line interface for batch real-estate document extraction.

Provides subcommands for processing a folder of scanned images into a
JSON result file and for extracting a single document.
"""

import argparse
import json
import sys
from pathlib import Path

from estate_ocr.extraction.engine import ExtractedRecord, FieldExtractor
from estate_ocr.ocr.tesseract_engine import RecognitionError, TesseractEngine
from estate_ocr.utils.config import AppConfig, load_config
from estate_ocr.utils.debug_sink import FileDebugSink
from estate_ocr.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".tiff", ".bmp")


def _find_images(input_dir: Path) -> list[Path]:
    """Find all supported image files in a directory.

    Args:
        input_dir: Directory to scan for images.

    Returns:
        Sorted list of image paths; empty if the directory is missing.
    """
    if not input_dir.is_dir():
        return []
    return sorted(
        p
        for p in input_dir.iterdir()
        if p.is_file() and p.suffix.lower() in _SUPPORTED_EXTENSIONS
    )


def _build_extractor(config: AppConfig, debug: bool) -> FieldExtractor:
    sink = FileDebugSink(Path(config.debug.directory)) if debug else None
    return FieldExtractor.from_config(config.extraction, debug_sink=sink)


def process_folder(
    input_dir: Path,
    output_path: Path,
    config: AppConfig | None = None,
    debug: bool | None = None,
    verbose: bool = False,
) -> list[ExtractedRecord]:
    """Extract fields from every image in a folder and save them as JSON.

    Args:
        input_dir: Directory containing scanned images.
        output_path: Path for the JSON result file.
        config: Application configuration. Loaded from disk if ``None``.
        debug: Whether to dump raw OCR text. Defaults to the config value.
        verbose: Whether to print per-file records.

    Returns:
        Records of every image whose text was recognized, in file order.
    """
    config = config or load_config()
    if debug is None:
        debug = config.debug.enabled

    if not input_dir.is_dir():
        logger.error("Image directory %s does not exist", input_dir)
        return []

    files = _find_images(input_dir)
    if not files:
        logger.warning("No image files found in %s", input_dir)
        return []

    logger.info("Found %d image files. Processing...", len(files))

    engine = TesseractEngine(config.ocr.tesseract_cmd, config.ocr.default_lang)
    extractor = _build_extractor(config, debug)

    records: list[ExtractedRecord] = []
    failed = 0
    for i, file_path in enumerate(files, 1):
        logger.info("Processing image %d/%d: %s", i, len(files), file_path.name)
        try:
            text = engine.extract_text(file_path, psm=config.ocr.psm)
            record = extractor.extract(text, source_file=file_path.name)
        except Exception as exc:
            logger.error("Failed to process %s: %s", file_path.name, exc)
            failed += 1
            continue

        records.append(record)
        if verbose:
            print(json.dumps(record.to_dict(), indent=2))

    if records:
        _write_json(records, output_path)
        logger.info("Processing complete. Results saved to %s", output_path)
    else:
        logger.warning("No results were extracted from any images")

    summary = {"total": len(files), "successful": len(records), "failed": failed}
    _print_summary(summary, output_path)
    return records


def _write_json(records: list[ExtractedRecord], output_path: Path) -> None:
    """Write extraction records to a JSON array file.

    Args:
        records: Records to serialize.
        output_path: Path for the output JSON file.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump([r.to_dict() for r in records], f, indent=2)


def _print_summary(summary: dict[str, int], output_path: Path) -> None:
    """Print batch processing summary to stdout.

    Args:
        summary: Counts of total, successful, and failed images.
        output_path: Path to the output JSON.
    """
    print(f"\n{'=' * 50}")
    print("Batch Processing Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_path}")


def extract_single(
    file_path: Path,
    config: AppConfig | None = None,
    debug: bool = False,
) -> ExtractedRecord:
    """Recognize and extract a single image.

    Args:
        file_path: Path to the image file.
        config: Application configuration. Loaded from disk if ``None``.
        debug: Whether to dump raw OCR text.

    Returns:
        Extracted record for the image.

    Raises:
        RecognitionError: If OCR fails for the image.
    """
    config = config or load_config()
    engine = TesseractEngine(config.ocr.tesseract_cmd, config.ocr.default_lang)
    extractor = _build_extractor(config, debug)

    text = engine.extract_text(file_path, psm=config.ocr.psm)
    return extractor.extract(text, source_file=file_path.name)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Real Estate Document OCR",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="YAML configuration file"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    batch_parser = subparsers.add_parser("batch", help="Process a folder of images")
    batch_parser.add_argument(
        "input_dir",
        type=Path,
        nargs="?",
        help="Input directory with images (default: from config)",
    )
    batch_parser.add_argument(
        "-o", "--output", type=Path, help="Output JSON file (default: from config)"
    )
    batch_parser.add_argument(
        "--debug-dir", type=Path, help="Directory for raw OCR text dumps"
    )
    batch_parser.add_argument(
        "--no-debug", action="store_true", help="Do not save raw OCR text"
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Print each extracted record"
    )

    single_parser = subparsers.add_parser("extract", help="Process a single image")
    single_parser.add_argument("file", type=Path, help="Image file to process")
    single_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(config.log_level)

    if args.command == "batch":
        if args.debug_dir:
            config.debug.directory = str(args.debug_dir)
        records = process_folder(
            args.input_dir or Path(config.batch.image_dir),
            args.output or Path(config.batch.output_path),
            config,
            debug=config.debug.enabled and not args.no_debug,
            verbose=args.verbose,
        )
        logger.info("Processed %d images successfully", len(records))
    elif args.command == "extract":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        try:
            record = extract_single(args.file, config, debug=config.debug.enabled)
        except (RecognitionError, ValueError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        output_str = json.dumps(record.to_dict(), indent=2)
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
