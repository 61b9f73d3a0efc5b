import argparse
import sys
from datetime import datetime, timezone

from url_extract.config import get_settings
from url_extract.output_json import generate_run_id, write_canonical_json
from url_extract.processing.text_extraction import extract_urls_from_file, get_source_type
from url_extract.utils.logger import redirect_logs, setup_logger
from url_extract.utils.urls import ExtractionAborted, extract_urls

logger = setup_logger()


def process_inputs(paths: list[str], strip_arguments: bool) -> list[dict]:
    """Run extraction over each input, recording failures per document."""
    documents = []

    for path in paths:
        logger.info(f"Extracting URLs from: {path}")
        errors = []
        urls = set()

        if path == "-":
            source_type = "stdin"
            try:
                urls = extract_urls(sys.stdin.read(), strip_arguments)
            except ExtractionAborted as e:
                errors.append(str(e))
        else:
            source_type = get_source_type(path)
            try:
                with open(path, "rb") as f:
                    file_bytes = f.read()
                urls = extract_urls_from_file(path, file_bytes, strip_arguments)
            except (OSError, ValueError, ExtractionAborted) as e:
                logger.error(f"Failed to extract URLs from {path}: {e}")
                errors.append(str(e))

        logger.info(f"Found {len(urls)} URLs in {path}")
        documents.append({
            "uri": path,
            "source_type": source_type,
            "urls": urls,
            "errors": errors,
        })

    return documents


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract URLs from text, HTML, PDF and DOCX files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m url_extract.main notes.txt page.html --print
  cat mail.txt | python -m url_extract.main - --strip-arguments --output-dir reports
        """,
    )
    try:
        settings = get_settings()
    except ValueError as e:
        parser.error(f"invalid configuration: {e}")

    parser.add_argument("inputs", nargs="+", help="Input files ('-' reads stdin)")
    parser.add_argument(
        "--strip-arguments",
        action=argparse.BooleanOptionalAction,
        default=settings.strip_arguments,
        help="Drop query strings from extracted URLs",
    )
    parser.add_argument("--output-dir", default=settings.output_dir, help="Directory for the JSON report")
    parser.add_argument("--print", dest="print_urls", action="store_true", help="Also print unique URLs")

    args = parser.parse_args(argv)

    # stdout is reserved for --print output
    with redirect_logs(sys.stderr):
        exit_code = _run(args)
    return exit_code


def _run(args) -> int:
    start_time = datetime.now(timezone.utc)
    documents = process_inputs(args.inputs, args.strip_arguments)

    result = write_canonical_json(
        run_id=generate_run_id(args.inputs),
        triggered_by="cli",
        strip_arguments=args.strip_arguments,
        documents=documents,
        start_time=start_time,
        output_dir=args.output_dir,
    )
    logger.info(f"Report written to {result['output_path']}")

    if args.print_urls:
        all_urls = set()
        for doc in documents:
            all_urls.update(doc["urls"])
        for url in sorted(all_urls):
            print(url)

    return 1 if result["stats"]["total_errors"] else 0


if __name__ == "__main__":
    sys.exit(main())
