"""CLI entry point for reportpack."""

import argparse
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import Literal, Optional, cast

from reportpack.config import Settings, get_settings
from reportpack.errors import ReportPackError
from reportpack.metrics import extract_metadata
from reportpack.models import ParsedReport

logger = logging.getLogger(__name__)


def _load(file: str, settings: Settings) -> tuple[bytes, ParsedReport]:
    """Read and parse a report, exiting with status 1 on failure."""
    from reportpack.pipeline import parse_report

    path = Path(file)
    if not path.is_file():
        logger.error(f"File not found: {file}")
        sys.exit(1)

    content = path.read_bytes()
    mime_type, _ = mimetypes.guess_type(path.name)
    try:
        return content, parse_report(content, path.name, mime_type, settings)
    except ReportPackError as e:
        logger.error(str(e))
        sys.exit(1)


def parse(
    file: str,
    max_chunk_size: Optional[int] = None,
    overlap: Optional[int] = None,
    as_json: bool = False,
) -> None:
    """Print the chunks of a report.

    Args:
        file: Path to a PDF, DOC, DOCX or TXT report
        max_chunk_size: Override the configured chunk size limit
        overlap: Override the configured window overlap
        as_json: Print chunks as a JSON array instead of a summary
    """
    overrides = {}
    if max_chunk_size is not None:
        overrides["MAX_CHUNK_SIZE"] = max_chunk_size
    if overlap is not None:
        overrides["CHUNK_OVERLAP"] = overlap
    try:
        settings = Settings(**overrides) if overrides else get_settings()
    except ValueError as e:
        logger.error(f"Invalid chunking options: {e}")
        sys.exit(1)

    _, report = _load(file, settings)

    if as_json:
        print(json.dumps([c.to_dict() for c in report.chunks], indent=2))
        return

    print(f"Report: {report.filename} ({report.file_type})")
    print(f"  Characters: {len(report.raw_text)}")
    print(f"  Chunks: {len(report.chunks)}")
    print("")
    for c in report.chunks:
        preview = " ".join(c.content.split())[:70]
        print(f"{c.chunk_index:>4}  {c.section:<36} {len(c.content):>5}  {preview}")


def metrics(file: str, vision: bool = False) -> None:
    """Print the metrics recovered from a report as JSON.

    Args:
        file: Path to the report
        vision: Try the Gemini vision strategy first (PDF only)
    """
    from reportpack.pipeline import analyze_report

    settings = get_settings()
    content, report = _load(file, settings)

    extractor = None
    if vision:
        from reportpack.llm import get_gemini_client
        from reportpack.metrics import VisionMetricsExtractor

        try:
            client = get_gemini_client(settings)
        except ReportPackError as e:
            logger.error(str(e))
            sys.exit(1)
        extractor = VisionMetricsExtractor(client, settings.VISION_PAGES, settings.VISION_DPI)

    result = analyze_report(content, report, extractor)
    print(json.dumps(result.to_dict(), indent=2))


def info(file: str) -> None:
    """Show stack metadata and the section breakdown of a report.

    Args:
        file: Path to the report
    """
    settings = get_settings()
    _, report = _load(file, settings)

    sections: dict[str, int] = {}
    for c in report.chunks:
        sections[c.section] = sections.get(c.section, 0) + 1

    print(f"Report: {report.filename}")
    print(f"  Type: {report.file_type}")
    print(f"  Characters: {len(report.raw_text)}")
    print("")
    print("Metadata:")
    for key, value in extract_metadata(report.raw_text).items():
        print(f"  {key}: {value}")
    print("")
    print("Sections:")
    for section, count in sections.items():
        print(f"  {section}: {count}")


def serve(transport: str = "stdio") -> None:
    """Start the MCP server.

    Args:
        transport: Transport protocol (stdio or sse)
    """
    # Import here to avoid loading MCP unless needed
    from reportpack.server import create_mcp_server

    settings = get_settings()
    extractor = None
    if settings.GEMINI_API_KEY is not None:
        from reportpack.llm import get_gemini_client
        from reportpack.metrics import VisionMetricsExtractor

        extractor = VisionMetricsExtractor(
            get_gemini_client(settings), settings.VISION_PAGES, settings.VISION_DPI
        )

    logger.info(f"Serving reportpack via {transport}")
    mcp = create_mcp_server(settings=settings, vision_extractor=extractor)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reportpack",
        description="reportpack - Health check report parsing, chunking and metrics",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Normalize and chunk a report")
    parse_parser.add_argument("file", help="Path to a PDF, DOC, DOCX or TXT report")
    parse_parser.add_argument("--max-chunk-size", type=int, help="Maximum chunk size in characters")
    parse_parser.add_argument("--overlap", type=int, help="Overlap between windowed chunks")
    parse_parser.add_argument("--json", action="store_true", help="Print chunks as JSON")

    # metrics command
    metrics_parser = subparsers.add_parser("metrics", help="Extract report metrics")
    metrics_parser.add_argument("file", help="Path to the report")
    metrics_parser.add_argument(
        "--vision",
        action="store_true",
        help="Read the first page with Gemini vision (PDF only)",
    )

    # info command
    info_parser = subparsers.add_parser("info", help="Show report metadata and sections")
    info_parser.add_argument("file", help="Path to the report")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start the MCP server")
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    level = "DEBUG" if args.verbose else get_settings().LOG_LEVEL
    logging.basicConfig(level=getattr(logging, level), format="%(message)s")

    if args.command == "parse":
        parse(args.file, args.max_chunk_size, args.overlap, args.json)
    elif args.command == "metrics":
        metrics(args.file, vision=args.vision)
    elif args.command == "info":
        info(args.file)
    elif args.command == "serve":
        serve(args.transport)


if __name__ == "__main__":
    main()
