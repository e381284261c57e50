"""Command-line interface for QuoteSmith."""

import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn
from pydantic import ValidationError

from .config import settings


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="QuoteSmith - Procurement quote risk detection and remediation"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to (default: {settings.port})"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze a decoded quote document (JSON) and print the result"
    )
    analyze_parser.add_argument("input", help="Path to a JSON document with rows and column mapping")
    analyze_parser.add_argument(
        "--format",
        "-f",
        choices=["report", "json", "csv"],
        default="report",
        help="Output format (default: report)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        run_server(args.host, args.port, args.reload)
    elif args.command == "analyze":
        sys.exit(run_analyze(args.input, args.format))
    else:
        parser.print_help()
        sys.exit(1)


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "quotesmith.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def run_analyze(path: str, output_format: str = "report") -> int:
    """Analyze a document file and print it in the chosen format. Returns an exit code."""
    from .analysis import DocumentInput, analyze_document
    from .export import analysis_to_json, generate_risk_report, rows_to_csv

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        document = DocumentInput.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"Could not read {path}: {e}", file=sys.stderr)
        return 1

    if not document.file_name:
        document = document.model_copy(update={"file_name": Path(path).name})

    analysis = analyze_document(document)

    if output_format == "json":
        print(analysis_to_json(analysis))
    elif output_format == "csv":
        print(rows_to_csv(analysis.rows))
    else:
        print(generate_risk_report(analysis))

    return 0 if analysis.success else 2


if __name__ == "__main__":
    main()
