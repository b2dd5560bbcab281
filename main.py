#!/usr/bin/env python3
"""Command-line entry point: run one fetch_url or google_search call and print the result."""

import argparse
import json
import sys

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from tools.web.factory import create_tool_service_from_env  # noqa: E402

FORMATS = ["text", "json", "html", "markdown"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch Browser - fetch pages and search Google")
    parser.add_argument(
        "--show-metadata", action="store_true", help="Print response metadata to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch = subparsers.add_parser("fetch", help="Fetch a URL")
    fetch.add_argument("url", help="Absolute http(s) URL")
    fetch.add_argument("--format", dest="response_type", choices=FORMATS, default="text")
    fetch.add_argument("--timeout", type=int, default=None, help="Timeout in milliseconds")

    search = subparsers.add_parser("search", help="Run a Google search")
    search.add_argument("query", help="Search query")
    search.add_argument("--format", dest="response_type", choices=FORMATS, default="json")
    search.add_argument("--max-results", type=int, default=10)
    search.add_argument("--topic", choices=["web", "news"], default="web")
    search.add_argument("--deep", action="store_true", help="Fetch every result page too")

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run the CLI.

    Returns:
        Process exit status: 0 on success, 1 when the tool returned an error
    """
    args = build_parser().parse_args(argv)
    service = create_tool_service_from_env()

    if args.command == "fetch":
        result = service.fetch_url_sync(args.url, args.response_type, args.timeout)
    else:
        result = service.google_search_sync(
            args.query, args.response_type, args.max_results, args.topic, deep=args.deep
        )

    if args.show_metadata:
        print(json.dumps(result.metadata, indent=2, default=str), file=sys.stderr)

    if result.is_error:
        print(f"Error: {result.text}", file=sys.stderr)
        return 1

    print(result.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
