"""
Command line entry point: encode JSON input as a URL query string.

Usage:
    query-encode '{"page": 1, "filter": {"state": "open"}}'
    echo '["a", "1", "b", "2"]' | query-encode --url "https://example.com/api?x=1"
"""
import argparse
import dataclasses
import json
import logging
import sys
from typing import List, Optional

from query.encode import QueryEncoder
from query.errors import QueryError
from query.options import EncoderOptions
from utils.request_query import append_query
import config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="query-encode",
        description="Encode a JSON object or array as a URL query string.",
    )
    parser.add_argument(
        "data",
        nargs="?",
        help="JSON document to encode (read from stdin when omitted)",
    )
    parser.add_argument(
        "--url",
        help="Append the query to this URL instead of printing it alone",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=config.MAX_DEPTH,
        help="Deepest nesting accepted (default: %(default)s)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    args = build_parser().parse_args(argv)
    raw = args.data if args.data is not None else sys.stdin.read()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Input is not valid JSON: {e}")
        return 2

    options = EncoderOptions.from_config()
    if args.max_depth != options.max_depth:
        options = dataclasses.replace(options, max_depth=args.max_depth)

    try:
        values = QueryEncoder(options).encode(data)
    except QueryError as e:
        logger.error(f"Failed to encode input: {e}")
        return 1

    query_string = values.encode()
    if args.url:
        print(append_query(args.url, query_string))
    else:
        print(query_string)
    return 0


if __name__ == "__main__":
    sys.exit(main())
