"""Command-line entry point: send a single Mailgun API request."""

import argparse
import json
import sys
from typing import Dict, List, Optional, Sequence

import structlog

from mailgun_client.api.client import RestClient
from mailgun_client.api.errors import GenericHTTPError, MailgunError
from mailgun_client.config import get_settings
from mailgun_client.logging import setup_logging


logger = structlog.get_logger()


def _parse_pairs(pairs: Sequence[str]) -> Dict[str, List[str]]:
    """Group ``key=value`` arguments; repeated keys keep every value."""
    grouped: Dict[str, List[str]] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected key=value, got: {pair}")
        grouped.setdefault(key, []).append(value)
    return grouped


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mailgun_client",
        description="Send one request to the Mailgun API and print the response body.",
    )
    parser.add_argument("method", choices=["get", "post", "put", "delete"])
    parser.add_argument("path", help="Path relative to the API base, e.g. example.com/messages")
    parser.add_argument(
        "-d",
        "--data",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Form field (post/put) or query parameter (get); repeatable",
    )
    parser.add_argument(
        "-f",
        "--file",
        action="append",
        default=[],
        metavar="FIELD=PATH",
        help="File for the message, attachment or inline field (post only)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one request. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    try:
        data = _parse_pairs(args.data)
        files = _parse_pairs(args.file)
    except argparse.ArgumentTypeError as e:
        print(str(e), file=sys.stderr)
        return 2

    with RestClient.from_settings(settings) as client:
        try:
            if args.method == "get":
                result = client.get(args.path, data)
            elif args.method == "post":
                result = client.post(args.path, data, files)
            elif args.method == "put":
                result = client.put(args.path, data)
            else:
                result = client.delete(args.path)
        except GenericHTTPError as e:
            logger.error("Request failed", status_code=e.status_code, error=str(e))
            if e.response_body:
                print(e.response_body)
            return 1
        except MailgunError as e:
            logger.error("Request failed", error=str(e))
            return 1
        except OSError as e:
            logger.error("Could not read upload file", error=str(e))
            return 1

    if isinstance(result.data, str):
        print(result.data)
    else:
        print(json.dumps(result.data, indent=2))
    return 0


def run() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
