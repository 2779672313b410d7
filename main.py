#!/usr/bin/env python3
"""
Command line front end: fetch a page and print its metadata as JSON.
"""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from pagemeta import extract, FetchConfig, ServiceError
from pagemeta.config.logging_config import setup_logging

logger = logging.getLogger("pagemeta.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract Open Graph and related metadata from a web page")
    parser.add_argument("url", help="Page URL")
    parser.add_argument("--user-agent", help="User-Agent header to send")
    parser.add_argument("--referrer", help="Referer header to send")
    parser.add_argument("--timeout-millis", type=int, help="Request timeout in milliseconds (0 disables it)")
    parser.add_argument("--ignore-http-errors", action="store_true", help="Parse error pages instead of failing")
    parser.add_argument("--no-follow-redirects", action="store_true", help="Do not follow redirects")
    parser.add_argument("--insecure", action="store_true", help="Skip TLS certificate validation")
    parser.add_argument("--strict-content-type", action="store_true", help="Reject non-HTML responses")
    parser.add_argument("--log-level", default=None, help="Logging level (default: PAGEMETA_LOG_LEVEL or INFO)")
    return parser


def config_from_args(args: argparse.Namespace) -> FetchConfig:
    """Overlay command line options on the environment defaults"""
    overrides = {}
    if args.user_agent is not None:
        overrides["user_agent"] = args.user_agent
    if args.referrer is not None:
        overrides["referrer"] = args.referrer
    if args.timeout_millis is not None:
        overrides["timeout_millis"] = args.timeout_millis
    if args.ignore_http_errors:
        overrides["ignore_http_errors"] = True
    if args.no_follow_redirects:
        overrides["follow_redirects"] = False
    if args.insecure:
        overrides["validate_tls_certificates"] = False
    if args.strict_content_type:
        overrides["ignore_content_type"] = False

    base = FetchConfig.from_settings()
    return FetchConfig(**{**base.model_dump(), **overrides})


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level)

    try:
        config = config_from_args(args)
    except ValidationError as e:
        parser.error(str(e))

    try:
        record = extract(args.url, config)
    except ServiceError as e:
        logger.error(f"{e.error_code}: {e.message}")
        print(json.dumps({"error": e.error_code, "message": e.message}), file=sys.stderr)
        return 1

    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
