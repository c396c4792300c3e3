#!/usr/bin/env python3
"""Analyze a job page (or look up a careers page) from the command line."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from job_hunter.demo import get_page_analyzer
from job_hunter.environment import is_demo_mode, log_environment_info, validate_environment
from job_hunter.errors import JobHunterError
from job_hunter.log import get_logger, set_level

log = get_logger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("url", nargs="?", help="Page to open and analyze (the company website with --careers)")
    parser.add_argument("--company", help="Company name (for --careers)")
    parser.add_argument("--careers", action="store_true", help="Print the careers page URL for --company")
    parser.add_argument("--headful", action="store_true", help="Show the browser window")
    parser.add_argument("--timeout", type=float, default=None, help="Per-request provider timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on the console")
    args = parser.parse_args(argv)
    if args.careers and not args.company:
        parser.error("--careers requires --company")
    if not args.careers and not args.url:
        parser.error("a URL is required unless --careers is given")
    return args


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.verbose:
        set_level("DEBUG")
    log_environment_info()
    try:
        validate_environment()
        analyzer = get_page_analyzer()

        if args.careers:
            url = analyzer.find_careers_page(args.company, args.url, timeout=args.timeout)
            if url is None:
                log.warning("No careers page found for %s", args.company)
                return 1
            print(url)
            return 0

        if is_demo_mode():
            analysis = analyzer.analyze_page(None)
        else:
            from job_hunter.browser import open_page

            with open_page(args.url, headless=not args.headful) as page:
                analysis = analyzer.analyze_page(page, timeout=args.timeout)
        print(json.dumps(analysis.to_dict(), indent=2))
        return 0
    except JobHunterError as exc:
        log.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
