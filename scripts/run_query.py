#!/usr/bin/env python3
"""
Query execution script

Usage:
  python scripts/run_query.py run --query-file <path> [--driver static|playwright] [--headed]
  python scripts/run_query.py run --query-id <id> [--driver static|playwright]
  python scripts/run_query.py api --query-id <id> --api-base-url <url>

Examples:
  python scripts/run_query.py queries/example.yaml
  python scripts/run_query.py run --query-id example --driver playwright
  python scripts/run_query.py api --query-id example --api-base-url http://localhost:8000
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import requests
from dotenv import load_dotenv

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

load_dotenv()

from infrastructure.config.env_defaults_provider import EnvDefaultsProvider
from infrastructure.logging.log_setup import setup_console_logging
from application.services.execution_deps import ExecutionDeps
from domain.exceptions import QueryError
from infrastructure.drivers.static_driver import StaticPageDriver
from infrastructure.logging.loguru_logger import LoguruLogger
from infrastructure.query.base_loader import QueryLoadError
from infrastructure.query.file_finder import QueryFileFinder
from infrastructure.query.loader_registry import QueryLoaderRegistry


QUERIES_DIR = Path(__file__).parent.parent / "queries"
DEFAULT_API_TIMEOUT_SEC = 30


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Page query helper")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run a query locally")
    run_parser.add_argument("--query-id", type=str)
    run_parser.add_argument("--query-file", type=str)
    run_parser.add_argument("--driver", type=str, choices=["static", "playwright"], default="static")
    run_parser.add_argument("--headed", action="store_true", help="Show the browser (playwright driver)")

    api_parser = subparsers.add_parser("api", help="Run a stored query via the API")
    api_parser.add_argument("--query-id", type=str, required=True)
    api_parser.add_argument("--api-base-url", type=str, required=True)

    return parser


def _resolve_query_path(args: argparse.Namespace) -> Path:
    if args.query_file:
        return Path(args.query_file)
    if not args.query_id:
        raise ValueError("query-file or query-id is required")
    path = QueryFileFinder(QUERIES_DIR).find_by_id(args.query_id)
    if path is None:
        raise ValueError(f"Query file not found: {args.query_id}")
    return path


def _run_local(args: argparse.Namespace) -> int:
    path = _resolve_query_path(args)
    try:
        query = QueryLoaderRegistry().get_loader(path).load_from_file(path)
    except (QueryLoadError, QueryError) as e:
        raise ValueError(f"Failed to load query: {e}") from e

    print(f"Query: {query.method} {query.url}")
    print(f"Steps: {len(query.steps)}")

    defaults = EnvDefaultsProvider().get()
    deps = ExecutionDeps(logger=LoguruLogger(), defaults=defaults)

    try:
        if args.driver == "playwright":
            results = _run_with_playwright(query, deps, headless=not args.headed)
        else:
            results = query.run(StaticPageDriver(defaults=defaults), deps=deps)
    except QueryError as e:
        print(f"\nFAILED ({type(e).__name__}): {e}")
        return 1

    print(json.dumps(results, indent=2, ensure_ascii=False))
    return 0


def _run_with_playwright(query, deps: ExecutionDeps, headless: bool):
    from playwright.sync_api import sync_playwright

    from infrastructure.drivers.playwright_driver import PlaywrightPageDriver

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=headless)
        try:
            page = browser.new_page(user_agent=deps.defaults.user_agent)
            return query.run(PlaywrightPageDriver(page, defaults=deps.defaults), deps=deps)
        finally:
            browser.close()


def _run_api(args: argparse.Namespace) -> int:
    url = f"{args.api_base_url.rstrip('/')}/queries/{args.query_id}/run"
    response = requests.post(url, timeout=DEFAULT_API_TIMEOUT_SEC)
    print(f"Status: {response.status_code}")
    data = response.json()
    print(json.dumps(data, indent=2, ensure_ascii=False))
    if response.status_code >= 400:
        return 1
    return 0 if data.get("success") else 1


def main() -> None:
    parser = _build_parser()
    argv = sys.argv[1:]
    if argv and argv[0] not in {"run", "api"} and not argv[0].startswith("-"):
        argv = ["run", "--query-file", argv[0]] + argv[1:]
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        setup_console_logging(level=EnvDefaultsProvider().log_level())
        if args.command == "run":
            exit_code = _run_local(args)
        elif args.command == "api":
            exit_code = _run_api(args)
        else:
            raise ValueError(f"Unknown command: {args.command}")
    except ValueError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)
    except requests.RequestException as exc:
        print(f"ERROR: request failed: {exc}")
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
