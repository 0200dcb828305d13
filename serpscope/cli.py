"""Command line entry point for serpscope."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from loguru import logger

from serpscope import __version__
from serpscope.config.loader import load_config
from serpscope.config.schema import Config
from serpscope.engine.browser import BrowserSession, install_browser
from serpscope.engine.extractor import SearchEngine
from serpscope.engine.models import SearchMode, SearchRequest
from serpscope.errors import ScraperError


def configure_logging(config: Config) -> None:
    """Route loguru output to stderr at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=config.logging.level.upper(), serialize=config.logging.serialize)


def _cmd_serve(config: Config, args: argparse.Namespace) -> int:
    import uvicorn

    from serpscope.server.app import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    logger.info("Serving on {}:{}", host, port)
    uvicorn.run(create_app(config), host=host, port=port, log_level=config.logging.level.lower())
    return 0


async def _run_search(config: Config, mode: SearchMode, query: str) -> dict:
    session = BrowserSession(config.browser)
    engine = SearchEngine(
        session,
        browser_config=config.browser,
        search_config=config.search,
        limits=config.limits,
    )
    try:
        return await engine.run(SearchRequest(query=query, mode=mode))
    finally:
        await session.close()


def _cmd_search(config: Config, args: argparse.Namespace) -> int:
    query = args.query.strip()
    if not query:
        print(json.dumps({"error": "query must not be empty"}))
        return 2
    try:
        payload = asyncio.run(_run_search(config, SearchMode(args.mode), query))
    except ScraperError as e:
        print(json.dumps({"error": e.message}, ensure_ascii=False))
        return 1
    print(json.dumps(payload, ensure_ascii=False, indent=2 if args.pretty else None))
    return 0


def _cmd_install_browsers(config: Config, args: argparse.Namespace) -> int:
    result = asyncio.run(install_browser(config.browser))
    print(result.details)
    return 0 if result.ok else 1


def build_parser() -> argparse.ArgumentParser:
    # --config is accepted before or after the subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, default=argparse.SUPPRESS, help="Path to config.json")

    parser = argparse.ArgumentParser(prog="serpscope", description=__doc__)
    parser.add_argument("--version", action="version", version=f"serpscope {__version__}")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", parents=[common], help="Run the HTTP service")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(handler=_cmd_serve)

    search = sub.add_parser("search", parents=[common], help="Run one extraction and print JSON")
    search.add_argument("mode", choices=[mode.value for mode in SearchMode])
    search.add_argument("query")
    search.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    search.set_defaults(handler=_cmd_search)

    install = sub.add_parser("install-browsers", parents=[common], help="Install the configured Playwright browser")
    install.set_defaults(handler=_cmd_install_browsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    configure_logging(config)
    return args.handler(config, args)


if __name__ == "__main__":
    raise SystemExit(main())
