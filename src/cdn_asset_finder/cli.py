from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List

from .api_config import ApiConfig, load_api_config
from .exceptions import ConfigurationError
from .pipeline import find_assets_with_settings, search_with_settings
from .report import write_report
from .settings import Settings, get_settings


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _resolve_level(level: str) -> int:
    name = (level or "").upper()
    if name not in LOG_LEVELS:
        return logging.INFO
    return logging.getLevelName(name)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=_resolve_level(level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _search_strings(args: argparse.Namespace) -> List[str]:
    terms = [t.strip() for t in (args.search_strings or []) if t and t.strip()]
    # Remove duplicates, preserve order
    return list(dict.fromkeys(terms))


def _load_config(args: argparse.Namespace) -> tuple[Settings, ApiConfig]:
    settings = get_settings()
    if getattr(args, "api_config", None):
        settings.api_config_path = args.api_config  # type: ignore[attr-defined]
    if getattr(args, "log_level", None):
        settings.log_level = args.log_level  # type: ignore[attr-defined]
    api_cfg = load_api_config(settings.api_config_path)
    # CLI flags win over YAML and environment
    if getattr(args, "token", None):
        api_cfg.github.token = args.token
    if getattr(args, "org", None):
        api_cfg.github.org = args.org
    return settings, api_cfg


async def cmd_scan(args: argparse.Namespace) -> int:
    terms = _search_strings(args)
    if not terms:
        print("Please provide a list of CDN strings using the --search-strings option.", file=sys.stderr)
        return 2

    settings, api_cfg = _load_config(args)
    _configure_logging(settings.log_level)
    try:
        assets = await find_assets_with_settings(terms, settings, api_cfg)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 2

    if args.json:
        for a in assets:
            print(json.dumps(a.to_dict(), ensure_ascii=False))

    out = write_report(assets, args.out or settings.output_path)
    if out is not None:
        logging.getLogger(__name__).info("Markdown file has been saved to %s", out)
    print(json.dumps({"status": "ok", "assets": len(assets), "report": str(out) if out else None}))
    return 0


async def cmd_search(args: argparse.Namespace) -> int:
    terms = _search_strings(args)
    if not terms:
        print("Please provide a list of CDN strings using the --search-strings option.", file=sys.stderr)
        return 2

    settings, api_cfg = _load_config(args)
    _configure_logging(settings.log_level)
    try:
        items = await search_with_settings(terms, settings, api_cfg)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 2

    for it in items:
        print(json.dumps({
            "owner": it.owner_login,
            "repository": it.repository_name,
            "path": it.path,
        }, ensure_ascii=False))
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--search-strings",
        "--searchStrings",
        dest="search_strings",
        nargs="+",
        help="CDN strings to search for (e.g. a CDN hostname fragment)",
    )
    p.add_argument("--org", help="GitHub organisation to scope the search to")
    p.add_argument("--token", help="GitHub token (defaults to GITHUB_TOKEN)")
    p.add_argument("--api-config", help="Path to github.yaml with token/org")
    p.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Logging level")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cdn-asset-finder",
        description="Find JavaScript assets referenced through CDN script tags across a GitHub organisation",
    )
    sub = parser.add_subparsers(dest="cmd")

    p_scan = sub.add_parser("scan", help="Search, fetch matching files and write a markdown report of assets")
    _add_common(p_scan)
    p_scan.add_argument("--out", help="Markdown report path (default: identified_assets.md)")
    p_scan.add_argument("--json", action="store_true", help="Also print each asset as a JSON line")
    p_scan.set_defaults(func=cmd_scan)

    p_search = sub.add_parser("search", help="Print code search hits (owner/repository/path) as JSON lines")
    _add_common(p_search)
    p_search.set_defaults(func=cmd_search)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 2
    return asyncio.run(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
