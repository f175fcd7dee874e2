"""Command-line access to the portal search engine.

Reads collections from a JSON store file (one object whose keys hold the
``recordings``, ``notes`` and ``exercises`` arrays) and prints JSON results.
Successful searches are recorded in the store's history and popular-term counters.
"""

# ruff: noqa: T201  # CLI intentionally prints results

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence
from pathlib import Path
import sys
import textwrap
from typing import Any

import orjson
from pydantic import BaseModel, ValidationError

from portal_search.adapters.store import AbstractKeyValueStore, build_store
from portal_search.config import Settings
from portal_search.domain.search import FilterCondition, FilterOp
from portal_search.observability.logging import configure_logging
from portal_search.service_layer.history_service import SearchHistoryService
from portal_search.service_layer.search_service import SearchService


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portal-search",
        description="Search portal recordings, notes and exercises",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """
            Examples:
              portal-search --store portal.json search grammar --collection notes --limit 5
              portal-search --store portal.json search quran --collection recordings --filter duration:gte=30
              portal-search --store portal.json global tafsir --facet subject --fuzzy
              portal-search --store portal.json history
              portal-search --store portal.json popular
            """
        ).strip(),
    )
    parser.add_argument(
        "--store",
        type=Path,
        default=None,
        help="JSON store file (default: STORE_PATH setting)",
    )
    parser.add_argument("--log-level", default=None, help="Override the LOG_LEVEL setting")

    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Search a single collection")
    search_parser.add_argument("query", help="Free-text query")
    search_parser.add_argument("--collection", required=True, help="Collection name (recordings, notes, exercises)")
    _add_search_options(search_parser)

    global_parser = subparsers.add_parser("global", help="Search every collection")
    global_parser.add_argument("query", help="Free-text query")
    _add_search_options(global_parser)

    history_parser = subparsers.add_parser("history", help="Show recent searches")
    history_parser.add_argument("--clear", action="store_true", help="Forget all recorded searches")

    subparsers.add_parser("popular", help="Show the most searched terms")
    return parser


def _add_search_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--field",
        dest="fields",
        action="append",
        default=None,
        metavar="PATH",
        help="Field to scan (repeatable, replaces the collection defaults)",
    )
    parser.add_argument(
        "--boost",
        action="append",
        default=None,
        metavar="FIELD=WEIGHT",
        help="Field weight (repeatable, replaces the collection defaults)",
    )
    parser.add_argument("--fuzzy", action="store_true", help="Enable typo-tolerant matching")
    parser.add_argument("--case-sensitive", action="store_true", help="Match field text case-sensitively")
    parser.add_argument(
        "--filter",
        dest="filters",
        action="append",
        default=None,
        metavar="FIELD[:OP]=VALUE",
        help="Filter results; OP is one of gt, gte, lt, lte, ne, contains, startsWith, endsWith",
    )
    parser.add_argument(
        "--facet",
        dest="facets",
        action="append",
        default=None,
        metavar="PATH",
        help="Field to aggregate into a facet (repeatable)",
    )
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of items per collection")
    parser.add_argument("--offset", type=int, default=0, help="Number of items to skip")
    parser.add_argument("--order-by", default=None, help="Field to sort by")
    parser.add_argument("--desc", action="store_true", help="Sort descending")


def parse_boosts(entries: Sequence[str] | None) -> dict[str, float] | None:
    if not entries:
        return None
    boosts: dict[str, float] = {}
    for entry in entries:
        field_name, sep, weight = entry.partition("=")
        if not sep or not field_name:
            raise ValueError(f"Invalid boost '{entry}', expected FIELD=WEIGHT")
        try:
            boosts[field_name] = float(weight)
        except ValueError as exc:
            raise ValueError(f"Invalid boost weight in '{entry}'") from exc
    return boosts


def parse_filters(entries: Sequence[str] | None) -> dict[str, Any] | None:
    """Parse ``FIELD=VALUE`` literals and ``FIELD:OP=VALUE`` conditions.

    Repeating a literal filter for the same field builds a membership list.
    """
    if not entries:
        return None
    filters: dict[str, Any] = {}
    for entry in entries:
        key, sep, value = entry.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid filter '{entry}', expected FIELD=VALUE or FIELD:OP=VALUE")
        field_name, _, operator = key.partition(":")
        if operator:
            filters[field_name] = FilterCondition(operator=FilterOp.parse(operator), value=value)
        elif field_name in filters:
            existing = filters[field_name]
            filters[field_name] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            filters[field_name] = value
    return filters


def build_options(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "fields": args.fields,
        "boost": parse_boosts(args.boost),
        "fuzzy": args.fuzzy,
        "case_sensitive": args.case_sensitive,
        "filters": parse_filters(args.filters),
        "facets": args.facets,
        "limit": args.limit,
        "offset": args.offset,
        "order_by": args.order_by,
        "order_direction": "desc" if args.desc else "asc",
    }


def _emit(payload: Any) -> None:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True)
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")


def main(argv: Sequence[str] | None = None, *, store: AbstractKeyValueStore | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return 1

    configure_logging(args.log_level or settings.log_level, json_output=settings.log_json)

    if store is None:
        store = build_store(args.store or settings.get_store_path())
    history = SearchHistoryService(store, settings)

    if args.command == "history":
        if args.clear:
            history.clear_search_history()
        _emit(history.get_search_history())
        return 0

    if args.command == "popular":
        _emit([term.model_dump(mode="json", by_alias=True) for term in history.get_popular_search_terms()])
        return 0

    try:
        options = build_options(args)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    service = SearchService(store, settings=settings)
    if args.command == "search":
        response = asyncio.run(service.search_collection(args.collection, args.query, options))
    else:
        response = asyncio.run(service.global_search(args.query, options))

    if response.success:
        history.add_to_search_history(args.query)
        history.track_search_term(args.query)

    _emit(response)
    return 0 if response.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
