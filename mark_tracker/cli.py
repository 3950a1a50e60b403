"""Command-line quest selector.

Usage::

    mark-tracker search pirate king
    mark-tracker search --exclude scout abyss
    mark-tracker search --show-scout abyss
    mark-tracker search --hide "King Who?" king
    mark-tracker list
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Sequence

from termcolor import colored

from mark_tracker import config
from mark_tracker.catalog import Catalog, load_catalog
from mark_tracker.errors import MarkTrackerError
from mark_tracker.logging_config import configure_logging
from mark_tracker.models import Quest
from mark_tracker.normalizer import normalize
from mark_tracker.search import SearchEngine, is_secret_query

logger = logging.getLogger(__name__)

_TIER_COLORS = ("white", "cyan", "green", "yellow", "magenta")


# ---------------------------------------------------------------------------
# Display filters
# ---------------------------------------------------------------------------


def exclude_scout_quests(quests: Iterable[Quest], scout_type: str = config.SCOUT_QUEST_TYPE) -> list[Quest]:
    return [quest for quest in quests if quest.kind != scout_type]


def exclude_tracked_quests(quests: Iterable[Quest], tracked_names: Iterable[str]) -> list[Quest]:
    """Drop quests the user is already tracking, matched by exact name."""
    tracked = set(tracked_names)
    return [quest for quest in quests if quest.name not in tracked]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def format_quest(quest: Quest, tier: int) -> str:
    color = _TIER_COLORS[min(max(tier, 0), len(_TIER_COLORS) - 1)]
    header = colored(f"[{quest.kind} | tier {tier}] {quest.name}", color)
    requirements = ", ".join(f"{req.dungeon} x{req.amount}" for req in quest.requirements)
    return f"{header}  ({quest.total_mark_amount} marks)\n    {requirements}"


def print_quests(catalog: Catalog, quests: Sequence[Quest]) -> None:
    if not quests:
        print(colored("No quests found.", "yellow"))
        return

    print(colored(f"\n{len(quests)} quest(s):\n", "green"))
    for quest in quests:
        print(format_quest(quest, catalog.get_tier_of(quest.kind)))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def search_command(args, catalog: Catalog) -> None:
    query = " ".join(args.query)
    engine = SearchEngine(catalog)

    mode = "Excluding" if args.exclude else "Searching for"
    print(colored(f"{mode}: {query}", "cyan"))

    tokens = normalize(query)
    types = engine.type_candidates(tokens)
    dungeons = engine.dungeon_candidates(tokens)
    if types:
        print(f"Types: {', '.join(types)}")
    if dungeons:
        print(f"Dungeons: {', '.join(dungeons)}")

    quests = engine.search(query, include=not args.exclude)
    if not args.show_scout:
        quests = exclude_scout_quests(quests)
    if args.hide:
        quests = exclude_tracked_quests(quests, args.hide)

    print_quests(catalog, quests)

    if is_secret_query(query):
        print(colored(f"\n{config.SECRET_NOTICE}", "magenta"))


def list_command(args, catalog: Catalog) -> None:
    quests = SearchEngine(catalog).store.sort_by_tier(catalog.all_quests)
    if not args.show_scout:
        quests = exclude_scout_quests(quests)
    print_quests(catalog, quests)


def types_command(args, catalog: Catalog) -> None:
    for kind in catalog.get_types():
        print(f"{kind} (tier {catalog.get_tier_of(kind)})")


def dungeons_command(args, catalog: Catalog) -> None:
    for dungeon in catalog.get_dungeons():
        print(dungeon)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find Tinkerer mark quests")
    parser.add_argument("--data-dir", default=None, help="Directory holding the catalog files")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Log level (default: %(default)s)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    search_parser = subparsers.add_parser("search", help="Search quests by name, type or dungeon")
    search_parser.add_argument("query", nargs="*", help="Search words")
    search_parser.add_argument("--exclude", "-x", action="store_true", help="Show quests NOT matching the query")
    search_parser.add_argument("--hide", action="append", default=[], metavar="NAME", help="Hide a quest you are tracking")

    list_parser = subparsers.add_parser("list", help="List every quest by tier")

    for sub in (search_parser, list_parser):
        sub.add_argument(
            "--show-scout",
            action="store_true",
            default=not config.HIDE_SCOUT_QUESTS,
            help="Include Scout quests",
        )

    subparsers.add_parser("types", help="List quest types and their tiers")
    subparsers.add_parser("dungeons", help="List supported dungeons")
    return parser


_COMMANDS = {
    "search": search_command,
    "list": list_command,
    "types": types_command,
    "dungeons": dungeons_command,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.log_level)

    try:
        catalog = load_catalog(args.data_dir)
    except (MarkTrackerError, OSError):
        logger.exception("catalog_load_failed", extra={"data_dir": args.data_dir})
        print(colored("Error: could not load the quest catalog.", "red"), file=sys.stderr)
        return 2

    _COMMANDS[args.command](args, catalog)
    return 0


if __name__ == "__main__":
    sys.exit(main())
