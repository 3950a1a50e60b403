"""Search engine: turns free text into a ranked list of quests.

A query is matched three ways: against quest names, against quest types and
against required dungeons. Include mode returns the union of the three hit
lists, ranked by how many lists a quest appears in and then by tier. Exclude
mode returns only quests that survive all three exclusions.
"""

from __future__ import annotations

import logging
from itertools import groupby
from typing import Iterable, Sequence

from mark_tracker import config
from mark_tracker.catalog import Catalog
from mark_tracker.models import Quest
from mark_tracker.normalizer import normalize, normalize_label
from mark_tracker.quest_store import QuestStore

logger = logging.getLogger(__name__)


def is_secret_query(text: str) -> bool:
    """True for the easter egg query. Has no effect on ranking."""
    return text.lower() == config.SECRET_QUERY


def _matching_labels(labels: Iterable[str], tokens: Sequence[str]) -> list[str]:
    return [
        label for label in labels
        if any(token in normalize_label(label) for token in tokens)
    ]


class SearchEngine:
    def __init__(self, catalog: Catalog, store: QuestStore | None = None) -> None:
        self._catalog = catalog
        self._store = store if store is not None else QuestStore(catalog)

    @property
    def store(self) -> QuestStore:
        return self._store

    def type_candidates(self, tokens: Sequence[str]) -> list[str]:
        """Valid quest types whose label contains any token."""
        return _matching_labels(self._catalog.get_types(), tokens)

    def dungeon_candidates(self, tokens: Sequence[str]) -> list[str]:
        """Valid dungeon names whose label contains any token."""
        return _matching_labels(self._catalog.get_dungeons(), tokens)

    def search(self, raw_query: str, include: bool = True) -> list[Quest]:
        """Return the quests matching (or, with ``include=False``, not matching) a query.

        Blank queries and queries that hit nothing give an empty list in
        include mode and the whole catalog, highest tier first, in exclude mode.
        """
        tokens = normalize(raw_query)
        if not tokens:
            return self._no_match(include)

        type_candidates = self.type_candidates(tokens)
        dungeon_candidates = self.dungeon_candidates(tokens)

        name_hits = self._store.filter_by_name(tokens, include)
        type_hits = self._store.sort_by_tier(self._store.filter_by_type(type_candidates, include))
        dungeon_hits = self._store.sort_by_tier(
            self._store.filter_by_dungeon(dungeon_candidates, include)
        )

        # Dungeon side counts candidates, not hits: a matched dungeon label
        # with no quests still counts as a match.
        if len(name_hits) + len(type_hits) + len(dungeon_candidates) == 0:
            return self._no_match(include)

        if include:
            results = self._rank_union(name_hits, dungeon_hits, type_hits)
        else:
            results = self._intersection(name_hits, dungeon_hits, type_hits)

        logger.debug(
            "search_completed",
            extra={
                "tokens": tokens,
                "include": include,
                "type_candidates": type_candidates,
                "dungeon_candidates": dungeon_candidates,
                "result_count": len(results),
            },
        )
        return results

    def _no_match(self, include: bool) -> list[Quest]:
        if include:
            return []
        # nothing to exclude, so everything stays
        return self._store.sort_by_tier(self._catalog.all_quests)

    def _rank_union(
        self,
        name_hits: list[Quest],
        dungeon_hits: list[Quest],
        type_hits: list[Quest],
    ) -> list[Quest]:
        """Group quests by how many hit lists contain them, most first.

        Lists are scanned name, dungeon, then type hits, and a quest moves to
        the back each time it is counted again. The tally is then sorted by
        count and reversed, so within a group equal tiers come out latest
        counted first.
        """
        hit_counts: dict[Quest, int] = {}
        for hit_list in (name_hits, dungeon_hits, type_hits):
            for quest in hit_list:
                hit_counts[quest] = hit_counts.pop(quest, 0) + 1

        tally = sorted(hit_counts.items(), key=lambda item: item[1])
        tally.reverse()

        ranked: list[Quest] = []
        for _, group in groupby(tally, key=lambda item: item[1]):
            ranked.extend(self._store.sort_by_tier(quest for quest, _ in group))
        return ranked

    def _intersection(
        self,
        name_hits: list[Quest],
        dungeon_hits: list[Quest],
        type_hits: list[Quest],
    ) -> list[Quest]:
        # A quest survives only if no criterion excluded it.
        in_dungeon_hits = set(dungeon_hits)
        in_type_hits = set(type_hits)
        survivors = [
            quest for quest in name_hits
            if quest in in_dungeon_hits and quest in in_type_hits
        ]
        return self._store.sort_by_tier(survivors)
