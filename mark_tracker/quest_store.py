"""Quest store: filtering and tier sorting over the fixed catalog.

Each filter runs independently over the whole catalog and returns a new list;
nothing here holds state between calls.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from mark_tracker.catalog import Catalog
from mark_tracker.models import Quest
from mark_tracker.normalizer import normalize_name


class QuestStore:
    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def all_quests(self) -> list[Quest]:
        return list(self._catalog.all_quests)

    def filter_by_name(self, tokens: Sequence[str], include: bool = True) -> list[Quest]:
        """Filter quests by how many tokens occur in their name.

        Differs from the type and dungeon filters: every token is counted
        against the name, and include mode orders by that hit count.

        Args:
            tokens: normalized search tokens.
            include: return matching quests (True) or non-matching ones (False).

        Returns:
            Include mode: quests with at least one hit, most hits first,
            catalog order among equal counts. Exclude mode: quests with no
            hits, in catalog order.
        """
        matches: list[tuple[Quest, int]] = []
        misses: list[Quest] = []
        for quest in self._catalog.all_quests:
            name = normalize_name(quest.name)
            hits = sum(1 for token in tokens if token in name)
            if hits:
                matches.append((quest, hits))
            else:
                misses.append(quest)

        if not include:
            return misses
        # sorted() is stable with reverse=True, so ties keep catalog order
        matches = sorted(matches, key=lambda match: match[1], reverse=True)
        return [quest for quest, _ in matches]

    def filter_by_type(self, type_names: Iterable[str], include: bool = True) -> list[Quest]:
        """Filter quests whose kind equals one of ``type_names``.

        Raises:
            InvalidCriterion: if any name is not a supported quest type.
        """
        wanted = set()
        for kind in type_names:
            self._catalog.validate_type(kind)
            wanted.add(kind)

        return [
            quest for quest in self._catalog.all_quests
            if (quest.kind in wanted) == include
        ]

    def filter_by_dungeon(self, dungeon_names: Iterable[str], include: bool = True) -> list[Quest]:
        """Filter quests that require marks from any of ``dungeon_names``.

        Expects canonical dungeon names (e.g. ``AbyssOfDemons``), not user words.

        Raises:
            InvalidCriterion: if any name is not a supported dungeon.
        """
        wanted = set()
        for dungeon in dungeon_names:
            self._catalog.validate_dungeon(dungeon)
            wanted.add(dungeon)

        return [
            quest for quest in self._catalog.all_quests
            if any(dungeon in wanted for dungeon in quest.dungeons) == include
        ]

    def sort_by_tier(self, quests: Iterable[Quest], ascending: bool = False) -> list[Quest]:
        """Order quests by tier, highest first.

        Equal tiers keep their input order. Ascending order is the descending
        result reversed, so tied quests also appear reversed.
        """
        descending = sorted(
            quests,
            key=lambda quest: self._catalog.get_tier_of(quest.kind),
            reverse=True,
        )
        if ascending:
            descending.reverse()
        return descending
