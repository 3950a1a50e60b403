"""Tests for the quest store filters and tier sort."""

import pytest

from mark_tracker.errors import InvalidCriterion
from mark_tracker.quest_store import QuestStore
from tests.factories import (
    ALL_QUESTS,
    DUNGEONS,
    INTO_THE_NEST,
    KING_WHO,
    PIRATE_KING,
    SCOUT_ABYSS,
    SCOUT_PIT,
    SNAKE_CHARMER,
    make_catalog,
    make_quest,
)


@pytest.fixture
def store():
    return QuestStore(make_catalog())


# ---------------------------------------------------------------------------
# filter_by_name
# ---------------------------------------------------------------------------


class TestFilterByName:
    def test_include_single_token(self, store):
        assert store.filter_by_name(["king"]) == [PIRATE_KING, KING_WHO]

    def test_include_orders_by_hit_count(self, store):
        result = store.filter_by_name(["the", "king"])
        assert result == [PIRATE_KING, SCOUT_ABYSS, KING_WHO, INTO_THE_NEST, SCOUT_PIT]

    def test_include_matches_across_words(self, store):
        # spaces are removed from names before matching
        assert store.filter_by_name(["kingwho"]) == [KING_WHO]

    def test_include_no_hits(self, store):
        assert store.filter_by_name(["dragon"]) == []

    def test_exclude_is_complement(self, store):
        included = store.filter_by_name(["the", "snake"], include=True)
        excluded = store.filter_by_name(["the", "snake"], include=False)
        assert set(included) | set(excluded) == set(ALL_QUESTS)
        assert not set(included) & set(excluded)

    def test_exclude_keeps_catalog_order(self, store):
        assert store.filter_by_name(["king"], include=False) == [
            SCOUT_ABYSS, SNAKE_CHARMER, INTO_THE_NEST, SCOUT_PIT,
        ]

    def test_empty_tokens(self, store):
        assert store.filter_by_name([]) == []
        assert store.filter_by_name([], include=False) == ALL_QUESTS


# ---------------------------------------------------------------------------
# filter_by_type
# ---------------------------------------------------------------------------


class TestFilterByType:
    def test_include(self, store):
        assert store.filter_by_type(["Scout"]) == [SCOUT_ABYSS, SCOUT_PIT]

    def test_include_several(self, store):
        assert store.filter_by_type(["Epic", "Scout"]) == [SCOUT_ABYSS, PIRATE_KING, INTO_THE_NEST, SCOUT_PIT]

    def test_exclude(self, store):
        assert store.filter_by_type(["Scout", "Epic"], include=False) == [KING_WHO, SNAKE_CHARMER]

    def test_empty_set(self, store):
        assert store.filter_by_type([]) == []
        assert store.filter_by_type([], include=False) == ALL_QUESTS

    def test_invalid_type_raises(self, store):
        with pytest.raises(InvalidCriterion):
            store.filter_by_type(["Epic", "scout"])

    @pytest.mark.parametrize("types", [[], ["Scout"], ["Standard", "Epic"], ["Scout", "Standard", "Epic"]])
    def test_include_exclude_partition_catalog(self, store, types):
        included = store.filter_by_type(types, include=True)
        excluded = store.filter_by_type(types, include=False)
        assert set(included) | set(excluded) == set(ALL_QUESTS)
        assert not set(included) & set(excluded)


# ---------------------------------------------------------------------------
# filter_by_dungeon
# ---------------------------------------------------------------------------


class TestFilterByDungeon:
    def test_any_requirement_matches(self, store):
        assert store.filter_by_dungeon(["SnakePit"]) == [KING_WHO, SNAKE_CHARMER, SCOUT_PIT]

    def test_several_dungeons(self, store):
        assert store.filter_by_dungeon(["PirateCave", "TheNest"]) == [KING_WHO, INTO_THE_NEST]

    def test_dungeon_without_quests(self, store):
        assert store.filter_by_dungeon(["ForestMaze"]) == []
        assert store.filter_by_dungeon(["ForestMaze"], include=False) == ALL_QUESTS

    def test_exclude(self, store):
        assert store.filter_by_dungeon(["SnakePit"], include=False) == [SCOUT_ABYSS, PIRATE_KING, INTO_THE_NEST]

    def test_invalid_dungeon_raises(self, store):
        with pytest.raises(InvalidCriterion, match="snake"):
            store.filter_by_dungeon(["snake"])

    def test_invalid_dungeon_raises_in_exclude_mode(self, store):
        with pytest.raises(InvalidCriterion):
            store.filter_by_dungeon(["Atlantis"], include=False)

    @pytest.mark.parametrize("dungeons", [[], ["SnakePit"], DUNGEONS])
    def test_include_exclude_partition_catalog(self, store, dungeons):
        included = store.filter_by_dungeon(dungeons, include=True)
        excluded = store.filter_by_dungeon(dungeons, include=False)
        assert set(included) | set(excluded) == set(ALL_QUESTS)
        assert not set(included) & set(excluded)


# ---------------------------------------------------------------------------
# sort_by_tier
# ---------------------------------------------------------------------------


class TestSortByTier:
    def test_descending(self, store):
        result = store.sort_by_tier(ALL_QUESTS)
        assert result == [PIRATE_KING, INTO_THE_NEST, KING_WHO, SNAKE_CHARMER, SCOUT_ABYSS, SCOUT_PIT]

    def test_descending_is_non_increasing(self, store):
        tiers = [store.catalog.get_tier_of(q.kind) for q in store.sort_by_tier(ALL_QUESTS)]
        assert tiers == sorted(tiers, reverse=True)

    def test_ties_keep_input_order(self, store):
        assert store.sort_by_tier([SCOUT_PIT, KING_WHO, SCOUT_ABYSS]) == [KING_WHO, SCOUT_PIT, SCOUT_ABYSS]

    def test_ascending_is_reversed_descending(self, store):
        quests = [KING_WHO, SNAKE_CHARMER, PIRATE_KING, SCOUT_ABYSS]
        ascending = store.sort_by_tier(quests, ascending=True)
        assert ascending == list(reversed(store.sort_by_tier(quests)))
        # ties flipped rather than re-sorted stably
        assert ascending == [SCOUT_ABYSS, SNAKE_CHARMER, KING_WHO, PIRATE_KING]

    def test_returns_new_list(self, store):
        quests = [SCOUT_ABYSS, PIRATE_KING]
        result = store.sort_by_tier(quests)
        assert result is not quests
        assert quests == [SCOUT_ABYSS, PIRATE_KING]

    def test_empty(self, store):
        assert store.sort_by_tier([]) == []
        assert store.sort_by_tier([], ascending=True) == []

    def test_unknown_kind_raises(self):
        store = QuestStore(make_catalog())
        with pytest.raises(InvalidCriterion):
            store.sort_by_tier([make_quest("Legendary", "Off Catalog")])
