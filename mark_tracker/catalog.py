"""Catalog provider: loads quest data once and serves it as an immutable snapshot.

The loader reads three YAML files (JSON is accepted too, being a YAML subset):

    quest_types.yml   [{type, tier}]
    dungeons.yml      [{dungeon, sheetPos}]
    mark_quests.yml   [{type, name, req: [{dungeon, amount}]}]

Numeric fields may be stored as strings. Any schema violation aborts with
MalformedCatalogData; no partial catalog is ever built.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

import yaml
from pydantic import BaseModel, ValidationError

from mark_tracker import config
from mark_tracker.errors import DuplicateLoad, InvalidCriterion, MalformedCatalogData
from mark_tracker.models import DungeonRecord, Quest, QuestTypeRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Immutable snapshot
# ---------------------------------------------------------------------------


class Catalog:
    """All quests plus the valid type and dungeon sets.

    Built once before any search; never mutated afterwards.
    """

    def __init__(
        self,
        quests: Iterable[Quest],
        tiers: Mapping[str, int],
        dungeons: Iterable[str],
    ) -> None:
        self._tiers = MappingProxyType(dict(tiers))
        self._dungeons = tuple(dict.fromkeys(dungeons))
        self._dungeon_set = frozenset(self._dungeons)
        self._quests = tuple(quests)
        self._check_invariants()

    def _check_invariants(self) -> None:
        seen: set[str] = set()
        for quest in self._quests:
            if quest.name in seen:
                raise MalformedCatalogData(f"Duplicate quest name {quest.name!r}")
            seen.add(quest.name)
            if quest.kind not in self._tiers:
                raise MalformedCatalogData(
                    f"Quest {quest.name!r} has unsupported type {quest.kind!r}"
                )
            for req in quest.requirements:
                if req.dungeon not in self._dungeon_set:
                    raise MalformedCatalogData(
                        f"Quest {quest.name!r} requires unsupported dungeon {req.dungeon!r}"
                    )

    @property
    def all_quests(self) -> tuple[Quest, ...]:
        return self._quests

    def get_types(self) -> tuple[str, ...]:
        return tuple(self._tiers)

    def get_dungeons(self) -> tuple[str, ...]:
        return self._dungeons

    def get_tier_of(self, kind: str) -> int:
        self.validate_type(kind)
        return self._tiers[kind]

    def validate_type(self, kind: str) -> None:
        if kind not in self._tiers:
            raise InvalidCriterion("type", kind)

    def validate_dungeon(self, name: str) -> None:
        if name not in self._dungeon_set:
            raise InvalidCriterion("dungeon", name)

    def __len__(self) -> int:
        return len(self._quests)

    def __repr__(self) -> str:
        return (
            f"Catalog(quests={len(self._quests)}, types={len(self._tiers)}, "
            f"dungeons={len(self._dungeons)})"
        )


# ---------------------------------------------------------------------------
# File loader
# ---------------------------------------------------------------------------


def _read_records(path: Path, model: type[BaseModel]) -> list:
    """Parse a YAML list of records and validate each against ``model``."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise MalformedCatalogData(f"{path.name} is not valid YAML/JSON") from exc

    if not isinstance(raw, list):
        raise MalformedCatalogData(f"{path.name} must contain a list of records")

    records = []
    for index, item in enumerate(raw):
        try:
            records.append(model.model_validate(item))
        except ValidationError as exc:
            raise MalformedCatalogData(f"{path.name} record {index} is malformed: {exc}") from exc
    return records


class CatalogLoader:
    """Reads catalog files from a data directory.

    Quest data may only be read once per loader; the resulting Catalog is the
    single holder of the quest list afterwards.
    """

    def __init__(self, data_dir: Path | str | None = None) -> None:
        self.data_dir = Path(data_dir) if data_dir is not None else config.DATA_DIR
        self._loaded_quests = False

    def load_types(self) -> dict[str, int]:
        """Return the tier table, keyed by quest type in file order."""
        records = _read_records(self.data_dir / config.QUEST_TYPES_FILE, QuestTypeRecord)
        return {record.type: record.tier for record in records}

    def load_dungeons(self) -> dict[str, int]:
        """Return dungeon name → sprite sheet position, in file order."""
        records = _read_records(self.data_dir / config.DUNGEONS_FILE, DungeonRecord)
        return {record.dungeon: record.sheet_pos for record in records}

    def load_quests(self) -> list[Quest]:
        """Read every quest from disk. Raises DuplicateLoad on a second call."""
        if self._loaded_quests:
            raise DuplicateLoad(
                "Quests were already loaded; use Catalog.all_quests instead of reloading"
            )
        self._loaded_quests = True
        return _read_records(self.data_dir / config.QUESTS_FILE, Quest)

    def build_catalog(self) -> Catalog:
        tiers = self.load_types()
        dungeons = self.load_dungeons()
        catalog = Catalog(self.load_quests(), tiers, dungeons)
        logger.info(
            "catalog_loaded",
            extra={
                "data_dir": str(self.data_dir),
                "quest_count": len(catalog),
                "type_count": len(tiers),
                "dungeon_count": len(dungeons),
            },
        )
        return catalog


def load_catalog(data_dir: Path | str | None = None) -> Catalog:
    """Build a catalog from ``data_dir`` (defaults to the configured data directory)."""
    return CatalogLoader(data_dir).build_catalog()
