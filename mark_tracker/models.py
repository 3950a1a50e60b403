"""Pydantic data models for mark quests and the catalog records they load from."""

from __future__ import annotations

import re

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

_INT_TEXT = re.compile(r"[+-]?[0-9]+")


def _parse_int(v: object) -> int:
    """Accept a real int or integer text such as "12"; anything else is an error."""
    if isinstance(v, bool):
        raise ValueError(f"Expected an integer, got {v!r}")
    if isinstance(v, int):
        return v
    if isinstance(v, str) and _INT_TEXT.fullmatch(v):
        return int(v)
    raise ValueError(f"Expected an integer, got {v!r}")


# ---------------------------------------------------------------------------
# Quest records
# ---------------------------------------------------------------------------


class Requirement(BaseModel):
    """A number of marks from one dungeon needed to complete a quest."""

    model_config = ConfigDict(frozen=True)

    dungeon: str = Field(min_length=1, description="Canonical dungeon name e.g., 'SnakePit'")
    amount: int = Field(gt=0, description="Marks of this dungeon required")

    @field_validator("amount", mode="before")
    @classmethod
    def amount_is_integer(cls, v: object) -> int:
        return _parse_int(v)


class Quest(BaseModel):
    """A Tinkerer quest: a kind, a display name and one or more requirements."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: str = Field(
        min_length=1,
        validation_alias=AliasChoices("kind", "type"),
        description="Quest type e.g., 'Scout', 'Epic'",
    )
    name: str = Field(min_length=1, description="Display name e.g., 'King Who?'")
    requirements: tuple[Requirement, ...] = Field(
        min_length=1,
        validation_alias=AliasChoices("requirements", "req"),
    )

    @property
    def total_mark_amount(self) -> int:
        return sum(req.amount for req in self.requirements)

    @property
    def dungeons(self) -> tuple[str, ...]:
        return tuple(req.dungeon for req in self.requirements)


# ---------------------------------------------------------------------------
# Lookup tables (quest_types.yml, dungeons.yml)
# ---------------------------------------------------------------------------


class QuestTypeRecord(BaseModel):
    """One quest type and its tier. Higher tiers rank first."""

    type: str = Field(min_length=1)
    tier: int

    @field_validator("tier", mode="before")
    @classmethod
    def tier_is_integer(cls, v: object) -> int:
        return _parse_int(v)


class DungeonRecord(BaseModel):
    """One valid dungeon and its position on the mark sprite sheet."""

    model_config = ConfigDict(populate_by_name=True)

    dungeon: str = Field(min_length=1)
    sheet_pos: int = Field(
        ge=0,
        validation_alias=AliasChoices("sheet_pos", "sheetPos"),
        description="Display data only",
    )

    @field_validator("sheet_pos", mode="before")
    @classmethod
    def sheet_pos_is_integer(cls, v: object) -> int:
        return _parse_int(v)
