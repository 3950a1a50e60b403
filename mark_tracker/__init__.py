"""Search and rank Tinkerer mark quests by name, type and dungeon."""

from .catalog import Catalog, CatalogLoader, load_catalog
from .errors import DuplicateLoad, InvalidCriterion, MalformedCatalogData, MarkTrackerError
from .models import Quest, Requirement
from .normalizer import normalize
from .quest_store import QuestStore
from .search import SearchEngine, is_secret_query

__all__ = [
    'Catalog',
    'CatalogLoader',
    'load_catalog',
    'DuplicateLoad',
    'InvalidCriterion',
    'MalformedCatalogData',
    'MarkTrackerError',
    'Quest',
    'Requirement',
    'normalize',
    'QuestStore',
    'SearchEngine',
    'is_secret_query',
]
