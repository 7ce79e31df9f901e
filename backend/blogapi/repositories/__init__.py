"""Repositories over the in-memory data store."""

from __future__ import annotations

from .base import (
    Contains,
    Exact,
    Filter,
    HasMember,
    InMemoryRepository,
    IsNull,
    Page,
    Pagination,
    RelatedEquals,
    parse_sort_tokens,
)
from .store import DataStore

__all__ = [
    "Contains",
    "DataStore",
    "Exact",
    "Filter",
    "HasMember",
    "InMemoryRepository",
    "IsNull",
    "Page",
    "Pagination",
    "RelatedEquals",
    "parse_sort_tokens",
]
