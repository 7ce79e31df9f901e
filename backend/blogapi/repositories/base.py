"""Generic in-memory repository base and query utilities.

This module centralizes persistence-only concerns shared by all repositories:
- Strongly-typed pagination and sorting helpers.
- Safe sorting with a whitelist mapping of public sort keys.
- Deterministic pagination (id is always the final tiebreaker).
- A closed set of typed filter predicates instead of free-form queries.
- Safe update helpers with per-repository updatable-field whitelists.
- No business logic; services own use cases and multi-step transactions.

Design decisions
----------------
* Repositories MUST remain thin and persistence-focused.
* Every read and write takes the store lock shared by all repositories, so a
  :meth:`blogapi.repositories.store.DataStore.transaction` block sees a
  consistent snapshot across collections.
* Updates MUST NOT allow mass-assignment: each repo exposes an explicit
  ``_updatable_fields`` whitelist.
"""

from __future__ import annotations

import math
import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from blogapi.models.base import utcnow
from blogapi.services._shared.errors import ConflictError

if TYPE_CHECKING:
    from blogapi.repositories.store import DataStore

E = TypeVar("E")  # entity dataclass type

Predicate = Callable[[Any], bool]


# ------------------------------- Filters -------------------------------------


@dataclass(frozen=True, slots=True)
class Exact:
    """``entity.field == value``."""

    field: str
    value: Any

    def compile(self, repo: InMemoryRepository[Any]) -> Predicate:
        return lambda entity: getattr(entity, self.field) == self.value


@dataclass(frozen=True, slots=True)
class Contains:
    """Case-insensitive substring match on a string field."""

    field: str
    value: str

    def compile(self, repo: InMemoryRepository[Any]) -> Predicate:
        needle = self.value.lower()
        return lambda entity: needle in (getattr(entity, self.field) or "").lower()


@dataclass(frozen=True, slots=True)
class HasMember:
    """``value`` is an element of the collection stored in ``field``."""

    field: str
    value: Any

    def compile(self, repo: InMemoryRepository[Any]) -> Predicate:
        return lambda entity: self.value in (getattr(entity, self.field) or ())


@dataclass(frozen=True, slots=True)
class IsNull:
    field: str

    def compile(self, repo: InMemoryRepository[Any]) -> Predicate:
        return lambda entity: getattr(entity, self.field) is None


@dataclass(frozen=True, slots=True)
class RelatedEquals:
    """
    Match through a reference to another collection.

    ``field`` holds an id (or a list of ids) pointing into the collection
    registered for it in ``_relations``; the entity matches when a referenced
    record has ``related_field == value``.

    :param field: Local reference field (``"author_id"``, ``"tag_ids"``).
    :param related_field: Attribute compared on the referenced record.
    :param value: Expected value of ``related_field``.
    """

    field: str
    related_field: str
    value: Any

    def compile(self, repo: InMemoryRepository[Any]) -> Predicate:
        related = repo.related(self.field)
        ids = {item.id for item in related.find([Exact(self.related_field, self.value)])}

        def _match(entity: Any) -> bool:
            ref = getattr(entity, self.field)
            if isinstance(ref, list | tuple | set):
                return any(item in ids for item in ref)
            return ref in ids

        return _match


Filter = Exact | Contains | HasMember | IsNull | RelatedEquals


# ------------------------------- Pagination ----------------------------------


@dataclass(slots=True)
class Pagination:
    """Pagination input parameters.

    :param page: 1-based page number (validated to be ``>= 1``).
    :type page: int
    :param limit: Page size (validated to be ``>= 1``).
    :type limit: int
    :param sort: Public sort tokens (e.g., ``["-created_at", "title"]``).
    :type sort: list[str]
    """

    page: int
    limit: int
    sort: list[str]

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(slots=True)
class Page(Generic[E]):
    """Result page with metadata.

    :param items: Entities in the current page.
    :param total: Size of the filtered set (not the whole collection).
    :param page: 1-based current page number.
    :param limit: Page size.
    """

    items: Sequence[E]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page * self.limit < self.total

    @property
    def has_previous(self) -> bool:
        return self.page > 1


# ----------------------------- Sorting utilities -----------------------------


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Parse public sort tokens into ``(field, is_desc)`` tuples.

    :param raw: Public tokens like ``["-created_at", "title"]``.
    :returns: List of ``(field_name, is_desc)`` tokens.
    """
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        is_desc = token.startswith("-")
        field = token[1:] if is_desc else token
        field = field.strip()
        if field:
            parsed.append((field, is_desc))
    return parsed


def _sort_key(attr: str) -> Callable[[Any], tuple[bool, Any]]:
    # None sorts last ascending, first descending
    def _key(entity: Any) -> tuple[bool, Any]:
        value = getattr(entity, attr)
        return (value is None, value if value is not None else 0)

    return _key


def _apply_sorting(
    items: list[E],
    sortable_fields: Mapping[str, str],
    tokens: Iterable[str],
) -> list[E]:
    """Order ``items`` by the whitelisted tokens, with ``id`` as final tiebreaker.

    Unknown sort tokens are ignored silently.
    """
    ordered = sorted(items, key=lambda entity: getattr(entity, "id"))
    # Stable sorts applied from the least to the most significant key
    for field, is_desc in reversed(parse_sort_tokens(tokens)):
        attr = sortable_fields.get(field)
        if attr is None:
            continue
        ordered.sort(key=_sort_key(attr), reverse=is_desc)
    return ordered


# ------------------------------ Base repository ------------------------------


class InMemoryRepository(Generic[E]):
    """Generic, persistence-only repository for a single entity collection.

    Subclasses MUST define:

    * ``entity``: the dataclass stored in the collection.

    Subclasses MAY override:

    * ``_sortable_fields`` to expose safe sort keys.
    * ``_unique_fields`` to reject duplicates on insert.
    * ``_updatable_fields`` to whitelist keys allowed for updates.
    * ``_relations`` to map reference fields to other collections.
    """

    entity: type[E]

    def __init__(self, store: DataStore, lock: threading.RLock) -> None:
        self._store = store
        self._lock = lock
        self._rows: dict[str, E] = {}

    # ------------------------------ Extensibility ----------------------------

    def _sortable_fields(self) -> Mapping[str, str]:
        """Whitelist mapping of public sort keys to entity attributes."""
        return {"created_at": "created_at", "createdAt": "created_at"}

    def _unique_fields(self) -> tuple[str, ...]:
        return ()

    def _updatable_fields(self) -> set[str]:
        """Whitelist of attributes that can be assigned on update."""
        return set()

    def _relations(self) -> Mapping[str, str]:
        """Reference field -> name of the related repository on the store."""
        return {}

    def related(self, field: str) -> InMemoryRepository[Any]:
        """Return the repository a reference ``field`` points into."""
        name = self._relations().get(field)
        if name is None:
            raise ValueError(f"{type(self).__name__} has no relation for {field!r}")
        return getattr(self._store, name)

    # ------------------------------ Internals --------------------------------

    def _select(self, filters: Iterable[Filter] | None) -> list[E]:
        predicates = [f.compile(self) for f in (filters or ())]
        return [row for row in self._rows.values() if all(p(row) for p in predicates)]

    def _sanitize_update_fields(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Return ``fields`` after checking every key against the whitelist.

        :raises ValueError: If unknown or non-updatable keys are present.
        """
        allowed = self._updatable_fields()
        unknown = [k for k in fields if k not in allowed]
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        return dict(fields)

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Insert a new entity.

        :raises ConflictError: When the id or a unique field is already taken.
        """
        with self._lock:
            entity_id = getattr(instance, "id")
            if entity_id in self._rows:
                raise ConflictError(self.entity.__name__, f"id {entity_id!r} already exists")
            for field in self._unique_fields():
                value = getattr(instance, field)
                if any(getattr(row, field) == value for row in self._rows.values()):
                    raise ConflictError(self.entity.__name__, f"{field} {value!r} already exists")
            self._rows[entity_id] = instance
            return instance

    def get(self, entity_id: str) -> E | None:
        with self._lock:
            return self._rows.get(entity_id)

    def find(
        self,
        filters: Iterable[Filter] | None = None,
        *,
        sort: Iterable[str] | None = None,
    ) -> list[E]:
        """Return every entity matching all ``filters``, ordered by ``sort`` tokens."""
        with self._lock:
            return _apply_sorting(self._select(filters), self._sortable_fields(), sort or ())

    def find_first(self, filters: Iterable[Filter] | None = None) -> E | None:
        with self._lock:
            matches = self._select(filters)
            return matches[0] if matches else None

    def count(self, filters: Iterable[Filter] | None = None) -> int:
        with self._lock:
            return len(self._select(filters))

    def paginate(
        self,
        filters: Iterable[Filter] | None,
        pagination: Pagination,
        *,
        default_sort: Sequence[str] = ("-created_at",),
    ) -> Page[E]:
        """Filter, sort and slice in one locked pass.

        :param filters: Predicates combined with AND.
        :param pagination: Requested page; empty ``sort`` falls back to ``default_sort``.
        :param default_sort: Sort tokens used when the caller gave none.
        :returns: :class:`Page` whose ``total`` counts the filtered set.
        """
        with self._lock:
            rows = self.find(filters, sort=pagination.sort or default_sort)
            start = pagination.skip
            return Page(
                items=rows[start : start + pagination.limit],
                total=len(rows),
                page=pagination.page,
                limit=pagination.limit,
            )

    def update(self, instance: E, **fields: Any) -> E:
        """Assign whitelisted ``fields`` on ``instance`` and bump ``updated_at``."""
        clean = self._sanitize_update_fields(fields)
        with self._lock:
            for key, value in clean.items():
                setattr(instance, key, value)
            if hasattr(instance, "updated_at"):
                setattr(instance, "updated_at", utcnow())
            return instance

    def delete(self, entity_id: str) -> bool:
        with self._lock:
            return self._rows.pop(entity_id, None) is not None

    def delete_where(self, filters: Iterable[Filter]) -> int:
        with self._lock:
            doomed = [getattr(row, "id") for row in self._select(filters)]
            for entity_id in doomed:
                del self._rows[entity_id]
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)
