"""
Sort compilation for zip queries.

Turns a user-facing sort expression into an ordered MongoDB sort spec.

Query string grammar:
    sort=term(,term)*      term := field(:direction)?

A direction whose leading integer is negative sorts descending; anything
else, including a missing or unparseable token, sorts ascending.

    "state:1,city,population:-1"  ->  [("state", 1), ("city", 1), ("pop", -1)]

Key order is significant: the first key is the primary sort and later keys
only break ties, so the input order is kept as given.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Tuple, Union

from pymongo import ASCENDING, DESCENDING

from .record import parse_int

# External sort name -> stored field name
SORT_FIELDS = {
    "city": "city",
    "state": "state",
    "population": "pop",
    "pop": "pop",
}

SortInput = Union[None, str, Mapping[str, Any], Iterable[Tuple[str, Any]]]


def parse_direction(token: Any) -> int:
    """Map a direction token to DESCENDING if it is a negative integer, else ASCENDING."""
    if token is None or (isinstance(token, str) and not token.strip()):
        return ASCENDING
    return DESCENDING if parse_int(token) < 0 else ASCENDING


@dataclass(frozen=True)
class SortSpec:
    """Ordered (field, direction) pairs, primary key first."""

    keys: Tuple[Tuple[str, int], ...] = ()

    def to_pymongo(self) -> List[Tuple[str, int]]:
        return list(self.keys)

    def __bool__(self) -> bool:
        return bool(self.keys)


def parse_sort_string(sort: str) -> List[Tuple[str, Any]]:
    """
    Split a sort query string into raw (field, direction-token) terms.

    Fields are not validated here.
    """
    terms = []
    for term in sort.split(","):
        parts = term.split(":")
        field = parts[0].strip()
        token = parts[1].strip() if len(parts) > 1 else None
        terms.append((field, token))
    return terms


def build_sort(raw: SortInput = None) -> SortSpec:
    """
    Compile a sort expression into a SortSpec.

    Accepts a query string, an ordered mapping of field -> direction, or a
    sequence of (field, direction) pairs. population is renamed to pop and
    fields outside city/state/population are dropped. Surviving fields keep
    their input order; a repeated field keeps its first position and its
    last direction.
    """
    if raw is None:
        return SortSpec()

    if isinstance(raw, str):
        terms = parse_sort_string(raw)
    elif isinstance(raw, Mapping):
        terms = list(raw.items())
    else:
        # a bare field name in a sequence sorts ascending
        terms = [(item, None) if isinstance(item, str) else item for item in raw]

    # dicts keep insertion order, so reassigning a key does not move it
    ordered = {}
    for field, token in terms:
        stored = SORT_FIELDS.get(str(field))
        if stored is None:
            continue
        ordered[stored] = parse_direction(token)

    return SortSpec(keys=tuple(ordered.items()))


def default_sort() -> SortSpec:
    """Sort used by unpaginated listings: population ascending."""
    return SortSpec(keys=(("pop", ASCENDING),))
