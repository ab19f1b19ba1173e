"""Filter building for zip queries."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# Only equality on these fields is supported; population is sort-only
FILTER_FIELDS = ("city", "state")


@dataclass(frozen=True)
class FilterSpec:
    """Equality filter over the queryable zip fields."""

    city: Optional[str] = None
    state: Optional[str] = None

    def to_query(self) -> Dict[str, Any]:
        """Return the MongoDB filter document. Empty matches everything."""
        query: Dict[str, Any] = {}
        if self.city is not None:
            query["city"] = self.city
        if self.state is not None:
            query["state"] = self.state
        return query


def build_filter(raw: Optional[Mapping[str, Any]] = None) -> FilterSpec:
    """
    Restrict a raw parameter mapping to the queryable fields.

    Unknown keys (paging, sort, population, typos) are dropped silently so
    query strings can carry extra parameters.

    Example:
        >>> build_filter({"city": "NY", "population": 500}).to_query()
        {'city': 'NY'}
    """
    if not raw:
        return FilterSpec()

    values = {}
    for field in FILTER_FIELDS:
        value = raw.get(field)
        if value is not None:
            values[field] = value
    return FilterSpec(**values)
