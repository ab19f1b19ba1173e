"""
Zip record model and conversions.

A zip code has two shapes:
- stored document: {"_id", "city", "state", "pop"}
- external record: {"id", "city", "state", "population"}

The conversion is a pure renaming in both directions.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from bson import ObjectId

# Fields returned by every zips query; anything else stored (e.g. loc) is left out
PROJECTION: Dict[str, bool] = {"_id": True, "city": True, "state": True, "pop": True}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any, default: int = 0) -> int:
    """
    Read the leading integer of a value.

    "42" -> 42, "-1" -> -1, "7 people" -> 7, "abc" -> default.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else default


def _identifier(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, ObjectId):
        return str(value)
    return value if isinstance(value, str) else str(value)


def storage_id(zip_id: str) -> Any:
    """
    Stored _id for an external id.

    Ids MongoDB generated are rendered as 24-char hex strings; those are
    turned back into ObjectId so lookups match. Zip codes pass through.
    """
    if isinstance(zip_id, str) and ObjectId.is_valid(zip_id):
        return ObjectId(zip_id)
    return zip_id


def id_filter(zip_id: str) -> Dict[str, Any]:
    """Query matching the single document for this id."""
    return {"_id": storage_id(zip_id)}


@dataclass(frozen=True)
class ZipRecord:
    """External view of one zip code."""

    id: Optional[str] = None
    city: str = ""
    state: str = ""
    population: int = 0

    @property
    def persisted(self) -> bool:
        """True once the record has an id, i.e. it maps to a stored document."""
        return self.id is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "city": self.city,
            "state": self.state,
            "population": self.population,
        }

    def __str__(self) -> str:
        return f"{self.id}: {self.city}, {self.state}, pop={self.population}"


def from_storage(document: Mapping[str, Any]) -> ZipRecord:
    """
    Build a ZipRecord from a stored document.

    Reads _id/pop, falling back to id/population when the mapping is
    already in external shape. Missing fields become empty values.
    """
    zip_id = document.get("_id")
    if zip_id is None:
        zip_id = document.get("id")

    population = document.get("pop")
    if population is None:
        population = document.get("population")

    return ZipRecord(
        id=_identifier(zip_id),
        city=document.get("city") or "",
        state=document.get("state") or "",
        population=parse_int(population),
    )


def from_user_input(params: Mapping[str, Any]) -> ZipRecord:
    """
    Build a ZipRecord from submitted form/JSON data using external names.

    A blank id means the record is new.
    """
    zip_id = params.get("id")
    if isinstance(zip_id, str) and not zip_id.strip():
        zip_id = None

    return ZipRecord(
        id=_identifier(zip_id),
        city=params.get("city") or "",
        state=params.get("state") or "",
        population=parse_int(params.get("population")),
    )


def to_document(record: ZipRecord) -> Dict[str, Any]:
    """
    Build the stored document for a record.

    _id is omitted for a new record so MongoDB assigns one.
    """
    document: Dict[str, Any] = {}
    if record.id is not None:
        document["_id"] = storage_id(record.id)
    document["city"] = record.city
    document["state"] = record.state
    document["pop"] = record.population
    return document
