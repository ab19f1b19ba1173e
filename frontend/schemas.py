"""
Pydantic models for zip request bodies.

Only id, city, state and population are accepted; any other submitted key
is ignored.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ZipParams(BaseModel):
    """Submitted zip fields, external names."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: Optional[str] = Field(None, description="Zip code, e.g. '01001'.")
    city: Optional[str] = Field(None, description="City name.")
    state: Optional[str] = Field(None, description="Two-letter state code.")
    population: Optional[int] = Field(None, ge=0, description="Population count.")

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, value: Any) -> Any:
        # JSON clients may send numeric zip codes
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("population", mode="before")
    @classmethod
    def blank_population_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def submitted(self) -> Dict[str, Any]:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


def extract_zip_payload(body: Any) -> Dict[str, Any]:
    """
    Accept either {"zip": {...}} or the bare field object.

    Returns:
        The field mapping, or {} when the body is not a JSON object
    """
    if not isinstance(body, dict):
        return {}
    nested = body.get("zip")
    if isinstance(nested, dict):
        return nested
    return body
