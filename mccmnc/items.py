"""Pydantic models for extracted MCC/MNC data and its output document."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Extraction result
# ---------------------------------------------------------------------------

class Entry(BaseModel):
    """One network operator assignment.

    ``mcc`` and ``mnc`` are kept as text so leading zeros survive
    (``"062"``, ``"01"``).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    mcc: str
    mnc: str


class ExtractionResult(BaseModel):
    """Areas keyed by lower-cased name, plus the original-case name index."""

    model_config = ConfigDict(populate_by_name=True)

    areas: dict[str, list[Entry]] = Field(default_factory=dict)
    area_names: list[str] = Field(default_factory=list, alias="areaNames")

    @property
    def entry_count(self) -> int:
        return sum(len(entries) for entries in self.areas.values())


# ---------------------------------------------------------------------------
# Fetch provenance
# ---------------------------------------------------------------------------

class DocumentReference(BaseModel):
    """Where a document came from and which revision it was."""

    url: str
    etag: str = ""

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("etag", mode="before")
    @classmethod
    def default_etag(cls, v: Any) -> Any:
        return v or ""


class FetchedDocument(BaseModel):
    content: bytes
    reference: DocumentReference


# ---------------------------------------------------------------------------
# Output document
# ---------------------------------------------------------------------------

class Metadata(BaseModel):
    generated: str
    source: str
    etag: str = ""


class MccMncDocument(BaseModel):
    """Canonical output schema, serialised with ``model_dump(by_alias=True)``."""

    model_config = ConfigDict(populate_by_name=True)

    metadata: Metadata
    areas: dict[str, list[Entry]] = Field(default_factory=dict)
    area_names: list[str] = Field(default_factory=list, alias="areaNames")
