"""Data models for export/import documents."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class ContainerRecord(BaseModel):
    """One managed container in an export/import document."""

    name: str = Field("", description="Container name without leading '/'")
    image: str = Field("", description="Image reference the container runs")
    args: str = Field("", description="Original run arguments joined into one string")

    @field_validator("name", "image", "args", mode="before")
    @classmethod
    def _null_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("name", mode="after")
    @classmethod
    def _strip_separator(cls, v: str) -> str:
        return v.lstrip("/")

    @property
    def is_valid(self) -> bool:
        return bool(self.name) and bool(self.image)


class ImportSummary(BaseModel):
    """Counts collected while importing a document."""

    total: int = 0
    imported: int = 0
    failed: int = 0
    skipped: int = 0


def record_from_item(item: Any) -> Optional[ContainerRecord]:
    """Build a record from one decoded JSON item, or None if it is not an object."""
    if not isinstance(item, dict):
        return None
    try:
        return ContainerRecord.model_validate(item)
    except ValueError:
        return None
