"""Resolved fitment context handed to the catalog."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class FitmentContext(BaseModel):
    """The vehicle a user resolved, as stored in the garage slot.

    The JSON form carries exactly these six keys and no version field;
    the product-page fitment check reads it as-is.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    year: str
    make: str
    model: str
    submodel: str = ""
    engine: str = ""

    @field_validator("year", "make", "model", "submodel", "engine", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    def to_json(self) -> str:
        return self.model_dump_json()
