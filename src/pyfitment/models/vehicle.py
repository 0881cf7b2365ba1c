"""Vehicle record model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pyfitment._constants import FIELD_ENGINE, FIELD_MAKE, FIELD_MODEL, FIELD_SUBMODEL, FIELD_YEAR
from pyfitment.models.metaobject import MetaobjectNode


class VehicleRecord(BaseModel):
    """One fitment entity mirrored from the remote store.

    ``year`` may arrive as a number; it is kept in string form so it
    compares equal to what the store and the selector both use.
    ``submodel`` and ``engine`` are ``""`` when the vehicle has none.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    id: str
    year: str = ""
    make: str = ""
    model: str = ""
    submodel: str = ""
    engine: str = ""

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original metaobject node, if the record was built from one."""

    @field_validator("year", "make", "model", "submodel", "engine", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @model_validator(mode="before")
    @classmethod
    def _ensure_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged.setdefault("raw", values)
        return merged

    @classmethod
    def from_node(cls, node: MetaobjectNode | dict[str, Any]) -> VehicleRecord:
        """Build a record from a raw ``{id, fields: [{key, value}]}`` node."""
        if not isinstance(node, MetaobjectNode):
            node = MetaobjectNode.model_validate(node)
        fields = node.field_map()
        return cls(
            id=node.id,
            year=fields.get(FIELD_YEAR, ""),
            make=fields.get(FIELD_MAKE, ""),
            model=fields.get(FIELD_MODEL, ""),
            submodel=fields.get(FIELD_SUBMODEL, ""),
            engine=fields.get(FIELD_ENGINE, ""),
            raw=node.model_dump(),
        )
