"""Storefront metaobject connection models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class MetaobjectField(BaseModel):
    """A single ``{key, value}`` pair of a metaobject."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    key: str
    value: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)


class MetaobjectNode(BaseModel):
    """One metaobject as returned by the ``metaobjects`` connection."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    handle: str = ""
    type: str = ""
    fields: list[MetaobjectField] = Field(default_factory=list)

    def field_map(self) -> dict[str, str]:
        """Fields keyed by name; a repeated key keeps its last value."""
        return {f.key: f.value for f in self.fields}


class PageInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    has_next_page: bool = Field(default=False, validation_alias=AliasChoices("hasNextPage", "has_next_page"))
    end_cursor: str | None = Field(default=None, validation_alias=AliasChoices("endCursor", "end_cursor"))


class MetaobjectConnection(BaseModel):
    """A page of metaobjects plus its continuation info."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    nodes: list[MetaobjectNode] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo, validation_alias=AliasChoices("pageInfo", "page_info"))
