"""Selector field names and per-field status."""

from __future__ import annotations

from enum import StrEnum


class SelectorField(StrEnum):
    YEAR = "year"
    MAKE = "make"
    MODEL = "model"
    SUBMODEL = "submodel"
    ENGINE = "engine"


class FieldStatus(StrEnum):
    LOCKED = "locked"
    ENABLED = "enabled"
    SELECTED = "selected"


FIELD_ORDER: tuple[SelectorField, ...] = (
    SelectorField.YEAR,
    SelectorField.MAKE,
    SelectorField.MODEL,
    SelectorField.SUBMODEL,
    SelectorField.ENGINE,
)

#: Both populated from the Model-level entries; neither resets the other.
SIBLING_FIELDS: frozenset[SelectorField] = frozenset({SelectorField.SUBMODEL, SelectorField.ENGINE})


def downstream_of(field: SelectorField) -> tuple[SelectorField, ...]:
    """Fields deeper than *field*, in order. Siblings have none."""
    if field in SIBLING_FIELDS:
        return ()
    return FIELD_ORDER[FIELD_ORDER.index(field) + 1 :]
