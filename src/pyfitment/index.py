"""In-memory fitment index.

Four lookups are derived from the flat record list, coarsest first:

* ``by_year``:            ``year -> {make}``
* ``by_year_make``:       ``"year::make" -> {model}``
* ``by_year_make_model``: ``"year::make::model" -> [FitmentEntry]``
* ``by_selection_key``:   ``"year::make::model::submodel::engine" -> id``

The three coarser maps are filled in the same pass as the finest one, so
every record reachable through ``by_selection_key`` is also reachable by
walking down from ``by_year``. An index is built once per load and never
patched afterwards.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from pyfitment._constants import KEY_SEPARATOR
from pyfitment.models.vehicle import VehicleRecord

_DIGITS = re.compile(r"^\d+$")


def key_segment(value: str | int | None) -> str:
    """Flatten one selection value into a key segment.

    ``None`` (not applicable, or not selected) and ``""`` both become an
    empty segment. This is the only place that conversion happens.
    """
    if value is None:
        return ""
    return str(value)


def selection_key(*parts: str | int | None) -> str:
    """Join selection values into a composite lookup key."""
    return KEY_SEPARATOR.join(key_segment(part) for part in parts)


def sorted_options(values: Iterable[str]) -> list[str]:
    """Sorted copy for display: numeric strings by value, then the rest.

    Empty values are left out. The selector reads ``""`` as "clear", so
    such an option could never be chosen; the records stay in the index.
    """

    def _sort_key(value: str) -> tuple[int, int, str]:
        if _DIGITS.match(value):
            return (0, int(value), value)
        return (1, 0, value)

    return sorted((value for value in values if value), key=_sort_key)


@dataclass(frozen=True, slots=True)
class FitmentEntry:
    """One Submodel/Engine variant under a Year/Make/Model."""

    submodel: str
    engine: str
    id: str


@dataclass
class FitmentIndex:
    records: list[VehicleRecord] = field(default_factory=list)
    by_year: dict[str, set[str]] = field(default_factory=dict)
    by_year_make: dict[str, set[str]] = field(default_factory=dict)
    by_year_make_model: dict[str, list[FitmentEntry]] = field(default_factory=dict)
    by_selection_key: dict[str, str] = field(default_factory=dict)
    type_name: str | None = None
    """Metaobject type the records were fetched under, if any."""

    def __len__(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def years(self) -> list[str]:
        return sorted_options(self.by_year)

    def makes(self, year: str | int | None) -> list[str]:
        if not key_segment(year):
            return []
        return sorted_options(self.by_year.get(key_segment(year), ()))

    def models(self, year: str | int | None, make: str | None) -> list[str]:
        if not key_segment(year) or not make:
            return []
        return sorted_options(self.by_year_make.get(selection_key(year, make), ()))

    def entries(self, year: str | int | None, make: str | None, model: str | None) -> list[FitmentEntry]:
        """Variants for a Year/Make/Model, in fetch order."""
        if not key_segment(year) or not make or not model:
            return []
        return list(self.by_year_make_model.get(selection_key(year, make, model), ()))

    def lookup(
        self,
        year: str | int | None,
        make: str | None,
        model: str | None,
        submodel: str | None = None,
        engine: str | None = None,
    ) -> str | None:
        """Exact lookup of a full selection; no partial matching."""
        return self.by_selection_key.get(selection_key(year, make, model, submodel, engine))


def build_index(records: Iterable[VehicleRecord], *, type_name: str | None = None) -> FitmentIndex:
    """Build a :class:`FitmentIndex` from records in fetch order.

    Records that share a full selection key all appear in
    ``by_year_make_model``; the last one wins in ``by_selection_key``.
    """
    index = FitmentIndex(type_name=type_name)
    for record in records:
        index.records.append(record)
        year_key = key_segment(record.year)
        ym_key = selection_key(record.year, record.make)
        ymm_key = selection_key(record.year, record.make, record.model)
        sel_key = selection_key(record.year, record.make, record.model, record.submodel, record.engine)

        index.by_year.setdefault(year_key, set()).add(record.make)
        index.by_year_make.setdefault(ym_key, set()).add(record.model)
        index.by_year_make_model.setdefault(ymm_key, []).append(
            FitmentEntry(submodel=record.submodel, engine=record.engine, id=record.id)
        )
        index.by_selection_key[sel_key] = record.id
    return index
