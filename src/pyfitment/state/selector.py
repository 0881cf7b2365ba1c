"""Cascading Year/Make/Model/Submodel/Engine selector.

:class:`SelectorState` is an immutable value; :func:`select` returns a new
state. Selecting a value at one level repopulates the next level from the
index and resets every deeper level, even when an old downstream value
would still be valid under the new upstream choice.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pyfitment.exceptions import FitmentSelectionError
from pyfitment.index import FitmentIndex, key_segment, sorted_options
from pyfitment.state.fields import FIELD_ORDER, SIBLING_FIELDS, FieldStatus, SelectorField, downstream_of


class FieldState(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: SelectorField
    value: str | None = None
    options: tuple[str, ...] = ()

    @property
    def status(self) -> FieldStatus:
        if self.value is not None:
            return FieldStatus.SELECTED
        if self.options:
            return FieldStatus.ENABLED
        return FieldStatus.LOCKED

    @property
    def hidden(self) -> bool:
        """Submodel/Engine with nothing to offer are not shown at all."""
        return self.name in SIBLING_FIELDS and not self.options


class SelectorState(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    levels: dict[SelectorField, FieldState] = Field(
        default_factory=lambda: {name: FieldState(name=name) for name in FIELD_ORDER}
    )

    def field(self, name: SelectorField | str) -> FieldState:
        return self.levels[SelectorField(name)]

    def value(self, name: SelectorField | str) -> str | None:
        return self.field(name).value

    def selection(self) -> tuple[str | None, ...]:
        """Current values in field order; ``None`` where unset or hidden."""
        return tuple(None if self.levels[name].hidden else self.levels[name].value for name in FIELD_ORDER)

    def visible_fields(self) -> list[SelectorField]:
        return [name for name in FIELD_ORDER if not self.levels[name].hidden]


def _locked(name: SelectorField) -> FieldState:
    return FieldState(name=name)


def initial_state(index: FitmentIndex) -> SelectorState:
    """Year populated from the index, every other field locked."""
    fields = {name: _locked(name) for name in FIELD_ORDER}
    fields[SelectorField.YEAR] = FieldState(name=SelectorField.YEAR, options=tuple(index.years()))
    return SelectorState(levels=fields)


def _populate_below(
    fields: dict[SelectorField, FieldState],
    index: FitmentIndex,
    name: SelectorField,
) -> None:
    year = fields[SelectorField.YEAR].value
    make = fields[SelectorField.MAKE].value
    model = fields[SelectorField.MODEL].value

    if name is SelectorField.YEAR:
        fields[SelectorField.MAKE] = FieldState(name=SelectorField.MAKE, options=tuple(index.makes(year)))
    elif name is SelectorField.MAKE:
        fields[SelectorField.MODEL] = FieldState(name=SelectorField.MODEL, options=tuple(index.models(year, make)))
    elif name is SelectorField.MODEL:
        entries = index.entries(year, make, model)
        submodels = sorted_options({entry.submodel for entry in entries})
        engines = sorted_options({entry.engine for entry in entries})
        fields[SelectorField.SUBMODEL] = FieldState(name=SelectorField.SUBMODEL, options=tuple(submodels))
        fields[SelectorField.ENGINE] = FieldState(name=SelectorField.ENGINE, options=tuple(engines))


def select(
    state: SelectorState,
    index: FitmentIndex,
    name: SelectorField | str,
    value: str | int | None,
) -> SelectorState:
    """Set *name* to *value* and cascade.

    ``None`` or ``""`` clears the field. A value that is not among the
    field's options is accepted; it simply leaves the next level locked
    and the selection unresolvable.

    Raises
    ------
    FitmentSelectionError
        If a value is given for a locked field.
    """
    name = SelectorField(name)
    current = state.levels[name]
    normalized = key_segment(value) or None

    if normalized is not None and current.status is FieldStatus.LOCKED:
        raise FitmentSelectionError(f"{name.value} is locked; choose the fields above it first")

    fields = dict(state.levels)
    fields[name] = current.model_copy(update={"value": normalized})

    for deeper in downstream_of(name):
        fields[deeper] = _locked(deeper)

    if normalized is not None:
        _populate_below(fields, index, name)

    return SelectorState(levels=fields)
