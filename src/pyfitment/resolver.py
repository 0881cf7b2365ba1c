"""Resolve a selector state to exactly one vehicle id."""

from __future__ import annotations

import logging

from pyfitment.index import FitmentIndex, key_segment, selection_key
from pyfitment.models.context import FitmentContext
from pyfitment.state.selector import SelectorState

_logger = logging.getLogger(__name__)


def resolve(state: SelectorState, index: FitmentIndex) -> str | None:
    """Return the vehicle id for the current selection, or ``None``.

    The key is built with the same segment rules as the index. Year, Make
    and Model must be set; Submodel and Engine contribute an empty segment
    when unset or hidden. Only an exact key match resolves.
    """
    year, make, model, submodel, engine = state.selection()
    if not key_segment(year) or not make or not model:
        return None
    vehicle_id = index.by_selection_key.get(selection_key(year, make, model, submodel, engine))
    if vehicle_id is None:
        _logger.debug("No vehicle for %s", selection_key(year, make, model, submodel, engine))
    return vehicle_id


def resolve_context(state: SelectorState, index: FitmentIndex) -> FitmentContext | None:
    """Like :func:`resolve`, but returns the full context to hand off."""
    vehicle_id = resolve(state, index)
    if vehicle_id is None:
        return None
    year, make, model, submodel, engine = state.selection()
    return FitmentContext(
        id=vehicle_id,
        year=year,
        make=make,
        model=model,
        submodel=submodel,
        engine=engine,
    )
