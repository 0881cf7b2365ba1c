"""Interaction adapter tying the catalog, selector, resolver and handoff together.

A :class:`VehicleFinder` is what a UI binds to: it owns the current index,
the current selector state and a one-line status message. It holds no
selection logic of its own.
"""

from __future__ import annotations

import logging

from pyfitment.client import FitmentClient
from pyfitment.exceptions import FitmentConfigError, FitmentError
from pyfitment.handoff import FitmentHandoff
from pyfitment.index import FitmentIndex, build_index
from pyfitment.resolver import resolve_context
from pyfitment.state.fields import SelectorField
from pyfitment.state.selector import FieldState, SelectorState, initial_state, select

_logger = logging.getLogger(__name__)

STATUS_EMPTY_CATALOG = "No vehicles found. Check metaobject definitions & Storefront visibility."
STATUS_INVALID_SELECTION = "Select valid Year/Make/Model."
STATUS_MISSING_TOKEN = "Missing Storefront access token."


class VehicleFinder:
    def __init__(self, client: FitmentClient, handoff: FitmentHandoff) -> None:
        self._client = client
        self._handoff = handoff
        self._index = build_index([])
        self._state = initial_state(self._index)
        self.status = ""

    @property
    def index(self) -> FitmentIndex:
        return self._index

    @property
    def state(self) -> SelectorState:
        return self._state

    async def load(self) -> FitmentIndex:
        """Fetch the catalog and swap in the new index.

        The selector stays on the previous (initially empty) index until
        the whole sweep has finished. On a transport or API error the index
        is replaced by an empty one and the error is reported in
        :attr:`status`. A missing token is reported and re-raised.
        """
        self.status = ""
        try:
            load = await self._client.load_catalog()
        except FitmentConfigError:
            self.status = STATUS_MISSING_TOKEN
            _logger.error("Vehicle finder cannot load: missing Storefront access token")
            raise
        except FitmentError as exc:
            _logger.error("Vehicle catalog load failed: %s", exc)
            self._swap(build_index([]))
            self.status = f"Error: {exc}"
            return self._index

        self._swap(build_index(load.records, type_name=load.type_name))
        if load.is_empty:
            self.status = STATUS_EMPTY_CATALOG
        return self._index

    def _swap(self, index: FitmentIndex) -> None:
        self._index = index
        self._state = initial_state(index)

    def options(self, name: SelectorField | str) -> list[str]:
        return list(self._state.field(name).options)

    def field(self, name: SelectorField | str) -> FieldState:
        return self._state.field(name)

    def visible_fields(self) -> list[SelectorField]:
        return self._state.visible_fields()

    def select(self, name: SelectorField | str, value: str | int | None) -> SelectorState:
        self._state = select(self._state, self._index, name, value)
        self.status = ""
        return self._state

    def reset(self) -> SelectorState:
        self._state = initial_state(self._index)
        self.status = ""
        return self._state

    def submit(self) -> str | None:
        """Resolve the selection and hand it off.

        Returns the catalog URL, or ``None`` with :attr:`status` set when
        the selection does not match a vehicle. The selection is kept as-is
        either way.
        """
        context = resolve_context(self._state, self._index)
        if context is None:
            self.status = STATUS_INVALID_SELECTION
            return None
        self.status = ""
        return self._handoff.apply(context)
