"""High-level async client for the Storefront vehicle catalog."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp
from pydantic import BaseModel, ConfigDict, Field

from pyfitment._api.metaobjects import fetch_all
from pyfitment._transport import StorefrontTransport, Transport
from pyfitment.config import FitmentConfig
from pyfitment.exceptions import FitmentError
from pyfitment.index import FitmentIndex, build_index
from pyfitment.models.vehicle import VehicleRecord

_logger = logging.getLogger(__name__)


class CatalogLoad(BaseModel):
    """Outcome of a schema-fallback load.

    ``type_name`` is the metaobject type whose sweep produced the records,
    or ``None`` when neither candidate had any.
    """

    model_config = ConfigDict(frozen=True)

    records: list[VehicleRecord] = Field(default_factory=list)
    type_name: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.records


class FitmentClient:
    """Async client for the vehicle metaobject catalog.

    Usage::

        async with FitmentClient(config) as client:
            index = await client.load_index()
    """

    def __init__(
        self,
        config: FitmentConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> FitmentClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = StorefrontTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise FitmentError("Client not initialized. Use 'async with FitmentClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    async def fetch_type(self, type_name: str) -> list[VehicleRecord]:
        """Sweep every page of one metaobject type."""
        self._config.validate()
        return await fetch_all(
            self._require_transport(),
            type_name,
            page_size=self._config.page_size,
            max_pages=self._config.max_pages,
        )

    async def load_catalog(self) -> CatalogLoad:
        """Load all vehicle records, falling back to the alternate type name.

        The fallback type is swept only when the primary one returns no
        records at all; results of the two are never merged.

        Raises
        ------
        FitmentConfigError
            If the access token is missing. Nothing is requested.
        FitmentTransportError, FitmentApiError
            On any failed page. No partial result is returned.
        """
        self._config.validate()

        for type_name in (self._config.primary_type, self._config.fallback_type):
            _logger.info("Fetching vehicles with type %r", type_name)
            records = await self.fetch_type(type_name)
            _logger.info("Found %d vehicles with type %r", len(records), type_name)
            if records:
                return CatalogLoad(records=records, type_name=type_name)

        _logger.warning(
            "No vehicles found for %r or %r; check the metaobject definition's Storefront access",
            self._config.primary_type,
            self._config.fallback_type,
        )
        return CatalogLoad()

    async def load_index(self) -> FitmentIndex:
        """Load the catalog and build its index in one step."""
        load = await self.load_catalog()
        return build_index(load.records, type_name=load.type_name)
