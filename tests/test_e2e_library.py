from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pyfitment.client import FitmentClient
from pyfitment.config import FitmentConfig
from pyfitment.exceptions import FitmentApiError, FitmentConfigError, FitmentError
from pyfitment.finder import STATUS_EMPTY_CATALOG, STATUS_INVALID_SELECTION, VehicleFinder
from pyfitment.handoff import FitmentHandoff, MemoryStorage
from pyfitment.state.fields import SelectorField


def _node(vid: str, year: str, make: str, model: str, submodel: str = "", engine: str = "") -> dict[str, Any]:
    fields = [{"key": "year", "value": year}, {"key": "make", "value": make}, {"key": "model", "value": model}]
    if submodel:
        fields.append({"key": "submodel", "value": submodel})
    if engine:
        fields.append({"key": "engine", "value": engine})
    return {"id": vid, "handle": vid.lower(), "type": "vehicle", "fields": fields}


@dataclass
class FakeStorefront:
    """Metaobject store keyed by type name, paged by a numeric cursor."""

    catalog: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    page_size: int = 2
    fail_type: str | None = None
    fail_after_pages: int = 0
    calls: list[dict[str, Any]] = field(default_factory=list)

    def pages_requested(self, type_name: str) -> int:
        return sum(1 for call in self.calls if call["type"] == type_name)

    async def post_graphql(self, query: str, variables: Mapping[str, Any]) -> dict[str, Any]:
        assert "metaobjects(type: $type" in query
        self.calls.append(dict(variables))
        type_name = variables["type"]

        if type_name == self.fail_type and self.pages_requested(type_name) > self.fail_after_pages:
            raise FitmentApiError("GraphQL errors", errors=[{"message": "Throttled"}])

        nodes = self.catalog.get(type_name, [])
        start = int(variables["after"] or 0)
        end = start + min(self.page_size, variables["first"])
        return {
            "metaobjects": {
                "nodes": nodes[start:end],
                "pageInfo": {"hasNextPage": end < len(nodes), "endCursor": str(end)},
            }
        }


@pytest.fixture
def config() -> FitmentConfig:
    return FitmentConfig(storefront_access_token="token", shop_url="https://shop.example")


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FakeStorefront:
    fake_backend = FakeStorefront()

    async def fake_post_graphql(_self: Any, query: str, variables: Mapping[str, Any]) -> dict[str, Any]:
        return await fake_backend.post_graphql(query, variables)

    monkeypatch.setattr("pyfitment._transport.StorefrontTransport.post_graphql", fake_post_graphql)
    return fake_backend


FALLBACK_CATALOG = [
    _node("V1", "2018", "Ford", "F-150", "Lariat", "5.0L"),
    _node("V2", "2018", "Ford", "F-150", "XLT", "3.5L"),
    _node("V3", "2018", "Ford", "Mustang", engine="5.0L"),
    _node("V4", "2020", "Toyota", "Camry"),
    _node("V5", "2020", "Honda", "Civic", "EX"),
]


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_fallback_type_used_only_when_primary_is_empty(config: FitmentConfig, backend: FakeStorefront) -> None:
    backend.catalog["custom.vehicle"] = FALLBACK_CATALOG

    async with FitmentClient(config) as client:
        load = await client.load_catalog()

    assert load.type_name == "custom.vehicle"
    assert [r.id for r in load.records] == ["V1", "V2", "V3", "V4", "V5"]
    assert backend.pages_requested("vehicle") == 1
    assert backend.pages_requested("custom.vehicle") == 3


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_primary_type_is_never_merged_with_fallback(config: FitmentConfig, backend: FakeStorefront) -> None:
    backend.catalog["vehicle"] = [_node("P1", "2022", "Kia", "EV6")]
    backend.catalog["custom.vehicle"] = FALLBACK_CATALOG

    async with FitmentClient(config) as client:
        index = await client.load_index()

    assert index.type_name == "vehicle"
    assert [r.id for r in index.records] == ["P1"]
    assert backend.pages_requested("custom.vehicle") == 0


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_both_types_empty_is_not_an_error(config: FitmentConfig, backend: FakeStorefront) -> None:
    async with FitmentClient(config) as client:
        load = await client.load_catalog()

    assert load.is_empty
    assert load.type_name is None


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_missing_token_fails_before_any_request(backend: FakeStorefront) -> None:
    async with FitmentClient(FitmentConfig(storefront_access_token="  ")) as client:
        with pytest.raises(FitmentConfigError):
            await client.load_catalog()

    assert backend.calls == []


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_error_mid_sweep_discards_partial_pages(config: FitmentConfig, backend: FakeStorefront) -> None:
    backend.catalog["vehicle"] = FALLBACK_CATALOG
    backend.fail_type = "vehicle"
    backend.fail_after_pages = 1

    async with FitmentClient(config) as client:
        with pytest.raises(FitmentApiError):
            await client.load_catalog()

    # the fallback is not tried after an error
    assert backend.pages_requested("custom.vehicle") == 0


@pytest.mark.asyncio
async def test_client_requires_context_manager(config: FitmentConfig) -> None:
    with pytest.raises(FitmentError, match="not initialized"):
        await FitmentClient(config).load_catalog()


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_finder_happy_path(config: FitmentConfig, backend: FakeStorefront) -> None:
    backend.catalog["vehicle"] = FALLBACK_CATALOG
    storage = MemoryStorage()
    visited: list[str] = []

    async with FitmentClient(config) as client:
        finder = VehicleFinder(client, FitmentHandoff(config, storage, navigate=visited.append))
        await finder.load()

    assert finder.status == ""
    assert finder.options(SelectorField.YEAR) == ["2018", "2020"]

    finder.select(SelectorField.YEAR, "2018")
    finder.select(SelectorField.MAKE, "Ford")
    finder.select(SelectorField.MODEL, "F-150")
    assert finder.visible_fields() == list(SelectorField)
    finder.select(SelectorField.SUBMODEL, "Lariat")
    finder.select(SelectorField.ENGINE, "5.0L")

    url = finder.submit()

    assert url == "https://shop.example/collections/all?filter.p.m.custom.fits_vehicles=V1"
    assert visited == [url]
    assert json.loads(storage.get_item("skm_garage_vehicle") or "") == {
        "id": "V1",
        "year": "2018",
        "make": "Ford",
        "model": "F-150",
        "submodel": "Lariat",
        "engine": "5.0L",
    }


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_finder_invalid_selection_keeps_state(config: FitmentConfig, backend: FakeStorefront) -> None:
    backend.catalog["vehicle"] = FALLBACK_CATALOG
    storage = MemoryStorage()

    async with FitmentClient(config) as client:
        finder = VehicleFinder(client, FitmentHandoff(config, storage))
        await finder.load()

    finder.select(SelectorField.YEAR, "2018")
    finder.select(SelectorField.MAKE, "Ford")
    finder.select(SelectorField.MODEL, "F-150")
    finder.select(SelectorField.SUBMODEL, "Lariat")
    before = finder.state

    assert finder.submit() is None
    assert finder.status == STATUS_INVALID_SELECTION
    assert finder.state == before
    assert storage.get_item("skm_garage_vehicle") is None

    finder.select(SelectorField.ENGINE, "5.0L")
    assert finder.submit() is not None


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_finder_reports_empty_catalog(config: FitmentConfig, backend: FakeStorefront) -> None:
    async with FitmentClient(config) as client:
        finder = VehicleFinder(client, FitmentHandoff(config, MemoryStorage()))
        index = await finder.load()

    assert index.is_empty
    assert finder.status == STATUS_EMPTY_CATALOG
    assert finder.options(SelectorField.YEAR) == []


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_finder_reports_error_with_empty_index(config: FitmentConfig, backend: FakeStorefront) -> None:
    backend.catalog["vehicle"] = FALLBACK_CATALOG
    storage = MemoryStorage()

    async with FitmentClient(config) as client:
        finder = VehicleFinder(client, FitmentHandoff(config, storage))
        await finder.load()
        assert len(finder.index) == 5

        backend.fail_type = "vehicle"
        backend.fail_after_pages = backend.pages_requested("vehicle") + 1
        index = await finder.load()

    assert index.is_empty
    assert finder.status == "Error: GraphQL errors"
    assert finder.options(SelectorField.YEAR) == []


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_finder_missing_token_is_raised(backend: FakeStorefront) -> None:
    config = FitmentConfig(storefront_access_token="")

    async with FitmentClient(config) as client:
        finder = VehicleFinder(client, FitmentHandoff(config, MemoryStorage()))
        with pytest.raises(FitmentConfigError):
            await finder.load()

    assert finder.status == "Missing Storefront access token."
    assert backend.calls == []
