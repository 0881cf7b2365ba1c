from __future__ import annotations

import pytest

from pyfitment.config import FitmentConfig
from pyfitment.exceptions import FitmentConfigError


def test_defaults() -> None:
    config = FitmentConfig(storefront_access_token="token")

    assert config.api_version == "2025-01"
    assert config.graphql_endpoint == "/api/2025-01/graphql.json"
    assert config.destination_collection == "all"
    assert (config.primary_type, config.fallback_type) == ("vehicle", "custom.vehicle")
    assert (config.page_size, config.max_pages) == (250, 50)
    assert config.storage_key == "skm_garage_vehicle"


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FITMENT_STOREFRONT_TOKEN", "token")
    monkeypatch.setenv("FITMENT_SHOP_URL", "https://shop.example")
    monkeypatch.setenv("FITMENT_COLLECTION", "truck-parts")
    monkeypatch.setenv("FITMENT_PAGE_SIZE", "100")

    config = FitmentConfig.from_env(max_pages=3)

    assert config.storefront_access_token == "token"
    assert config.shop_url == "https://shop.example"
    assert config.collection_handle == "truck-parts"
    assert config.page_size == 100
    assert config.max_pages == 3


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FITMENT_STOREFRONT_TOKEN", "env-token")
    monkeypatch.setenv("FITMENT_PAGE_SIZE", "100")

    config = FitmentConfig.from_env(storefront_access_token="explicit", page_size=10)

    assert config.storefront_access_token == "explicit"
    assert config.page_size == 10


def test_from_env_without_token_fails_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FITMENT_STOREFRONT_TOKEN", raising=False)

    config = FitmentConfig.from_env()

    with pytest.raises(FitmentConfigError, match="access token"):
        config.validate()


@pytest.mark.parametrize("field_name", ["page_size", "max_pages"])
def test_non_positive_paging_rejected(field_name: str) -> None:
    config = FitmentConfig(storefront_access_token="token", **{field_name: 0})

    with pytest.raises(FitmentConfigError, match=field_name):
        config.validate()
