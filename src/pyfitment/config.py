"""Client configuration for pyfitment."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyfitment._constants import (
    DEFAULT_API_VERSION,
    DEFAULT_COLLECTION,
    FALLBACK_VEHICLE_TYPE,
    GARAGE_STORAGE_KEY,
    MAX_PAGES,
    PAGE_SIZE,
    PRIMARY_VEHICLE_TYPE,
)
from pyfitment.exceptions import FitmentConfigError


@dataclasses.dataclass(frozen=True)
class FitmentConfig:
    """Client configuration.

    Parameters
    ----------
    storefront_access_token : str
        Storefront API access token. Required; every load fails with
        :class:`FitmentConfigError` when blank.
    shop_url : str
        Storefront origin, e.g. ``"https://example.myshopify.com"``.
        Empty means URLs are built relative to the shop root.
    api_version : str
        Storefront API version segment.
    collection_handle : str
        Collection the catalog handoff navigates to.
    page_size : int
        Metaobjects requested per page.
    max_pages : int
        Hard cap on pages per sweep.
    primary_type : str
        Metaobject type tried first.
    fallback_type : str
        Metaobject type tried when the primary type yields no records.
    storage_key : str
        Client-local storage slot for the resolved vehicle.
    storage_path : str or None
        JSON file backing client-local storage for the CLI scripts.
    """

    storefront_access_token: str
    shop_url: str = ""
    api_version: str = DEFAULT_API_VERSION
    collection_handle: str = DEFAULT_COLLECTION
    page_size: int = PAGE_SIZE
    max_pages: int = MAX_PAGES
    primary_type: str = PRIMARY_VEHICLE_TYPE
    fallback_type: str = FALLBACK_VEHICLE_TYPE
    storage_key: str = GARAGE_STORAGE_KEY
    storage_path: str | None = None

    @property
    def graphql_endpoint(self) -> str:
        return f"/api/{self.api_version or DEFAULT_API_VERSION}/graphql.json"

    @property
    def destination_collection(self) -> str:
        return self.collection_handle or DEFAULT_COLLECTION

    def validate(self) -> None:
        """Raise :class:`FitmentConfigError` if the configuration is unusable."""
        if not self.storefront_access_token or not self.storefront_access_token.strip():
            raise FitmentConfigError("Missing Storefront access token")
        if self.page_size <= 0:
            raise FitmentConfigError(f"page_size must be positive, got {self.page_size}")
        if self.max_pages <= 0:
            raise FitmentConfigError(f"max_pages must be positive, got {self.max_pages}")

    @classmethod
    def from_env(cls, **overrides: Any) -> FitmentConfig:
        """Create configuration from environment variables.

        Reads ``FITMENT_STOREFRONT_TOKEN`` and optional ``FITMENT_*``
        variables. Explicit keyword arguments override environment values.
        A missing token is not rejected here; :meth:`validate` does that
        at load time.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "FITMENT_STOREFRONT_TOKEN": "storefront_access_token",
            "FITMENT_SHOP_URL": "shop_url",
            "FITMENT_API_VERSION": "api_version",
            "FITMENT_COLLECTION": "collection_handle",
            "FITMENT_PRIMARY_TYPE": "primary_type",
            "FITMENT_FALLBACK_TYPE": "fallback_type",
            "FITMENT_STORAGE_KEY": "storage_key",
            "FITMENT_STORAGE_PATH": "storage_path",
        }
        config_kwargs: dict[str, Any] = {"storefront_access_token": ""}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # numeric settings, handle separately
        page_size_env = env.get("FITMENT_PAGE_SIZE")
        if page_size_env is not None and "page_size" not in overrides:
            config_kwargs["page_size"] = int(page_size_env)

        max_pages_env = env.get("FITMENT_MAX_PAGES")
        if max_pages_env is not None and "max_pages" not in overrides:
            config_kwargs["max_pages"] = int(max_pages_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
