"""pyfitment - Year/Make/Model vehicle fitment lookup for Storefront catalogs."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfitment")
except PackageNotFoundError:
    __version__ = "0+local"
from pyfitment.client import CatalogLoad, FitmentClient
from pyfitment.config import FitmentConfig
from pyfitment.exceptions import (
    FitmentApiError,
    FitmentConfigError,
    FitmentError,
    FitmentSelectionError,
    FitmentTransportError,
)
from pyfitment.finder import VehicleFinder
from pyfitment.handoff import (
    FitmentHandoff,
    JsonFileStorage,
    LocalStorage,
    MemoryStorage,
    build_catalog_url,
    load_saved_context,
)
from pyfitment.index import FitmentEntry, FitmentIndex, build_index, selection_key
from pyfitment.models import FitmentContext, VehicleRecord
from pyfitment.resolver import resolve, resolve_context
from pyfitment.state.fields import FieldStatus, SelectorField
from pyfitment.state.selector import FieldState, SelectorState, initial_state, select

__all__ = [
    "__version__",
    "CatalogLoad",
    "FieldState",
    "FieldStatus",
    "FitmentApiError",
    "FitmentClient",
    "FitmentConfig",
    "FitmentConfigError",
    "FitmentContext",
    "FitmentEntry",
    "FitmentError",
    "FitmentHandoff",
    "FitmentIndex",
    "FitmentSelectionError",
    "FitmentTransportError",
    "JsonFileStorage",
    "LocalStorage",
    "MemoryStorage",
    "SelectorField",
    "SelectorState",
    "VehicleFinder",
    "VehicleRecord",
    "build_catalog_url",
    "build_index",
    "initial_state",
    "load_saved_context",
    "resolve",
    "resolve_context",
    "select",
    "selection_key",
]
