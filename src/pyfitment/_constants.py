"""Internal constants shared across the library."""

DEFAULT_API_VERSION = "2025-01"
DEFAULT_COLLECTION = "all"
ACCESS_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"
USER_AGENT = "pyfitment/1"

# ------------------------------------------------------------------
# Vehicle metaobject schema
# ------------------------------------------------------------------

#: Type name created by the admin API.
PRIMARY_VEHICLE_TYPE = "vehicle"
#: Older namespaced type name, tried only when the primary one is empty.
FALLBACK_VEHICLE_TYPE = "custom.vehicle"

PAGE_SIZE = 250
MAX_PAGES = 50

FIELD_YEAR = "year"
FIELD_MAKE = "make"
FIELD_MODEL = "model"
FIELD_SUBMODEL = "submodel"
FIELD_ENGINE = "engine"

# ------------------------------------------------------------------
# Handoff
# ------------------------------------------------------------------

GARAGE_STORAGE_KEY = "skm_garage_vehicle"
FITS_VEHICLES_FILTER = "filter.p.m.custom.fits_vehicles"
KEY_SEPARATOR = "::"
