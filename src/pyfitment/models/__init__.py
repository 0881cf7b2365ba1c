"""Data models for pyfitment."""

from pyfitment.models.context import FitmentContext
from pyfitment.models.metaobject import MetaobjectConnection, MetaobjectField, MetaobjectNode, PageInfo
from pyfitment.models.vehicle import VehicleRecord

__all__ = [
    "FitmentContext",
    "MetaobjectConnection",
    "MetaobjectField",
    "MetaobjectNode",
    "PageInfo",
    "VehicleRecord",
]
