"""movecar - Notify a parked car's owner and track their confirmation."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("movecar")
except PackageNotFoundError:
    __version__ = "0+local"
from movecar.access import RegionGate
from movecar.config import MoveCarConfig
from movecar.coords import build_map_links, out_of_china, wgs84_to_gcj02
from movecar.delivery import BarkGateway, DeliveryGateway
from movecar.exceptions import (
    DeliveryFailedError,
    LocationNotFoundError,
    MoveCarConfigError,
    MoveCarError,
    StoreError,
)
from movecar.models import (
    GeoPoint,
    LocationRecord,
    MapLinks,
    NotifyRequest,
    NotifyResult,
    NotifyStatus,
    OwnerConfirmation,
    StatusSnapshot,
)
from movecar.state import KeyValueStore, MemoryStore
from movecar.workflow import NotificationWorkflow

__all__ = [
    "__version__",
    "BarkGateway",
    "DeliveryFailedError",
    "DeliveryGateway",
    "GeoPoint",
    "KeyValueStore",
    "LocationNotFoundError",
    "LocationRecord",
    "MapLinks",
    "MemoryStore",
    "MoveCarConfig",
    "MoveCarConfigError",
    "MoveCarError",
    "NotificationWorkflow",
    "NotifyRequest",
    "NotifyResult",
    "NotifyStatus",
    "OwnerConfirmation",
    "RegionGate",
    "StatusSnapshot",
    "StoreError",
    "build_map_links",
    "out_of_china",
    "wgs84_to_gcj02",
]
