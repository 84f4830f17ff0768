"""Internal constants shared across the library."""

from __future__ import annotations

# ------------------------------------------------------------------
# Store keys
# ------------------------------------------------------------------

REQUESTER_LOCATION_KEY = "requester_location"
OWNER_LOCATION_KEY = "owner_location"
NOTIFY_STATUS_KEY = "notify_status"

#: Lifetime of a stored location record (1 hour).
LOCATION_TTL_SECONDS: int = 3600
#: Lifetime of the shared notify status (10 minutes).
STATUS_TTL_SECONDS: int = 600
#: Debounce before a delayed notification is pushed.
NOTIFY_DELAY_SECONDS: float = 30.0

# ------------------------------------------------------------------
# Notification text
# ------------------------------------------------------------------

DEFAULT_MESSAGE = "车旁有人等待"
NOTIFY_HEADER = "🚗 挪车请求"
MESSAGE_PREFIX = "💬 留言: "
LOCATION_ATTACHED = "📍 已附带位置信息，点击查看"
LOCATION_MISSING = "⚠️ 未提供位置信息"
OWNER_CONFIRM_PATH = "/owner-confirm"

# ------------------------------------------------------------------
# Bark push parameters
# ------------------------------------------------------------------

BARK_TITLE = "挪车请求"
BARK_GROUP = "MoveCar"
BARK_LEVEL = "critical"
BARK_SOUND = "minuet"
BARK_ICON = "https://cdn-icons-png.flaticon.com/512/741/741407.png"

# ------------------------------------------------------------------
# Map links
# ------------------------------------------------------------------

MAP_LABEL = "位置"
AMAP_MARKER_URL = "https://uri.amap.com/marker"
APPLE_MAPS_URL = "https://maps.apple.com/"
