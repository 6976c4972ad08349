from .client import CloudflareClient
from .results import IncompleteResultsError, exit_code, reorder
from .selection import apply_overrides, select_zones
from .zone import Zone, ZoneError

__all__ = [
    "CloudflareClient",
    "IncompleteResultsError",
    "Zone",
    "ZoneError",
    "apply_overrides",
    "exit_code",
    "reorder",
    "select_zones",
]
