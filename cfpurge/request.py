from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import quote

from .zone import Zone


def quote_segment(value: str) -> str:
    """Percent-encodes a value into exactly one URL path segment."""
    segment = quote(value, safe="")
    # "." and ".." would be resolved as dot segments
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    return segment


@dataclass(slots=True, frozen=True)
class PurgeRequest:
    identifier: str
    payload: dict[str, Any]

    @property
    def path(self) -> str:
        """Encoded path, relative to the API base URL."""
        return f"zones/{quote_segment(self.identifier)}/purge_cache"


def build_requests(batch: Mapping[str, Zone]) -> dict[str, PurgeRequest]:
    """One request per batch entry, keyed and ordered like the batch."""
    return {identifier: PurgeRequest(identifier, zone.serialize()) for identifier, zone in batch.items()}
