from __future__ import annotations

from typing import Mapping, Sequence

import structlog

from .zone import Zone

logger = structlog.getLogger(__name__)


def select_zones(configured: Mapping[str, Zone], requested: str | None = None) -> dict[str, Zone]:
    """Resolves the batch from an optional zone identifier and the configured zones."""
    if not requested:
        return {identifier: zone.model_copy(deep=True) for identifier, zone in configured.items()}

    if requested in configured:
        return {requested: configured[requested].model_copy(deep=True)}

    logger.debug("Zone is not configured, purging everything", zone=requested)
    return {requested: Zone()}


def apply_overrides(
    batch: Mapping[str, Zone],
    files: Sequence[str] | None = None,
    tags: Sequence[str] | None = None,
    hosts: Sequence[str] | None = None,
) -> Mapping[str, Zone]:
    """Replaces every zone's filters with the given ones, if any is non-empty."""
    overrides = {
        key: list(value)
        for key, value in (("files", files), ("tags", tags), ("hosts", hosts))
        if value
    }
    if not overrides:
        return batch

    for zone in batch.values():
        zone.replace_parameters(**overrides)
    return batch
