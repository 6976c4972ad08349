from __future__ import annotations

from typing import Iterable, Mapping

from .zone import Zone


class IncompleteResultsError(RuntimeError):
    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"No purge result for zone(s): {', '.join(missing)}")
        self.missing = missing


def reorder(results: Mapping[str, Zone], keys: Iterable[str]) -> dict[str, Zone]:
    """Re-sequences results to follow the original batch order."""
    keys = list(keys)
    missing = [key for key in keys if key not in results]
    if missing:
        raise IncompleteResultsError(missing)
    return {key: results[key] for key in keys}


def exit_code(results: Mapping[str, Zone]) -> int:
    """Return 1 if no zone was purged successfully, otherwise 0."""
    return int(not any(zone.success for zone in results.values()))
