from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchConfig:
    radius_km: float = 30.0
    earth_radius_km: float = 6371.0
    # Fuse-style distance: 0 is an exact match, 1 matches anything.
    fuzziness: float = 0.3
    # Used when the device location is unknown (permission denied).
    default_latitude: float = 28.6139
    default_longitude: float = 77.2090

    @property
    def min_similarity(self) -> float:
        return 1.0 - self.fuzziness


DEFAULT_SEARCH_CONFIG = SearchConfig()
