from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from fresh_powder.config import AppConfig, ResortSettings, app_config
from fresh_powder.models import Resort


def _to_resort(settings: ResortSettings) -> Resort:
    return Resort.from_dict(
        {
            **settings.baseline,
            "id": settings.id,
            "name": settings.name,
            "location": settings.location,
            "latitude": settings.latitude,
            "longitude": settings.longitude,
        }
    )


def all_resorts(config: Optional[AppConfig] = None) -> List[Resort]:
    """Build the static resort table from configuration."""

    config = config or app_config
    resorts = [_to_resort(settings) for settings in config.resorts]
    seen = set()
    for resort in resorts:
        if resort.id in seen:
            raise ValueError(f"Duplicate resort id: {resort.id}")
        seen.add(resort.id)
    return resorts


def resort_lookup(resorts: Iterable[Resort]) -> Dict[str, Resort]:
    return {resort.id: resort for resort in resorts}


def coldest_first(resorts: Iterable[Resort]) -> List[Resort]:
    """Order resorts by current temperature, coldest first, for display."""
    return sorted(resorts, key=lambda resort: resort.current_temp)
