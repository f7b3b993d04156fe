"""Device location model."""

import json
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GeoPoint:
    """Last known device location."""

    lat: float
    lng: float

    @classmethod
    def from_json(cls, raw: Optional[str]) -> Optional["GeoPoint"]:
        """
        Parse the stored ``{"lat": .., "lng": ..}`` document.

        Returns None for a missing or unreadable value.
        """
        if not raw:
            return None
        try:
            payload = json.loads(raw)
            return cls(lat=float(payload["lat"]), lng=float(payload["lng"]))
        except (ValueError, TypeError, KeyError):
            return None

    def to_json(self) -> str:
        return json.dumps({"lat": self.lat, "lng": self.lng})
