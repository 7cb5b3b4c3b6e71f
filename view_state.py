# view_state.py

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass
class LocationRecord:
    ip: str
    location: str
    timezone: str
    isp: str
    lat: float = 0.0
    lng: float = 0.0

    def to_dict(self):
        return asdict(self)


# Shown until the first lookup completes
PLACEHOLDER_RECORD = LocationRecord(
    ip="192.XX.XXX.X",
    location="Alexandria",
    timezone="TZ",
    isp="Com.",
    lat=31.2001,
    lng=29.9187,
)


def valid_coordinates(lat, lng) -> bool:
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


@dataclass
class ViewState:
    """What the info panel and the map render.

    The last-known record survives a failed lookup; only the error changes.
    """

    query: str = ""
    location: Optional[LocationRecord] = None
    loading: bool = False
    error: Optional[str] = None

    def start(self, query):
        self.query = query
        self.loading = True
        self.error = None
        return self

    def succeed(self, record: LocationRecord):
        self.location = record
        self.loading = False
        self.error = None
        return self

    def fail(self, message: str):
        self.loading = False
        self.error = message
        return self

    def to_dict(self):
        return {
            "query": self.query,
            "location": self.location.to_dict() if self.location else None,
            "loading": self.loading,
            "error": self.error,
        }
