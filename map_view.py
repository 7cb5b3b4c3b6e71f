# map_view.py

import logging
from dataclasses import dataclass

import requests
from opencage.geocoder import OpenCageGeocode, OpenCageGeocodeError

import config

logger = logging.getLogger(__name__)

# Initialize the OpenCage client for reverse geocoding marker labels
if config.OPENCAGE_API_KEY:
    geocoder = OpenCageGeocode(config.OPENCAGE_API_KEY)
else:
    geocoder = None


@dataclass
class MapView:
    center: tuple
    zoom: int
    tile_url: str
    attribution: str
    marker_text: str

    def to_dict(self):
        return {
            "center": list(self.center),
            "zoom": self.zoom,
            "tileUrl": self.tile_url,
            "attribution": self.attribution,
            "markerText": self.marker_text,
        }


def get_address_from_coords(lat, lng):
    """Formatted street address for a point, or None."""
    if not geocoder:
        return None
    try:
        results = geocoder.reverse_geocode(lat, lng, limit=1, no_annotations=1)
    except (OpenCageGeocodeError, requests.exceptions.RequestException) as e:
        logger.warning("Reverse geocoding (%s, %s) failed: %s", lat, lng, e)
        return None
    if results and results[0].get("formatted"):
        return results[0]["formatted"]
    return None


def marker_label(record):
    # (0, 0) is the "no coordinates" fallback, not a real place
    if (record.lat, record.lng) != (0.0, 0.0):
        address = get_address_from_coords(record.lat, record.lng)
        if address:
            return address
    return record.location or record.ip


def build_map_view(record, label=None):
    return MapView(
        center=(record.lat, record.lng),
        zoom=config.MAP_ZOOM,
        tile_url=config.TILE_URL,
        attribution=config.TILE_ATTRIBUTION,
        marker_text=label or record.location or record.ip,
    )
