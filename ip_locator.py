# ip_locator.py

import logging

import requests

import config
from errors import GeolocationError
from view_state import LocationRecord, valid_coordinates

logger = logging.getLogger(__name__)


def _coordinates(data):
    try:
        lat, lng = float(data["lat"]), float(data["lon"])
    except (KeyError, TypeError, ValueError):
        return 0.0, 0.0
    if not valid_coordinates(lat, lng):
        return 0.0, 0.0
    return lat, lng


def format_location(data):
    """'City, Region 12345' with whatever parts the provider returned."""
    place = ", ".join(part for part in (data.get("city"), data.get("regionName")) if part)
    postal = data.get("zip")
    if postal:
        place = f"{place} {postal}" if place else postal
    return place or "Unknown"


def normalize_response(data):
    lat, lng = _coordinates(data)
    return LocationRecord(
        ip=data.get("query") or "",
        location=format_location(data),
        timezone=data.get("timezone") or "",
        isp=data.get("isp") or "",
        lat=lat,
        lng=lng,
    )


def get_location_from_ip(ip_address=None):
    # No address: the API answers for whoever is calling it
    url = f"{config.IP_API_URL}/{ip_address}" if ip_address else f"{config.IP_API_URL}/"
    logger.debug("Geolocation request %s", url)

    try:
        response = requests.get(url, params={"fields": config.IP_API_FIELDS}, timeout=config.HTTP_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.RequestException as e:
        raise GeolocationError("Geolocation service is unavailable") from e
    except ValueError as e:
        raise GeolocationError("Geolocation service sent an unreadable answer") from e

    if not isinstance(data, dict):
        raise GeolocationError("Geolocation service sent an unreadable answer")
    if data.get("status") != "success":
        reason = (data or {}).get("message", "unknown error")
        raise GeolocationError(f"Could not locate {ip_address or 'your address'}: {reason}")

    return normalize_response(data)
