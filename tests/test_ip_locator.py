# tests/test_ip_locator.py

from unittest.mock import patch

import pytest
import requests

from conftest import IP_API_SUCCESS, make_response
from errors import GeolocationError
from ip_locator import get_location_from_ip, normalize_response


def test_get_location_from_ip():
    with patch("ip_locator.requests.get", return_value=make_response(IP_API_SUCCESS)) as get:
        record = get_location_from_ip("8.8.8.8")

    assert get.call_args[0][0].endswith("/json/8.8.8.8")
    assert "fields" in get.call_args[1]["params"]
    assert record.ip == "8.8.8.8"
    assert record.location == "Mountain View, California 94043"
    assert record.timezone == "America/Los_Angeles"
    assert record.isp == "Google LLC"
    assert (record.lat, record.lng) == (37.4223, -122.085)


def test_self_lookup_sends_no_address():
    with patch("ip_locator.requests.get", return_value=make_response(IP_API_SUCCESS)) as get:
        get_location_from_ip()
    assert get.call_args[0][0].endswith("/json/")


def test_provider_failure_message_is_surfaced():
    failed = {"status": "fail", "message": "reserved range", "query": "0.0.0.1"}
    with patch("ip_locator.requests.get", return_value=make_response(failed)):
        with pytest.raises(GeolocationError, match="reserved range"):
            get_location_from_ip("0.0.0.1")


def test_http_error():
    with patch("ip_locator.requests.get", return_value=make_response(status=429)):
        with pytest.raises(GeolocationError, match="unavailable"):
            get_location_from_ip("8.8.8.8")


def test_unreadable_body():
    response = make_response()
    response.json.side_effect = ValueError("not json")
    with patch("ip_locator.requests.get", return_value=response):
        with pytest.raises(GeolocationError, match="unreadable"):
            get_location_from_ip("8.8.8.8")


def test_network_error():
    with patch("ip_locator.requests.get", side_effect=requests.exceptions.ConnectionError()):
        with pytest.raises(GeolocationError):
            get_location_from_ip("8.8.8.8")


@pytest.mark.parametrize("coords", [
    {},
    {"lat": 10.0},
    {"lat": None, "lon": None},
    {"lat": "north", "lon": 3},
    {"lat": 95.0, "lon": 10.0},
])
def test_bad_coordinates_fall_back_to_origin(coords):
    record = normalize_response({"query": "1.2.3.4", **coords})
    assert (record.lat, record.lng) == (0.0, 0.0)


def test_location_text_skips_missing_parts():
    assert normalize_response({"city": "Paris"}).location == "Paris"
    assert normalize_response({"regionName": "Ontario", "zip": "K1A"}).location == "Ontario K1A"
    assert normalize_response({}).location == "Unknown"


@pytest.mark.parametrize("payload", [[], ["x"], "success", 42])
def test_non_object_body(payload):
    with patch("ip_locator.requests.get", return_value=make_response(payload)):
        with pytest.raises(GeolocationError, match="unreadable"):
            get_location_from_ip("8.8.8.8")
