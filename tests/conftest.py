# tests/conftest.py

from unittest.mock import Mock

import pytest
import requests


def make_response(payload=None, status=200):
    """A stand-in for requests.Response."""
    response = Mock()
    response.status_code = status
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} Error")
    else:
        response.raise_for_status.return_value = None
    return response


IP_API_SUCCESS = {
    "status": "success",
    "query": "8.8.8.8",
    "city": "Mountain View",
    "regionName": "California",
    "zip": "94043",
    "timezone": "America/Los_Angeles",
    "isp": "Google LLC",
    "lat": 37.4223,
    "lon": -122.085,
}


@pytest.fixture(autouse=True)
def no_reverse_geocoding(monkeypatch):
    import map_view
    monkeypatch.setattr(map_view, "geocoder", None)


@pytest.fixture
def app():
    from app import app as flask_app
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
