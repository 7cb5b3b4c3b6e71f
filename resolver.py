# resolver.py

import enum
import ipaddress
import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

import requests

import config
from errors import InvalidQueryError, ResolutionError

logger = logging.getLogger(__name__)

DNS_TYPE_A = 1
_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


class QueryKind(enum.Enum):
    SELF = "self"
    IPV4 = "ipv4"
    DOMAIN = "domain"


@dataclass
class ResolvedQuery:
    kind: QueryKind
    text: str
    address: Optional[str]


def is_ipv4(text):
    try:
        ipaddress.IPv4Address(text)
        return True
    except ValueError:
        return False


def is_domain_name(text):
    name = text.rstrip(".")
    if not name or len(name) > 253:
        return False
    labels = name.split(".")
    return len(labels) >= 2 and all(_LABEL.match(label) for label in labels)


def classify_query(text):
    text = (text or "").strip()
    if not text:
        return QueryKind.SELF
    if is_ipv4(text):
        return QueryKind.IPV4
    return QueryKind.DOMAIN


def _host_from_input(text):
    # Accept pasted URLs like "https://example.com/path"
    if "://" in text:
        try:
            return urlsplit(text).hostname or ""
        except ValueError:
            # e.g. "http://[bad"
            return ""
    return text.split("/", 1)[0]


def to_ascii_hostname(host):
    """Punycode form of an internationalized name, "" if it cannot be encoded."""
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError:
        return ""


def resolve_domain(name):
    """Look up the first A record of `name` over DNS-over-HTTPS."""
    params = {"name": name, "type": "A"}
    logger.debug("DoH lookup %s %s", config.DOH_URL, params)
    try:
        response = requests.get(
            config.DOH_URL,
            params=params,
            headers={"Accept": "application/dns-json"},
            timeout=config.HTTP_TIMEOUT,
        )
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.RequestException as e:
        raise ResolutionError(f"Could not reach the DNS resolver for {name}") from e
    except ValueError as e:
        raise ResolutionError(f"Unreadable DNS answer for {name}") from e

    if not isinstance(data, dict):
        raise ResolutionError(f"Unreadable DNS answer for {name}")

    # Status is the DNS RCODE: 0 NOERROR, 3 NXDOMAIN, ...
    if data.get("Status") != 0:
        raise ResolutionError(f"Domain {name} could not be resolved")

    for answer in data.get("Answer") or []:
        if not isinstance(answer, dict):
            continue
        if answer.get("type") == DNS_TYPE_A and is_ipv4(answer.get("data", "")):
            return answer["data"]
    raise ResolutionError(f"Domain {name} has no IPv4 address")


def _public_address(client_ip):
    if not client_ip:
        return None
    try:
        address = ipaddress.ip_address(client_ip)
    except ValueError:
        return None
    return client_ip if address.is_global else None


def resolve_query(text, client_ip=None) -> ResolvedQuery:
    """Turn search box input into the address to geolocate.

    An empty search means the caller's own address. When the caller is on a
    private network (or localhost) the address is left as None so that the
    geolocation API reports the public address it sees instead.
    """
    text = (text or "").strip()
    kind = classify_query(text)

    if kind is QueryKind.SELF:
        return ResolvedQuery(kind, text, _public_address(client_ip))
    if kind is QueryKind.IPV4:
        return ResolvedQuery(kind, text, text)

    host = _host_from_input(text)
    if is_ipv4(host):
        return ResolvedQuery(QueryKind.IPV4, text, host)
    host = to_ascii_hostname(host)
    if not is_domain_name(host):
        raise InvalidQueryError(f"'{text}' is not a valid IPv4 address or domain")
    return ResolvedQuery(kind, text, resolve_domain(host.rstrip(".").lower()))
