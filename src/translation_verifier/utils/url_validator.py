"""Guard against fetching search-result pages hosted on internal networks.

Search hits are untrusted input: a result URL could point at localhost, a
private range or a cloud metadata endpoint. Every page fetch goes through
``ensure_public_url`` first.

NOTE: the hostname is resolved here and again by httpx when connecting, so a
DNS answer that changes between the two lookups is not caught.
"""

from __future__ import annotations

import ipaddress
import socket
from urllib.parse import urlparse

from translation_verifier.errors import UnsafeURLError

_INTERNAL_HOSTNAMES = frozenset({"localhost", "localhost.localdomain", "ip6-localhost"})

# Metadata and wildcard addresses that is_private does not cover
_BLOCKED_ADDRESSES = frozenset({
    ipaddress.ip_address("169.254.169.254"),
    ipaddress.ip_address("0.0.0.0"),
})


def _is_blocked(addr: ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
    return (
        addr in _BLOCKED_ADDRESSES
        or addr.is_private
        or addr.is_loopback
        or addr.is_reserved
        or addr.is_link_local
        or addr.is_multicast
    )


def ensure_public_url(url: str) -> str:
    """Return ``url`` unchanged if it targets a public http(s) host.

    Raises UnsafeURLError for internal hosts and ValueError for malformed or
    unresolvable URLs.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"Unsupported URL scheme: {parsed.scheme!r}")

    host = parsed.hostname
    if not host:
        raise ValueError(f"No hostname in URL: {url!r}")
    if host.lower() in _INTERNAL_HOSTNAMES:
        raise UnsafeURLError(f"Blocked internal hostname: {host!r}")

    try:
        literal = ipaddress.ip_address(host)
    except ValueError:
        literal = None
    if literal is not None:
        if _is_blocked(literal):
            raise UnsafeURLError(f"Blocked private/internal IP: {literal}")
        return url

    try:
        infos = socket.getaddrinfo(host, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except socket.gaierror as exc:
        raise ValueError(f"Cannot resolve hostname {host!r}: {exc}") from exc

    for *_, sockaddr in infos:
        addr = ipaddress.ip_address(sockaddr[0])
        if _is_blocked(addr):
            raise UnsafeURLError(f"Hostname {host!r} resolves to blocked address: {addr}")
    return url
