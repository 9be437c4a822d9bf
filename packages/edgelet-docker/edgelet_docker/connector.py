"""Engine endpoint resolution.

Turns an engine locator (``unix:///var/run/docker.sock``,
``http://127.0.0.1:2375`` ...) into the pieces an ``httpx.AsyncClient``
needs: a transport and a base URL.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlsplit

import httpx

from edgelet_docker.exceptions import ConfigurationError

UNIX_SCHEME = "unix"
HTTP_SCHEMES = frozenset({"http", "https", "tcp"})

# Host part is ignored by the socket transport but httpx requires one.
_UNIX_BASE_URL = "http://docker"


def get_base_path(url: str) -> str:
    """Return the socket path for ``unix://`` locators, else the locator itself."""
    parts = urlsplit(url)
    if parts.scheme == UNIX_SCHEME:
        return parts.path
    return url


@dataclass(frozen=True)
class DockerConnector:
    """Resolved endpoint: where requests go and how they get there."""

    scheme: str
    base_path: str

    @classmethod
    def from_url(cls, url: str) -> "DockerConnector":
        scheme = urlsplit(url).scheme
        if scheme == UNIX_SCHEME:
            base_path = get_base_path(url)
            if not base_path or not os.path.exists(base_path):
                raise ConfigurationError(f"Invalid unix domain socket URI: {url}", url=url)
            return cls(scheme=scheme, base_path=base_path)
        if scheme in HTTP_SCHEMES:
            if not urlsplit(url).netloc:
                raise ConfigurationError(f"Invalid docker URI: {url}", url=url)
            return cls(scheme=scheme, base_path=url)
        raise ConfigurationError(f"Invalid docker URI: {url}", url=url)

    @property
    def base_url(self) -> str:
        if self.scheme == UNIX_SCHEME:
            return _UNIX_BASE_URL
        if self.scheme == "tcp":
            return "http://" + self.base_path[len("tcp://"):]
        return self.base_path

    def transport(self) -> httpx.AsyncBaseTransport:
        if self.scheme == UNIX_SCHEME:
            return httpx.AsyncHTTPTransport(uds=self.base_path)
        return httpx.AsyncHTTPTransport()
