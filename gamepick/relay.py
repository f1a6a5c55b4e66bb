"""HTTP relay client used to reach the Steam Web API."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import quote

import requests

from gamepick.errors import RelayError

logger = logging.getLogger(__name__)

DEFAULT_RELAY_URL = "https://api.allorigins.win/raw?url="
_TIMEOUT = 10  # seconds
_KEY_RE = re.compile(r"(key(?:=|%3D))(?:(?!&|%26).)+", re.IGNORECASE)


def mask_key(url: str) -> str:
    """Return *url* with the value of any ``key`` parameter hidden."""
    return _KEY_RE.sub(r"\1***", url)


class RelayClient:
    """Forwards GET requests through a third-party relay.

    Parameters
    ----------
    base_url:
        The relay endpoint; the target URL is appended to it verbatim.
    encode:
        Percent-encode the target URL before appending it. Relays differ on
        whether they expect this, so it is fixed per client.
    timeout:
        Seconds to wait for the relay before giving up.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_RELAY_URL,
        encode: bool = False,
        timeout: float = _TIMEOUT,
    ) -> None:
        if not base_url:
            raise ValueError("base_url must not be empty")
        self.base_url = base_url
        self.encode = encode
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def build_url(self, target_url: str) -> str:
        """Return the relay URL that fetches *target_url*."""
        if self.encode:
            return f"{self.base_url}{quote(target_url, safe='')}"
        return f"{self.base_url}{target_url}"

    def relay(self, target_url: str) -> Any:
        """GET *target_url* through the relay and return the decoded JSON body.

        Raises ``RelayError`` on a non-2xx status, an undecodable body or a
        transport failure. Never retries.
        """
        url = self.build_url(target_url)
        logger.debug("GET %s via %s", mask_key(target_url), self.base_url)
        try:
            resp = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.debug("Relay transport failure: %s", type(exc).__name__)
            raise RelayError(network_failure=True) from exc

        if not 200 <= resp.status_code < 300:
            raise RelayError(status_code=resp.status_code, body=resp.text)
        try:
            return resp.json()
        except ValueError as exc:
            raise RelayError(status_code=resp.status_code, body=resp.text) from exc

    def close(self) -> None:
        self._session.close()
