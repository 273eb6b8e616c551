"""Ways to nudge the host app after a handoff."""

from __future__ import annotations

import logging
import webbrowser
from typing import Protocol

import requests

from .errors import PublishFailed

logger = logging.getLogger(__name__)


class WakeSignal(Protocol):
    def open_url(self, url: str) -> None: ...


class SystemUrlOpener:
    """Hand the custom-scheme URL to the OS URL handler."""

    def open_url(self, url: str) -> None:
        try:
            accepted = webbrowser.open(url)
        except webbrowser.Error as exc:
            raise PublishFailed(f"Unable to open {url}: {exc}") from exc
        if not accepted:
            raise PublishFailed(f"No handler accepted {url}")


class HttpWakeRelay:
    """POST the wake URL to a relay that forwards it to the host."""

    def __init__(self, relay_url: str, timeout: float = 5) -> None:
        self.relay_url = relay_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def open_url(self, url: str) -> None:
        try:
            response = self.session.post(self.relay_url, json={"url": url}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise PublishFailed(f"Wake relay unreachable: {exc}") from exc
        if response.status_code >= 400:
            logger.error("Wake relay failed (%s): %s", response.status_code, response.text)
            raise PublishFailed(f"Wake relay returned {response.status_code}")
