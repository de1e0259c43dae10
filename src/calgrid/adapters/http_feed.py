"""HTTP feed adapter - fetches event records from a JSON endpoint."""

import logging
from typing import Any

import requests

from .json_file import extract_records

logger = logging.getLogger(__name__)


class HttpEventSource:
    """
    Fetches events from a URL serving JSON.

    Implements EventSource protocol. Network and decoding failures are logged
    and yield no events.
    """

    def __init__(
        self,
        url: str,
        timeout: int = 30,
        session: requests.Session | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.headers = headers or {}
        self._session = session or requests.Session()

    def fetch_events(self) -> list[dict[str, Any]]:
        try:
            resp = self._session.get(self.url, headers=self.headers, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.JSONDecodeError as e:
            logger.warning(f"Invalid JSON from {self.url}: {e}")
            return []
        except requests.RequestException as e:
            logger.warning(f"Failed to fetch events from {self.url}: {e}")
            return []

        return extract_records(data, self.url)
