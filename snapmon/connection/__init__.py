"""
HTTP transport for the SnapRoute FlexSwitch REST API.
"""

import logging
from typing import Optional

import requests

from snapmon.errors import TransportError

# Initialize logger
LOG = logging.getLogger(__name__)


def get_session() -> requests.Session:
    """
    Return a plain requests.Session for the device API.

    The local state API is unauthenticated and expects no custom headers, so
    the session is left at library defaults.
    """
    return requests.Session()


class HttpTransport:
    """
    Issues one unauthenticated GET per call and returns the buffered body.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        """
        Args:
            session: Session to reuse; a new one is created if omitted
            timeout: Per-request timeout in seconds, None keeps the requests default
        """
        self.session = session or get_session()
        self.timeout = timeout

    def fetch(self, url: str) -> bytes:
        """
        GET the URL and return the raw response body.

        The HTTP status is not inspected; an error page surfaces later as a
        decode failure.

        Raises:
            TransportError: malformed URL, connection failure or body read failure
        """
        LOG.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            content = response.content
        except requests.exceptions.RequestException as e:
            raise TransportError(url, str(e)) from e

        if not 200 <= response.status_code < 300:
            LOG.debug(f"GET {url} returned HTTP {response.status_code} ({len(content)} bytes)")
        return content

    def close(self) -> None:
        self.session.close()
