"""
Transport that serves previously captured API responses from a directory.

A capture for ``<base>state/psus`` is looked up as ``<dir>/state/psus.json``
and then ``<dir>/state_psus.json``. Follow-up pages requested with
``?CurrentMarker=N`` are looked up with an ``_N`` suffix on the file stem.
"""

import logging
import os
from typing import List
from urllib.parse import parse_qs, urlsplit

from snapmon.errors import TransportError

LOG = logging.getLogger(__name__)


class ReplayTransport:
    """Drop-in replacement for HttpTransport when running with --fromJson."""

    def __init__(self, directory: str, base_url: str):
        self.directory = directory
        self.base_path = urlsplit(base_url).path
        if not os.path.isdir(directory):
            LOG.warning(f"Replay directory does not exist: {directory}")

    def _candidates(self, url: str) -> List[str]:
        parts = urlsplit(url)
        path = parts.path
        if self.base_path and path.startswith(self.base_path):
            path = path[len(self.base_path):]
        stem = path.strip('/')

        marker = parse_qs(parts.query).get('CurrentMarker')
        if marker:
            stem = f"{stem}_{marker[0]}"

        return [
            os.path.join(self.directory, *stem.split('/')) + '.json',
            os.path.join(self.directory, stem.replace('/', '_') + '.json'),
        ]

    def fetch(self, url: str) -> bytes:
        """
        Return the captured body for the URL.

        Raises:
            TransportError: no capture exists or it cannot be read
        """
        candidates = self._candidates(url)
        for file_path in candidates:
            if not os.path.exists(file_path):
                continue
            try:
                with open(file_path, 'rb') as f:
                    content = f.read()
            except OSError as e:
                raise TransportError(url, f"cannot read capture {file_path}: {e}") from e
            LOG.debug(f"Replay match: {url} -> {file_path}")
            return content

        raise TransportError(url, f"no capture found (tried {', '.join(candidates)})")

    def close(self) -> None:
        pass
