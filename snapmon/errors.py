# -----------------------------------------------------------------------------
# Copyright (c) 2026 SnapRoute Telemetry Collector contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Exceptions raised while collecting from a SnapRoute device.
"""

from typing import Optional


class CollectionError(Exception):
    """Base class for errors that terminate a collection cycle."""


class TransportError(CollectionError):
    """The request could not be built, sent, or its body read."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"GET {url} failed: {reason}")


class DecodeError(CollectionError):
    """A response body is not valid JSON or does not match the endpoint schema."""

    def __init__(self, model_name: str, reason: str, url: Optional[str] = None, content: bytes = b''):
        self.model_name = model_name
        self.reason = reason
        self.url = url
        self.content = content
        where = f" from {url}" if url else ""
        super().__init__(f"Cannot decode {model_name}{where}: {reason}")


class IdentityError(CollectionError):
    """Local network interfaces could not be enumerated."""
