# -----------------------------------------------------------------------------
# Copyright (c) 2026 SnapRoute Telemetry Collector contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Base model shared by every FlexSwitch state schema.

Decoding is structural: unknown keys are ignored, absent keys and JSON null
fall back to the zero value of the field, and a key carrying the wrong JSON
type fails the whole document.
"""

from typing import Annotated, Any, List, Optional

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict, Field, ValidationError, model_validator

from snapmon.errors import DecodeError

# Counters on the device are signed 64-bit
Int64 = Annotated[int, Field(ge=-(2 ** 63), le=2 ** 63 - 1)]


class BaseModel(PydanticBaseModel):
    """Strict, immutable model with zero-value defaults."""

    model_config = ConfigDict(strict=True, extra='ignore', frozen=True)

    @model_validator(mode='before')
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null means "leave the zero value"
        if data is None:
            return {}
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @classmethod
    def from_api_response(cls, content: bytes, url: Optional[str] = None):
        """
        Decode a raw response body into this model.

        Args:
            content: Raw JSON body as returned by the transport
            url: Request URL, kept on the error for logging

        Raises:
            DecodeError: malformed JSON or a type mismatch against the schema
        """
        try:
            return cls.model_validate_json(content)
        except ValidationError as e:
            raise DecodeError(cls.__name__, str(e), url=url, content=content) from e


class Envelope(BaseModel):
    """
    Paginated wrapper used by list-valued endpoints.

    Subclasses add an ``Objects`` list of ``{ObjectId, Object}`` entries.
    """

    MoreExist: bool = False
    ObjCount: Int64 = 0
    CurrentMarker: Int64 = 0
    NextMarker: Int64 = 0

    def objects(self) -> List[Any]:
        """Payloads of every entry on this page, in response order."""
        return [entry.Object for entry in getattr(self, 'Objects', [])]

    def merged_with(self, other: 'Envelope') -> 'Envelope':
        """Return this envelope with the entries of a following page appended."""
        return self.model_copy(update={
            'Objects': list(self.Objects) + list(other.Objects),
            'ObjCount': self.ObjCount + other.ObjCount,
            'MoreExist': other.MoreExist,
            'NextMarker': other.NextMarker,
        })
