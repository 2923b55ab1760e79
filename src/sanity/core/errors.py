# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exceptions raised by the Sanity SDK itself.

Transport failures are never wrapped: the blocking client lets
:class:`requests.exceptions.RequestException` propagate and the async client
lets :class:`httpx.HTTPError` propagate. HTTP status codes are not inspected,
so a 4xx/5xx response is returned to the caller like any other.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional


class SanityError(Exception):
    """Base structured error for the Sanity SDK."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.details = details or {}
        self.source = source or "client"
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "details": self.details,
            "source": self.source,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(SanityError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class AssetError(SanityError):
    """Local failure reading an asset before upload. No request is sent."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="asset_error", subcode=subcode, details=details, source="client")


__all__ = ["SanityError", "ValidationError", "AssetError"]
