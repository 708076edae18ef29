# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exception hierarchy for the bigbucket client.

Every failure raised by the client derives from :class:`BigbucketError`:

- :class:`RequestConstructionError` (and :class:`MalformedAddressError`): the
  request could not be built.
- :class:`TokenRefreshError` (and :class:`MalformedTokenError`,
  :class:`MetadataUnavailableError`, :class:`MalformedResponseError`): a bearer
  token could not be obtained.
- :class:`TransportError`: the request was built but never completed.
- :class:`ServerError`: the server answered with a non-200 status and a
  JSON ``{"error": ...}`` body.
- :class:`ResponseDecodeError`: a response body did not have the expected
  JSON shape.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from . import _error_codes as ec


class BigbucketError(Exception):
    """Base structured error for the bigbucket client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class RequestConstructionError(BigbucketError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="request_construction_error", subcode=subcode or ec.REQUEST_INVALID, details=details)


class MalformedAddressError(RequestConstructionError):
    def __init__(self, address: str, reason: str):
        super().__init__(
            f"Malformed address {address!r}: {reason}",
            subcode=ec.REQUEST_MALFORMED_ADDRESS,
            details={"address": address},
        )
        self.address = address


class TokenRefreshError(BigbucketError):
    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            code="token_refresh_error",
            subcode=subcode or ec.TOKEN_CREDENTIAL_FAILED,
            status_code=status_code,
            details=details,
        )


class MalformedTokenError(TokenRefreshError):
    def __init__(self, message: str):
        super().__init__(message, subcode=ec.TOKEN_MALFORMED)


class MetadataUnavailableError(TokenRefreshError):
    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message, subcode=ec.TOKEN_METADATA_UNAVAILABLE, status_code=status_code)


class MalformedResponseError(TokenRefreshError):
    def __init__(self, message: str):
        super().__init__(message, subcode=ec.TOKEN_MALFORMED_RESPONSE)


class TransportError(BigbucketError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="transport_error", subcode=subcode or ec.TRANSPORT_FAILED, details=details)


class ResponseDecodeError(BigbucketError):
    """Raised when a response body is not the JSON document the client expects."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        subcode: Optional[str] = None,
        body_excerpt: Optional[str] = None,
    ):
        details: Dict[str, Any] = {}
        if body_excerpt is not None:
            details["body_excerpt"] = body_excerpt
        super().__init__(
            message,
            code="response_decode_error",
            subcode=subcode or ec.RESPONSE_NOT_JSON,
            status_code=status_code,
            details=details,
            source="server",
        )


class ServerError(BigbucketError):
    """A completed request rejected by the server.

    ``str(err)`` is ``"<status>: <message>"`` where ``message`` is the
    ``"error"`` field of the JSON response body.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(
            f"{status_code}: {message}",
            code="http_error",
            subcode=ec.http_subcode(status_code),
            status_code=status_code,
            source="server",
        )
        self.message = message


__all__ = [
    "BigbucketError",
    "RequestConstructionError",
    "MalformedAddressError",
    "TokenRefreshError",
    "MalformedTokenError",
    "MetadataUnavailableError",
    "MalformedResponseError",
    "TransportError",
    "ResponseDecodeError",
    "ServerError",
]
