# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Bearer token acquisition for authenticated requests.

:class:`GcpMetadataCredential` fetches identity tokens from the GCP instance
metadata server. :class:`_AuthManager` keeps the most recent token for one client
and refreshes it when it is absent or within
:data:`TOKEN_EXPIRY_MARGIN_SECONDS` of its ``exp`` claim.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import math
import threading
import time
from typing import Any, Optional

import requests
from azure.core.credentials import AccessToken, TokenCredential

from ._url import _build_url
from .errors import (
    MalformedResponseError,
    MalformedTokenError,
    MetadataUnavailableError,
    TokenRefreshError,
)

_logger = logging.getLogger(__name__)

METADATA_HOST = "http://metadata"
METADATA_IDENTITY_PATH = "/computeMetadata/v1/instance/service-accounts/default/identity"
METADATA_TIMEOUT = 15.0

# A token must stay valid this long past "now" to be sent.
TOKEN_EXPIRY_MARGIN_SECONDS = 30


def _jwt_expiry(token: str) -> float:
    """
    Return the ``exp`` claim of a JWT without verifying its signature.

    :raises ~bigbucket.core.errors.MalformedTokenError: If the token is not three
        dot-separated segments, the payload is not base64url, or the payload is
        not a JSON object with a numeric ``exp``.
    """
    segments = token.split(".")
    if len(segments) != 3:
        raise MalformedTokenError(f"JWT must have 3 segments, found {len(segments)}")

    payload = segments[1]
    if "+" in payload or "/" in payload:
        raise MalformedTokenError("JWT payload is not valid base64url: standard alphabet characters found")
    if len(payload) % 4:
        payload += "=" * (4 - len(payload) % 4)
    try:
        raw = base64.b64decode(payload.encode("ascii"), altchars=b"-_", validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise MalformedTokenError(f"JWT payload is not valid base64url: {exc}") from exc

    try:
        claims = json.loads(raw)
    except ValueError as exc:
        raise MalformedTokenError(f"JWT payload is not valid JSON: {exc}") from exc
    if not isinstance(claims, dict):
        raise MalformedTokenError("JWT payload is not a JSON object")

    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        raise MalformedTokenError("Failed to decode JWT JSON content, 'exp' not found")
    # NaN, Infinity and overflowing literals like 1e999
    if isinstance(exp, float) and not math.isfinite(exp):
        raise MalformedTokenError(f"JWT 'exp' claim is not a finite number: {exp!r}")
    return exp


def _jwt_expired(token: str, now: Optional[float] = None) -> bool:
    """
    Return True if ``token`` is empty or expires within the safety margin.

    :param token: Cached bearer token, or ``""`` when none has been fetched yet.
    :param now: Current Unix time; defaults to :func:`time.time`.
    :raises ~bigbucket.core.errors.MalformedTokenError: If a non-empty token cannot be decoded.
    """
    if token == "":
        return True
    expiry = _jwt_expiry(token)
    if now is None:
        now = time.time()
    return expiry <= now + TOKEN_EXPIRY_MARGIN_SECONDS


class GcpMetadataCredential:
    """
    Identity-token credential backed by the GCP instance metadata server.

    Implements the :class:`azure.core.credentials.TokenCredential` protocol so it can
    be swapped for any other credential. The first scope passed to :meth:`get_token`
    is used as the token audience, normally the bigbucket server address.

    :param host: Metadata server base URL. Default is ``"http://metadata"``.
    :type host: str
    :param path: Identity endpoint path on the metadata server.
    :type path: str
    :param timeout: Timeout in seconds for each fetch, independent of the client timeout.
    :type timeout: float
    """

    def __init__(
        self,
        host: str = METADATA_HOST,
        path: str = METADATA_IDENTITY_PATH,
        timeout: float = METADATA_TIMEOUT,
    ) -> None:
        self.host = host
        self.path = path
        self.timeout = timeout

    def fetch(self, audience: str) -> str:
        """
        Fetch a fresh identity token for ``audience``.

        :raises ~bigbucket.core.errors.MetadataUnavailableError: On network errors or a non-200 status.
        :raises ~bigbucket.core.errors.MalformedResponseError: If the body cannot be read or is empty.
        """
        url = _build_url(self.host, self.path, {"audience": audience})
        try:
            response = requests.get(
                url,
                headers={"Metadata-Flavor": "Google"},
                timeout=self.timeout,
                stream=True,
            )
        except requests.exceptions.RequestException as exc:
            raise MetadataUnavailableError(f"Metadata server request failed: {exc}") from exc

        with response:
            if response.status_code != 200:
                raise MetadataUnavailableError(
                    f"Metadata server returned {response.status_code}",
                    status_code=response.status_code,
                )
            try:
                token = response.content.decode("utf-8")
            except (requests.exceptions.RequestException, UnicodeDecodeError) as exc:
                raise MalformedResponseError(f"Unable to read metadata server response: {exc}") from exc

        if not token:
            raise MalformedResponseError("Metadata server returned an empty token")
        return token

    def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        if not scopes:
            raise ValueError("An audience scope is required.")
        token = self.fetch(scopes[0])
        try:
            expires_on = int(_jwt_expiry(token))
        except MalformedTokenError:
            expires_on = 0
        return AccessToken(token, expires_on)


class _AuthManager:
    """
    Per-client bearer token cache.

    :meth:`_acquire_token` checks the cached token, fetches a new one through the
    credential when needed, stores it and returns it. The check, fetch and store run
    under one lock, so concurrent callers on the same client trigger a single refresh.
    """

    def __init__(self, credential: TokenCredential, audience: str) -> None:
        if not isinstance(credential, TokenCredential):
            raise TypeError("credential must implement azure.core.credentials.TokenCredential.")
        self.credential: TokenCredential = credential
        self.audience = audience
        self._token = ""
        self._lock = threading.Lock()

    @property
    def token(self) -> str:
        return self._token

    def _acquire_token(self) -> str:
        """
        Return a bearer token valid for at least the expiry margin.

        :raises ~bigbucket.core.errors.TokenRefreshError: If a refresh was needed and failed.
        """
        with self._lock:
            try:
                expired = _jwt_expired(self._token)
            except MalformedTokenError as exc:
                _logger.warning("Cached token is malformed, refreshing: %s", exc)
                expired = True
            if expired:
                self._token = self._refresh()
            return self._token

    def _refresh(self) -> str:
        try:
            access_token = self.credential.get_token(self.audience)
        except TokenRefreshError:
            raise
        except Exception as exc:
            raise TokenRefreshError(f"Credential failed to provide a token: {exc}") from exc
        _logger.info("Refreshed bearer token for audience %s", self.audience)
        return access_token.token
