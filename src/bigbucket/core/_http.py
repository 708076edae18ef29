# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP transport with timeout handling and optional session support.

This module provides :class:`~bigbucket.core._http._HttpClient`, a thin wrapper
around the requests library that applies the client's default timeout, reuses a
caller-owned session when one is available, and converts requests exceptions into
the client's error hierarchy. Requests are sent exactly once; nothing is retried.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import requests

from . import _error_codes as ec
from .errors import RequestConstructionError, TransportError

_logger = logging.getLogger(__name__)

_CONSTRUCTION_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidHeader,
    requests.exceptions.URLRequired,
)


class _HttpClient:
    """
    HTTP client with timeout handling and optional session support.

    :param timeout: Default request timeout in seconds, used when a call does not pass one.
    :type timeout: :class:`float` | None
    :param session: Optional requests.Session. If provided, all requests use this session.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.default_timeout: Optional[float] = timeout
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute a single HTTP request.

        :param method: HTTP method (GET, POST, DELETE, etc.).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``, including headers, data, etc.
        :return: HTTP response object. The caller owns it and must close it.
        :rtype: :class:`requests.Response`
        :raises ~bigbucket.core.errors.RequestConstructionError: If requests rejects the URL or headers.
        :raises ~bigbucket.core.errors.TransportError: On connection failures and timeouts.
        """
        if "timeout" not in kwargs and self.default_timeout is not None:
            kwargs["timeout"] = self.default_timeout

        started = time.monotonic()
        try:
            if self._session is not None:
                response = self._session.request(method, url, **kwargs)
            else:
                response = requests.request(method, url, **kwargs)
        except _CONSTRUCTION_ERRORS as exc:
            raise RequestConstructionError(f"{method} {url}: {exc}") from exc
        except requests.exceptions.Timeout as exc:
            raise TransportError(
                f"{method} {url} timed out: {exc}", subcode=ec.TRANSPORT_TIMEOUT, details={"url": url}
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            raise TransportError(
                f"{method} {url} failed to connect: {exc}", subcode=ec.TRANSPORT_CONNECTION, details={"url": url}
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}", details={"url": url}) from exc
        except UnicodeError as exc:
            # http.client encodes header values as latin-1
            raise RequestConstructionError(f"{method} {url}: {exc}", subcode=ec.REQUEST_INVALID) from exc

        _logger.debug(
            "%s %s %s %.1fms", method, url, response.status_code, (time.monotonic() - started) * 1000
        )
        return response

    def close(self) -> None:
        """
        Close the HTTP client and release resources.

        If a session was provided, this method closes it. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None
