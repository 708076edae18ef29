# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Low-level bigbucket REST client: request execution, error translation and resource calls."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

import requests

from ..core import _error_codes as ec
from ..core._auth import _AuthManager
from ..core._http import _HttpClient
from ..core._url import _build_url
from ..core.config import BigbucketConfig
from ..core.errors import BigbucketError, RequestConstructionError, ResponseDecodeError, ServerError
from ..common.constants import (
    COLUMN_PATH,
    ROW_COUNT_PATH,
    ROW_LIST_PATH,
    ROW_PATH,
    TABLE_PATH,
)

_logger = logging.getLogger(__name__)

_BODY_EXCERPT_LIMIT = 200


def _body_excerpt(response: requests.Response) -> str:
    return (response.text or "")[:_BODY_EXCERPT_LIMIT]


class _RestClient:
    """bigbucket HTTP API client used by the operation namespaces.

    :param auth: Token cache used to authenticate requests, or ``None`` to send
        unauthenticated requests.
    :type auth: ~bigbucket.core._auth._AuthManager | None
    :param config: Client configuration (address, timeout, extra headers).
    :type config: ~bigbucket.core.config.BigbucketConfig
    :param session: Optional session shared with the owning client.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        auth: Optional[_AuthManager],
        config: BigbucketConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.config = config
        self.address = config.address
        self._http = _HttpClient(timeout=config.timeout, session=session)

    def close(self) -> None:
        """Close the transport and any session it holds. Safe to call multiple times."""
        self._http.close()

    # ------------------------------------------------------------- execution

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        body: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        """Build, authenticate and send one request; return the live response.

        :raises ~bigbucket.core.errors.RequestConstructionError: If the URL or body cannot be built.
        :raises ~bigbucket.core.errors.TokenRefreshError: If a bearer token was needed and could not be obtained.
        :raises ~bigbucket.core.errors.TransportError: If the request did not complete.
        """
        url = _build_url(self.address, path, params)

        headers: Dict[str, str] = {}
        data: Optional[str] = None
        if body is not None:
            try:
                data = json.dumps(dict(body))
            except (TypeError, ValueError) as exc:
                raise RequestConstructionError(
                    f"Request body is not JSON serializable: {exc}",
                    subcode=ec.REQUEST_BODY_NOT_SERIALIZABLE,
                ) from exc
            headers["Content-Type"] = "application/json"

        if self.auth is not None:
            headers["Authorization"] = f"bearer {self.auth._acquire_token()}"

        headers.update(self.config.headers)

        return self._http._request(method, url, headers=headers, data=data)

    def _translate_error(self, response: requests.Response) -> BigbucketError:
        """Convert a non-200 response into :class:`ServerError`, or :class:`ResponseDecodeError` if its body is not ``{"error": "..."}``."""
        status = response.status_code
        try:
            payload = response.json()
        except ValueError as exc:
            err = ResponseDecodeError(
                f"Unable to decode error response ({status}): {exc}",
                status_code=status,
                body_excerpt=_body_excerpt(response),
            )
            err.__cause__ = exc
            return err
        message = payload.get("error") if isinstance(payload, dict) else None
        if not isinstance(message, str):
            return ResponseDecodeError(
                f"Error response ({status}) has no 'error' field",
                status_code=status,
                subcode=ec.RESPONSE_UNEXPECTED_SHAPE,
                body_excerpt=_body_excerpt(response),
            )
        return ServerError(status, message)

    def _raise_for_status(self, response: requests.Response) -> None:
        if response.status_code != 200:
            err = self._translate_error(response)
            _logger.debug("Request failed: %s", err)
            raise err

    def _call(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        body: Optional[Mapping[str, str]] = None,
        decode: bool = True,
    ) -> Any:
        """Send a request, raise on non-200, and return the decoded JSON object (or None when ``decode`` is False)."""
        response = self._request(method, path, params=params, body=body)
        with response:
            self._raise_for_status(response)
            if not decode:
                return None
            try:
                payload = response.json()
            except ValueError as exc:
                raise ResponseDecodeError(
                    f"Unable to decode response from {method} {path}: {exc}",
                    status_code=response.status_code,
                    body_excerpt=_body_excerpt(response),
                ) from exc
        if not isinstance(payload, dict):
            raise ResponseDecodeError(
                f"Expected a JSON object from {method} {path}",
                status_code=200,
                subcode=ec.RESPONSE_UNEXPECTED_SHAPE,
            )
        return payload

    # --------------------------------------------------------------- helpers

    @staticmethod
    def _params(
        table: str,
        *,
        column: Optional[str] = None,
        key: Optional[str] = None,
        prefix: Optional[str] = None,
        columns: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, str]:
        params = {"table": table}
        if column is not None:
            params["column"] = column
        if key is not None:
            params["key"] = key
        if prefix:
            params["prefix"] = prefix
        if columns:
            if isinstance(columns, str):
                raise TypeError("columns must be a list of column names, not a str")
            params["columns"] = ",".join(columns)
        if limit is not None:
            params["limit"] = str(limit)
        return params

    @staticmethod
    def _string_list(payload: Dict[str, Any], field: str) -> List[str]:
        values = payload.get(field)
        if values is None:
            return []
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ResponseDecodeError(
                f"Expected '{field}' to be a list of strings",
                status_code=200,
                subcode=ec.RESPONSE_UNEXPECTED_SHAPE,
            )
        return values

    @staticmethod
    def _parse_count(text: str) -> int:
        """Parse an integer with optional ``0x``/``0o``/``0b`` prefix; a leading ``0`` means octal."""
        try:
            return int(text, 0)
        except ValueError:
            # "010" is octal 8
            return int(text, 8)

    @staticmethod
    def _row(value: Any, key: str) -> Dict[str, str]:
        if not isinstance(value, dict):
            raise ResponseDecodeError(
                f"Expected row '{key}' to be a JSON object",
                status_code=200,
                subcode=ec.RESPONSE_UNEXPECTED_SHAPE,
            )
        return value

    # ---------------------------------------------------------------- tables

    def _list_tables(self) -> List[str]:
        return self._string_list(self._call("GET", TABLE_PATH), "tables")

    def _delete_table(self, table: str) -> None:
        self._call("DELETE", TABLE_PATH, params=self._params(table), decode=False)

    # --------------------------------------------------------------- columns

    def _list_columns(self, table: str) -> List[str]:
        return self._string_list(self._call("GET", COLUMN_PATH, params=self._params(table)), "columns")

    def _delete_column(self, table: str, column: str) -> None:
        self._call("DELETE", COLUMN_PATH, params=self._params(table, column=column), decode=False)

    # ------------------------------------------------------------------ rows

    def _count_rows(self, table: str, prefix: Optional[str] = None) -> int:
        payload = self._call("GET", ROW_COUNT_PATH, params=self._params(table, prefix=prefix))
        raw = payload.get("rowsCount")
        try:
            return self._parse_count(str(raw))
        except (TypeError, ValueError) as exc:
            raise ResponseDecodeError(
                f"Expected 'rowsCount' to be an integer string, got {raw!r}",
                status_code=200,
                subcode=ec.RESPONSE_UNEXPECTED_SHAPE,
            ) from exc

    def _list_rows(self, table: str, prefix: Optional[str] = None) -> List[str]:
        payload = self._call("GET", ROW_LIST_PATH, params=self._params(table, prefix=prefix))
        return self._string_list(payload, "rowKeys")

    def _get_row(self, table: str, key: str, columns: Optional[Sequence[str]] = None) -> Dict[str, str]:
        payload = self._call("GET", ROW_PATH, params=self._params(table, key=key, columns=columns))
        if key not in payload:
            return {}
        return self._row(payload[key], key)

    def _get_rows(
        self,
        table: str,
        prefix: Optional[str] = None,
        columns: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Dict[str, str]]:
        payload = self._call(
            "GET",
            ROW_PATH,
            params=self._params(table, prefix=prefix, columns=columns, limit=limit),
        )
        return {key: self._row(value, key) for key, value in payload.items()}

    def _set_row(self, table: str, key: str, values: Mapping[str, str]) -> None:
        self._call("POST", ROW_PATH, params=self._params(table, key=key), body=values, decode=False)

    def _delete_row(self, table: str, key: str) -> None:
        self._call("DELETE", ROW_PATH, params=self._params(table, key=key), decode=False)

    def _delete_rows(self, table: str, prefix: str) -> None:
        if not prefix:
            raise ValueError("prefix is required to delete rows by prefix.")
        self._call("DELETE", ROW_PATH, params=self._params(table, prefix=prefix), decode=False)
