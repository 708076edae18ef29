# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""URL construction for requests against the server and the metadata service."""

from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

from .errors import MalformedAddressError


def _build_url(address: str, path: str, params: Optional[Mapping[str, str]] = None) -> str:
    """
    Compose ``address``, ``path`` and ``params`` into one absolute URL.

    ``path`` is appended to whatever path ``address`` already carries. When
    ``params`` is given it replaces the address's query string and is encoded
    in sorted key order.

    :raises ~bigbucket.core.errors.MalformedAddressError: If ``address`` is not an absolute URL.
    """
    try:
        parts = urlsplit(address)
        # .port validates the netloc
        parts.port
    except (ValueError, TypeError, AttributeError) as exc:
        raise MalformedAddressError(str(address), str(exc)) from exc
    if not parts.scheme or not parts.netloc:
        raise MalformedAddressError(address, "expected an absolute URL with scheme and host")

    query = parts.query
    if params is not None:
        query = urlencode(sorted(params.items()), safe=",")
    return urlunsplit((parts.scheme, parts.netloc, parts.path + path, query, parts.fragment))
