# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""bigbucket: Python client for the bigbucket key-column-value store."""

from .client import BigbucketClient
from .core._auth import GcpMetadataCredential
from .core.config import BigbucketConfig
from .core.errors import (
    BigbucketError,
    MalformedAddressError,
    MalformedResponseError,
    MalformedTokenError,
    MetadataUnavailableError,
    RequestConstructionError,
    ResponseDecodeError,
    ServerError,
    TokenRefreshError,
    TransportError,
)
from .models.table import Table

__all__ = [
    "BigbucketClient",
    "BigbucketConfig",
    "GcpMetadataCredential",
    "Table",
    "BigbucketError",
    "MalformedAddressError",
    "MalformedResponseError",
    "MalformedTokenError",
    "MetadataUnavailableError",
    "RequestConstructionError",
    "ResponseDecodeError",
    "ServerError",
    "TokenRefreshError",
    "TransportError",
]

__version__ = "0.1.0"
