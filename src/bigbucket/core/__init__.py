# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the bigbucket client.

This module contains the foundational components including authentication,
configuration, HTTP transport, URL construction and error handling.
"""

from .config import BigbucketConfig
from .errors import (
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

__all__ = [
    "BigbucketConfig",
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
