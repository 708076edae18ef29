# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional

DEFAULT_ADDRESS = "http://localhost:8080"
DEFAULT_TIMEOUT = 30.0

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class BigbucketConfig:
    """
    Configuration settings for bigbucket client operations.

    :param address: Base URL of the bigbucket server. Default is ``"http://localhost:8080"``.
    :type address: str
    :param timeout: Request timeout in seconds for calls to the server (default: 30).
        Token fetches from the metadata server use their own fixed timeout.
    :type timeout: float
    :param gcp_auth: Whether to authenticate with an identity token from the GCP
        metadata server (default: False).
    :type gcp_auth: bool
    :param headers: Extra headers applied to every request sent to the server.
        These are applied last and may overwrite ``Authorization`` or ``Content-Type``.
    :type headers: dict[str, str]
    """

    address: str = DEFAULT_ADDRESS
    timeout: float = DEFAULT_TIMEOUT
    gcp_auth: bool = False
    headers: Dict[str, str] = field(default_factory=dict)

    def with_headers(self, headers: Mapping[str, str]) -> "BigbucketConfig":
        """
        Return a copy of this configuration with ``headers`` merged into the existing headers.

        :param headers: Header names and values to add or overwrite.
        :type headers: dict[str, str]
        :return: New configuration instance.
        :rtype: ~bigbucket.core.config.BigbucketConfig
        """
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BigbucketConfig":
        """
        Create a configuration instance from ``BIGBUCKET_*`` environment variables.

        Reads ``BIGBUCKET_ADDRESS``, ``BIGBUCKET_TIMEOUT`` and ``BIGBUCKET_GCP_AUTH``;
        unset variables keep their defaults.

        :param environ: Mapping to read instead of ``os.environ``.
        :type environ: dict[str, str] or None
        :return: Configuration instance.
        :rtype: ~bigbucket.core.config.BigbucketConfig
        :raises ValueError: If ``BIGBUCKET_TIMEOUT`` is not a number.
        """
        env = os.environ if environ is None else environ
        timeout_raw = env.get("BIGBUCKET_TIMEOUT")
        return cls(
            address=env.get("BIGBUCKET_ADDRESS") or DEFAULT_ADDRESS,
            timeout=float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT,
            gcp_auth=(env.get("BIGBUCKET_GCP_AUTH", "").strip().lower() in _TRUTHY),
        )
