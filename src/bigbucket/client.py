# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

import requests

from azure.core.credentials import TokenCredential

from .core._auth import GcpMetadataCredential, _AuthManager
from .core.config import BigbucketConfig
from .data._rest import _RestClient
from .models.table import Table
from .operations.columns import ColumnOperations
from .operations.rows import RowOperations
from .operations.tables import TableOperations


class BigbucketClient:
    """
    High-level client for a bigbucket key-column-value store.

    The client owns configuration and authentication, and delegates HTTP calls to an
    internal :class:`~bigbucket.data._rest._RestClient`. Every call is synchronous and
    sends a single request; when authentication is enabled and the cached bearer token
    is missing or about to expire, a token is fetched first.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager shares one HTTP session across calls
        and closes it on exit::

            with BigbucketClient("https://bigbucket.example.com") as client:
                client.rows.set("users", "user#42", {"name": "Ada"})

    Operations are organized under namespaces:

    - ``client.tables``: list and delete tables
    - ``client.columns``: list and delete columns
    - ``client.rows``: count, list, read, write and delete rows

    ``client.use_table(name)`` returns a :class:`~bigbucket.models.table.Table`
    handle that fills in the table name for each call.

    :param address: Base URL of the bigbucket server. Overrides ``config.address`` when given.
    :type address: :class:`str` or None
    :param config: Optional configuration for timeout, GCP authentication and extra headers.
        If not provided, defaults are loaded from
        :meth:`~bigbucket.core.config.BigbucketConfig.from_env`.
    :type config: ~bigbucket.core.config.BigbucketConfig or None
    :param credential: Optional credential used to obtain bearer tokens. When omitted and
        ``config.gcp_auth`` is enabled, a
        :class:`~bigbucket.core._auth.GcpMetadataCredential` is used. Passing a
        credential enables authentication regardless of ``config.gcp_auth``.
    :type credential: ~azure.core.credentials.TokenCredential or None

    :raises ValueError: If the resolved address is empty.

    Example:
        Authenticated access from a GCP workload::

            from bigbucket import BigbucketClient, BigbucketConfig

            config = BigbucketConfig(gcp_auth=True, timeout=10)
            with BigbucketClient("https://bigbucket-abc.run.app", config=config) as client:
                print(client.get_tables())
    """

    def __init__(
        self,
        address: Optional[str] = None,
        *,
        config: Optional[BigbucketConfig] = None,
        credential: Optional[TokenCredential] = None,
    ) -> None:
        config = config or BigbucketConfig.from_env()
        if address is not None and address != config.address:
            config = replace(config, address=address)
        if not config.address:
            raise ValueError("address is required.")
        self._config = config

        if credential is None and config.gcp_auth:
            credential = GcpMetadataCredential()
        self.auth: Optional[_AuthManager] = (
            _AuthManager(credential, config.address) if credential is not None else None
        )

        self._rest: Optional[_RestClient] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

        self.tables = TableOperations(self)
        self.columns = ColumnOperations(self)
        self.rows = RowOperations(self)

    @property
    def config(self) -> BigbucketConfig:
        return self._config

    def __enter__(self) -> "BigbucketClient":
        """
        Enter the context manager.

        Creates an HTTP session shared by all calls until the context exits.

        :return: The client instance.
        :rtype: BigbucketClient
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
            # Rebuild the low-level client so it picks up the session
            self._close_rest()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the client and release resources.

        Closes the HTTP session (if owned) and the internal REST client. Safe to call
        multiple times. The cached bearer token is kept.
        """
        self._close_rest()
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def _close_rest(self) -> None:
        if self._rest is not None:
            self._rest.close()
            self._rest = None

    def _get_rest(self) -> _RestClient:
        """
        Get or create the internal REST client instance.

        :return: The lazily-initialized low-level client used to perform HTTP requests.
        :rtype: ~bigbucket.data._rest._RestClient
        """
        if self._rest is None:
            self._rest = _RestClient(
                self.auth,
                self._config,
                session=self._session,
            )
        return self._rest

    def get_tables(self) -> List[str]:
        """
        List the names of all tables.

        Shortcut for ``client.tables.list()``.

        :rtype: :class:`list` of :class:`str`
        """
        return self.tables.list()

    def use_table(self, table: str) -> Table:
        """
        Return a handle for ``table``. No request is made.

        :param table: Table name.
        :type table: :class:`str`
        :rtype: ~bigbucket.models.table.Table
        """
        return Table(table, self)
