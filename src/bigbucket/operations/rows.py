# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Row operations namespace."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..client import BigbucketClient


__all__ = ["RowOperations"]


class RowOperations:
    """
    Row read, write and delete operations.

    Accessed via ``client.rows``. Rows are mappings of column name to string value,
    addressed by row key. Optional ``prefix``, ``columns`` and ``limit`` arguments
    narrow reads; empty values are treated as not given.

    Example:
        Write, read and delete a row::

            client.rows.set("users", "user#42", {"name": "Ada", "plan": "pro"})
            row = client.rows.get("users", "user#42", columns=["name"])
            client.rows.delete("users", "user#42")

        Scan by prefix::

            total = client.rows.count("users", prefix="user#")
            keys = client.rows.list("users", prefix="user#")
            rows = client.rows.get_many("users", prefix="user#", limit=100)
    """

    def __init__(self, client: "BigbucketClient") -> None:
        """
        Initialize RowOperations.

        :param client: Parent BigbucketClient instance.
        :type client: BigbucketClient
        """
        self._client = client

    def count(self, table: str, *, prefix: Optional[str] = None) -> int:
        """
        Count rows in a table.

        :param table: Table name.
        :type table: str
        :param prefix: Only count rows whose key starts with this prefix.
        :type prefix: str or None
        :return: Number of matching rows.
        :rtype: int

        :raises ~bigbucket.core.errors.ResponseDecodeError: If the server's count is not an integer.
        """
        return self._client._get_rest()._count_rows(table, prefix)

    def list(self, table: str, *, prefix: Optional[str] = None) -> List[str]:
        """
        List row keys in a table.

        :param table: Table name.
        :type table: str
        :param prefix: Only list keys starting with this prefix.
        :type prefix: str or None
        :return: Row keys.
        :rtype: list[str]
        """
        return self._client._get_rest()._list_rows(table, prefix)

    def get(self, table: str, key: str, *, columns: Optional[Sequence[str]] = None) -> Dict[str, str]:
        """
        Read a single row.

        :param table: Table name.
        :type table: str
        :param key: Row key.
        :type key: str
        :param columns: Column names to return; all columns when omitted.
        :type columns: list[str] or None
        :return: Mapping of column name to value. Empty if the row has no data.
        :rtype: dict[str, str]

        Example::

            row = client.rows.get("users", "user#42", columns=["name", "plan"])
            print(row.get("name"))
        """
        return self._client._get_rest()._get_row(table, key, columns)

    def get_many(
        self,
        table: str,
        *,
        prefix: Optional[str] = None,
        columns: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Dict[str, str]]:
        """
        Read multiple rows.

        :param table: Table name.
        :type table: str
        :param prefix: Only read rows whose key starts with this prefix.
        :type prefix: str or None
        :param columns: Column names to return; all columns when omitted.
        :type columns: list[str] or None
        :param limit: Maximum number of rows to return.
        :type limit: int or None
        :return: Mapping of row key to row.
        :rtype: dict[str, dict[str, str]]
        """
        return self._client._get_rest()._get_rows(table, prefix, columns, limit)

    def set(self, table: str, key: str, values: Mapping[str, str]) -> None:
        """
        Write column values to a row, creating the row and columns as needed.

        :param table: Table name.
        :type table: str
        :param key: Row key.
        :type key: str
        :param values: Mapping of column name to value.
        :type values: dict[str, str]

        :raises ~bigbucket.core.errors.RequestConstructionError: If ``values`` is not JSON serializable.
        """
        self._client._get_rest()._set_row(table, key, values)

    def delete(self, table: str, key: str) -> None:
        """Delete a single row by key."""
        self._client._get_rest()._delete_row(table, key)

    def delete_prefix(self, table: str, prefix: str) -> None:
        """
        Delete every row whose key starts with ``prefix``.

        :raises ValueError: If ``prefix`` is empty.
        """
        self._client._get_rest()._delete_rows(table, prefix)
