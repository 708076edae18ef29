# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Column operations namespace for the bigbucket client."""

from __future__ import annotations

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from ..client import BigbucketClient


__all__ = ["ColumnOperations"]


class ColumnOperations:
    """Namespace for column operations, accessed via ``client.columns``.

    Example::

        columns = client.columns.list("users")
        client.columns.delete("users", "legacy_flag")
    """

    def __init__(self, client: BigbucketClient) -> None:
        self._client = client

    def list(self, table: str) -> List[str]:
        """List the column names of ``table``."""
        return self._client._get_rest()._list_columns(table)

    def delete(self, table: str, column: str) -> None:
        """Delete ``column`` from every row of ``table``."""
        self._client._get_rest()._delete_column(table, column)
