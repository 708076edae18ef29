# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Table operations namespace for the bigbucket client."""

from __future__ import annotations

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from ..client import BigbucketClient


__all__ = ["TableOperations"]


class TableOperations:
    """Namespace for table-level operations.

    Accessed via ``client.tables``.

    :param client: The parent :class:`~bigbucket.client.BigbucketClient` instance.
    :type client: ~bigbucket.client.BigbucketClient

    Example::

        client = BigbucketClient("http://localhost:8080")

        for name in client.tables.list():
            print(name)

        client.tables.delete("old_events")
    """

    def __init__(self, client: BigbucketClient) -> None:
        self._client = client

    # ------------------------------------------------------------------- list

    def list(self) -> List[str]:
        """List the names of all tables.

        :return: Table names. Empty if the server reports none.
        :rtype: :class:`list` of :class:`str`

        :raises ~bigbucket.core.errors.ServerError: If the server rejects the request.
        """
        return self._client._get_rest()._list_tables()

    # ----------------------------------------------------------------- delete

    def delete(self, table: str) -> None:
        """Delete a table and all of its rows.

        :param table: Table name.
        :type table: :class:`str`

        :raises ~bigbucket.core.errors.ServerError: If the table does not exist or deletion fails.

        .. warning::
            This operation is irreversible.
        """
        self._client._get_rest()._delete_table(table)
