# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Table handle bound to a single table name.

:class:`Table` is returned by :meth:`~bigbucket.client.BigbucketClient.use_table`
and forwards every call to the client's ``tables``, ``columns`` and ``rows``
namespaces with the table name filled in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..client import BigbucketClient

__all__ = ["Table"]


@dataclass(frozen=True)
class Table:
    """
    A bigbucket table.

    :param name: Table name.
    :type name: :class:`str`

    Example::

        users = client.use_table("users")
        users.set_row("user#42", {"name": "Ada"})
        print(users.read_row("user#42"))
        print(users.count_rows(prefix="user#"))
    """

    name: str
    _client: "BigbucketClient" = field(repr=False, compare=False)

    def delete(self) -> None:
        """Delete this table and all of its rows."""
        self._client.tables.delete(self.name)

    def list_columns(self) -> List[str]:
        return self._client.columns.list(self.name)

    def delete_column(self, column: str) -> None:
        self._client.columns.delete(self.name, column)

    def count_rows(self, *, prefix: Optional[str] = None) -> int:
        return self._client.rows.count(self.name, prefix=prefix)

    def list_rows(self, *, prefix: Optional[str] = None) -> List[str]:
        return self._client.rows.list(self.name, prefix=prefix)

    def read_row(self, key: str, *, columns: Optional[Sequence[str]] = None) -> Dict[str, str]:
        return self._client.rows.get(self.name, key, columns=columns)

    def read_rows(
        self,
        *,
        prefix: Optional[str] = None,
        columns: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Dict[str, str]]:
        return self._client.rows.get_many(self.name, prefix=prefix, columns=columns, limit=limit)

    def set_row(self, key: str, values: Mapping[str, str]) -> None:
        self._client.rows.set(self.name, key, values)

    def delete_row(self, key: str) -> None:
        self._client.rows.delete(self.name, key)

    def delete_rows(self, prefix: str) -> None:
        """Delete every row whose key starts with ``prefix``."""
        self._client.rows.delete_prefix(self.name, prefix)
