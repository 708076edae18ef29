# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for the tables, columns and rows namespaces."""

import unittest
from unittest.mock import MagicMock

from bigbucket.client import BigbucketClient
from bigbucket.core.config import BigbucketConfig
from bigbucket.core.errors import ServerError


class _NamespaceTestCase(unittest.TestCase):
    def setUp(self):
        """Set up test fixtures before each test method."""
        self.client = BigbucketClient(config=BigbucketConfig(address="https://bigbucket.example.com"))
        self.client._rest = MagicMock()


class TestTableOperations(_NamespaceTestCase):
    def test_list(self):
        self.client._rest._list_tables.return_value = ["users"]

        self.assertEqual(self.client.tables.list(), ["users"])

    def test_delete(self):
        self.client.tables.delete("users")

        self.client._rest._delete_table.assert_called_once_with("users")

    def test_errors_propagate(self):
        self.client._rest._delete_table.side_effect = ServerError(404, "table not found")

        with self.assertRaises(ServerError) as ctx:
            self.client.tables.delete("missing")
        self.assertEqual(str(ctx.exception), "404: table not found")


class TestColumnOperations(_NamespaceTestCase):
    def test_list(self):
        self.client._rest._list_columns.return_value = ["name", "plan"]

        self.assertEqual(self.client.columns.list("users"), ["name", "plan"])
        self.client._rest._list_columns.assert_called_once_with("users")

    def test_delete(self):
        self.client.columns.delete("users", "plan")

        self.client._rest._delete_column.assert_called_once_with("users", "plan")


class TestRowOperations(_NamespaceTestCase):
    def test_count(self):
        self.client._rest._count_rows.return_value = 3

        self.assertEqual(self.client.rows.count("users", prefix="user#"), 3)
        self.client._rest._count_rows.assert_called_once_with("users", "user#")

    def test_count_without_prefix(self):
        self.client.rows.count("users")

        self.client._rest._count_rows.assert_called_once_with("users", None)

    def test_list(self):
        self.client._rest._list_rows.return_value = ["user#1"]

        self.assertEqual(self.client.rows.list("users", prefix="user#"), ["user#1"])
        self.client._rest._list_rows.assert_called_once_with("users", "user#")

    def test_get(self):
        self.client._rest._get_row.return_value = {"name": "Ada"}

        row = self.client.rows.get("users", "user#1", columns=["name"])

        self.assertEqual(row, {"name": "Ada"})
        self.client._rest._get_row.assert_called_once_with("users", "user#1", ["name"])

    def test_get_many(self):
        self.client._rest._get_rows.return_value = {"user#1": {"name": "Ada"}}

        rows = self.client.rows.get_many("users", prefix="user#", columns=["name"], limit=10)

        self.assertEqual(rows, {"user#1": {"name": "Ada"}})
        self.client._rest._get_rows.assert_called_once_with("users", "user#", ["name"], 10)

    def test_set(self):
        self.client.rows.set("users", "user#1", {"name": "Ada"})

        self.client._rest._set_row.assert_called_once_with("users", "user#1", {"name": "Ada"})

    def test_delete(self):
        self.client.rows.delete("users", "user#1")

        self.client._rest._delete_row.assert_called_once_with("users", "user#1")

    def test_delete_prefix(self):
        self.client.rows.delete_prefix("users", "tmp#")

        self.client._rest._delete_rows.assert_called_once_with("users", "tmp#")
