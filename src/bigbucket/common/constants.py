# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for the bigbucket HTTP API.

These constants define the resource paths served under ``/api``.
"""

TABLE_PATH = "/api/table"
"""List tables (GET) or delete a table (DELETE)."""

COLUMN_PATH = "/api/column"
"""List the columns of a table (GET) or delete a column (DELETE)."""

ROW_PATH = "/api/row"
"""Read (GET), write (POST) or delete (DELETE) rows."""

ROW_COUNT_PATH = "/api/row/count"
"""Count the rows of a table, optionally restricted to a key prefix."""

ROW_LIST_PATH = "/api/row/list"
"""List row keys of a table, optionally restricted to a key prefix."""
