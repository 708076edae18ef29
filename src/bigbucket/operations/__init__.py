# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the bigbucket client.

This module contains the operation namespace classes that organize
related operations under intuitive namespaces:
- TableOperations: listing and deleting tables
- ColumnOperations: listing and deleting columns
- RowOperations: counting, reading, writing and deleting rows
"""

__all__ = []
