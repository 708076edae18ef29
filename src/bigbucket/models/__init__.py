# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models for the bigbucket client.

- :class:`~bigbucket.models.table.Table`: handle bound to one table name.

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from the
    specific module files.
"""

__all__ = []
