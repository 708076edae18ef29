# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the bigbucket client.

This module contains the low-level REST client that executes requests,
translates errors and decodes response bodies.
"""

__all__ = []
