# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for bigbucket client tests.

This module provides token and response factories and a safe default
configuration that can be used across all test modules.
"""

import base64
import json

import pytest
import requests

from bigbucket.core.config import BigbucketConfig


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


@pytest.fixture
def make_jwt():
    """Factory for unsigned JWT-shaped tokens with the given claims."""
    def _make(exp=None, **claims):
        if exp is not None:
            claims["exp"] = exp
        header = _b64url(json.dumps({"alg": "RS256", "typ": "JWT"}).encode("utf-8"))
        payload = _b64url(json.dumps(claims).encode("utf-8"))
        return f"{header}.{payload}.c2lnbmF0dXJl"
    return _make


@pytest.fixture
def make_response():
    """Factory for real ``requests.Response`` objects with a preloaded body."""
    def _make(status=200, body=None, text=None):
        r = requests.Response()
        r.status_code = status
        if body is not None:
            r._content = json.dumps(body).encode("utf-8")
        else:
            r._content = (text or "").encode("utf-8")
        r._content_consumed = True
        r.encoding = "utf-8"
        return r
    return _make


@pytest.fixture
def sample_address():
    """Standard test server address."""
    return "https://bigbucket.example.com"


@pytest.fixture
def test_config(sample_address):
    """Test configuration with safe defaults."""
    return BigbucketConfig(address=sample_address, timeout=5)
