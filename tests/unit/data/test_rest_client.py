# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import json
from unittest.mock import MagicMock

import pytest
import requests

from bigbucket.core.config import BigbucketConfig
from bigbucket.core.errors import (
    MetadataUnavailableError,
    RequestConstructionError,
    ResponseDecodeError,
    ServerError,
)
from bigbucket.data._rest import _RestClient

ADDRESS = "https://bigbucket.example.com"


def _response(status, body):
    r = requests.Response()
    r.status_code = status
    r._content = (json.dumps(body) if isinstance(body, (dict, list)) else (body or "")).encode("utf-8")
    r._content_consumed = True
    r.encoding = "utf-8"
    return r


class RecordingHTTP:
    """Stands in for _HttpClient; records every call and replays canned responses."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def _request(self, method, url, **kwargs):
        if not self._responses:
            raise AssertionError("No more responses")
        self.calls.append((method, url, kwargs))
        status, body = self._responses.pop(0)
        return _response(status, body)

    def close(self):
        pass


class StubAuth:
    def __init__(self, token="tok-1"):
        self.token = token
        self.calls = 0

    def _acquire_token(self):
        self.calls += 1
        return self.token


def make_client(responses, *, auth=None, headers=None):
    config = BigbucketConfig(address=ADDRESS, timeout=5, headers=headers or {})
    client = _RestClient(auth, config)
    client._http = RecordingHTTP(responses)
    return client


# --- request executor ---


def test_get_without_auth_or_body():
    c = make_client([(200, {"tables": []})])
    c._request("GET", "/api/table")

    method, url, kwargs = c._http.calls[0]
    assert method == "GET"
    assert url == ADDRESS + "/api/table"
    assert kwargs["headers"] == {}
    assert kwargs["data"] is None


def test_body_serialized_as_json():
    c = make_client([(200, "")])
    c._request("POST", "/api/row", params={"table": "users", "key": "u1"}, body={"name": "Ada"})

    _, url, kwargs = c._http.calls[0]
    assert url == ADDRESS + "/api/row?key=u1&table=users"
    assert json.loads(kwargs["data"]) == {"name": "Ada"}
    assert kwargs["headers"]["Content-Type"] == "application/json"


def test_unserializable_body():
    c = make_client([])
    with pytest.raises(RequestConstructionError) as ei:
        c._request("POST", "/api/row", body={"name": object()})
    assert ei.value.subcode == "request_body_not_serializable"
    assert c._http.calls == []


def test_bearer_token_attached():
    auth = StubAuth("eyJ.token.sig")
    c = make_client([(200, {}), (200, {})], auth=auth)
    c._request("GET", "/api/table")
    c._request("GET", "/api/table")

    assert auth.calls == 2
    for _, _, kwargs in c._http.calls:
        assert kwargs["headers"]["Authorization"] == "bearer eyJ.token.sig"


def test_token_failure_stops_request():
    auth = MagicMock()
    auth._acquire_token.side_effect = MetadataUnavailableError("metadata down")
    c = make_client([(200, {})], auth=auth)

    with pytest.raises(MetadataUnavailableError):
        c._request("GET", "/api/table")
    assert c._http.calls == []


def test_extra_headers_applied_last():
    headers = {"Authorization": "bearer override", "Content-Type": "text/plain", "X-Team": "data"}
    c = make_client([(200, "")], auth=StubAuth(), headers=headers)
    c._request("POST", "/api/row", body={"a": "1"})

    _, _, kwargs = c._http.calls[0]
    assert kwargs["headers"] == headers


def test_malformed_address_raised_before_dispatch():
    c = _RestClient(None, BigbucketConfig(address="nonsense"))
    c._http = RecordingHTTP([])
    with pytest.raises(RequestConstructionError):
        c._request("GET", "/api/table")


# --- error translator ---


def test_server_error_from_json_body():
    c = make_client([(404, {"error": "table not found"})])
    with pytest.raises(ServerError) as ei:
        c._list_tables()
    assert str(ei.value) == "404: table not found"
    assert ei.value.status_code == 404


def test_unparsable_error_body_surfaces_decode_error():
    c = make_client([(500, "<html>Internal Server Error</html>")])
    with pytest.raises(ResponseDecodeError) as ei:
        c._list_tables()
    assert ei.value.status_code == 500
    assert isinstance(ei.value.__cause__, ValueError)
    assert "Internal Server Error" in ei.value.details["body_excerpt"]


@pytest.mark.parametrize("body", [{"message": "nope"}, {"error": 42}, ["error"]])
def test_error_body_without_error_field(body):
    c = make_client([(400, body)])
    with pytest.raises(ResponseDecodeError) as ei:
        c._list_tables()
    assert ei.value.subcode == "response_unexpected_shape"
    assert not isinstance(ei.value, ServerError)


def test_only_200_is_success():
    c = make_client([(201, {"error": "created is not ok"})])
    with pytest.raises(ServerError) as ei:
        c._delete_table("users")
    assert str(ei.value) == "201: created is not ok"


def test_response_closed_after_error():
    closed = []

    class TrackedResponse(requests.Response):
        def close(self):
            closed.append(True)

    r = TrackedResponse()
    r.status_code = 409
    r._content = b'{"error": "conflict"}'
    r._content_consumed = True
    c = make_client([])
    c._request = MagicMock(return_value=r)

    with pytest.raises(ServerError):
        c._delete_table("users")
    assert closed == [True]


# --- success-path decoding ---


def test_list_tables():
    c = make_client([(200, {"tables": ["users", "events"]})])
    assert c._list_tables() == ["users", "events"]
    assert c._http.calls[0][0:2] == ("GET", ADDRESS + "/api/table")


def test_list_tables_missing_field():
    c = make_client([(200, {})])
    assert c._list_tables() == []


@pytest.mark.parametrize("body", ["not json", ["users"], {"tables": "users"}, {"tables": [1, 2]}])
def test_list_tables_bad_body(body):
    c = make_client([(200, body)])
    with pytest.raises(ResponseDecodeError):
        c._list_tables()


def test_delete_table_ignores_body():
    c = make_client([(200, "")])
    assert c._delete_table("users") is None
    assert c._http.calls[0][0:2] == ("DELETE", ADDRESS + "/api/table?table=users")


def test_list_and_delete_columns():
    c = make_client([(200, {"columns": ["name", "plan"]}), (200, "")])
    assert c._list_columns("users") == ["name", "plan"]
    c._delete_column("users", "plan")

    assert c._http.calls[0][1] == ADDRESS + "/api/column?table=users"
    assert c._http.calls[1][0:2] == ("DELETE", ADDRESS + "/api/column?column=plan&table=users")


def test_count_rows():
    c = make_client([(200, {"rowsCount": "42"})])
    assert c._count_rows("users", "user#") == 42
    assert c._http.calls[0][1] == ADDRESS + "/api/row/count?prefix=user%23&table=users"


@pytest.mark.parametrize("raw", ["0x2A", "0o52", "052", "0b101010", 42])
def test_count_rows_base_prefixes(raw):
    c = make_client([(200, {"rowsCount": raw})])
    assert c._count_rows("users") == 42


@pytest.mark.parametrize("body", [{"rowsCount": "many"}, {"rowsCount": "09"}, {"rowsCount": "4.0"}, {}])
def test_count_rows_bad_value(body):
    c = make_client([(200, body)])
    with pytest.raises(ResponseDecodeError):
        c._count_rows("users")


def test_list_rows_without_prefix():
    c = make_client([(200, {"rowKeys": ["a", "b"]})])
    assert c._list_rows("users", "") == ["a", "b"]
    assert c._http.calls[0][1] == ADDRESS + "/api/row/list?table=users"


def test_get_row_with_columns():
    c = make_client([(200, {"u1": {"a": "1", "b": "2"}})])
    assert c._get_row("users", "u1", ["a", "b", "c"]) == {"a": "1", "b": "2"}
    assert c._http.calls[0][1] == ADDRESS + "/api/row?columns=a,b,c&key=u1&table=users"


def test_get_row_missing():
    c = make_client([(200, {})])
    assert c._get_row("users", "u1") == {}


def test_get_row_columns_must_be_list():
    c = make_client([])
    with pytest.raises(TypeError):
        c._get_row("users", "u1", "a,b")


def test_get_rows():
    rows = {"u1": {"a": "1"}, "u2": {"a": "2"}}
    c = make_client([(200, rows)])
    assert c._get_rows("users", prefix="u", columns=["a"], limit=10) == rows
    assert c._http.calls[0][1] == ADDRESS + "/api/row?columns=a&limit=10&prefix=u&table=users"


def test_get_rows_bad_row():
    c = make_client([(200, {"u1": "flat"})])
    with pytest.raises(ResponseDecodeError):
        c._get_rows("users")


def test_set_row():
    c = make_client([(200, "")])
    c._set_row("users", "u1", {"name": "Ada", "plan": "pro"})

    method, url, kwargs = c._http.calls[0]
    assert (method, url) == ("POST", ADDRESS + "/api/row?key=u1&table=users")
    assert json.loads(kwargs["data"]) == {"name": "Ada", "plan": "pro"}


def test_delete_row_and_prefix():
    c = make_client([(200, ""), (200, "")])
    c._delete_row("users", "u1")
    c._delete_rows("users", "tmp#")

    assert c._http.calls[0][0:2] == ("DELETE", ADDRESS + "/api/row?key=u1&table=users")
    assert c._http.calls[1][0:2] == ("DELETE", ADDRESS + "/api/row?prefix=tmp%23&table=users")


def test_delete_rows_requires_prefix():
    c = make_client([])
    with pytest.raises(ValueError):
        c._delete_rows("users", "")
