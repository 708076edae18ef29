# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_409 = "http_409"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

# Request construction subcodes
REQUEST_MALFORMED_ADDRESS = "request_malformed_address"
REQUEST_BODY_NOT_SERIALIZABLE = "request_body_not_serializable"
REQUEST_INVALID = "request_invalid"

# Token subcodes
TOKEN_MALFORMED = "token_malformed"
TOKEN_METADATA_UNAVAILABLE = "token_metadata_unavailable"
TOKEN_MALFORMED_RESPONSE = "token_malformed_response"
TOKEN_CREDENTIAL_FAILED = "token_credential_failed"

# Transport subcodes
TRANSPORT_TIMEOUT = "transport_timeout"
TRANSPORT_CONNECTION = "transport_connection"
TRANSPORT_FAILED = "transport_failed"

# Response decode subcodes
RESPONSE_NOT_JSON = "response_not_json"
RESPONSE_UNEXPECTED_SHAPE = "response_unexpected_shape"


def http_subcode(status_code: int) -> str:
    """Return the ``http_<status>`` subcode for a status code."""
    return f"http_{status_code}"
