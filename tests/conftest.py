"""Pytest fixtures: a fake transport standing in for the network."""

import json

import pytest
import requests


def make_response(status_code=200, body=None, reason="OK"):
    """Build a requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if body is None:
        response._content = b""
    elif isinstance(body, (bytes, str)):
        response._content = body.encode("utf-8") if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode("utf-8")
    return response


class FakeTransport:
    """Records each request and answers with a canned response or exception."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else make_response(body={"data": {}})
        self.error = error
        self.calls = []

    def post(self, url, data, headers, timeout):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last_body(self):
        return json.loads(self.calls[-1]["data"])


@pytest.fixture
def transport():
    return FakeTransport()
