from dataclasses import dataclass

import pytest
import requests

from gqlclient import (
    DEFAULT_TIMEOUT,
    AuthorizationError,
    DecodeError,
    GqlClient,
    GqlClientError,
    QueryResponse,
    RequestsTransport,
    SerializationError,
    StatusError,
    TransportError,
)
from tests.conftest import FakeTransport, make_response

GITHUB_URL = "https://api.github.com/graphql"

SIMPLE_REPO_DATA_QUERY = """query FetchRepoInfo($owner: String!, $name: String!) {
	repository(owner: $owner, name: $name) {
		name
		owner {
			login
		}
	}
}"""


@dataclass
class SimpleRepoData:
    name: str
    owner_login: str

    @classmethod
    def from_dict(cls, data):
        repository = data["repository"]
        return cls(name=repository["name"], owner_login=repository["owner"]["login"])


HAPPY_BODY = {"data": {"repository": {"name": "gogql", "owner": {"login": "mikebway"}}}}


def test_target_url_is_kept():
    client = GqlClient(GITHUB_URL, "token abc", transport=FakeTransport())
    assert client.target_url == GITHUB_URL
    assert client.get_target_url() == GITHUB_URL


def test_target_url_unchanged_by_queries(transport):
    client = GqlClient(GITHUB_URL, transport=transport)
    client.query("{ viewer { login } }", None, QueryResponse())
    client.query("{ viewer { login } }", None, QueryResponse())
    assert client.get_target_url() == GITHUB_URL


def test_authorization_is_not_exposed():
    client = GqlClient(GITHUB_URL, "token s3cret", transport=FakeTransport())
    assert not hasattr(client, "authorization")
    assert "s3cret" not in repr(client)


def test_default_transport_is_requests():
    client = GqlClient(GITHUB_URL)
    assert isinstance(client._transport, RequestsTransport)
    assert client._transport.verify is True


def test_request_envelope_and_headers(transport):
    client = GqlClient(GITHUB_URL, "token abc", transport=transport)
    client.query(SIMPLE_REPO_DATA_QUERY, {"owner": "mikebway", "name": "gogql"}, QueryResponse())

    assert len(transport.calls) == 1
    call = transport.calls[0]
    assert call["url"] == GITHUB_URL
    assert call["timeout"] == DEFAULT_TIMEOUT == 10
    assert call["headers"] == {"Content-Type": "application/json", "Authorization": "token abc"}
    assert transport.last_body == {
        "query": "query FetchRepoInfo($owner: String!, $name: String!) "
                 "{ repository(owner: $owner, name: $name) { name owner { login } } }",
        "variables": {"owner": "mikebway", "name": "gogql"},
    }


def test_no_authorization_header_without_credential(transport):
    client = GqlClient(GITHUB_URL, transport=transport)
    client.query("{ viewer { login } }", None, QueryResponse())
    assert "Authorization" not in transport.calls[0]["headers"]


def test_missing_variables_sent_as_empty_object(transport):
    client = GqlClient(GITHUB_URL, transport=transport)
    client.query("{ viewer { login } }", None, QueryResponse())
    assert transport.last_body["variables"] == {}


def test_custom_timeout(transport):
    client = GqlClient(GITHUB_URL, transport=transport, timeout=2.5)
    client.query("{ viewer { login } }", None, QueryResponse())
    assert transport.calls[0]["timeout"] == 2.5


@pytest.mark.parametrize("variables", [
    {"when": object()},
    {"ratio": float("nan")},
    {"ids": {1, 2}},
])
def test_unserializable_variables_fail_before_io(transport, variables):
    client = GqlClient(GITHUB_URL, transport=transport)
    with pytest.raises(SerializationError):
        client.query("{ viewer { login } }", variables, QueryResponse())
    assert transport.calls == []


@pytest.mark.parametrize("error", [
    requests.exceptions.ConnectionError("connection refused"),
    requests.exceptions.Timeout("timed out"),
    requests.exceptions.SSLError("certificate verify failed"),
    requests.exceptions.MissingSchema("Invalid URL 'nowhere'"),
])
def test_transport_failures_are_wrapped(error):
    client = GqlClient("nowhere", transport=FakeTransport(error=error))
    with pytest.raises(TransportError) as excinfo:
        client.query("{ viewer { login } }", None, QueryResponse())
    assert excinfo.value.__cause__ is error


def test_malformed_url_with_default_transport():
    client = GqlClient("not a url")
    with pytest.raises(TransportError):
        client.query("{ viewer { login } }", None, QueryResponse())


def test_happy_path_decodes_payload():
    transport = FakeTransport(make_response(body=HAPPY_BODY))
    client = GqlClient(GITHUB_URL, "token abc", transport=transport)
    response = QueryResponse(decoder=SimpleRepoData.from_dict)

    result = client.query(SIMPLE_REPO_DATA_QUERY, {"owner": "mikebway", "name": "gogql"}, response)

    assert result is response
    assert response.errors == []
    assert response.data == SimpleRepoData(name="gogql", owner_login="mikebway")


def test_unauthorized():
    transport = FakeTransport(make_response(401, body="not even json", reason="Unauthorized"))
    client = GqlClient(GITHUB_URL, transport=transport)
    response = QueryResponse()

    with pytest.raises(AuthorizationError) as excinfo:
        client.query("{ viewer { login } }", None, response)

    assert excinfo.value.status_code == 401
    assert "401 UNAUTHORIZED" in str(excinfo.value)
    assert response.data is None


def test_authorization_error_is_a_status_error():
    assert issubclass(AuthorizationError, StatusError)
    assert issubclass(StatusError, GqlClientError)


@pytest.mark.parametrize("status, reason", [(404, "Not Found"), (500, "Internal Server Error"), (302, "Found")])
def test_other_statuses(status, reason):
    transport = FakeTransport(make_response(status, body="<html>nope</html>", reason=reason))
    client = GqlClient(GITHUB_URL, transport=transport)

    with pytest.raises(StatusError) as excinfo:
        client.query("{ viewer { login } }", None, QueryResponse())

    assert not isinstance(excinfo.value, AuthorizationError)
    assert excinfo.value.status_code == status
    assert excinfo.value.reason == reason
    assert f"{status} {reason}" in str(excinfo.value)


def test_protocol_errors_are_not_raised():
    body = {"data": None, "errors": [{"message": "Could not resolve to a Repository"}]}
    client = GqlClient(GITHUB_URL, transport=FakeTransport(make_response(body=body)))
    response = QueryResponse(decoder=SimpleRepoData.from_dict)

    client.query(SIMPLE_REPO_DATA_QUERY, {"owner": "mikebway", "name": "nope"}, response)

    assert response.data is None
    assert len(response.errors) == 1
    assert response.messages == ["Could not resolve to a Repository"]


def test_malformed_json_body():
    client = GqlClient(GITHUB_URL, transport=FakeTransport(make_response(body="{not json")))
    with pytest.raises(DecodeError):
        client.query("{ viewer { login } }", None, QueryResponse())


def test_shape_mismatch_is_decode_error():
    body = {"data": {"viewer": {"login": "mikebway"}}}
    client = GqlClient(GITHUB_URL, transport=FakeTransport(make_response(body=body)))
    with pytest.raises(DecodeError):
        client.query("{ viewer { login } }", None, QueryResponse(decoder=SimpleRepoData.from_dict))


def test_repeated_queries_are_identical():
    transport = FakeTransport(make_response(body=HAPPY_BODY))
    client = GqlClient(GITHUB_URL, transport=transport)
    variables = {"owner": "mikebway", "name": "gogql"}

    first = client.query(SIMPLE_REPO_DATA_QUERY, variables, QueryResponse(decoder=SimpleRepoData.from_dict))
    second = client.query(SIMPLE_REPO_DATA_QUERY, variables, QueryResponse(decoder=SimpleRepoData.from_dict))

    assert first.data == second.data
    assert first.errors == second.errors
    assert transport.calls[0]["data"] == transport.calls[1]["data"]



def test_missing_reason_uses_standard_phrase():
    transport = FakeTransport(make_response(404, body="", reason=None))
    client = GqlClient(GITHUB_URL, transport=transport)

    with pytest.raises(StatusError) as excinfo:
        client.query("{ viewer { login } }", None, QueryResponse())

    assert excinfo.value.reason == "Not Found"
    assert str(excinfo.value) == "Expected 200 response but received: 404 Not Found"


def test_missing_reason_for_unknown_status():
    error = StatusError(599, None)
    assert error.reason == ""
    assert str(error) == "Expected 200 response but received: 599"
    assert "None" not in str(error)


def test_missing_reason_on_unauthorized():
    error = AuthorizationError(None)
    assert error.reason == "Unauthorized"
    assert error.status_code == 401
