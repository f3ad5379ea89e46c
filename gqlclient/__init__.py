"""A simple client for GraphQL-over-HTTP query APIs."""

from gqlclient.client import DEFAULT_TIMEOUT, GqlClient
from gqlclient.errors import (
    AuthorizationError,
    DecodeError,
    GqlClientError,
    SerializationError,
    StatusError,
    TransportError,
)
from gqlclient.query import pack_query
from gqlclient.response import GraphQLErrorMessage, PageInfo, QueryResponse
from gqlclient.transport import RequestsTransport, Transport, TransportResponse

__all__ = [
    "DEFAULT_TIMEOUT",
    "AuthorizationError",
    "DecodeError",
    "GqlClient",
    "GqlClientError",
    "GraphQLErrorMessage",
    "PageInfo",
    "QueryResponse",
    "RequestsTransport",
    "SerializationError",
    "StatusError",
    "Transport",
    "TransportError",
    "TransportResponse",
    "pack_query",
]
