import json
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, TypeVar

from gqlclient.errors import DecodeError

T = TypeVar("T")


@dataclass(frozen=True)
class GraphQLErrorMessage:
    """A single entry of the `errors` array in a GraphQL response."""
    message: str


@dataclass(frozen=True)
class PageInfo:
    """
    Cursor details of a connections-style paged field.

    Callers embed this in their own payload types when a query selects
    `pageInfo { startCursor endCursor hasNextPage hasPreviousPage }`.
    """
    start_cursor: Optional[str]
    end_cursor: Optional[str]
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_dict(cls, data):
        return cls(
            start_cursor=data.get("startCursor"),
            end_cursor=data.get("endCursor"),
            has_next_page=bool(data["hasNextPage"]),
            has_previous_page=bool(data["hasPreviousPage"]),
        )


@dataclass
class QueryResponse(Generic[T]):
    """
    The `data` + `errors` envelope of a GraphQL response.

    Callers supply a decoder that turns the raw `data` JSON value into the
    payload type they declared for their query, for example:

        response = QueryResponse(decoder=RepositorySearch.from_dict)
        client.query(QUERY, {"owner": "mikebway"}, response)

    Without a decoder, `data` is left as the raw JSON value (dicts and lists).

    If `errors` is non-empty the GraphQL service reported a problem and the
    contents of `data` must not be trusted; the decoder is not applied and
    `data` holds whatever raw JSON value the service sent.
    """
    decoder: Optional[Callable[[Any], T]] = None
    data: Optional[T] = None
    errors: List[GraphQLErrorMessage] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self.errors]

    def decode(self, body: bytes) -> None:
        """
        Populate this envelope from a raw JSON response body.

        Args:
            body (bytes): The HTTP response body.

        Raises:
            DecodeError: If the body is not JSON, is not a JSON object, carries
                a malformed `errors` array, or the decoder rejects `data`.
        """
        try:
            document = json.loads(body)
        except (ValueError, RecursionError) as e:
            raise DecodeError(f"Response body is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise DecodeError(f"Expected a JSON object but found {type(document).__name__}")

        self.errors = _decode_errors(document.get("errors"))

        raw_data = document.get("data")
        # The payload is untrusted when errors were reported, so it stays raw
        if raw_data is None or self.decoder is None or self.errors:
            self.data = raw_data
            return

        try:
            self.data = self.decoder(raw_data)
        except (LookupError, TypeError, ValueError, AttributeError, RecursionError) as e:
            raise DecodeError(f"Response data did not match the expected structure: {e!r}") from e


def _decode_errors(raw_errors):
    if raw_errors is None:
        return []
    if not isinstance(raw_errors, list):
        raise DecodeError("Expected 'errors' to be a JSON array")

    errors = []
    for entry in raw_errors:
        if not isinstance(entry, dict):
            raise DecodeError("Expected each entry of 'errors' to be a JSON object")
        errors.append(GraphQLErrorMessage(message=str(entry.get("message", ""))))
    return errors
