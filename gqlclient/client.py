import json
import logging
from typing import Any, Dict, Optional

import requests

from gqlclient.errors import (
    AuthorizationError,
    SerializationError,
    StatusError,
    TransportError,
)
from gqlclient.query import pack_query
from gqlclient.response import QueryResponse
from gqlclient.transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class GqlClient:
    """
    A client for a single GraphQL-over-HTTP endpoint.

    The client holds the target URL and an optional authorization header value.
    The target URL can be read back through `target_url`; the authorization
    value is write-only and is only ever placed on outgoing requests.
    """

    def __init__(
        self,
        target_url: str,
        authorization: Optional[str] = None,
        transport: Optional[Transport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the client.

        No validation of the URL is done here; a malformed URL surfaces as a
        TransportError when a query is made.

        Args:
            target_url (str): The GraphQL server URL, e.g. https://api.github.com/graphql
            authorization (str, optional): Sent verbatim as the Authorization
                header, e.g. "token f69acf8...". Include any scheme prefix yourself.
            transport (Transport, optional): Sends the HTTP request. Defaults to
                a RequestsTransport.
            timeout (float): Seconds allowed for each request.
        """
        self._target_url = target_url
        self.__authorization = authorization
        self._transport = transport or RequestsTransport()
        self._timeout = timeout

    @property
    def target_url(self) -> str:
        return self._target_url

    def get_target_url(self) -> str:
        """Return the target API URL of the client."""
        return self._target_url

    def __repr__(self):
        return f"GqlClient(target_url={self._target_url!r})"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.__authorization is not None:
            headers["Authorization"] = self.__authorization
        return headers

    def query(
        self,
        query: str,
        variables: Optional[Dict[str, Any]],
        response: QueryResponse,
    ) -> QueryResponse:
        """
        Send a GraphQL query and decode the result into `response`.

        The query may be formatted with whitespace and newlines for readability;
        it is packed onto a single line before submission.

        Errors reported by the GraphQL service itself (the `errors` array of a
        200 response) are not raised. Check `response.errors` after the call.

        Args:
            query (str): The GraphQL query document.
            variables (dict, optional): Query variables; None sends an empty object.
            response (QueryResponse): Envelope to populate.

        Returns:
            QueryResponse: The same `response` object, populated.

        Raises:
            SerializationError: The variables could not be encoded as JSON.
            TransportError: The request could not be completed.
            AuthorizationError: The server answered 401.
            StatusError: The server answered anything else other than 200.
            DecodeError: The response body did not decode.
        """
        envelope = {"query": pack_query(query), "variables": variables if variables is not None else {}}
        try:
            body = json.dumps(envelope, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Could not encode GraphQL request: {e}") from e

        logger.debug("POST %s (%d bytes)", self._target_url, len(body))
        try:
            http_response = self._transport.post(
                self._target_url, data=body, headers=self._headers(), timeout=self._timeout
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"GraphQL request to {self._target_url} failed: {e}") from e

        status = http_response.status_code
        logger.debug("Response %s %s from %s", status, http_response.reason, self._target_url)
        if status != 200:
            if status == 401:
                raise AuthorizationError(http_response.reason)
            raise StatusError(status, http_response.reason)

        response.decode(http_response.content)
        if response.errors:
            logger.debug("GraphQL service reported %d error(s)", len(response.errors))
        return response
