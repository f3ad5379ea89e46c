from http import HTTPStatus


class GqlClientError(Exception):
    """Base exception for GraphQL client errors."""
    pass


class SerializationError(GqlClientError):
    """The request body could not be encoded as JSON."""
    pass


class TransportError(GqlClientError):
    """The HTTP round trip failed (DNS, connection, TLS, timeout, bad URL)."""
    pass


class StatusError(GqlClientError):
    """The server answered with a status other than 200."""

    def __init__(self, status_code, reason):
        self.status_code = status_code
        self.reason = reason or _standard_phrase(status_code)
        super().__init__(f"Expected 200 response but received: {status_code} {self.reason}".rstrip())


class AuthorizationError(StatusError):
    """The server answered 401 UNAUTHORIZED."""

    def __init__(self, reason=None):
        super().__init__(401, reason)
        # Replace the generic status message with something more actionable
        self.args = ("Received 401 UNAUTHORIZED response! Did you need to provide an authorization key?",)


class DecodeError(GqlClientError):
    """The response body was not JSON or did not match the response envelope."""
    pass


def _standard_phrase(status_code):
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""
