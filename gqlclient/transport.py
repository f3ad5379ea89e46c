import time
from dataclasses import dataclass
from typing import Dict, Protocol

import requests
import urllib3

CHUNK_SIZE = 16 * 1024


@dataclass(frozen=True)
class TransportResponse:
    """A fully read HTTP response."""
    status_code: int
    reason: str
    content: bytes


class Transport(Protocol):
    """
    Anything that can POST a request body and hand back a response exposing
    `status_code`, `reason` and `content` (the `requests.Response` interface).

    Implementations signal network-level failures, including running past
    `timeout`, by raising `requests.exceptions.RequestException`.
    """

    def post(self, url: str, data: bytes, headers: Dict[str, str], timeout: float):
        ...


class RequestsTransport:
    """
    Default transport built on the `requests` library.

    `timeout` bounds the whole call, from connecting to reading the last byte
    of the body, not just each socket operation. Each call is an independent
    `requests.post`, so one instance can be shared between threads.
    """

    def __init__(self, verify: bool = True):
        """
        Args:
            verify (bool): Verify TLS certificates. Disable only for servers
                with self-signed certificates.
        """
        self.verify = verify

    def post(self, url, data, headers, timeout):
        deadline = time.monotonic() + timeout
        response = requests.post(
            url, data=data, headers=headers, timeout=timeout, verify=self.verify, stream=True
        )
        with response:
            content = _read_body(response.raw, timeout, deadline)
        return TransportResponse(response.status_code, response.reason, content)


def _read_body(raw, timeout, deadline):
    # read1 returns after a single socket read, so a server trickling bytes
    # cannot hold the call open past the deadline
    chunks = []
    while True:
        if time.monotonic() > deadline:
            raise requests.exceptions.Timeout(f"Response not complete within {timeout} seconds")
        try:
            chunk = raw.read1(CHUNK_SIZE, decode_content=True)
        except urllib3.exceptions.HTTPError as e:
            raise requests.exceptions.ConnectionError(e) from e
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)
