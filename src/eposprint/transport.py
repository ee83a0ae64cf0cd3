"""
HTTP Transport for ePOS-Print.

The printer only needs "send these bytes, give me the reply bytes". Any
object with a matching send() can stand in for RequestsTransport; send()
may return the reply directly or an awaitable that resolves to it.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Mapping, Optional, Protocol, Union

import requests

from .errors import TransportError


@dataclass
class TransportReply:
    """HTTP status and body of a reply."""
    status: int
    body: bytes


class Transport(Protocol):
    """Something that can POST a request body and return the reply."""

    def send(
        self,
        url: str,
        body: bytes,
        headers: Mapping[str, str],
        params: Mapping[str, str],
    ) -> Union[TransportReply, Awaitable[TransportReply]]:
        ...


class RequestsTransport:
    """
    Transport backed by the requests library.

    The blocking POST runs in a worker thread so the caller's event loop
    keeps running while the printer works.
    """

    # Network timeout in seconds; unrelated to the printer's own timeout
    DEFAULT_TIMEOUT = 60.0

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session

    def post(self, url: str, body: bytes, headers: Mapping[str, str],
             params: Mapping[str, str]) -> TransportReply:
        """Perform one blocking POST."""
        poster = self.session.post if self.session is not None else requests.post
        try:
            reply = poster(
                url,
                data=body,
                headers=dict(headers),
                params=dict(params),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e
        return TransportReply(status=reply.status_code, body=reply.content)

    async def send(self, url: str, body: bytes, headers: Mapping[str, str],
                   params: Mapping[str, str]) -> TransportReply:
        return await asyncio.to_thread(self.post, url, body, headers, params)
