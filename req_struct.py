from enum import Enum
from dataclasses import dataclass, field


class HttpMethod(Enum):
    # HttpMethod {{{
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    HEAD = "HEAD"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    # }}}


class TransportError(Exception):
    """
    Raised by the transport when a request
    could not be sent or no response arrived.
    """
    pass


@dataclass
class Request():
    # Request {{{
    uri: str
    headers: str | None   # None when the headers field is empty
    body: str | None      # None when the body field is empty
    method: str

    def __str__(self) -> str:
        metadata = f"{self.method} {self.uri}\n"
        headers = f"{self.headers}\n" if self.headers is not None else ""
        body = f"{self.body}\n" if self.body is not None else ""
        return metadata + headers + body
    # }}}


@dataclass
class Response():
    # Response {{{
    status: int
    body: str
    reason: str = ""
    url: str = ""
    headers: dict = field(default_factory=dict)
    # }}}
