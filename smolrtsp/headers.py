"""RTSP headers and the bounded header map."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Union


class HeaderName(str, Enum):
    """Well-known RTSP header names."""

    ACCEPT = "Accept"
    ACCEPT_ENCODING = "Accept-Encoding"
    ACCEPT_LANGUAGE = "Accept-Language"
    ALLOW = "Allow"
    AUTHORIZATION = "Authorization"
    BANDWIDTH = "Bandwidth"
    BLOCKSIZE = "Blocksize"
    CACHE_CONTROL = "Cache-Control"
    CONFERENCE = "Conference"
    CONNECTION = "Connection"
    CONTENT_BASE = "Content-Base"
    CONTENT_ENCODING = "Content-Encoding"
    CONTENT_LANGUAGE = "Content-Language"
    CONTENT_LENGTH = "Content-Length"
    CONTENT_LOCATION = "Content-Location"
    CONTENT_TYPE = "Content-Type"
    C_SEQ = "CSeq"
    DATE = "Date"
    EXPIRES = "Expires"
    FROM = "From"
    IF_MODIFIED_SINCE = "If-Modified-Since"
    LAST_MODIFIED = "Last-Modified"
    PROXY_AUTHENTICATE = "Proxy-Authenticate"
    PROXY_REQUIRE = "Proxy-Require"
    PUBLIC = "Public"
    RANGE = "Range"
    REFERER = "Referrer"
    REQUIRE = "Require"
    RETRY_AFTER = "Retry-After"
    RTP_INFO = "RTP-Info"
    SCALE = "Scale"
    SESSION = "Session"
    SERVER = "Server"
    SPEED = "Speed"
    TRANSPORT = "Transport"
    UNSUPPORTED = "Unsupported"
    USER_AGENT = "User-Agent"
    VIA = "Via"
    WWW_AUTHENTICATE = "WWW-Authenticate"

    def __str__(self) -> str:
        return self.value


HeaderKey = Union[HeaderName, str]


def _plain_key(key: HeaderKey) -> str:
    if isinstance(key, HeaderName):
        return key.value
    if not isinstance(key, str):
        raise TypeError(f"header key must be a string, not {type(key).__name__}")
    return key


@dataclass(frozen=True)
class Header:
    """A single RTSP header: a key and its value."""

    key: str
    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", _plain_key(self.key))
        if not isinstance(self.value, str):
            raise TypeError("header value must be a string")

    def serialize(self) -> str:
        """Return the wire form ``Key: Value`` followed by CRLF."""
        return f"{self.key}: {self.value}\r\n"


class HeaderMapOverflow(ValueError):
    """Raised when a header is added to a full header map."""


class HeaderMap:
    """An ordered collection of at most ``CAPACITY`` headers."""

    CAPACITY = 32

    def __init__(self, headers: Optional[Iterable[Header]] = None) -> None:
        self._headers: list[Header] = []
        for header in headers or ():
            self.append(header)

    def find(self, key: HeaderKey) -> Optional[str]:
        """Return the value of the first header named ``key``, or None."""
        wanted = _plain_key(key)
        return next((h.value for h in self._headers if h.key == wanted), None)

    def contains_key(self, key: HeaderKey) -> bool:
        """Return whether a header named ``key`` is present."""
        return self.find(key) is not None

    def append(self, header: Header) -> None:
        """Add ``header`` at the end; raise HeaderMapOverflow when full."""
        if not isinstance(header, Header):
            raise TypeError("only Header instances can be appended")
        if self.is_full():
            raise HeaderMapOverflow(
                f"header map already holds {self.CAPACITY} headers"
            )
        self._headers.append(header)

    def is_full(self) -> bool:
        """Return whether no more headers fit."""
        return len(self._headers) >= self.CAPACITY

    def serialize(self) -> str:
        """Return every header in order followed by the terminating CRLF."""
        return "".join(h.serialize() for h in self._headers) + "\r\n"

    def __len__(self) -> int:
        return len(self._headers)

    def __iter__(self) -> Iterator[Header]:
        return iter(self._headers)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains_key(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderMap):
            return NotImplemented
        return self._headers == other._headers

    def __repr__(self) -> str:
        return f"HeaderMap({self._headers!r})"