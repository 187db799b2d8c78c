"""RTSP start lines, requests and responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from smolrtsp.headers import HeaderMap, HeaderName
from smolrtsp.status import Method

_U32_MAX = 0xFFFFFFFF


def _plain(value: Union[str, Enum]) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if not isinstance(value, str):
        raise TypeError(f"expected a string, not {type(value).__name__}")
    return value


@dataclass(frozen=True)
class RtspVersion:
    """An RTSP protocol version such as ``RTSP/1.0``."""

    major: int = 1
    minor: int = 0

    def __post_init__(self) -> None:
        for name, number in (("major", self.major), ("minor", self.minor)):
            if not 0 <= number <= 0xFF:
                raise ValueError(f"{name} version number out of range: {number}")

    def serialize(self) -> str:
        """Return the wire form ``RTSP/<major>.<minor>``."""
        return f"RTSP/{self.major}.{self.minor}"

    def __str__(self) -> str:
        return self.serialize()


@dataclass(frozen=True)
class RequestLine:
    """The first line of a request: method, URI and version."""

    method: str
    uri: str
    version: RtspVersion = field(default_factory=RtspVersion)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", _plain(self.method))
        object.__setattr__(self, "uri", _plain(self.uri))

    def serialize(self) -> str:
        """Return ``METHOD URI RTSP/x.y`` followed by CRLF."""
        return f"{self.method} {self.uri} {self.version.serialize()}\r\n"


@dataclass(frozen=True)
class ResponseLine:
    """The first line of a response: version, status code and reason."""

    version: RtspVersion
    code: int
    reason: str

    def __post_init__(self) -> None:
        if not 0 <= int(self.code) <= 0xFFFF:
            raise ValueError(f"status code out of range: {self.code}")
        object.__setattr__(self, "reason", _plain(self.reason))

    def serialize(self) -> str:
        """Return ``RTSP/x.y CODE Reason`` followed by CRLF."""
        return f"{self.version.serialize()} {int(self.code)} {self.reason}\r\n"


def _check_cseq(cseq: int) -> None:
    if not 0 <= cseq <= _U32_MAX:
        raise ValueError(f"CSeq out of range: {cseq}")


def _serialize_message(start_line: str, header_map: HeaderMap, body: str, cseq: int) -> str:
    parts = [start_line]
    if not header_map.contains_key(HeaderName.C_SEQ):
        parts.append(f"{HeaderName.C_SEQ.value}: {cseq}\r\n")
    if body and not header_map.contains_key(HeaderName.CONTENT_LENGTH):
        parts.append(
            f"{HeaderName.CONTENT_LENGTH.value}: {len(body.encode('utf-8'))}\r\n"
        )
    parts.append(header_map.serialize())
    parts.append(body)
    return "".join(parts)


@dataclass
class Request:
    """An RTSP request."""

    start_line: RequestLine
    header_map: HeaderMap = field(default_factory=HeaderMap)
    body: str = ""
    cseq: int = 0

    def __post_init__(self) -> None:
        _check_cseq(self.cseq)

    def serialize(self) -> str:
        """Return the full request.

        ``CSeq`` and, for a non-empty body, ``Content-Length`` are emitted
        first unless the header map already has them.
        """
        return _serialize_message(
            self.start_line.serialize(), self.header_map, self.body, self.cseq
        )


@dataclass
class Response:
    """An RTSP response."""

    start_line: ResponseLine
    header_map: HeaderMap = field(default_factory=HeaderMap)
    body: str = ""
    cseq: int = 0

    def __post_init__(self) -> None:
        _check_cseq(self.cseq)

    def serialize(self) -> str:
        """Return the full response.

        ``CSeq`` and, for a non-empty body, ``Content-Length`` are emitted
        first unless the header map already has them.
        """
        return _serialize_message(
            self.start_line.serialize(), self.header_map, self.body, self.cseq
        )