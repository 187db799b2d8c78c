"""Per-request response context."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from smolrtsp.headers import Header, HeaderKey, HeaderMap
from smolrtsp.message import Response, ResponseLine, RtspVersion
from smolrtsp.status import StatusCode


class ResponseWriter(Protocol):
    """A sink that accepts the serialised response."""

    def write(self, data: bytes) -> Optional[int]:
        """Write ``data`` and return the number of bytes written."""


class Context:
    """Collects headers and a body, then writes one RTSP response."""

    def __init__(self, writer: ResponseWriter, cseq: int) -> None:
        if writer is None:
            raise ValueError("a writer is required")
        self._writer = writer
        self._cseq = cseq
        self._headers = HeaderMap()
        self._body = ""
        self._ret = 0

    @property
    def writer(self) -> ResponseWriter:
        """The connection the response goes to."""
        return self._writer

    @property
    def cseq(self) -> int:
        """The sequence number of the request being answered."""
        return self._cseq

    @property
    def ret(self) -> int:
        """What the last response write returned; 0 before any response."""
        return self._ret

    @property
    def headers(self) -> HeaderMap:
        """The headers added so far."""
        return self._headers

    def header(self, key: HeaderKey, fmt: str, *args: Any) -> None:
        """Add a header whose value is ``fmt % args``."""
        value = fmt % args
        if not value:
            raise ValueError("a header value must not be empty")
        self._headers.append(Header(key, value))

    def body(self, body: str) -> None:
        """Set the response body."""
        if not isinstance(body, str):
            raise TypeError("body must be a string")
        self._body = body

    def respond(self, code: int, reason: str) -> int:
        """Write the response and return what the writer returned."""
        response = Response(
            start_line=ResponseLine(RtspVersion(1, 0), code, reason),
            header_map=self._headers,
            body=self._body,
            cseq=self._cseq,
        )
        data = response.serialize().encode("utf-8")
        written = self._writer.write(data)
        self._ret = len(data) if written is None else written
        return self._ret

    def respond_ok(self) -> int:
        """Respond with ``200 OK``."""
        return self.respond(StatusCode.OK, "OK")

    def respond_internal_error(self) -> int:
        """Respond with ``500 Internal error``."""
        return self.respond(StatusCode.INTERNAL_SERVER_ERROR, "Internal error")