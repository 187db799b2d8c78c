# smolrtsp

A small toolkit for building RTSP 1.0 servers in Python. It provides the
building blocks that a server needs. You supply the network loop.

- `smolrtsp.message`: `Request`, `Response`, `RequestLine`, `ResponseLine`
  and `RtspVersion`, each with a `serialize()` method that returns text.
- `smolrtsp.headers`: `Header`, `HeaderMap` (at most 32 headers; appending
  to a full map raises `HeaderMapOverflow`) and the `HeaderName` enum.
- `smolrtsp.status`: the `StatusCode` and `Method` enums.
- `smolrtsp.sdp`: `SdpType`, `SdpLine`, `sdp_line` and `sdp_describe`.
- `smolrtsp.rtp`: `RtpHeader`, the RTP fixed header with CSRCs and an
  optional extension.
- `smolrtsp.rtp_transport`: `RtpTransport`, the `RawTimestamp` and
  `SysClockUsTimestamp` timestamps, and `compute_timestamp`.
- `smolrtsp.h264`, `smolrtsp.h265`, `smolrtsp.nal`, `smolrtsp.fu`: the NAL
  headers `H264NalHeader` and `H265NalHeader`, `NalUnit`, and start-code
  detection (`determine_start_code`, `test_start_code_3b`,
  `test_start_code_4b`).
- `smolrtsp.nal_transport`: `NalTransport` and `NalTransportConfig`.
- `smolrtsp.transport`: `TcpTransport` for RTP interleaved into the RTSP
  connection, `UdpTransport` over a datagram socket, `dgram_socket`,
  `interleaved_header` and `iovec_len`.
- `smolrtsp.context` and `smolrtsp.controller`: `Context`, `Controller`,
  `ControlFlow` and `dispatch`.

## Installation

```
pip install .
```

## Answering requests

Subclass `Controller` and implement all of its methods. Then pass each
request to `dispatch`:

```python
import io

from smolrtsp.controller import ControlFlow, Controller, dispatch
from smolrtsp.headers import HeaderName
from smolrtsp.message import Request, RequestLine
from smolrtsp.status import Method, StatusCode


class MyServer(Controller):
    def options(self, ctx, req):
        ctx.header(HeaderName.PUBLIC, "DESCRIBE, SETUP, TEARDOWN, PLAY")
        ctx.respond_ok()

    def describe(self, ctx, req):
        ctx.header(HeaderName.CONTENT_TYPE, "application/sdp")
        ctx.body("v=0\r\n")
        ctx.respond_ok()

    def setup(self, ctx, req):
        ctx.respond(StatusCode.UNSUPPORTED_TRANSPORT, "Unsupported transport")

    def play(self, ctx, req):
        ctx.respond(StatusCode.SESSION_NOT_FOUND, "Invalid Session ID")

    def teardown(self, ctx, req):
        ctx.respond_ok()

    def unknown(self, ctx, req):
        ctx.respond(StatusCode.METHOD_NOT_ALLOWED, "Unknown method")

    def before(self, ctx, req):
        return ControlFlow.CONTINUE

    def after(self, ret, ctx, req):
        pass


conn = io.BytesIO()
request = Request(RequestLine(Method.OPTIONS, "rtsp://localhost/stream"), cseq=1)
dispatch(conn, MyServer(), request)
```

`dispatch` creates a `Context` for the request and calls `before`. If
`before` returns `ControlFlow.BREAK`, the handler is skipped. Otherwise
`dispatch` calls the handler that matches the request method, or `unknown`
when no handler matches. It then calls `after`, even when the handler
raises. `dispatch` returns the value of the response write, or 0 if no
response was written.

A `Context` sends its response to any object that has a
`write(bytes)` method. Add headers with `ctx.header(key, fmt, *args)`, which
formats the value with `%`, and set the body with `ctx.body(text)`. The
response always carries `CSeq`. It also carries `Content-Length` when the
body is not empty. In both cases the header map keeps priority when it
already has that header.

## Describing a session

```python
from smolrtsp.sdp import SdpType, sdp_describe

sdp = sdp_describe([
    (SdpType.VERSION, "0"),
    (SdpType.SESSION_NAME, "Example"),
    (SdpType.MEDIA, "video 0 RTP/AVP %d", 96),
    (SdpType.ATTR, "rtpmap:%d H264/%d", 96, 90000),
])
```

Each line is written as `<type>=<value>\r\n`. `sdp_describe` raises
`ValueError` when it gets no lines.

## Sending video

```python
import socket

from smolrtsp.h264 import H264NalHeader
from smolrtsp.nal import NalUnit
from smolrtsp.nal_transport import NalTransport
from smolrtsp.rtp_transport import RawTimestamp, RtpTransport
from smolrtsp.transport import UdpTransport, dgram_socket

transport = UdpTransport(dgram_socket(socket.AF_INET, "127.0.0.1", 5004))
with NalTransport(RtpTransport(transport, payload_ty=96, clock_rate=90000)) as nal:
    nalu = NalUnit(H264NalHeader.parse(0x65), b"\x88\x84")
    nal.send_packet(RawTimestamp(0), nalu)
```

A NAL unit is sent in a single RTP packet when its size, header included,
is below the configured maximum for its codec. The defaults are 1200 bytes
for H.264 and 4096 bytes for H.265. A larger payload is split into
fragmentation units, and the marker bit is set on the last fragment. For an
unfragmented unit, the marker bit is set on coded slices.

`RtpTransport` advances the sequence number only after a successful send.
A failed send raises an `OSError`. A short write on a `TcpTransport`
raises `TransmitError`, which is a subclass of `OSError`.

## What the package does not do

- It does not parse RTSP requests or responses. Messages can only be built
  and serialised.
- It has no server loop and no socket listener. It also has no command-line
  program. You read requests from the connection yourself and pass them to
  `dispatch`.
- It does not parse the `Transport` header and does not pick a transport.

## Tests

```
pip install .[test]
pytest
```