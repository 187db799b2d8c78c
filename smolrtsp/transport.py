"""Low-level RTP transports: TCP-interleaved and UDP."""

from __future__ import annotations

import errno
import os
import socket
import struct
import sys
import threading
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Protocol, Sequence, Union

_MAX_RETRANSMITS = 10
_INTERLEAVED_MAGIC = b"$"

# Linux values of IP_MTU_DISCOVER and IP_PMTUDISC_WANT.
_IP_MTU_DISCOVER = 10
_IP_PMTUDISC_WANT = 1


class TransmitError(OSError):
    """Raised when a packet could not be written in full."""


class Writer(Protocol):
    """The sink a TCP transport writes interleaved packets into."""

    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written."""

    def filled(self) -> int:
        """Return the number of bytes buffered but not yet sent."""


def iovec_len(bufs: Iterable[bytes]) -> int:
    """Return the total length of a sequence of buffers."""
    return sum(len(buf) for buf in bufs)


def interleaved_header(channel_id: int, length: int) -> bytes:
    """Return the four-octet RTSP interleaved frame header ``$ ch len``."""
    if not 0 <= channel_id <= 0xFF:
        raise ValueError(f"channel id out of range: {channel_id}")
    if not 0 <= length <= 0xFFFF:
        raise ValueError(f"interleaved frame too long: {length}")
    return _INTERLEAVED_MAGIC + struct.pack(">BH", channel_id, length)


class Transport(ABC):
    """A way of delivering RTP packets to a client."""

    @abstractmethod
    def transmit(self, bufs: Sequence[bytes]) -> None:
        """Send the concatenation of ``bufs`` as one packet."""

    @abstractmethod
    def is_full(self) -> bool:
        """Return whether the transport cannot take more data right now."""

    def close(self) -> None:
        """Release the resources held by the transport."""

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class TcpTransport(Transport):
    """Sends packets interleaved into the RTSP connection."""

    def __init__(
        self,
        writer: Writer,
        channel_id: int,
        max_buffer: int = 0,
        lock: Optional[threading.Lock] = None,
    ) -> None:
        if not 0 <= channel_id <= 0xFF:
            raise ValueError(f"channel id out of range: {channel_id}")
        self.writer = writer
        self.channel_id = channel_id
        self.max_buffer = max_buffer
        self._lock = lock if lock is not None else threading.Lock()

    def transmit(self, bufs: Sequence[bytes]) -> None:
        chunks = [bytes(buf) for buf in bufs]
        header = interleaved_header(self.channel_id, iovec_len(chunks))
        with self._lock:
            for chunk in (header, *chunks):
                written = self.writer.write(chunk)
                if written != len(chunk):
                    raise TransmitError(
                        f"short write: {written} of {len(chunk)} bytes"
                    )

    def is_full(self) -> bool:
        return self.writer.filled() > self.max_buffer


class UdpTransport(Transport):
    """Sends each packet as a datagram over a socket."""

    def __init__(self, sock: socket.socket, address: Optional[object] = None) -> None:
        self.sock = sock
        self.address = address

    def transmit(self, bufs: Sequence[bytes]) -> None:
        chunks = [bytes(buf) for buf in bufs]
        last_error: Optional[OSError] = None
        # The kernel may fragment an oversized packet on a retry.
        for _ in range(_MAX_RETRANSMITS):
            try:
                if self.address is None:
                    self.sock.sendmsg(chunks)
                else:
                    self.sock.sendmsg(chunks, [], 0, self.address)
                return
            except OSError as error:
                if error.errno != errno.EMSGSIZE:
                    raise
                last_error = error
        assert last_error is not None
        raise last_error

    def is_full(self) -> bool:
        return False

    def close(self) -> None:
        self.sock.close()


def dgram_socket(family: int, ip: Union[str, bytes], port: int) -> socket.socket:
    """Open a datagram socket connected to ``ip``:``port``.

    ``ip`` is either a textual address or its packed binary form.
    """
    if family not in (socket.AF_INET, socket.AF_INET6):
        raise OSError(errno.EAFNOSUPPORT, os.strerror(errno.EAFNOSUPPORT))
    host = socket.inet_ntop(family, ip) if isinstance(ip, (bytes, bytearray)) else ip

    sock = socket.socket(family, socket.SOCK_DGRAM)
    try:
        sock.connect((host, port))
        if family == socket.AF_INET and sys.platform.startswith("linux"):
            sock.setsockopt(socket.IPPROTO_IP, _IP_MTU_DISCOVER, _IP_PMTUDISC_WANT)
    except OSError:
        sock.close()
        raise
    return sock