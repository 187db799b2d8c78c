"""RTP packetisation on top of a transport."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Union

from smolrtsp.rtp import RtpHeader
from smolrtsp.transport import Transport

_U32_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class RawTimestamp:
    """An RTP timestamp given directly in clock-rate units."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _U32_MASK:
            raise ValueError(f"RTP timestamp out of range: {self.value}")


@dataclass(frozen=True)
class SysClockUsTimestamp:
    """A timestamp given in microseconds of system clock time."""

    microseconds: int

    def __post_init__(self) -> None:
        if self.microseconds < 0:
            raise ValueError("timestamp must not be negative")


RtpTimestamp = Union[RawTimestamp, SysClockUsTimestamp]


def compute_timestamp(ts: RtpTimestamp, clock_rate: int) -> int:
    """Convert ``ts`` to a 32-bit RTP timestamp at ``clock_rate`` Hz."""
    if isinstance(ts, RawTimestamp):
        return ts.value
    if isinstance(ts, SysClockUsTimestamp):
        ms, us_rem = divmod(ts.microseconds, 1000)
        clock_rate_khz = clock_rate // 1000
        value = ms * clock_rate_khz + int(us_rem * (clock_rate_khz / 1000.0))
        return value & _U32_MASK
    raise TypeError(f"unsupported timestamp: {ts!r}")


class RtpTransport:
    """Wraps payloads into RTP packets and hands them to a transport."""

    def __init__(
        self,
        transport: Transport,
        payload_ty: int,
        clock_rate: int,
        *,
        ssrc: Optional[int] = None,
    ) -> None:
        if not 0 <= payload_ty <= 0x7F:
            raise ValueError(f"payload type out of range: {payload_ty}")
        self.transport = transport
        self.payload_ty = payload_ty
        self.clock_rate = clock_rate
        self.ssrc = random.getrandbits(32) if ssrc is None else ssrc
        self.sequence_number = 0

    def send_packet(
        self, ts: RtpTimestamp, marker: bool, payload_header: bytes, payload: bytes
    ) -> None:
        """Send one RTP packet; the sequence number advances only on success."""
        header = RtpHeader(
            marker=marker,
            payload_ty=self.payload_ty,
            sequence_number=self.sequence_number,
            timestamp=compute_timestamp(ts, self.clock_rate),
            ssrc=self.ssrc,
        )
        self.transport.transmit([header.serialize(), payload_header, payload])
        self.sequence_number = (self.sequence_number + 1) & 0xFFFF

    def is_full(self) -> bool:
        return self.transport.is_full()

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> RtpTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()