"""Sending H.264/H.265 NAL units over RTP, with FU fragmentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from smolrtsp.h264 import H264NalHeader
from smolrtsp.nal import NalUnit
from smolrtsp.rtp_transport import RtpTimestamp, RtpTransport

MAX_H264_NALU_SIZE = 1200
MAX_H265_NALU_SIZE = 4096


@dataclass(frozen=True)
class NalTransportConfig:
    """Largest NAL unit sent unfragmented, per codec."""

    max_h264_nalu_size: int = MAX_H264_NALU_SIZE
    max_h265_nalu_size: int = MAX_H265_NALU_SIZE

    def __post_init__(self) -> None:
        if self.max_h264_nalu_size <= 0 or self.max_h265_nalu_size <= 0:
            raise ValueError("maximum NAL unit sizes must be positive")


class NalTransport:
    """Packetises NAL units (RFC 6184, RFC 7798) onto an RTP transport."""

    def __init__(
        self, transport: RtpTransport, config: Optional[NalTransportConfig] = None
    ) -> None:
        self.transport = transport
        self.config = config if config is not None else NalTransportConfig()

    def send_packet(self, ts: RtpTimestamp, nalu: NalUnit) -> None:
        """Send ``nalu`` as one packet or as a series of FU packets."""
        header = nalu.header
        max_packet_size = (
            self.config.max_h264_nalu_size
            if isinstance(header, H264NalHeader)
            else self.config.max_h265_nalu_size
        )
        nalu_size = header.HEADER_SIZE + len(nalu.payload)

        if nalu_size < max_packet_size:
            marker = header.is_coded_slice_idr() or header.is_coded_slice_non_idr()
            self.transport.send_packet(ts, marker, header.serialize(), nalu.payload)
            return

        self._send_fragmented(ts, max_packet_size, nalu)

    def _send_fragmented(
        self, ts: RtpTimestamp, max_packet_size: int, nalu: NalUnit
    ) -> None:
        payload = nalu.payload
        offsets = range(0, len(payload), max_packet_size)
        for index, start in enumerate(offsets):
            is_first = index == 0
            is_last = index == len(offsets) - 1
            fu_header = nalu.header.fu_header(is_first, is_last)
            self.transport.send_packet(
                ts, is_last, fu_header, payload[start : start + max_packet_size]
            )

    def is_full(self) -> bool:
        return self.transport.is_full()

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> NalTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()