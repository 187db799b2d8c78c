"""RTP fixed header (RFC 3550, 5.1)."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

_FIXED_HEADER_SIZE = 12
_CSRC_SIZE = 4
_EXTENSION_HEADER_SIZE = 4
_MAX_CSRC = 15


@dataclass(frozen=True)
class RtpHeader:
    """An RTP header; numeric fields are plain integers in host order."""

    version: int = 2
    padding: bool = False
    extension: bool = False
    marker: bool = False
    payload_ty: int = 0
    sequence_number: int = 0
    timestamp: int = 0
    ssrc: int = 0
    csrc: tuple[int, ...] = ()
    extension_profile: int = 0
    extension_payload: bytes = field(default=b"")

    def __post_init__(self) -> None:
        object.__setattr__(self, "csrc", tuple(self.csrc))
        object.__setattr__(self, "extension_payload", bytes(self.extension_payload))
        _check_range("version", self.version, 0b11)
        _check_range("payload_ty", self.payload_ty, 0x7F)
        _check_range("sequence_number", self.sequence_number, 0xFFFF)
        _check_range("timestamp", self.timestamp, 0xFFFFFFFF)
        _check_range("ssrc", self.ssrc, 0xFFFFFFFF)
        _check_range("extension_profile", self.extension_profile, 0xFFFF)
        if len(self.csrc) > _MAX_CSRC:
            raise ValueError(f"at most {_MAX_CSRC} CSRC identifiers are allowed")
        for source in self.csrc:
            _check_range("csrc", source, 0xFFFFFFFF)
        if len(self.extension_payload) % 4:
            raise ValueError("extension payload must be a multiple of 32 bits")
        _check_range("extension_payload_len", self.extension_payload_len, 0xFFFF)

    @property
    def csrc_count(self) -> int:
        """The number of CSRC identifiers."""
        return len(self.csrc)

    @property
    def extension_payload_len(self) -> int:
        """The extension length in 32-bit words."""
        return len(self.extension_payload) // 4

    def size(self) -> int:
        """Return the size of the serialised header in bytes."""
        total = _FIXED_HEADER_SIZE + self.csrc_count * _CSRC_SIZE
        if self.extension:
            total += _EXTENSION_HEADER_SIZE + len(self.extension_payload)
        return total

    def serialize(self) -> bytes:
        """Return the header in network byte order."""
        first = (
            (self.version << 6)
            | (int(self.padding) << 5)
            | (int(self.extension) << 4)
            | self.csrc_count
        )
        second = (int(self.marker) << 7) | self.payload_ty
        parts = [
            struct.pack(
                ">BBHII", first, second, self.sequence_number, self.timestamp, self.ssrc
            ),
            struct.pack(f">{self.csrc_count}I", *self.csrc),
        ]
        if self.extension:
            parts.append(
                struct.pack(">HH", self.extension_profile, self.extension_payload_len)
            )
            parts.append(self.extension_payload)
        return b"".join(parts)


def _check_range(name: str, value: int, maximum: int) -> None:
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} out of range: {value}")