"""H.264 NAL header representation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

from smolrtsp.fu import nal_fu_header


class H264NalUnitType(IntEnum):
    """H.264 ``nal_unit_type`` values."""

    UNSPECIFIED = 0
    CODED_SLICE_NON_IDR = 1
    CODED_SLICE_DATA_PARTITION_A = 2
    CODED_SLICE_DATA_PARTITION_B = 3
    CODED_SLICE_DATA_PARTITION_C = 4
    CODED_SLICE_IDR = 5
    SEI = 6
    SPS = 7
    PPS = 8
    AUD = 9
    END_OF_SEQUENCE = 10
    END_OF_STREAM = 11
    FILLER = 12
    SPS_EXT = 13
    PREFIX = 14
    SUBSET_SPS = 15
    DPS = 16
    CODED_SLICE_AUX = 19
    CODED_SLICE_EXT = 20
    CODED_SLICE_EXT_DEPTH_VIEW = 21


_FU_A_IDENTIFIER = 0b01111100  # 0, nal_ref_idc, FU-A (28)


@dataclass(frozen=True)
class H264NalHeader:
    """A one-octet H.264 NAL header."""

    forbidden_zero_bit: bool
    ref_idc: int
    unit_type: int

    HEADER_SIZE: ClassVar[int] = 1
    FU_HEADER_SIZE: ClassVar[int] = 2

    @classmethod
    def parse(cls, byte_header: int) -> H264NalHeader:
        """Parse a header from its single octet."""
        if not 0 <= byte_header <= 0xFF:
            raise ValueError(f"NAL header octet out of range: {byte_header}")
        return cls(
            forbidden_zero_bit=(byte_header & 0b10000000) >> 7 == 1,
            ref_idc=(byte_header & 0b01100000) >> 5,
            unit_type=byte_header & 0b00011111,
        )

    def serialize(self) -> bytes:
        """Return the one-octet wire form."""
        octet = (
            (0b10000000 if self.forbidden_zero_bit else 0)
            | (self.ref_idc << 5)
            | self.unit_type
        ) & 0xFF
        return bytes([octet])

    def is_vps(self) -> bool:
        """H.264 has no VPS, so this is always false."""
        return False

    def is_sps(self) -> bool:
        return self.unit_type == H264NalUnitType.SPS

    def is_pps(self) -> bool:
        return self.unit_type == H264NalUnitType.PPS

    def is_coded_slice_idr(self) -> bool:
        return self.unit_type == H264NalUnitType.CODED_SLICE_IDR

    def is_coded_slice_non_idr(self) -> bool:
        return self.unit_type == H264NalUnitType.CODED_SLICE_NON_IDR

    def fu_header(self, is_first_fragment: bool, is_last_fragment: bool) -> bytes:
        """Return the FU indicator and FU header octets (RFC 6184, 5.8)."""
        fu_identifier = _FU_A_IDENTIFIER
        if self.ref_idc & 0b00000010 == 0:
            fu_identifier &= 0b00111111
        if self.ref_idc & 0b00000001 == 0:
            fu_identifier &= 0b01011111
        header = nal_fu_header(is_first_fragment, is_last_fragment, self.unit_type)
        return bytes([fu_identifier, header])