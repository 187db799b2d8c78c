"""H.265 NAL header representation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

from smolrtsp.fu import nal_fu_header


class H265NalUnitType(IntEnum):
    """H.265 ``nal_unit_type`` values."""

    TRAIL_N = 0
    TRAIL_R = 1
    TSA_N = 2
    TSA_R = 3
    STSA_N = 4
    STSA_R = 5
    RADL_N = 6
    RADL_R = 7
    RASL_N = 8
    RASL_R = 9
    BLA_W_LP = 16
    BLA_W_RADL = 17
    BLA_N_LP = 18
    IDR_W_RADL = 19
    IDR_N_LP = 20
    CRA_NUT = 21
    VPS_NUT = 32
    SPS_NUT = 33
    PPS_NUT = 34
    AUD_NUT = 35
    EOS_NUT = 36
    EOB_NUT = 37
    FD_NUT = 38
    PREFIX_SEI_NUT = 39
    SUFFIX_SEI_NUT = 40


_FU_PAYLOAD_HEADER_TYPE = 49


@dataclass(frozen=True)
class H265NalHeader:
    """A two-octet H.265 NAL header."""

    forbidden_zero_bit: bool
    unit_type: int
    nuh_layer_id: int
    nuh_temporal_id_plus1: int

    HEADER_SIZE: ClassVar[int] = 2
    FU_HEADER_SIZE: ClassVar[int] = 3

    @classmethod
    def parse(cls, data: bytes) -> H265NalHeader:
        """Parse a header from its first two octets."""
        if len(data) < 2:
            raise ValueError("an H.265 NAL header needs two octets")
        b0, b1 = data[0], data[1]
        return cls(
            forbidden_zero_bit=bool((b0 & 0b10000000) >> 7),
            unit_type=(b0 & 0b01111110) >> 1,
            nuh_layer_id=((b0 & 0b00000001) << 5) | ((b1 & 0b11111000) >> 3),
            nuh_temporal_id_plus1=b1 & 0b00000111,
        )

    def serialize(self) -> bytes:
        """Return the two-octet wire form."""
        b0 = (
            ((int(self.forbidden_zero_bit) & 0b1) << 7)
            | ((self.unit_type & 0b00111111) << 1)
            | ((self.nuh_layer_id & 0b00100000) >> 5)
        )
        b1 = ((self.nuh_layer_id & 0b00011111) << 3) | (
            self.nuh_temporal_id_plus1 & 0b00000111
        )
        return bytes([b0, b1])

    def is_vps(self) -> bool:
        return self.unit_type == H265NalUnitType.VPS_NUT

    def is_sps(self) -> bool:
        return self.unit_type == H265NalUnitType.SPS_NUT

    def is_pps(self) -> bool:
        return self.unit_type == H265NalUnitType.PPS_NUT

    def is_coded_slice_idr(self) -> bool:
        return self.unit_type == H265NalUnitType.IDR_W_RADL

    def is_coded_slice_non_idr(self) -> bool:
        return self.unit_type in (H265NalUnitType.IDR_N_LP, H265NalUnitType.TRAIL_R)

    def fu_header(self, is_first_fragment: bool, is_last_fragment: bool) -> bytes:
        """Return the payload header and FU header octets (RFC 7798, 4.4.3)."""
        payload_hdr = H265NalHeader(
            forbidden_zero_bit=self.forbidden_zero_bit,
            unit_type=_FU_PAYLOAD_HEADER_TYPE,
            nuh_layer_id=self.nuh_layer_id,
            nuh_temporal_id_plus1=self.nuh_temporal_id_plus1,
        ).serialize()
        header = nal_fu_header(is_first_fragment, is_last_fragment, self.unit_type)
        return payload_hdr + bytes([header])