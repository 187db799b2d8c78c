import pytest

from smolrtsp.h264 import H264NalHeader, H264NalUnitType


def test_parse_serialize_round_trip_for_every_octet():
    for octet in range(256):
        assert H264NalHeader.parse(octet).serialize() == bytes([octet])


def test_parse_idr_slice():
    header = H264NalHeader.parse(0x65)
    assert header.forbidden_zero_bit is False
    assert header.ref_idc == 3
    assert header.unit_type == H264NalUnitType.CODED_SLICE_IDR
    assert header.is_coded_slice_idr()
    assert not header.is_coded_slice_non_idr()


def test_forbidden_bit_is_parsed():
    header = H264NalHeader.parse(0b10000000 | H264NalUnitType.SEI)
    assert header.forbidden_zero_bit is True
    assert header.unit_type == H264NalUnitType.SEI


@pytest.mark.parametrize("octet", [256, -1])
def test_parse_rejects_out_of_range(octet):
    with pytest.raises(ValueError):
        H264NalHeader.parse(octet)


def test_predicates():
    sps = H264NalHeader(False, 3, H264NalUnitType.SPS)
    pps = H264NalHeader(False, 3, H264NalUnitType.PPS)
    non_idr = H264NalHeader(False, 2, H264NalUnitType.CODED_SLICE_NON_IDR)
    assert sps.is_sps() and not sps.is_pps()
    assert pps.is_pps() and not pps.is_sps()
    assert non_idr.is_coded_slice_non_idr() and not non_idr.is_coded_slice_idr()
    assert [h.is_vps() for h in (sps, pps, non_idr)] == [False, False, False]


def test_fu_header_full_ref_idc():
    header = H264NalHeader(False, 3, H264NalUnitType.CODED_SLICE_IDR)
    fu = header.fu_header(True, False)
    assert len(fu) == H264NalHeader.FU_HEADER_SIZE
    assert fu[0] == 0b01111100
    assert fu[1] & 0b10000000
    assert not fu[1] & 0b01000000
    assert fu[1] & 0b00011111 == H264NalUnitType.CODED_SLICE_IDR


def test_fu_header_zero_ref_idc_is_plain_fu_a():
    header = H264NalHeader(False, 0, H264NalUnitType.CODED_SLICE_NON_IDR)
    assert header.fu_header(False, False)[0] == 28


@pytest.mark.parametrize("ref_idc", [0, 1, 2, 3])
def test_fu_indicator_carries_ref_idc(ref_idc):
    header = H264NalHeader(False, ref_idc, H264NalUnitType.SPS)
    indicator = header.fu_header(False, True)[0]
    assert (indicator >> 5) & 0b11 == ref_idc
    assert indicator & 0b00011111 == 28
    assert not indicator & 0b10000000


def test_fu_header_last_fragment():
    header = H264NalHeader(False, 1, H264NalUnitType.PPS)
    fu = header.fu_header(False, True)
    assert fu[1] & 0b11000000 == 0b01000000
    assert fu[1] == 0b01000000 | H264NalUnitType.PPS


def test_sizes():
    assert len(H264NalHeader.parse(0x41).serialize()) == H264NalHeader.HEADER_SIZE