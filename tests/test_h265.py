import pytest

from smolrtsp.h265 import H265NalHeader, H265NalUnitType


def test_round_trip_over_many_headers():
    for b0 in range(256):
        for b1 in (0x00, 0x01, 0x5A, 0xA7, 0xFF):
            data = bytes([b0, b1])
            assert H265NalHeader.parse(data).serialize() == data


def test_parse_vps():
    header = H265NalHeader.parse(bytes([0x40, 0x01]))
    assert header.unit_type == H265NalUnitType.VPS_NUT
    assert header.forbidden_zero_bit is False
    assert header.nuh_layer_id == 0
    assert header.nuh_temporal_id_plus1 == 1
    assert header.is_vps()
    assert not header.is_sps() and not header.is_pps()


def test_parse_ignores_trailing_bytes():
    data = bytes([0x42, 0x01, 0xFF, 0xFF])
    assert H265NalHeader.parse(data) == H265NalHeader.parse(data[:2])


@pytest.mark.parametrize("data", [b"", b"\x40"])
def test_parse_rejects_short_input(data):
    with pytest.raises(ValueError):
        H265NalHeader.parse(data)


def test_layer_id_spans_both_octets():
    header = H265NalHeader(False, H265NalUnitType.SPS_NUT, 0b111111, 0b111)
    parsed = H265NalHeader.parse(header.serialize())
    assert parsed == header
    assert parsed.is_sps()


def test_slice_predicates():
    idr = H265NalHeader(False, H265NalUnitType.IDR_W_RADL, 0, 1)
    idr_n_lp = H265NalHeader(False, H265NalUnitType.IDR_N_LP, 0, 1)
    trail_r = H265NalHeader(False, H265NalUnitType.TRAIL_R, 0, 1)
    pps = H265NalHeader(False, H265NalUnitType.PPS_NUT, 0, 1)
    assert idr.is_coded_slice_idr() and not idr.is_coded_slice_non_idr()
    assert idr_n_lp.is_coded_slice_non_idr() and not idr_n_lp.is_coded_slice_idr()
    assert trail_r.is_coded_slice_non_idr()
    assert pps.is_pps()
    assert not pps.is_coded_slice_idr() and not pps.is_coded_slice_non_idr()


def test_fu_header_layout():
    header = H265NalHeader(False, H265NalUnitType.IDR_W_RADL, 5, 2)
    fu = header.fu_header(True, False)
    assert len(fu) == H265NalHeader.FU_HEADER_SIZE
    payload_hdr = H265NalHeader.parse(fu[:2])
    assert payload_hdr.unit_type == 49
    assert payload_hdr.nuh_layer_id == header.nuh_layer_id
    assert payload_hdr.nuh_temporal_id_plus1 == header.nuh_temporal_id_plus1
    assert payload_hdr.forbidden_zero_bit == header.forbidden_zero_bit
    assert fu[2] & 0b10000000
    assert not fu[2] & 0b01000000
    assert fu[2] & 0b00111111 == H265NalUnitType.IDR_W_RADL


def test_fu_header_last_fragment():
    header = H265NalHeader(False, H265NalUnitType.TRAIL_R, 0, 1)
    fu = header.fu_header(False, True)
    assert fu[2] & 0b01000000
    assert not fu[2] & 0b10000000
    assert fu[2] & 0b00111111 == H265NalUnitType.TRAIL_R


def test_serialize_size():
    header = H265NalHeader(True, H265NalUnitType.AUD_NUT, 1, 1)
    assert len(header.serialize()) == H265NalHeader.HEADER_SIZE
    assert H265NalHeader.parse(header.serialize()).forbidden_zero_bit is True