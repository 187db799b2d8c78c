import pytest

from smolrtsp.rtp import RtpHeader
from smolrtsp.rtp_transport import (
    RawTimestamp,
    RtpTransport,
    SysClockUsTimestamp,
    compute_timestamp,
)
from smolrtsp.transport import Transport


class RecordingTransport(Transport):
    def __init__(self, fail_times=0, full=False):
        self.packets = []
        self.fail_times = fail_times
        self.full = full
        self.closed = False

    def transmit(self, bufs):
        if self.fail_times:
            self.fail_times -= 1
            raise OSError("transmit failed")
        self.packets.append([bytes(b) for b in bufs])

    def is_full(self):
        return self.full

    def close(self):
        self.closed = True


def test_raw_timestamp_is_passed_through():
    assert compute_timestamp(RawTimestamp(1234), 90000) == 1234


def test_one_second_equals_clock_rate():
    assert compute_timestamp(SysClockUsTimestamp(1_000_000), 90000) == 90000
    assert compute_timestamp(SysClockUsTimestamp(0), 8000) == 0


def test_sys_clock_timestamp_is_monotonic_and_32_bit():
    values = [compute_timestamp(SysClockUsTimestamp(us), 8000) for us in range(0, 5000, 125)]
    assert values == sorted(values)
    assert 0 <= compute_timestamp(SysClockUsTimestamp(2**45), 90000) <= 0xFFFFFFFF


def test_raw_timestamp_out_of_range():
    with pytest.raises(ValueError):
        RawTimestamp(2**32)


def test_send_packet_layout():
    inner = RecordingTransport()
    rtp = RtpTransport(inner, 96, 90000, ssrc=42)
    rtp.send_packet(RawTimestamp(3000), True, b"\x7c", b"payload")
    [packet] = inner.packets
    expected = RtpHeader(
        marker=True, payload_ty=96, sequence_number=0, timestamp=3000, ssrc=42
    )
    assert packet == [expected.serialize(), b"\x7c", b"payload"]


def test_sequence_number_advances_only_on_success():
    inner = RecordingTransport(fail_times=1)
    rtp = RtpTransport(inner, 0, 8000, ssrc=1)
    with pytest.raises(OSError):
        rtp.send_packet(RawTimestamp(0), False, b"", b"a")
    assert rtp.sequence_number == 0
    rtp.send_packet(RawTimestamp(0), False, b"", b"a")
    rtp.send_packet(RawTimestamp(160), False, b"", b"b")
    assert rtp.sequence_number == 2
    assert [p[0][2:4] for p in inner.packets] == [b"\x00\x00", b"\x00\x01"]


def test_sequence_number_wraps():
    rtp = RtpTransport(RecordingTransport(), 0, 8000)
    rtp.sequence_number = 0xFFFF
    rtp.send_packet(RawTimestamp(0), False, b"", b"x")
    assert rtp.sequence_number == 0


def test_is_full_and_close_delegate():
    inner = RecordingTransport(full=True)
    with RtpTransport(inner, 0, 8000) as rtp:
        assert rtp.is_full() is True
    assert inner.closed is True


def test_invalid_payload_type():
    with pytest.raises(ValueError):
        RtpTransport(RecordingTransport(), 128, 8000)