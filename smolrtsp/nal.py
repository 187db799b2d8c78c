"""Generic NAL unit representation and Annex B start-code detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union

from smolrtsp.h264 import H264NalHeader
from smolrtsp.h265 import H265NalHeader

NalHeader = Union[H264NalHeader, H265NalHeader]
"""A NAL header of either codec; both share the same interface."""

NalStartCodeTester = Callable[[bytes], int]
"""Returns the length of the start code at the beginning of data, or 0."""

_START_CODE_3B = b"\x00\x00\x01"
_START_CODE_4B = b"\x00\x00\x00\x01"


@dataclass(frozen=True)
class NalUnit:
    """A NAL unit: its header and the payload that follows the header."""

    header: NalHeader
    payload: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.header, (H264NalHeader, H265NalHeader)):
            raise TypeError("header must be an H264NalHeader or H265NalHeader")
        object.__setattr__(self, "payload", bytes(self.payload))


def test_start_code_3b(data: bytes) -> int:
    """Return 3 if ``data`` begins with ``00 00 01``, otherwise 0."""
    return len(_START_CODE_3B) if bytes(data[:3]) == _START_CODE_3B else 0


def test_start_code_4b(data: bytes) -> int:
    """Return 4 if ``data`` begins with ``00 00 00 01``, otherwise 0."""
    return len(_START_CODE_4B) if bytes(data[:4]) == _START_CODE_4B else 0


def determine_start_code(data: bytes) -> Optional[NalStartCodeTester]:
    """Pick the start-code tester matching the beginning of ``data``.

    Returns None when ``data`` starts with neither start code.
    """
    if test_start_code_3b(data):
        return test_start_code_3b
    if test_start_code_4b(data):
        return test_start_code_4b
    return None