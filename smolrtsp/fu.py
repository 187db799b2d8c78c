"""Fragmentation unit (FU) header byte shared by H.264 and H.265."""

_START_BIT = 0b10000000
_END_BIT = 0b01000000


def nal_fu_header(is_first_fragment: bool, is_last_fragment: bool, unit_type: int) -> int:
    """Build the one-octet FU header.

    The layout is ``|S|E|R|Type|`` for H.264 (RFC 6184, 5.8) and
    ``|S|E|FuType|`` for H.265 (RFC 7798, 4.4.3).
    """
    fu_header = 0
    if is_first_fragment:
        fu_header |= _START_BIT
    if is_last_fragment:
        fu_header |= _END_BIT
    return (fu_header + unit_type) & 0xFF