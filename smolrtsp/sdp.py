"""SDP lines (RFC 4566) written in ``printf`` style."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence, Union


class SdpType(str, Enum):
    """The one-character SDP line types."""

    VERSION = "v"
    ORIGIN = "o"
    SESSION_NAME = "s"
    INFO = "i"
    URI = "u"
    EMAIL = "e"
    PHONE = "p"
    CONNECTION = "c"
    BANDWIDTH = "b"
    TIME = "t"
    REPEAT = "r"
    TIME_ZONES = "z"
    ENCRYPTION_KEYS = "k"
    ATTR = "a"
    MEDIA = "m"

    def __str__(self) -> str:
        return self.value


SdpTypeLike = Union[SdpType, str]


def _plain_type(ty: SdpTypeLike) -> str:
    text = ty.value if isinstance(ty, SdpType) else ty
    if not isinstance(text, str) or len(text) != 1:
        raise ValueError(f"an SDP type is a single character, got {ty!r}")
    return text


@dataclass(frozen=True)
class SdpLine:
    """A single ``<type>=<value>`` SDP line."""

    ty: str
    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "ty", _plain_type(self.ty))
        if not isinstance(self.value, str):
            raise TypeError("SDP value must be a string")

    def serialize(self) -> str:
        """Return the line followed by CRLF."""
        return f"{self.ty}={self.value}\r\n"


def sdp_line(ty: SdpTypeLike, fmt: str, *args: Any) -> str:
    """Format ``fmt`` with ``args`` (``%`` style) into one SDP line."""
    return SdpLine(ty, fmt % args).serialize()


def sdp_describe(lines: Iterable[Sequence[Any]]) -> str:
    """Join SDP lines given as ``(ty, fmt, *args)`` tuples.

    At least one line is required.
    """
    rendered = [sdp_line(*line) for line in lines]
    if not rendered:
        raise ValueError("an SDP description needs at least one line")
    return "".join(rendered)