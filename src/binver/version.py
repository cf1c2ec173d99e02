"""Document and field version tags."""
from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from binver.protocol import HEADER_FMT, HEADER_LEN, MAX_U16

if TYPE_CHECKING:
    from binver.io import Reader, Writer


@dataclass(frozen=True, order=True)
class VersionTag:
    """Ordered (major, minor, patch) triple, each a uint16 on the wire."""

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"VersionTag.{name} must be int, got {type(value).__name__}")
            if not 0 <= value <= MAX_U16:
                raise ValueError(f"VersionTag.{name}={value} does not fit in 16 bits")

    @classmethod
    def parse(cls, text: str) -> "VersionTag":
        """Parse ``"1.2.3"``. Spaces are ignored; pre-release and build suffixes are not allowed."""
        parts = text.replace(" ", "").split(".")
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid version {text!r}, expected MAJOR.MINOR.PATCH")
        return cls(int(parts[0]), int(parts[1]), int(parts[2]))

    def to_bytes(self) -> bytes:
        return struct.pack(HEADER_FMT, self.major, self.minor, self.patch)

    @classmethod
    def from_bytes(cls, data: bytes) -> "VersionTag":
        if len(data) != HEADER_LEN:
            raise ValueError(f"Version header must be {HEADER_LEN} bytes, got {len(data)}")
        return cls(*struct.unpack(HEADER_FMT, data))

    def write(self, writer: "Writer") -> None:
        writer.write(self.to_bytes())

    @classmethod
    def read(cls, reader: "Reader") -> "VersionTag":
        return cls.from_bytes(reader.read(HEADER_LEN))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


VersionLike = Union[VersionTag, str, tuple]

ZERO = VersionTag(0, 0, 0)


def coerce_version(value: VersionLike) -> VersionTag:
    """Accept a VersionTag, a ``"1.2.3"`` string or a 3-tuple."""
    if isinstance(value, VersionTag):
        return value
    if isinstance(value, str):
        return VersionTag.parse(value)
    if isinstance(value, tuple) and len(value) == 3:
        return VersionTag(*value)
    raise TypeError(f"Cannot interpret {value!r} as a version")
