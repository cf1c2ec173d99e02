"""Primitive codecs.

Integers are big-endian at their natural width. Text, blobs and sequences
carry a uint32 length prefix. Owning and borrowing text/blob codecs produce
identical bytes; they differ only in how a decoded value is materialized.
"""
from __future__ import annotations

import struct
from typing import Any, Callable
from warnings import warn

from binver.errors import InvalidUtf8Str, InvalidUtf8String
from binver.io import Reader, Writer
from binver.protocol import (
    BOOL_FALSE,
    BOOL_TRUE,
    F32_FMT,
    F64_FMT,
    I8_FMT,
    I16_FMT,
    I32_FMT,
    I64_FMT,
    INT128_LEN,
    LENGTH_FMT,
    MAX_LENGTH,
    U8_FMT,
    U16_FMT,
    U32_FMT,
    U64_FMT,
)
from binver.version import VersionTag

_LENGTH = struct.Struct(LENGTH_FMT)


class BoolByteWarning(UserWarning):
    """A bool was decoded from a byte other than 0 or 1."""


class Codec:
    """Encodes one kind of value to a writer and decodes it from a reader."""

    name = "codec"

    def encode(self, writer: Writer, value: Any) -> None:
        raise NotImplementedError

    def decode(self, reader: Reader) -> Any:
        raise NotImplementedError

    def default(self) -> Any:
        """Value synthesized for a field absent from an older document."""
        raise NotImplementedError

    def schema_version(self, seen: set[int]) -> VersionTag | None:
        """Highest introduced-version reachable from this codec, if any."""
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def write_length(writer: Writer, n: int) -> None:
    if n > MAX_LENGTH:
        raise ValueError(f"Length {n} exceeds uint32 prefix")
    writer.write(_LENGTH.pack(n))


def read_length(reader: Reader) -> int:
    return _LENGTH.unpack(reader.read(_LENGTH.size))[0]


class Fixed(Codec):
    """Fixed-width numeric value described by a struct format."""

    def __init__(self, fmt: str, name: str, zero: Any = 0) -> None:
        self._struct = struct.Struct(fmt)
        self.name = name
        self._zero = zero

    @property
    def size(self) -> int:
        return self._struct.size

    def encode(self, writer: Writer, value: Any) -> None:
        try:
            data = self._struct.pack(value)
        except struct.error as e:
            raise ValueError(f"{value!r} does not fit in {self.name}") from e
        writer.write(data)

    def decode(self, reader: Reader) -> Any:
        return self._struct.unpack(reader.read(self._struct.size))[0]

    def default(self) -> Any:
        return self._zero


class Int128(Codec):
    def __init__(self, signed: bool) -> None:
        self.signed = signed
        self.name = "i128" if signed else "u128"

    def encode(self, writer: Writer, value: int) -> None:
        if not isinstance(value, int):
            raise ValueError(f"{value!r} does not fit in {self.name}")
        try:
            data = value.to_bytes(INT128_LEN, "big", signed=self.signed)
        except OverflowError as e:
            raise ValueError(f"{value!r} does not fit in {self.name}") from e
        writer.write(data)

    def decode(self, reader: Reader) -> int:
        return int.from_bytes(reader.read(INT128_LEN), "big", signed=self.signed)

    def default(self) -> int:
        return 0


class Bool(Codec):
    name = "bool"

    def encode(self, writer: Writer, value: bool) -> None:
        writer.write(bytes((BOOL_TRUE if value else BOOL_FALSE,)))

    def decode(self, reader: Reader) -> bool:
        byte = reader.read(1)[0]
        if byte == BOOL_TRUE:
            return True
        if byte != BOOL_FALSE:
            warn(f"Bool byte {byte:#04x} is neither 0 nor 1, decoding as False", BoolByteWarning, stacklevel=2)
        return False

    def default(self) -> bool:
        return False


class Str(Codec):
    """Owned UTF-8 text: bytes are copied out of the reader."""

    name = "string"

    def encode(self, writer: Writer, value: str) -> None:
        data = value.encode("utf-8")
        write_length(writer, len(data))
        writer.write(data)

    def decode(self, reader: Reader) -> str:
        raw = reader.read(read_length(reader))
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidUtf8String(e) from e

    def default(self) -> str:
        return ""


class StrRef(Str):
    """Borrowed UTF-8 text: decoded straight from a zero-copy view.

    Needs a persistent reader; stream readers raise ReaderNotPersistent.
    """

    name = "str"

    def decode(self, reader: Reader) -> str:
        view = reader.read_slice(read_length(reader))
        try:
            return str(view, "utf-8")
        except UnicodeDecodeError as e:
            raise InvalidUtf8Str(e) from e


class Blob(Codec):
    """Owned byte string."""

    name = "bytes"

    def encode(self, writer: Writer, value) -> None:
        # Length counts bytes, not buffer items.
        data = memoryview(value).cast("B")
        write_length(writer, len(data))
        writer.write(data)

    def decode(self, reader: Reader):
        return reader.read(read_length(reader))

    def default(self):
        return b""


class BlobRef(Blob):
    """Borrowed byte string: a memoryview into the reader's buffer."""

    name = "bytes_ref"

    def decode(self, reader: Reader) -> memoryview:
        return reader.read_slice(read_length(reader))

    def default(self) -> memoryview:
        return memoryview(b"")


class Seq(Codec):
    """Homogeneous sequence: uint32 count, then each element in order."""

    def __init__(self, element: Any) -> None:
        self.element = as_codec(element)

    @property
    def name(self) -> str:  # type: ignore[override]
        return f"seq[{self.element.name}]"

    def encode(self, writer: Writer, value) -> None:
        write_length(writer, len(value))
        for item in value:
            self.element.encode(writer, item)

    def decode(self, reader: Reader) -> list:
        count = read_length(reader)
        return [self.element.decode(reader) for _ in range(count)]

    def default(self) -> list:
        return []

    def schema_version(self, seen: set[int]) -> VersionTag | None:
        return self.element.schema_version(seen)


class Lazy(Codec):
    """Deferred reference, for types that contain themselves.

    ``Lazy(lambda: Branch)`` resolves on first use.
    """

    def __init__(self, factory: Callable[[], Any]) -> None:
        self._factory = factory
        self._codec: Codec | None = None

    @property
    def target(self) -> Codec:
        if self._codec is None:
            self._codec = as_codec(self._factory())
        return self._codec

    @property
    def name(self) -> str:  # type: ignore[override]
        # The target may not be defined yet.
        return self._codec.name if self._codec is not None else "lazy"

    def encode(self, writer: Writer, value: Any) -> None:
        self.target.encode(writer, value)

    def decode(self, reader: Reader) -> Any:
        return self.target.decode(reader)

    def default(self) -> Any:
        return self.target.default()

    def schema_version(self, seen: set[int]) -> VersionTag | None:
        return self.target.schema_version(seen)


def as_codec(obj: Any) -> Codec:
    """Return the codec for ``obj``: a Codec instance, or a record/union class."""
    if isinstance(obj, Codec):
        return obj
    codec = getattr(obj, "__binver_codec__", None)
    if isinstance(codec, Codec):
        return codec
    raise TypeError(f"{obj!r} is not a codec or a binver record/union type")


U8 = Fixed(U8_FMT, "u8")
U16 = Fixed(U16_FMT, "u16")
U32 = Fixed(U32_FMT, "u32")
U64 = Fixed(U64_FMT, "u64")
U128 = Int128(signed=False)
I8 = Fixed(I8_FMT, "i8")
I16 = Fixed(I16_FMT, "i16")
I32 = Fixed(I32_FMT, "i32")
I64 = Fixed(I64_FMT, "i64")
I128 = Int128(signed=True)
F32 = Fixed(F32_FMT, "f32", zero=0.0)
F64 = Fixed(F64_FMT, "f64", zero=0.0)
BOOL = Bool()
STR = Str()
STR_REF = StrRef()
BLOB = Blob()
BLOB_REF = BlobRef()
