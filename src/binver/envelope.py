"""Document envelope: a 6-byte version header followed by the root value.

There is no length prefix on the document; readers consume exactly what the
schema dictates. The stamped version defaults to the highest introduced-version
in the value's schema and may be given explicitly to write older documents.
"""
from __future__ import annotations

from typing import Any, BinaryIO

from binver.config import ReadConfig
from binver.errors import TrailingBytes
from binver.io import BytesWriter, Reader, SliceReader, SliceWriter, StreamReader, StreamWriter, Writer
from binver.primitives import Codec, as_codec
from binver.schema import schema_version
from binver.version import VersionLike, VersionTag, coerce_version


def _resolve(value: Any, codec: Any | None) -> Codec:
    return as_codec(codec if codec is not None else type(value))


def _stamp(codec: Codec, version: VersionLike | None) -> VersionTag:
    if version is None:
        return schema_version(codec)
    return coerce_version(version)


def write_document(writer: Writer, value: Any, codec: Codec) -> None:
    """Write header and value. ``writer.version`` must already be the stamp."""
    writer.version.write(writer)
    codec.encode(writer, value)


def encode(value: Any, version: VersionLike | None = None, codec: Any | None = None) -> bytes:
    """Serialize ``value`` into a new document.

    ``codec`` is needed only when ``value`` is not a record or union instance
    (e.g. a bare list encoded with ``Seq(U32)``).
    """
    codec = _resolve(value, codec)
    writer = BytesWriter(_stamp(codec, version))
    write_document(writer, value, codec)
    return writer.getvalue()


def encode_into(buffer, value: Any, version: VersionLike | None = None, codec: Any | None = None) -> int:
    """Serialize into a fixed buffer and return the number of bytes written.

    Raises EndOfOutput when the buffer is too small; bytes before the failing
    chunk may already have been written.
    """
    codec = _resolve(value, codec)
    writer = SliceWriter(buffer, _stamp(codec, version))
    write_document(writer, value, codec)
    return writer.index


def encode_to(fp: BinaryIO, value: Any, version: VersionLike | None = None, codec: Any | None = None) -> int:
    """Serialize into a binary file object and return the number of bytes written."""
    codec = _resolve(value, codec)
    writer = StreamWriter(fp, _stamp(codec, version))
    write_document(writer, value, codec)
    return writer.bytes_written


def read_header(reader: Reader) -> VersionTag:
    """Parse the version header and bind it to ``reader``."""
    version = VersionTag.read(reader)
    reader.bind_version(version)
    return version


def decode_with_config(data, schema: Any, config: ReadConfig) -> Any:
    """Decode a document held in memory.

    Borrowing codecs (``STR_REF``, ``BLOB_REF``) return views into ``data``.
    """
    codec = as_codec(schema)
    reader = SliceReader(data)
    read_header(reader)
    value = codec.decode(reader)
    if config.error_on_trailing_bytes and reader.remaining:
        raise TrailingBytes(reader.remaining)
    return value


def decode(data, schema: Any, config: ReadConfig | None = None) -> Any:
    return decode_with_config(data, schema, config or ReadConfig())


def decode_from(fp: BinaryIO, schema: Any, config: ReadConfig | None = None) -> Any:
    """Decode a document from a binary file object.

    Stream readers are not persistent, so borrowing codecs raise
    ReaderNotPersistent. In strict mode the rest of the stream is read to
    count trailing bytes.
    """
    config = config or ReadConfig()
    codec = as_codec(schema)
    reader = StreamReader(fp)
    read_header(reader)
    value = codec.decode(reader)
    if config.error_on_trailing_bytes:
        remaining = reader.drain()
        if remaining:
            raise TrailingBytes(remaining)
    return value
