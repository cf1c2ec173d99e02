"""binver - Versioned binary serialization with backward-compatible schemas."""
from .config import ReadConfig
from .envelope import decode, decode_from, decode_with_config, encode, encode_into, encode_to, read_header
from .errors import (
    BinverError,
    EndOfInput,
    EndOfOutput,
    InvalidUtf8Str,
    InvalidUtf8String,
    MissingVersion,
    ReadError,
    ReaderNotPersistent,
    SchemaError,
    TrailingBytes,
    UnknownVariant,
    VariantNotInVersion,
    WriteError,
)
from .io import BytesWriter, Reader, SliceReader, SliceWriter, StreamReader, StreamWriter, Writer
from .primitives import (
    BLOB,
    BLOB_REF,
    BOOL,
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    STR,
    STR_REF,
    U8,
    U16,
    U32,
    U64,
    U128,
    BoolByteWarning,
    Codec,
    Lazy,
    Seq,
    as_codec,
)
from .schema import TaggedUnion, field, record, schema_version
from .version import VersionTag

__all__ = [
    "ReadConfig",
    "decode", "decode_from", "decode_with_config", "encode", "encode_into", "encode_to", "read_header",
    "BinverError", "WriteError", "EndOfOutput", "VariantNotInVersion",
    "ReadError", "EndOfInput", "UnknownVariant", "InvalidUtf8String", "InvalidUtf8Str",
    "TrailingBytes", "ReaderNotPersistent", "MissingVersion", "SchemaError",
    "Writer", "Reader", "BytesWriter", "SliceWriter", "StreamWriter", "SliceReader", "StreamReader",
    "Codec", "Seq", "Lazy", "as_codec", "BoolByteWarning",
    "U8", "U16", "U32", "U64", "U128", "I8", "I16", "I32", "I64", "I128", "F32", "F64",
    "BOOL", "STR", "STR_REF", "BLOB", "BLOB_REF",
    "TaggedUnion", "field", "record", "schema_version",
    "VersionTag",
]
