"""Version-gated record and tagged-union codecs.

No field markers exist on the wire. Whether a field's bytes are present is
decided by comparing the document version with the field's introduced-version,
and both paths make the same comparison:

    encode: write field  iff  writer.version is None or writer.version >= since
    decode: read field   iff  reader.version >= since, else synthesize default

A union writes a uint16 selector first, then the chosen variant's fields with
the same gating. Field order and ``since`` constants are therefore part of the
format: reordering fields or moving a ``since`` breaks existing documents.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Callable

from binver.errors import UnknownVariant, VariantNotInVersion
from binver.io import Reader, Writer
from binver.primitives import Codec
from binver.protocol import SELECTOR_FMT
from binver.version import VersionTag

_SELECTOR = struct.Struct(SELECTOR_FMT)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    codec: Codec
    since: VersionTag
    default: Callable[[], Any]


@dataclass(frozen=True)
class VariantSpec:
    index: int
    cls: type
    since: VersionTag
    fields: tuple[FieldSpec, ...]
    discriminant: int | None = None

    @property
    def selector(self) -> int:
        return self.index if self.discriminant is None else self.discriminant


def encode_fields(writer: Writer, fields: tuple[FieldSpec, ...], value: Any) -> None:
    version = writer.version
    for spec in fields:
        if version is not None and version < spec.since:
            continue
        spec.codec.encode(writer, getattr(value, spec.name))


def decode_fields(reader: Reader, fields: tuple[FieldSpec, ...]) -> dict[str, Any]:
    version = reader.version
    values: dict[str, Any] = {}
    for spec in fields:
        if version < spec.since:
            # Absent from this document: no bytes consumed.
            values[spec.name] = spec.default()
        else:
            values[spec.name] = spec.codec.decode(reader)
    return values


def default_fields(fields: tuple[FieldSpec, ...]) -> dict[str, Any]:
    return {spec.name: spec.default() for spec in fields}


def _max_version(fields: tuple[FieldSpec, ...], seen: set[int]) -> VersionTag | None:
    best: VersionTag | None = None
    for spec in fields:
        for candidate in (spec.since, spec.codec.schema_version(seen)):
            if candidate is not None and (best is None or candidate > best):
                best = candidate
    return best


class RecordCodec(Codec):
    """Structured type with an ordered, fixed list of version-gated fields."""

    def __init__(self, cls: type, fields: tuple[FieldSpec, ...]) -> None:
        self.cls = cls
        self.fields = fields
        self.name = cls.__name__

    def encode(self, writer: Writer, value: Any) -> None:
        if not isinstance(value, self.cls):
            raise TypeError(f"Expected {self.name}, got {type(value).__name__}")
        encode_fields(writer, self.fields, value)

    def decode(self, reader: Reader) -> Any:
        return self.cls(**decode_fields(reader, self.fields))

    def default(self) -> Any:
        return self.cls(**default_fields(self.fields))

    def schema_version(self, seen: set[int]) -> VersionTag | None:
        if id(self) in seen:
            return None
        seen.add(id(self))
        return _max_version(self.fields, seen)


class UnionCodec(Codec):
    """Sum type: a uint16 selector followed by the variant's gated fields."""

    def __init__(self, cls: type) -> None:
        self.cls = cls
        self.name = cls.__name__
        self.variants: list[VariantSpec] = []
        self._by_selector: dict[int, VariantSpec] = {}
        self._by_class: dict[type, VariantSpec] = {}

    def register(self, spec: VariantSpec) -> None:
        self.variants.append(spec)
        self._by_selector[spec.selector] = spec
        self._by_class[spec.cls] = spec

    def variant_for(self, selector: int) -> VariantSpec | None:
        return self._by_selector.get(selector)

    def encode(self, writer: Writer, value: Any) -> None:
        spec = self._by_class.get(type(value))
        if spec is None:
            raise TypeError(f"{type(value).__name__} is not a registered variant of {self.name}")
        if writer.version is not None and writer.version < spec.since:
            raise VariantNotInVersion(spec.cls.__name__, spec.since, writer.version)
        writer.write(_SELECTOR.pack(spec.selector))
        encode_fields(writer, spec.fields, value)

    def decode(self, reader: Reader) -> Any:
        version = reader.version
        selector = _SELECTOR.unpack(reader.read(_SELECTOR.size))[0]
        spec = self._by_selector.get(selector)
        # A variant newer than the document cannot legitimately appear in it.
        if spec is None or version < spec.since:
            raise UnknownVariant(selector)
        return spec.cls(**decode_fields(reader, spec.fields))

    def default(self) -> Any:
        if not self.variants:
            raise TypeError(f"{self.name} has no variants to default to")
        first = self.variants[0]
        return first.cls(**default_fields(first.fields))

    def schema_version(self, seen: set[int]) -> VersionTag | None:
        if id(self) in seen:
            return None
        seen.add(id(self))
        best: VersionTag | None = None
        for spec in self.variants:
            for candidate in (spec.since, _max_version(spec.fields, seen)):
                if candidate is not None and (best is None or candidate > best):
                    best = candidate
        return best
