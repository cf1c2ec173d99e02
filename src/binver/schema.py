"""Declaring records and tagged unions.

A record is a dataclass whose fields are declared with :func:`field`::

    @record
    class User:
        id: int = field(U32, since="1.0.0")
        name: str = field(STR, since="2.0.0")

A tagged union is a subclass of :class:`TaggedUnion`; each variant is a
subclass registered in declaration order::

    class Event(TaggedUnion):
        pass

    @Event.variant(since="1.0.0")
    class Started(Event):
        pass

    @Event.variant(since="2.0.0")
    class Renamed(Event):
        name: str = field(STR, since="3.0.0")

Authoring mistakes (mixed discriminants, variants out of version order, ...)
raise SchemaError when the class is declared, never at encode/decode time.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, ClassVar

from binver.codec import FieldSpec, RecordCodec, UnionCodec, VariantSpec
from binver.errors import SchemaError
from binver.primitives import as_codec
from binver.protocol import MAX_U16
from binver.version import ZERO, VersionLike, VersionTag, coerce_version

_META_KEY = "binver"


def field(
    codec: Any,
    *,
    since: VersionLike | None = None,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    **kwargs: Any,
) -> Any:
    """Declare a record field with its codec and introduced-version.

    ``default``/``default_factory`` also become the value synthesized when the
    field is absent from an older document; otherwise the codec's zero value is
    used.
    """
    meta = dict(kwargs.pop("metadata", None) or {})
    meta[_META_KEY] = (codec, None if since is None else coerce_version(since))
    return dataclasses.field(default=default, default_factory=default_factory, metadata=meta, **kwargs)


def _absent_default(f: dataclasses.Field, codec) -> Callable[[], Any]:
    if f.default is not dataclasses.MISSING:
        value = f.default
        return lambda: value
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory
    return codec.default


def _build_fields(cls: type) -> tuple[FieldSpec, ...]:
    specs: list[FieldSpec] = []
    for f in dataclasses.fields(cls):
        meta = f.metadata.get(_META_KEY)
        if meta is None:
            raise SchemaError(
                f"{cls.__name__}.{f.name} has no codec; declare it with binver.field(codec, since=...)"
            )
        if not f.init:
            raise SchemaError(f"{cls.__name__}.{f.name} must be an init field")
        raw_codec, since = meta
        if since is None:
            raise SchemaError(f"{cls.__name__}.{f.name} has no introduced-version; pass since=...")
        try:
            codec = as_codec(raw_codec)
        except TypeError as e:
            raise SchemaError(f"{cls.__name__}.{f.name}: {e}") from e
        specs.append(FieldSpec(f.name, codec, since, _absent_default(f, codec)))
    return tuple(specs)


def record(cls: type | None = None, **dataclass_kwargs: Any):
    """Class decorator: make ``cls`` a dataclass encoded as a version-gated record."""

    def wrap(cls: type) -> type:
        cls = dataclasses.dataclass(cls, **dataclass_kwargs)
        cls.__binver_codec__ = RecordCodec(cls, _build_fields(cls))
        return cls

    return wrap if cls is None else wrap(cls)


def _check_variant(codec: UnionCodec, cls: type, since: VersionTag, discriminant: int | None) -> None:
    name = f"{codec.name}.{cls.__name__}"
    if len(codec.variants) > MAX_U16:
        raise SchemaError(f"{codec.name} has more variants than a uint16 selector can address")
    if cls in (v.cls for v in codec.variants):
        raise SchemaError(f"{name} is already registered")
    if discriminant is not None:
        if isinstance(discriminant, bool) or not isinstance(discriminant, int) or not 0 <= discriminant <= MAX_U16:
            raise SchemaError(f"{name}: discriminant {discriminant!r} does not fit in uint16")
        if codec.variant_for(discriminant) is not None:
            raise SchemaError(f"{name}: discriminant {discriminant} is already used")
    if codec.variants:
        first = codec.variants[0]
        if (first.discriminant is None) != (discriminant is None):
            raise SchemaError(
                f"{codec.name}: variants must either ALL declare a discriminant, or none at all"
            )
        last = codec.variants[-1]
        if last.since > since:
            raise SchemaError(
                f"{name}: new variants must be added at the bottom. "
                f"Version {last.since} must be declared before {since}"
            )


class TaggedUnion:
    """Base class for sum types. Subclass once per union, then register variants."""

    __binver_codec__: ClassVar[UnionCodec]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if TaggedUnion in cls.__bases__:
            cls.__binver_codec__ = UnionCodec(cls)

    @classmethod
    def variant(cls, since: VersionLike, discriminant: int | None = None, **dataclass_kwargs: Any):
        """Register the decorated subclass as this union's next variant."""
        codec = cls.__dict__.get("__binver_codec__")
        if not isinstance(codec, UnionCodec):
            raise SchemaError(f"variant() must be called on a direct TaggedUnion subclass, not {cls.__name__}")
        since = coerce_version(since)

        def wrap(variant_cls: type) -> type:
            if not issubclass(variant_cls, cls):
                raise SchemaError(f"{variant_cls.__name__} must subclass {cls.__name__}")
            _check_variant(codec, variant_cls, since, discriminant)
            variant_cls = dataclasses.dataclass(variant_cls, **dataclass_kwargs)
            spec = VariantSpec(
                index=len(codec.variants),
                cls=variant_cls,
                since=since,
                fields=_build_fields(variant_cls),
                discriminant=discriminant,
            )
            codec.register(spec)
            return variant_cls

        return wrap


def schema_version(schema: Any) -> VersionTag:
    """Highest introduced-version across the whole field/variant tree of ``schema``."""
    found = as_codec(schema).schema_version(set())
    return found if found is not None else ZERO
