"""Declaration-time schema checks."""

import dataclasses

import pytest

import binver
from binver import STR, U16, U32, SchemaError, TaggedUnion, field, record


class TestRecordDeclaration:

    def test_fields_in_declaration_order(self):
        @record
        class Point:
            x: int = field(U16, since="1.0.0")
            y: int = field(U16, since="1.0.0")
            label: str = field(STR, since="1.1.0", default="origin")

        codec = binver.as_codec(Point)
        assert [f.name for f in codec.fields] == ["x", "y", "label"]
        assert codec.fields[2].since == binver.VersionTag(1, 1, 0)
        assert dataclasses.is_dataclass(Point)

    def test_plain_dataclass_field_rejected(self):
        with pytest.raises(SchemaError):
            @record
            class Broken:
                x: int = 0

    def test_non_codec_rejected(self):
        with pytest.raises(SchemaError):
            @record
            class Broken:
                x: int = field(int, since="1.0.0")

    def test_missing_since_rejected(self):
        with pytest.raises(SchemaError, match="introduced-version"):
            @record
            class Unversioned:
                x: int = field(U32)

    def test_bad_since_rejected(self):
        with pytest.raises(ValueError):
            field(U32, since="one")

    def test_dataclass_options_pass_through(self):
        @record(frozen=True)
        class Frozen:
            x: int = field(U32, since="1.0.0")

        with pytest.raises(dataclasses.FrozenInstanceError):
            Frozen(x=1).x = 2

    def test_default_factory_used_for_absent_field(self):
        @record
        class Tagged:
            id: int = field(U32, since="1.0.0")
            tags: list = field(binver.Seq(STR), since="2.0.0", default_factory=lambda: ["untagged"])

        data = binver.encode(Tagged(id=1, tags=[]), version="1.0.0")
        assert binver.decode(data, Tagged).tags == ["untagged"]

    def test_default_record(self):
        @record
        class Pair:
            a: int = field(U32, since="1.0.0")
            b: str = field(STR, since="1.0.0")

        assert binver.as_codec(Pair).default() == Pair(a=0, b="")


class TestUnionDeclaration:

    def test_mixed_discriminants_rejected(self):
        class Mixed(TaggedUnion):
            pass

        @Mixed.variant(since="1.0.0", discriminant=1)
        class A(Mixed):
            pass

        with pytest.raises(SchemaError, match="ALL"):
            @Mixed.variant(since="1.0.0")
            class B(Mixed):
                pass

    def test_mixed_discriminants_rejected_other_way(self):
        class Mixed(TaggedUnion):
            pass

        @Mixed.variant(since="1.0.0")
        class A(Mixed):
            pass

        with pytest.raises(SchemaError):
            @Mixed.variant(since="1.0.0", discriminant=3)
            class B(Mixed):
                pass

    def test_variants_out_of_version_order_rejected(self):
        class Ordered(TaggedUnion):
            pass

        @Ordered.variant(since="2.0.0")
        class New(Ordered):
            pass

        with pytest.raises(SchemaError, match="bottom"):
            @Ordered.variant(since="1.0.0")
            class Old(Ordered):
                pass

    def test_equal_versions_allowed(self):
        class Flat(TaggedUnion):
            pass

        @Flat.variant(since="1.0.0")
        class A(Flat):
            pass

        @Flat.variant(since="1.0.0")
        class B(Flat):
            pass

        assert [v.index for v in binver.as_codec(Flat).variants] == [0, 1]

    def test_duplicate_discriminant_rejected(self):
        class Dup(TaggedUnion):
            pass

        @Dup.variant(since="1.0.0", discriminant=4)
        class A(Dup):
            pass

        with pytest.raises(SchemaError):
            @Dup.variant(since="1.0.0", discriminant=4)
            class B(Dup):
                pass

    @pytest.mark.parametrize("discriminant", [-1, 65536, True, "1"])
    def test_discriminant_must_fit_selector(self, discriminant):
        class Wide(TaggedUnion):
            pass

        with pytest.raises(SchemaError):
            @Wide.variant(since="1.0.0", discriminant=discriminant)
            class A(Wide):
                pass

    def test_variant_must_subclass_union(self):
        class U(TaggedUnion):
            pass

        with pytest.raises(SchemaError):
            @U.variant(since="1.0.0")
            class Outsider:
                pass

    def test_variant_registered_on_variant_rejected(self):
        class U(TaggedUnion):
            pass

        @U.variant(since="1.0.0")
        class A(U):
            pass

        with pytest.raises(SchemaError):
            A.variant(since="1.0.0")

    def test_each_union_has_its_own_table(self):
        class First(TaggedUnion):
            pass

        class Second(TaggedUnion):
            pass

        assert binver.as_codec(First) is not binver.as_codec(Second)

    def test_empty_union_has_no_default(self):
        class Empty(TaggedUnion):
            pass

        with pytest.raises(TypeError):
            binver.as_codec(Empty).default()

    def test_empty_union_stamps_zero(self):
        class Empty(TaggedUnion):
            pass

        assert binver.schema_version(Empty) == binver.VersionTag(0, 0, 0)
