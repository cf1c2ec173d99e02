"""Version-gated records."""

import pytest

import binver
from binver import STR, U32, ReadConfig, field, record


@record
class User:
    id: int = field(U32, since="1.0.0")
    name: str = field(STR, since="2.0.0")


class TestRecordEncode:

    def test_stamps_highest_field_version(self):
        data = binver.encode(User(id=5, name="Trangar"))
        assert data == bytes([
            0, 2,  # major
            0, 0,  # minor
            0, 0,  # patch
            0, 0, 0, 5,  # id
            0, 0, 0, 7, *b"Trangar",  # name
        ])

    def test_explicit_old_version_omits_newer_fields(self):
        data = binver.encode(User(id=1, name=""), version="1.0.0")
        assert data == bytes.fromhex("000100000000" "00000001")

    def test_newer_field_value_is_not_written(self):
        # Only the id fits in a 1.0.0 document, whatever name holds.
        data = binver.encode(User(id=1, name="ignored"), version="1.0.0")
        assert data == bytes.fromhex("000100000000" "00000001")

    def test_wrong_type_rejected(self):
        with pytest.raises(TypeError):
            binver.encode(User(id=1, name=""), codec=binver.as_codec(OtherRecord))


@record
class OtherRecord:
    flag: bool = field(binver.BOOL, since="1.0.0")


class TestRecordDecode:

    def test_decode_current_version(self):
        data = bytes.fromhex("000200000000" "00000001" "00000007") + b"Trangar"
        user = binver.decode(data, User)
        assert user.id == 1
        assert user.name == "Trangar"

    def test_decode_old_document_defaults_new_field(self):
        data = bytes.fromhex("000100000000" "00000001")
        user = binver.decode(data, User, ReadConfig(error_on_trailing_bytes=True))
        assert user == User(id=1, name="")

    def test_absent_field_consumes_no_bytes(self):
        # Anything after the id of a 1.0.0 document is left unread.
        data = bytes.fromhex("000100000000" "00000001" "00000007") + b"Trangar"
        reader = binver.SliceReader(data)
        binver.read_header(reader)
        user = binver.as_codec(User).decode(reader)
        assert user == User(id=1, name="")
        assert reader.remaining == 11

    def test_round_trip(self):
        user = User(id=0xDEADBEEF, name="héllo wörld")
        assert binver.decode(binver.encode(user), User) == user

    def test_truncated_field(self):
        data = bytes.fromhex("000200000000" "00000001" "00000007") + b"Tran"
        with pytest.raises(binver.EndOfInput) as exc:
            binver.decode(data, User)
        assert exc.value.needed == 7
        assert exc.value.remaining == 4

    def test_truncated_header(self):
        with pytest.raises(binver.EndOfInput):
            binver.decode(b"\x00\x01\x00", User)


@record
class ProfileV1:
    id: int = field(U32, since="1.0.0")
    active: bool = field(binver.BOOL, since="1.0.0")


@record
class ProfileV2:
    id: int = field(U32, since="1.0.0")
    active: bool = field(binver.BOOL, since="1.0.0")
    nickname: str = field(STR, since="2.0.0")


@record
class ProfileV3:
    id: int = field(U32, since="1.0.0")
    active: bool = field(binver.BOOL, since="1.0.0")
    nickname: str = field(STR, since="2.0.0")
    score: int = field(binver.I64, since="3.0.0", default=-1)


class TestSchemaEvolution:

    def test_old_document_reads_the_same_under_newer_schemas(self):
        data = binver.encode(ProfileV1(id=42, active=True))
        strict = ReadConfig(error_on_trailing_bytes=True)

        v1 = binver.decode(data, ProfileV1, strict)
        v2 = binver.decode(data, ProfileV2, strict)
        v3 = binver.decode(data, ProfileV3, strict)

        for newer in (v2, v3):
            assert (newer.id, newer.active) == (v1.id, v1.active)
        assert v2.nickname == v3.nickname == ""

    def test_declared_default_used_when_absent(self):
        data = binver.encode(ProfileV2(id=1, active=False, nickname="n"))
        assert binver.decode(data, ProfileV3).score == -1

    def test_declared_default_not_used_when_present(self):
        data = binver.encode(ProfileV3(id=1, active=False, nickname="n", score=7))
        assert binver.decode(data, ProfileV3).score == 7
