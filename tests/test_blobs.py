"""Byte blobs and sequences."""

import array

import binver
from binver import BLOB, BLOB_REF, STR, U8, ReadConfig, Seq, field, record

STRICT = ReadConfig(error_on_trailing_bytes=True)


@record
class Borrowed:
    data: memoryview = field(BLOB_REF, since="0.0.1")


@record
class Owned:
    blob: list = field(Seq(U8), since="0.0.1")
    string_list: list = field(Seq(STR), since="0.0.1")


@record
class Packet:
    payload: bytes = field(BLOB, since="0.0.1")


class TestBlobs:

    def test_borrowed_slice_layout(self):
        buf = bytearray(1024)
        n = binver.encode_into(buf, Borrowed(data=memoryview(b"Hello there")))
        assert bytes(buf[6:10]) == (11).to_bytes(4, "big")
        assert bytes(buf[10:n]) == b"Hello there"

    def test_borrowed_slice_is_a_view(self):
        buf = bytearray(1024)
        n = binver.encode_into(buf, Borrowed(data=memoryview(b"Hello there")))
        doc = memoryview(buf)[:n]
        result = binver.decode(doc, Borrowed, STRICT)
        assert result.data == b"Hello there"

        # Zero-copy: the decoded value tracks the underlying buffer.
        buf[10] = ord("J")
        assert result.data == b"Jello there"

    def test_owned_and_borrowed_identical_on_wire(self):
        a = binver.encode(Packet(payload=b"\x00\x01\x02"))
        b = binver.encode(Borrowed(data=memoryview(b"\x00\x01\x02")))
        assert a == b

    def test_owned_blob_is_a_copy(self):
        data = bytearray(binver.encode(Packet(payload=b"abc")))
        result = binver.decode(data, Packet)
        data[-1] = ord("z")
        assert result.payload == b"abc"

    def test_sequences_round_trip(self):
        value = Owned(blob=[1, 2, 3, 4, 5, 6], string_list=["Hello", "there"])
        assert binver.decode(binver.encode(value), Owned, STRICT) == value

    def test_u8_sequence_matches_blob_layout(self):
        seq = binver.encode(Owned(blob=[1, 2, 3], string_list=[]))
        blob = binver.encode(Packet(payload=b"\x01\x02\x03"))
        assert seq[:-4] == blob

    def test_empty_sequence(self):
        data = binver.encode(Owned(blob=[], string_list=[]))
        assert data[6:] == b"\x00" * 8

    def test_wide_item_buffers_prefix_byte_length(self):
        data = binver.encode(Packet(payload=array.array("H", [1, 2, 3])))
        assert data[6:10] == (6).to_bytes(4, "big")
        assert len(data) == 6 + 4 + 6

    def test_wide_memoryview_round_trip(self):
        words = memoryview(array.array("I", [7, 8]))
        data = binver.encode(Packet(payload=words))
        result = binver.decode(data, Packet, STRICT)
        assert result.payload == words.tobytes()
