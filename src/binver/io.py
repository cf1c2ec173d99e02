"""Byte sinks and sources.

Writers append whole chunks or fail; readers hand back exactly the bytes asked
for or fail. Slice-backed implementations check bounds before touching the
buffer, so a failed call leaves buffer and cursor untouched.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

from binver.errors import EndOfInput, EndOfOutput, MissingVersion, ReaderNotPersistent
from binver.version import VersionTag


class Writer(ABC):
    """Append-only byte sink.

    ``version`` is the document version being written. Record codecs skip
    fields newer than it; ``None`` means every field is written.
    """

    def __init__(self, version: VersionTag | None = None) -> None:
        self.version = version

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Store all of ``data`` or raise EndOfOutput."""


class Reader(ABC):
    """Sequential byte source bound to one document version."""

    def __init__(self, version: VersionTag | None = None) -> None:
        self._version = version

    @property
    def version(self) -> VersionTag:
        if self._version is None:
            raise MissingVersion()
        return self._version

    def bind_version(self, version: VersionTag) -> None:
        if self._version is not None and self._version != version:
            raise ValueError(f"Reader already bound to version {self._version}")
        self._version = version

    @abstractmethod
    def read(self, n: int) -> bytes:
        """Return exactly ``n`` bytes or raise EndOfInput."""

    def read_slice(self, n: int) -> memoryview:
        """Return a zero-copy view of the next ``n`` bytes.

        Readers without a persistent backing buffer refuse instead of copying.
        """
        raise ReaderNotPersistent()


class BytesWriter(Writer):
    """Growable in-memory sink."""

    def __init__(self, version: VersionTag | None = None) -> None:
        super().__init__(version)
        self._buf = bytearray()

    def write(self, data: bytes) -> None:
        self._buf += data

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)


class SliceWriter(Writer):
    """Fixed-capacity sink over a caller-supplied writable buffer."""

    def __init__(self, buffer, version: VersionTag | None = None) -> None:
        super().__init__(version)
        view = memoryview(buffer)
        if view.readonly:
            raise TypeError("SliceWriter needs a writable buffer (bytearray, memoryview, array)")
        self._view = view.cast("B")
        self.index = 0

    @property
    def remaining(self) -> int:
        return len(self._view) - self.index

    def write(self, data: bytes) -> None:
        n = len(data)
        if n > self.remaining:
            raise EndOfOutput(n, self.remaining)
        self._view[self.index:self.index + n] = data
        self.index += n


class StreamWriter(Writer):
    """Sink over a binary file object.

    Short writes are retried until the chunk is drained. A write that makes no
    progress raises EndOfOutput; bytes already accepted by the file stay there.
    """

    def __init__(self, fp: BinaryIO, version: VersionTag | None = None) -> None:
        super().__init__(version)
        self._fp = fp
        self.bytes_written = 0

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        offset = 0
        while offset < len(view):
            n = self._fp.write(view[offset:])
            if not n:
                raise EndOfOutput(len(view) - offset, 0)
            offset += n
        self.bytes_written += offset


class SliceReader(Reader):
    """Source over an in-memory buffer. Supports zero-copy ``read_slice``."""

    def __init__(self, data, version: VersionTag | None = None) -> None:
        super().__init__(version)
        self._view = memoryview(data).cast("B")
        self.index = 0

    @property
    def remaining(self) -> int:
        return len(self._view) - self.index

    def read(self, n: int) -> bytes:
        return bytes(self.read_slice(n))

    def read_slice(self, n: int) -> memoryview:
        if n > self.remaining:
            raise EndOfInput(n, self.remaining)
        out = self._view[self.index:self.index + n]
        self.index += n
        return out


class StreamReader(Reader):
    """Source over a binary file object. Not persistent: no zero-copy slices."""

    def __init__(self, fp: BinaryIO, version: VersionTag | None = None) -> None:
        super().__init__(version)
        self._fp = fp
        self.bytes_read = 0

    def read(self, n: int) -> bytes:
        chunks: list[bytes] = []
        got = 0
        while got < n:
            chunk = self._fp.read(n - got)
            if not chunk:
                raise EndOfInput(n, got)
            chunks.append(chunk)
            got += len(chunk)
        self.bytes_read += got
        return b"".join(chunks)

    def drain(self) -> int:
        """Consume whatever is left in the stream and return its length."""
        rest = self._fp.read()
        return len(rest) if rest else 0
