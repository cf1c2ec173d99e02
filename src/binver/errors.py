"""binver error taxonomy.

Write errors come from the sink, read errors from the document. Both abort the
enclosing record or variant; nothing is recovered partially.
"""
from __future__ import annotations


class BinverError(Exception):
    """Base class for every runtime codec failure."""


class WriteError(BinverError):
    pass


class EndOfOutput(WriteError):
    """The sink cannot accept more bytes."""

    def __init__(self, needed: int = 0, available: int = 0):
        self.needed = needed
        self.available = available
        super().__init__(f"End of output: need {needed} bytes, {available} available")


class VariantNotInVersion(WriteError):
    """A variant was encoded under a document version that predates it."""

    def __init__(self, variant: str, since, version):
        self.variant = variant
        self.since = since
        self.version = version
        super().__init__(f"Variant {variant} was introduced in {since}, document version is {version}")


class ReadError(BinverError):
    pass


class EndOfInput(ReadError):
    """Fewer bytes remain than the current value requires."""

    def __init__(self, needed: int = 0, remaining: int = 0):
        self.needed = needed
        self.remaining = remaining
        super().__init__(f"End of input: need {needed} bytes, {remaining} remaining")


class UnknownVariant(ReadError):
    def __init__(self, selector: int):
        self.selector = selector
        super().__init__(f"Unknown variant {selector}")


class InvalidUtf8String(ReadError):
    """Owned text is not valid UTF-8."""

    def __init__(self, cause: UnicodeDecodeError):
        self.cause = cause
        super().__init__(f"Invalid UTF-8 string: {cause}")


class InvalidUtf8Str(ReadError):
    """Borrowed text is not valid UTF-8."""

    def __init__(self, cause: UnicodeDecodeError):
        self.cause = cause
        super().__init__(f"Invalid UTF-8 str: {cause}")


class TrailingBytes(ReadError):
    def __init__(self, remaining: int):
        self.remaining = remaining
        super().__init__(f"{remaining} trailing bytes after document")


class ReaderNotPersistent(ReadError):
    """Zero-copy slice requested from a reader with no backing buffer."""

    def __init__(self) -> None:
        super().__init__("Reader is not backed by a persistent buffer")


class MissingVersion(ReadError):
    def __init__(self) -> None:
        super().__init__("Reader has no document version; read the envelope header first")


class SchemaError(TypeError):
    """Raised when a record or tagged union is declared inconsistently."""
