from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReadConfig:
    """Configuration passed to the decode entry points."""

    # Raise TrailingBytes when input remains after the root value.
    error_on_trailing_bytes: bool = False
