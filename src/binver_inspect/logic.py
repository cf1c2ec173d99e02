import importlib
import sys
from pathlib import Path

from binver import (
    EndOfInput,
    InvalidUtf8Str,
    InvalidUtf8String,
    ReadConfig,
    ReadError,
    TrailingBytes,
    UnknownVariant,
    VersionTag,
    as_codec,
    decode_with_config,
)
from binver.protocol import HEADER_LEN
from .const import ERRORS


def failure(code: str, **extra) -> dict:
    err = {"code": code, "message": ERRORS[code], **extra}
    return {"status": "FAIL", "error_count": 1, "errors": [err]}


def load_schema(spec: str):
    """Resolve ``package.module:Name`` to a record or union type."""
    module_name, _, attr = spec.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Schema must look like module:Name, got {spec!r}")
    obj = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    as_codec(obj)
    return obj


def inspect_header(path: Path) -> dict:
    data = path.read_bytes()
    if len(data) < HEADER_LEN:
        return failure("E_HEADER_SHORT", path=str(path), length=len(data))
    version = VersionTag.from_bytes(data[:HEADER_LEN])
    return {
        "status": "PASS",
        "version": str(version),
        "header_len": HEADER_LEN,
        "payload_len": len(data) - HEADER_LEN,
    }


def check_document(path: Path, schema, strict: bool = False) -> dict:
    data = path.read_bytes()
    if len(data) < HEADER_LEN:
        return failure("E_HEADER_SHORT", path=str(path), length=len(data))
    version = VersionTag.from_bytes(data[:HEADER_LEN])

    try:
        decode_with_config(data, schema, ReadConfig(error_on_trailing_bytes=strict))
    except EndOfInput as e:
        return failure("E_END_OF_INPUT", needed=e.needed, remaining=e.remaining)
    except UnknownVariant as e:
        return failure("E_UNKNOWN_VARIANT", selector=e.selector, version=str(version))
    except (InvalidUtf8String, InvalidUtf8Str) as e:
        return failure("E_INVALID_UTF8", detail=str(e.cause))
    except TrailingBytes as e:
        return failure("E_TRAILING_BYTES", remaining=e.remaining)
    except ReadError as e:
        return failure("E_READ", detail=str(e))
    except RecursionError:
        return failure("E_DEPTH", limit=sys.getrecursionlimit())
    except TypeError as e:
        # Raised for absent fields whose union has no variants.
        return failure("E_SCHEMA_INVALID", detail=str(e))

    return {"status": "PASS", "error_count": 0, "errors": [], "version": str(version)}
