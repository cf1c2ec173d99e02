import json
from pathlib import Path

import click

from .logic import check_document, inspect_header, load_schema, failure

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _emit(result: dict) -> None:
    click.echo(json.dumps(result, **CANONICAL_JSON_KW))
    if result["status"] != "PASS":
        raise SystemExit(1)


@click.group()
def main():
    """Inspect binver documents."""


@main.command("header")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def header_cmd(path: Path):
    """Print the version stamped on a document."""
    _emit(inspect_header(path))


@main.command("check")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--schema", "schema_spec", required=True, help="Root type as module:Name")
@click.option("--strict", is_flag=True, help="Fail on bytes left after the root value")
def check_cmd(path: Path, schema_spec: str, strict: bool):
    """Decode a document against a schema and report the outcome."""
    try:
        schema = load_schema(schema_spec)
    except (ImportError, AttributeError, ValueError, TypeError) as e:
        _emit(failure("E_SCHEMA_IMPORT", schema=schema_spec, detail=str(e)))
        return
    _emit(check_document(path, schema, strict=strict))


if __name__ == "__main__":
    main()
