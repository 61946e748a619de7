from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, TextIO

from colorama import Back, Fore, Style

from .errors import ConfigurationError
from .models import FieldDefinition, FieldValue


SEPARATOR = "==================="

HEADER_RE = re.compile(r"^Field Name: (?P<name>.*) \(ID: (?P<id>[^()]*)\)$")
VALUE_RE = re.compile(r"^\tValue Name: (?P<value>.*) \(ID: (?P<id>[^()]*)\)$")


def format_field(field: FieldDefinition) -> list[str]:
    lines = [f"Field Name: {field.name} (ID: {field.id})"]
    for v in field.values:
        lines.append(f"\tValue Name: {v.value} (ID: {v.id})")
    return lines


def write_field(field: FieldDefinition, stream: TextIO, highlight: bool = False) -> None:
    header, *values = format_field(field)
    if highlight:
        stream.write(f"{Back.GREEN}{header}{Style.RESET_ALL}\n")
        for line in values:
            stream.write(f"{Fore.GREEN}{line}{Style.RESET_ALL}\n")
        return
    stream.write(header + "\n")
    for line in values:
        stream.write(line + "\n")


def write_fields(fields: Iterable[FieldDefinition], stream: TextIO, highlight: bool = False) -> None:
    for idx, field in enumerate(fields):
        if idx > 0:
            stream.write(SEPARATOR + "\n")
        write_field(field, stream, highlight=highlight)


def write_to_path(fields: Iterable[FieldDefinition], path: str | Path) -> None:
    # "w" truncates, so a shorter rendering never leaves stale bytes behind.
    try:
        with Path(path).open("w", encoding="utf-8") as f:
            write_fields(fields, f)
    except OSError as exc:
        raise ConfigurationError(f"couldn't write output file: {path}: {exc}") from exc


def parse_rendered(text: str) -> list[FieldDefinition]:
    """Read a plain (non-highlighted) rendering back into field definitions."""
    fields: list[FieldDefinition] = []
    current: FieldDefinition | None = None
    for line in text.splitlines():
        if line == SEPARATOR or not line:
            current = None
            continue
        header = HEADER_RE.match(line)
        if header:
            current = FieldDefinition(name=header.group("name"), id=header.group("id"))
            fields.append(current)
            continue
        value = VALUE_RE.match(line)
        if value is None or current is None:
            raise ValueError(f"Unrecognized line in rendered output: {line!r}")
        current.values.append(FieldValue(value=value.group("value"), id=value.group("id")))
    return fields
