"""Record values and input parsing.

Records are immutable mappings of field name to a tagged value. Every value
knows how to render itself as display text, so nothing downstream needs to
inspect raw JSON types.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .errors import InputError

LINE_FIELD = "line"


def _compact_json(data: object) -> str:
    return json.dumps(data, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


class Value:
    """Base for tagged record values."""

    def display(self) -> str:
        raise NotImplementedError

    def to_python(self) -> object:
        raise NotImplementedError

    def to_json(self) -> str:
        return _compact_json(self.to_python())


@dataclass(frozen=True)
class NullValue(Value):
    def display(self) -> str:
        return "null"

    def to_python(self) -> object:
        return None


@dataclass(frozen=True)
class BoolValue(Value):
    value: bool

    def display(self) -> str:
        return "true" if self.value else "false"

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True)
class NumberValue(Value):
    value: int | float

    def display(self) -> str:
        """Render integral numbers without a fraction, others in shortest form.

        Floats whose magnitude reaches ``1e21`` keep exponent notation.
        """
        value = self.value
        if isinstance(value, int):
            return str(value)
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True)
class TextValue(Value):
    value: str

    def display(self) -> str:
        return self.value

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True)
class ListValue(Value):
    items: tuple[Value, ...]

    def display(self) -> str:
        return self.to_json()

    def to_python(self) -> object:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class MapValue(Value):
    fields: Mapping[str, Value]

    def display(self) -> str:
        return self.to_json()

    def to_python(self) -> object:
        return {key: item.to_python() for key, item in self.fields.items()}

    def get(self, name: str) -> Value | None:
        return self.fields.get(name)

    def keys(self) -> Iterable[str]:
        return self.fields.keys()


Record = MapValue


def from_python(data: object) -> Value:
    """Convert decoded JSON data into a tagged value.

    Total over any input: unexpected Python types degrade to their ``str``.
    """
    if data is None:
        return NullValue()
    if isinstance(data, bool):
        return BoolValue(data)
    if isinstance(data, (int, float)):
        return NumberValue(data)
    if isinstance(data, str):
        return TextValue(data)
    if isinstance(data, (list, tuple)):
        return ListValue(tuple(from_python(item) for item in data))
    if isinstance(data, dict):
        return MapValue({str(key): from_python(item) for key, item in data.items()})
    return TextValue(str(data))


def split_lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping one trailing ``\\r`` per line and a final empty line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_records(text: str, line_mode: bool = False) -> tuple[Record, ...]:
    """Parse input text into records.

    Line mode wraps each line as ``{"line": text}``. Otherwise the input must
    be a JSON array whose elements are objects. An empty result is an error.
    """
    if line_mode:
        records = tuple(MapValue({LINE_FIELD: TextValue(line)}) for line in split_lines(text))
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InputError(f"error parsing JSON: {exc}") from exc
        if not isinstance(data, list):
            raise InputError("error parsing JSON: expected an array of objects")
        parsed: list[Record] = []
        for position, item in enumerate(data):
            if not isinstance(item, dict):
                raise InputError(f"error parsing JSON: element {position} is not an object")
            parsed.append(from_python(item))
        records = tuple(parsed)

    if not records:
        raise InputError("no objects found in input")
    return records


def all_attributes(records: Iterable[Record]) -> tuple[str, ...]:
    """Return the sorted union of field names across ``records``."""
    names: set[str] = set()
    for record in records:
        names.update(record.keys())
    return tuple(sorted(names))
