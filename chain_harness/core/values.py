"""Tagged values passed to and returned from contract calls.

Every argument and every result is one of a closed set of frozen dataclasses.
Constructors validate their payload, so a value that exists is always
encodable. Serialization to the literal syntax and to plain dicts (used by
scenario files and run summaries) matches on the full set and fails loudly
on anything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, assert_never

UINT_MAX = 2**128 - 1
INT_MIN = -(2**127)
INT_MAX = 2**127 - 1


def _require_int(kind: str, value: object) -> int:
    # bool is an int subclass; reject it so Bool stays distinct
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{kind} expects an int, got {type(value).__name__}")
    return value


def _require_str(kind: str, value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{kind} expects a str, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Ascii:
    """ASCII string (``string-ascii``)."""

    value: str

    def __post_init__(self) -> None:
        text = _require_str("Ascii", self.value)
        if not text.isascii():
            raise ValueError(f"Ascii value contains non-ASCII characters: {text!r}")


@dataclass(frozen=True)
class Utf8:
    """UTF-8 string (``string-utf8``)."""

    value: str

    def __post_init__(self) -> None:
        _require_str("Utf8", self.value)


@dataclass(frozen=True)
class UInt:
    """Unsigned 128-bit integer."""

    value: int

    def __post_init__(self) -> None:
        number = _require_int("UInt", self.value)
        if not 0 <= number <= UINT_MAX:
            raise ValueError(f"UInt out of range: {number}")


@dataclass(frozen=True)
class Int:
    """Signed 128-bit integer."""

    value: int

    def __post_init__(self) -> None:
        number = _require_int("Int", self.value)
        if not INT_MIN <= number <= INT_MAX:
            raise ValueError(f"Int out of range: {number}")


@dataclass(frozen=True)
class Bool:
    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"Bool expects a bool, got {type(self.value).__name__}")


@dataclass(frozen=True)
class Principal:
    """Standard (``ST...``) or contract (``ST....name``) principal."""

    value: str

    def __post_init__(self) -> None:
        text = _require_str("Principal", self.value)
        if not text.startswith("S") or len(text) < 3:
            raise ValueError(f"Not a principal: {text!r}")


@dataclass(frozen=True)
class Ok:
    """Successful response wrapping a payload."""

    value: ClarityValue

    def __post_init__(self) -> None:
        if not isinstance(self.value, ClarityValue):
            raise TypeError(f"Ok expects a tagged value, got {type(self.value).__name__}")


@dataclass(frozen=True)
class Err:
    """Error response wrapping a payload."""

    value: ClarityValue

    def __post_init__(self) -> None:
        if not isinstance(self.value, ClarityValue):
            raise TypeError(f"Err expects a tagged value, got {type(self.value).__name__}")


ClarityValue = Ascii | Utf8 | UInt | Int | Bool | Principal | Ok | Err
Response = Ok | Err

_ESCAPES = {'"': '\\"', "\\": "\\\\", "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def _escape(text: str, unicode: bool) -> str:
    parts: list[str] = []
    for char in text:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif unicode and ord(char) > 0x7F:
            parts.append(f"\\u{{{ord(char):x}}}")
        else:
            parts.append(char)
    return "".join(parts)


def serialize(value: ClarityValue) -> str:
    """Render a value in the chain's literal syntax, e.g. ``(ok u1)``."""
    match value:
        case Ascii(value=text):
            return f'"{_escape(text, unicode=False)}"'
        case Utf8(value=text):
            return f'u"{_escape(text, unicode=True)}"'
        case UInt(value=number):
            return f"u{number}"
        case Int(value=number):
            return str(number)
        case Bool(value=flag):
            return "true" if flag else "false"
        case Principal(value=principal):
            return f"'{principal}"
        case Ok(value=inner):
            return f"(ok {serialize(inner)})"
        case Err(value=inner):
            return f"(err {serialize(inner)})"
        case _:
            assert_never(value)


def value_to_dict(value: ClarityValue) -> dict[str, Any]:
    match value:
        case Ascii(value=text):
            return {"ascii": text}
        case Utf8(value=text):
            return {"utf8": text}
        case UInt(value=number):
            return {"uint": number}
        case Int(value=number):
            return {"int": number}
        case Bool(value=flag):
            return {"bool": flag}
        case Principal(value=principal):
            return {"principal": principal}
        case Ok(value=inner):
            return {"ok": value_to_dict(inner)}
        case Err(value=inner):
            return {"err": value_to_dict(inner)}
        case _:
            assert_never(value)


_SCALAR_TAGS: dict[str, type[Ascii | Utf8 | UInt | Int | Bool | Principal]] = {
    "ascii": Ascii,
    "utf8": Utf8,
    "uint": UInt,
    "int": Int,
    "bool": Bool,
    "principal": Principal,
}


def value_from_dict(data: object) -> ClarityValue:
    """Inverse of ``value_to_dict``.

    Expects a single-key mapping such as ``{"uint": 1}`` or
    ``{"ok": {"uint": 1}}``.
    """
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError(f"Expected a single-key tagged value, got {data!r}")

    ((tag, payload),) = data.items()
    if tag == "ok":
        return Ok(value_from_dict(payload))
    if tag == "err":
        return Err(value_from_dict(payload))
    if tag not in _SCALAR_TAGS:
        raise ValueError(f"Unknown value tag: {tag!r}")
    return _SCALAR_TAGS[tag](payload)
