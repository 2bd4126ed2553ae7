"""Read and write Java .properties text.

Writing follows java.util.Properties.store() escaping, minus the
timestamp header, so the same entries always serialise to the same
ASCII text. Reading implements the Properties.load() line grammar."""
from __future__ import annotations
import re
from typing import Dict, Iterable, Tuple


_CONTROL_ESCAPES = {"\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f"}
_KEY_SPECIALS = "=:#! "
_VALUE_SPECIALS = "=:#!"

_UNESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}

_WHITESPACE = " \t\f"


def _escape(string: str, specials: str, escape_space: bool) -> str:
    out = []
    for i, char in enumerate(string):
        if char == "\\":
            out.append("\\\\")
        elif char in _CONTROL_ESCAPES:
            out.append(_CONTROL_ESCAPES[char])
        elif char == " ":
            out.append("\\ " if escape_space or i == 0 else " ")
        elif char in specials:
            out.append("\\" + char)
        elif " " < char <= "~":
            out.append(char)
        else:
            encoded = char.encode("utf-16-be")
            for j in range(0, len(encoded), 2):
                out.append("\\u%04X" % int.from_bytes(encoded[j : j + 2], "big"))
    return "".join(out)


def escape_key(key: str) -> str:
    return _escape(key, _KEY_SPECIALS, escape_space=True)


def escape_value(value: str) -> str:
    return _escape(value, _VALUE_SPECIALS, escape_space=False)


def dumps(items: "Iterable[Tuple[str, str]] | Dict[str, str]") -> str:
    if isinstance(items, dict):
        items = items.items()
    return "\n".join(f"{escape_key(k)}={escape_value(v)}" for k, v in items)


def _logical_lines(text: str):
    """Join continuation lines and drop blanks and comments."""
    buffer = None
    for raw in re.split(r"\r\n|\r|\n", text):
        line = raw.lstrip(_WHITESPACE)
        if buffer is None:
            if not line or line[0] in "#!":
                continue
            buffer = ""
        # An odd number of trailing backslashes continues the line.
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            buffer += line[:-1]
            continue
        yield buffer + line
        buffer = None
    if buffer:
        yield buffer


def _unescape(string: str) -> str:
    out = []
    i = 0
    while i < len(string):
        char = string[i]
        if char != "\\":
            out.append(char)
            i += 1
            continue
        i += 1
        if i == len(string):
            break
        char = string[i]
        if char == "u":
            digits = string[i + 1 : i + 5]
            if not re.fullmatch(r"[0-9a-fA-F]{4}", digits):
                raise ValueError(f"Malformed \\uxxxx encoding: \\u{digits}")
            out.append(chr(int(digits, 16)))
            i += 5
        else:
            out.append(_UNESCAPES.get(char, char))
            i += 1
    # Rejoin surrogate pairs written as two \u escapes.
    return "".join(out).encode("utf-16", "surrogatepass").decode("utf-16")


def _split_line(line: str) -> Tuple[str, str]:
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in "=:" or char in _WHITESPACE:
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def loads(text: str) -> Dict[str, str]:
    result = {}
    for line in _logical_lines(text):
        key, value = _split_line(line)
        result[_unescape(key)] = _unescape(value)
    return result
