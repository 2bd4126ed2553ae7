#!/usr/bin/env python3
# Copyright 2026 The fontmanifest Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS-IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
"""Reader for METADATA.pb family descriptions.

METADATA.pb files are protobuf messages in text format:

    name: "Maven Pro"
    designer: "Joe Prince"
    license: "OFL"
    category: "SANS_SERIF"
    fonts {
      name: "Maven Pro"
      style: "normal"
      weight: 400
      filename: "MavenPro[wght].ttf"
    }
    subsets: "latin"
    subsets: "menu"
    axes {
      tag: "wght"
      min_value: 400.0
      max_value: 900.0
    }

The parser below reads that grammar without the protobuf runtime: the
generic part builds a TextMessage tree of (key, value) fields, and
FamilyMetadata pulls the fields we publish out of it.
"""
from __future__ import annotations
import logging
import math
import re
from collections import namedtuple
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, List, Optional

from fontmanifest.constants import IGNORED_SUBSETS


log = logging.getLogger("fontmanifest.metadata")


class MetadataParseError(ValueError):
    def __init__(self, message, lineno=None, path=None):
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.path = path

    def __str__(self):
        location = [str(p) for p in (self.path, self.lineno) if p is not None]
        if location:
            return f"{':'.join(location)}: {self.message}"
        return self.message


Token = namedtuple("Token", ["kind", "value", "lineno"])

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>[ \t\r\f\v]+)
  | (?P<newline>\n)
  | (?P<comment>\#[^\n]*)
  | (?P<string>"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')
  | (?P<number>[-+]?0[xX][0-9a-fA-F]+(?![\w.])
      |[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?[fF]?(?![\w.]))
  | (?P<ident>-?[A-Za-z_][A-Za-z0-9_.]*)
  | (?P<symbol>[:{}<>,;\[\]])
    """,
    re.VERBOSE,
)

_CLOSERS = {"{": "}", "<": ">"}

_SIMPLE_ESCAPES = {
    "n": b"\n",
    "t": b"\t",
    "r": b"\r",
    "a": b"\a",
    "b": b"\b",
    "f": b"\f",
    "v": b"\v",
    "\\": b"\\",
    "'": b"'",
    '"': b'"',
    "?": b"?",
}

_IDENT_VALUES = {
    "true": True,
    "True": True,
    "t": True,
    "false": False,
    "False": False,
    "f": False,
    "inf": float("inf"),
    "-inf": float("-inf"),
    "infinity": float("inf"),
    "-infinity": float("-inf"),
    "nan": float("nan"),
}


def _tokenize(text: str) -> Iterator[Token]:
    lineno = 1
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if not m:
            char = text[pos]
            if char in "\"'":
                raise MetadataParseError("unterminated string", lineno)
            raise MetadataParseError(f"unexpected character {char!r}", lineno)
        kind = m.lastgroup
        pos = m.end()
        if kind == "newline":
            lineno += 1
        elif kind not in ("ws", "comment"):
            yield Token(kind, m.group(), lineno)


def _decode_string(literal: str, lineno: int) -> str:
    body = literal[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char != "\\":
            out += char.encode("utf-8")
            i += 1
            continue
        i += 1
        char = body[i]
        if char in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[char]
            i += 1
        elif char in "01234567":
            digits = re.match(r"[0-7]{1,3}", body[i:]).group()
            value = int(digits, 8)
            if value > 0xFF:
                raise MetadataParseError(f"octal escape out of range: \\{digits}", lineno)
            out.append(value)
            i += len(digits)
        elif char in "xX":
            m = re.match(r"[0-9a-fA-F]{1,2}", body[i + 1 :])
            if not m:
                raise MetadataParseError("\\x escape without hex digits", lineno)
            out.append(int(m.group(), 16))
            i += 1 + len(m.group())
        elif char in "uU":
            width = 4 if char == "u" else 8
            digits = body[i + 1 : i + 1 + width]
            if not re.fullmatch(r"[0-9a-fA-F]{%d}" % width, digits):
                raise MetadataParseError(f"\\{char} escape needs {width} hex digits", lineno)
            codepoint = int(digits, 16)
            if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
                raise MetadataParseError(f"invalid code point U+{digits}", lineno)
            out += chr(codepoint).encode("utf-8")
            i += 1 + width
        else:
            raise MetadataParseError(f"invalid escape \\{char}", lineno)
    try:
        return out.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MetadataParseError(f"string is not valid UTF-8: {e}", lineno) from e


def _parse_number(literal: str):
    if re.match(r"[-+]?0[xX]", literal):
        return int(literal, 16)
    if literal[-1] in "fF":
        return float(literal[:-1])
    if re.fullmatch(r"[-+]?\d+", literal):
        return int(literal)
    return float(literal)


class TextMessage:
    """Ordered (key, value, lineno) fields of one text format message.

    Values are str, int, float, bool or a nested TextMessage. Repeated
    fields keep every occurrence, in file order."""

    def __init__(self):
        self.fields = []

    def add(self, key: str, value: Any, lineno: Optional[int] = None):
        self.fields.append((key, value, lineno))

    def get(self, key: str, default=None):
        for k, v, _ in self.fields:
            if k == key:
                return v
        return default

    def get_all(self, key: str) -> list:
        return [v for k, v, _ in self.fields if k == key]

    def lineno(self, key: str) -> Optional[int]:
        for k, _, lineno in self.fields:
            if k == key:
                return lineno
        return None

    def keys(self) -> list:
        seen = []
        for k, _, _ in self.fields:
            if k not in seen:
                seen.append(k)
        return seen

    def __contains__(self, key):
        return any(k == key for k, _, _ in self.fields)

    def __iter__(self):
        for k, v, _ in self.fields:
            yield k, v

    def __len__(self):
        return len(self.fields)

    def __repr__(self):
        return f"TextMessage({[(k, v) for k, v in self]!r})"


class _Parser:
    def __init__(self, text: str):
        self.tokens = list(_tokenize(text))
        self.pos = 0

    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def next(self) -> Optional[Token]:
        token = self.peek()
        self.pos += 1
        return token

    def is_symbol(self, token, symbols):
        return token is not None and token.kind == "symbol" and token.value in symbols

    def scalar(self, key: str, token: Optional[Token]):
        if token is None:
            raise MetadataParseError(f"missing value for {key!r}", self.tokens[-1].lineno)
        if token.kind == "string":
            value = _decode_string(token.value, token.lineno)
            # Adjacent literals are concatenated, also across lines.
            while self.peek() is not None and self.peek().kind == "string":
                nxt = self.next()
                value += _decode_string(nxt.value, nxt.lineno)
            return value
        if token.kind == "number":
            return _parse_number(token.value)
        if token.kind == "ident":
            return _IDENT_VALUES.get(token.value, token.value)
        raise MetadataParseError(
            f"expected a value for {key!r}, got {token.value!r}", token.lineno
        )

    def parse(self) -> TextMessage:
        root = TextMessage()
        # (message, expected closer, line of the opener)
        stack = [(root, None, 0)]
        while self.peek() is not None:
            message, closer, _ = stack[-1]
            token = self.next()

            if self.is_symbol(token, "}>"):
                if token.value != closer:
                    raise MetadataParseError(f"unexpected {token.value!r}", token.lineno)
                stack.pop()
                continue
            if self.is_symbol(token, ",;"):
                continue
            if token.kind != "ident" or token.value.startswith("-"):
                raise MetadataParseError(
                    f"expected a field name, got {token.value!r}", token.lineno
                )

            key = token.value
            has_colon = False
            if self.is_symbol(self.peek(), ":"):
                self.next()
                has_colon = True

            token = self.next()
            if self.is_symbol(token, "{<"):
                child = TextMessage()
                message.add(key, child, token.lineno)
                stack.append((child, _CLOSERS[token.value], token.lineno))
            elif not has_colon:
                lineno = token.lineno if token else self.tokens[-1].lineno
                raise MetadataParseError(f"expected ':' or '{{' after {key!r}", lineno)
            elif self.is_symbol(token, "["):
                self._list(message, key, token)
            else:
                message.add(key, self.scalar(key, token), token.lineno if token else None)

        if len(stack) > 1:
            _, closer, lineno = stack[-1]
            raise MetadataParseError(f"block opened here is never closed with {closer!r}", lineno)
        return root

    def _list(self, message: TextMessage, key: str, opener: Token):
        # subsets: ["latin", "latin-ext"]
        while True:
            token = self.next()
            if self.is_symbol(token, "]"):
                return
            if token is None:
                raise MetadataParseError(f"unclosed list for {key!r}", opener.lineno)
            message.add(key, self.scalar(key, token), token.lineno)
            if self.is_symbol(self.peek(), ","):
                self.next()


def parse_text_message(text: str) -> TextMessage:
    return _Parser(text).parse()


def _field(message: TextMessage, key: str, types, default=None):
    value = message.get(key, default)
    if value is not default and not isinstance(value, types):
        raise MetadataParseError(
            f"field {key!r} has unexpected value {value!r}", message.lineno(key)
        )
    return value


def _repeated(message: TextMessage, key: str, types) -> list:
    values = message.get_all(key)
    for value in values:
        if not isinstance(value, types):
            raise MetadataParseError(
                f"field {key!r} has unexpected value {value!r}", message.lineno(key)
            )
    return values


@dataclass
class Axis:
    tag: str
    min_value: float
    max_value: float

    @classmethod
    def from_message(cls, message: TextMessage):
        tag = _field(message, "tag", str)
        if not tag:
            raise MetadataParseError("axis without a tag", message.lineno("tag"))
        return cls(
            tag=tag,
            min_value=float(_field(message, "min_value", (int, float), 0.0)),
            max_value=float(_field(message, "max_value", (int, float), 0.0)),
        )


@dataclass
class FontEntry:
    filename: str
    name: str = ""
    style: str = ""
    weight: int = 400
    post_script_name: str = ""
    full_name: str = ""

    @classmethod
    def from_message(cls, message: TextMessage):
        weight = _field(message, "weight", (int, float), 400)
        if not math.isfinite(weight):
            raise MetadataParseError(
                f"weight must be a finite number, got {weight!r}",
                message.lineno("weight"),
            )
        return cls(
            filename=_field(message, "filename", str, ""),
            name=_field(message, "name", str, ""),
            style=_field(message, "style", str, ""),
            weight=int(weight),
            post_script_name=_field(message, "post_script_name", str, ""),
            full_name=_field(message, "full_name", str, ""),
        )


@dataclass
class FamilyMetadata:
    name: str
    designer: str = ""
    license: str = ""
    categories: List[str] = field(default_factory=list)
    date_added: str = ""
    primary_script: str = ""
    subsets: List[str] = field(default_factory=list)
    axes: List[Axis] = field(default_factory=list)
    fonts: List[FontEntry] = field(default_factory=list)

    @property
    def category(self) -> Optional[str]:
        return self.categories[0] if self.categories else None

    @property
    def is_variable(self) -> bool:
        return bool(self.axes)

    @classmethod
    def from_message(cls, message: TextMessage):
        subsets = _repeated(message, "subsets", str)
        return cls(
            name=_field(message, "name", str, ""),
            designer=_field(message, "designer", str, ""),
            license=_field(message, "license", str, ""),
            categories=_repeated(message, "category", str),
            date_added=_field(message, "date_added", str, ""),
            primary_script=_field(message, "primary_script", str, ""),
            subsets=sorted(set(s for s in subsets if s not in IGNORED_SUBSETS)),
            axes=[
                Axis.from_message(m) for m in _repeated(message, "axes", TextMessage)
            ],
            fonts=[
                FontEntry.from_message(m)
                for m in _repeated(message, "fonts", TextMessage)
            ],
        )

    @classmethod
    def from_text(cls, text: str):
        return cls.from_message(parse_text_message(text))

    @classmethod
    def from_fp(cls, fp: "str | Path"):
        with open(fp, "rb") as doc:
            data = doc.read()
        try:
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as e:
                lineno = data.count(b"\n", 0, e.start) + 1
                raise MetadataParseError(
                    f"file is not valid UTF-8: {e.reason}", lineno
                ) from e
            return cls.from_text(text)
        except MetadataParseError as e:
            e.path = fp
            raise

    def to_json(self):
        return {
            "name": self.name,
            "designer": self.designer,
            "license": self.license,
            "category": self.categories,
            "date_added": self.date_added,
            "primary_script": self.primary_script,
            "subsets": self.subsets,
            "axes": [a.__dict__ for a in self.axes],
            "fonts": [f.__dict__ for f in self.fonts],
        }


def read_family_metadata(fp: Path) -> Optional[FamilyMetadata]:
    """FamilyMetadata for fp, or None when the file is missing or broken."""
    if not fp.is_file():
        log.warning("%s is missing", fp)
        return None
    try:
        return FamilyMetadata.from_fp(fp)
    except MetadataParseError as e:
        log.error("Cannot parse %s", e)
        return None
