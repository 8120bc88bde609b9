"""Reader for values rendered by Haskell's derived ``Show`` instances.

Only the value grammar that appears inside setup-config field spans is
supported. Values are mapped onto plain Python data so that schema models
can validate them:

- ``Con {f = v, ...}``  -> ``{"constructor": "Con", "f": v, ...}``
- ``Con a b``           -> ``{"constructor": "Con", "args": [a, b]}``
- ``True`` / ``False``  -> ``bool``
- ``(a, b)``            -> ``tuple``; ``()`` -> ``()``
- ``[a, b]``            -> ``list``
- string and char literals -> ``str``; numbers -> ``int`` / ``float``

Lower-case names (``fromList``, bare flag names) are read like constructors.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional


class ShownValueError(ValueError):
    """Raised when text is not a well-formed shown value."""

    def __init__(self, message: str, offset: int):
        self.offset = offset
        super().__init__(f"{message} at offset {offset}")


_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<string>"(?:[^"\\]|\\.)*")
    | (?P<char>'(?:[^'\\]|\\.[^']*)')
    | (?P<number>-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)
    | (?P<name>[A-Za-z_][\w']*(?:\.[A-Za-z_][\w']*)*)
    | (?P<punct>[()\[\]{},=])
    """,
    re.VERBOSE | re.DOTALL,
)

_ASCII_NAMES = (
    "NUL SOH STX ETX EOT ENQ ACK BEL BS HT LF VT FF CR SO SI "
    "DLE DC1 DC2 DC3 DC4 NAK SYN ETB CAN EM SUB ESC FS GS RS US"
).split()
_NAMED_CODES = {name: code for code, name in enumerate(_ASCII_NAMES)}
_NAMED_CODES.update({"SP": 32, "DEL": 127})
_SIMPLE_ESCAPES = {
    "a": "\a", "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t",
    "v": "\v", "\\": "\\", '"': '"', "'": "'", "&": "",
}
_ESCAPE_RE = re.compile(
    r"\\(?:(?P<dec>\d+)|x(?P<hex>[0-9a-fA-F]+)|o(?P<oct>[0-7]+)"
    r"|\^(?P<ctrl>[@A-Z\[\\\]^_])"
    r"|(?P<named>" + "|".join(sorted(_NAMED_CODES, key=len, reverse=True)) + r")"
    r"|(?P<simple>[abfnrtv\\\"'&])"
    r"|(?P<gap>\s+\\))"
)


def _unescape(body: str, offset: int) -> str:
    def replace(match: "re.Match[str]") -> str:
        if match.group("dec"):
            return chr(int(match.group("dec")))
        if match.group("hex"):
            return chr(int(match.group("hex"), 16))
        if match.group("oct"):
            return chr(int(match.group("oct"), 8))
        if match.group("ctrl"):
            return chr(ord(match.group("ctrl")) - 64)
        if match.group("named"):
            return chr(_NAMED_CODES[match.group("named")])
        if match.group("simple"):
            return _SIMPLE_ESCAPES[match.group("simple")]
        return ""

    decoded = _ESCAPE_RE.sub(replace, body)
    if "\\" in _ESCAPE_RE.sub("", body):
        raise ShownValueError("unknown escape sequence in literal", offset)
    return decoded


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    offset: int


def _tokenize(text: str) -> Iterator[_Token]:
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ShownValueError(f"unexpected character {text[pos]!r}", pos)
        kind = match.lastgroup
        if kind != "ws":
            yield _Token(kind, match.group(), pos)
        pos = match.end()


class _Name(str):
    """A bare name read in argument position, not yet applied."""


_STOP = frozenset(",)]}=")


class _Reader:
    def __init__(self, text: str):
        self._tokens = _tokenize(text)
        self._peeked: Optional[_Token] = None
        self._end = len(text)

    def peek(self) -> Optional[_Token]:
        if self._peeked is None:
            self._peeked = next(self._tokens, None)
        return self._peeked

    def advance(self) -> _Token:
        token = self.peek()
        if token is None:
            raise ShownValueError("unexpected end of input", self._end)
        self._peeked = None
        return token

    def expect(self, punct: str) -> _Token:
        token = self.advance()
        if token.kind != "punct" or token.text != punct:
            raise ShownValueError(f"expected {punct!r}, found {token.text!r}", token.offset)
        return token

    def at_punct(self, punct: str) -> bool:
        token = self.peek()
        return token is not None and token.kind == "punct" and token.text == punct

    def expression(self) -> Any:
        head_token = self.peek()
        head = self.atom()
        args: List[Any] = []
        while True:
            token = self.peek()
            if token is None or (token.kind == "punct" and token.text in _STOP):
                break
            args.append(_settle(self.atom()))
        if isinstance(head, _Name):
            if not args and head in ("True", "False"):
                return head == "True"
            return {"constructor": str(head), "args": args}
        if args:
            raise ShownValueError("only constructors can take arguments", head_token.offset)
        return head

    def atom(self) -> Any:
        token = self.advance()
        if token.kind == "string":
            return _unescape(token.text[1:-1], token.offset)
        if token.kind == "char":
            return _unescape(token.text[1:-1], token.offset)
        if token.kind == "number":
            return float(token.text) if any(c in token.text for c in ".eE") else int(token.text)
        if token.kind == "name":
            if self.at_punct("{"):
                return self.record(token.text)
            return _Name(token.text)
        if token.text == "(":
            return self.tuple()
        if token.text == "[":
            return self.list()
        raise ShownValueError(f"unexpected {token.text!r}", token.offset)

    def record(self, constructor: str) -> dict:
        self.expect("{")
        fields: dict = {"constructor": constructor}
        if self.at_punct("}"):
            self.advance()
            return fields
        while True:
            name = self.advance()
            if name.kind != "name":
                raise ShownValueError(f"expected field name, found {name.text!r}", name.offset)
            if name.text in fields:
                raise ShownValueError(f"duplicate field {name.text!r}", name.offset)
            self.expect("=")
            fields[name.text] = self.expression()
            if self.at_punct("}"):
                self.advance()
                return fields
            self.expect(",")

    def tuple(self) -> Any:
        if self.at_punct(")"):
            self.advance()
            return ()
        items = [self.expression()]
        while self.at_punct(","):
            self.advance()
            items.append(self.expression())
        self.expect(")")
        return items[0] if len(items) == 1 else tuple(items)

    def list(self) -> list:
        items: List[Any] = []
        if self.at_punct("]"):
            self.advance()
            return items
        items.append(self.expression())
        while self.at_punct(","):
            self.advance()
            items.append(self.expression())
        self.expect("]")
        return items


def _settle(value: Any) -> Any:
    if isinstance(value, _Name):
        if value in ("True", "False"):
            return value == "True"
        return {"constructor": str(value), "args": []}
    return value


def read_shown(text: str) -> Any:
    """Read exactly one shown value from ``text``."""
    reader = _Reader(text)
    value = reader.expression()
    trailing = reader.peek()
    if trailing is not None:
        raise ShownValueError(f"trailing input {trailing.text!r}", trailing.offset)
    return value


def read_shown_prefix(text: str) -> Any:
    """Read the first shown value of ``text`` and ignore whatever follows it."""
    return _Reader(text).expression()
