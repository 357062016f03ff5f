"""JavaScript string-literal unquoting."""
from __future__ import annotations

import re

__all__ = ["unquote"]

_QUOTES = "\"'`"

_ESCAPE_RE = re.compile(
    r"\\(?:"
    r"u\{([0-9A-Fa-f]+)\}"
    r"|u([0-9A-Fa-f]{4})"
    r"|x([0-9A-Fa-f]{2})"
    r"|([0-3][0-7]{0,2}|[4-7][0-7]?)"
    r"|(\r\n|[\s\S])"
    r")"
)

_SINGLE_CHAR_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

_LINE_TERMINATORS = ("\n", "\r", "\r\n", "\u2028", "\u2029")


def _decode_escape(match: re.Match[str]) -> str:
    code_point, utf16_unit, hex_byte, octal, other = match.groups()
    if code_point is not None:
        value = int(code_point, 16)
        return chr(value) if value <= 0x10FFFF else "\ufffd"
    if utf16_unit is not None:
        return chr(int(utf16_unit, 16))
    if hex_byte is not None:
        return chr(int(hex_byte, 16))
    if octal is not None:
        return chr(int(octal, 8))
    if other in _LINE_TERMINATORS:
        # line continuation
        return ""
    return _SINGLE_CHAR_ESCAPES.get(other, other)


def _has_surrogates(text: str) -> bool:
    return any("\ud800" <= char <= "\udfff" for char in text)


def unquote(literal: str) -> str:
    """Strip the surrounding quotes of a JS string literal and resolve its escapes.

    ``\\uD83D\\uDE00`` style surrogate pairs are joined; a lone surrogate
    becomes U+FFFD. Unknown escapes yield the escaped character itself, as in
    JavaScript. Never raises.
    """
    body = literal
    if len(literal) >= 2 and literal[0] in _QUOTES and literal[-1] == literal[0]:
        body = literal[1:-1]

    if "\\" not in body:
        return body

    decoded = _ESCAPE_RE.sub(_decode_escape, body)
    if _has_surrogates(decoded):
        decoded = decoded.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
    return decoded
