"""Read and write Java-style .properties text.

Importer configuration files use this format, and their keys routinely carry
namespace URIs, e.g. ``retype.{urn\\:hl7-org\\:v3}ANY=System.Any``, so ':'
and '=' inside keys must be escaped on write and unescaped on read.
"""

from typing import Dict, Iterator, Mapping


COMMENT_CHARS = "#!"
SEPARATORS = "=:"
WHITESPACE = " \t\f"

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class PropertiesSyntaxError(ValueError):
    """Raised when properties text cannot be decoded."""


def _logical_lines(text: str) -> Iterator[str]:
    """Join backslash-continued lines; skip blanks and comments."""
    pending = None
    for raw in text.splitlines():
        line = raw.lstrip(WHITESPACE)
        if pending is None:
            if not line or line[0] in COMMENT_CHARS:
                continue
        else:
            line = pending + line

        # An odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending = line[:-1]
            continue

        pending = None
        yield line

    if pending is not None:
        yield pending


def _unescape(text: str) -> str:
    out = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        i += 1
        if i >= len(text):
            break
        esc = text[i]
        if esc == "u":
            digits = text[i + 1:i + 5]
            if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                raise PropertiesSyntaxError(f"Malformed \\uXXXX escape in '{text}'")
            out.append(chr(int(digits, 16)))
            i += 5
            continue
        out.append(_ESCAPES.get(esc, esc))
        i += 1
    return "".join(out)


def _split_line(line: str) -> tuple[str, str]:
    """Split a logical line at the first unescaped separator."""
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in SEPARATORS or ch in WHITESPACE:
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(WHITESPACE)
    if rest and rest[0] in SEPARATORS:
        rest = rest[1:].lstrip(WHITESPACE)
    return _unescape(key), _unescape(rest)


def loads(text: str) -> Dict[str, str]:
    """Parse properties text into a dict (later keys win)."""
    properties: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_line(line)
        properties[key] = value
    return properties


def _escape(text: str, is_key: bool) -> str:
    out = []
    for pos, ch in enumerate(text):
        if ch == "\\":
            out.append("\\\\")
        elif ch in "\t\n\r\f":
            out.append("\\" + {"\t": "t", "\n": "n", "\r": "r", "\f": "f"}[ch])
        elif ch in SEPARATORS or ch in COMMENT_CHARS:
            out.append("\\" + ch)
        elif ch == " " and (is_key or pos == 0):
            out.append("\\ ")
        elif ord(ch) < 0x20 or ord(ch) > 0x7E:
            out.append(f"\\u{ord(ch):04x}" if ord(ch) <= 0xFFFF else ch)
        else:
            out.append(ch)
    return "".join(out)


def dumps(properties: Mapping[str, str]) -> str:
    """Serialize key/value pairs in the given order, one per line."""
    lines = [f"{_escape(key, True)}={_escape(value, False)}" for key, value in properties.items()]
    return "\n".join(lines) + ("\n" if lines else "")
