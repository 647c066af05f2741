"""
Comment-tolerant JSON parsing.

The schema files in the Firefox tree start with a license block and sometimes
carry inline notes, so they are not strict JSON. Comments are blanked out
before handing the text to the json module.
"""
from __future__ import annotations

import json
from typing import Any


def _blank(segment: str) -> str:
    # Keep newlines so line/column numbers in json errors stay accurate.
    return "".join(ch if ch in "\r\n" else " " for ch in segment)


def strip_json_comments(text: str) -> str:
    """
    Replace // line comments and /* */ block comments with whitespace.

    Comment markers inside string literals are left alone. An unterminated
    block comment swallows the rest of the input.
    """
    out = []
    i = 0
    n = len(text)
    start = 0  # start of the current verbatim run

    while i < n:
        ch = text[i]

        if ch == '"':
            # Skip over the string literal, honouring backslash escapes.
            i += 1
            while i < n:
                if text[i] == "\\":
                    i += 2
                    continue
                if text[i] == '"':
                    break
                i += 1
            i += 1
            continue

        if ch == "/" and i + 1 < n:
            nxt = text[i + 1]
            if nxt == "/":
                out.append(text[start:i])
                end = i + 2
                while end < n and text[end] not in "\r\n":
                    end += 1
                out.append(_blank(text[i:end]))
                i = start = end
                continue
            if nxt == "*":
                out.append(text[start:i])
                close = text.find("*/", i + 2)
                end = n if close == -1 else close + 2
                out.append(_blank(text[i:end]))
                i = start = end
                continue

        i += 1

    out.append(text[start:])
    return "".join(out)


def loads_with_comments(text: str) -> Any:
    """Parse JSON text that may contain JavaScript-style comments."""
    return json.loads(strip_json_comments(text))
