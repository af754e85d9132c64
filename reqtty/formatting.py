"""reqtty formatting - response body indentation and display strings."""

from __future__ import annotations

import json

STATUS_NONE_LABEL = "none"


def is_json_content_type(content_type: str | None) -> bool:
    """True when a declared content type names a JSON payload."""
    return bool(content_type) and "json" in content_type.lower()


INDENT = "  "
_WHITESPACE = " \t\r\n"


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _skip_whitespace(text: str, i: int) -> int:
    while i < len(text) and text[i] in _WHITESPACE:
        i += 1
    return i


def indent_json(text: str) -> str:
    """Re-indent a JSON document with two spaces.

    Only whitespace between tokens changes. Strings, numbers and repeated
    keys are copied exactly as the server sent them. Empty objects and
    arrays stay on one line.

    Raises ValueError on malformed input; callers fall back to the raw text.
    """
    json.loads(text, parse_constant=_reject_constant)

    out = []
    depth = 0
    i = 0
    while i < len(text):
        c = text[i]
        if c == '"':
            j = i + 1
            while text[j] != '"':
                j += 2 if text[j] == "\\" else 1
            out.append(text[i : j + 1])
            i = j + 1
            continue
        if c in _WHITESPACE:
            i += 1
            continue
        if c in "{[":
            close = "}" if c == "{" else "]"
            k = _skip_whitespace(text, i + 1)
            if text[k] == close:
                out.append(c + close)
                i = k + 1
                continue
            depth += 1
            out.append(c + "\n" + INDENT * depth)
        elif c in "}]":
            depth -= 1
            out.append("\n" + INDENT * depth + c)
        elif c == ",":
            out.append(",\n" + INDENT * depth)
        elif c == ":":
            out.append(": ")
        else:
            out.append(c)
        i += 1
    return "".join(out)


def pretty_body(body: str, content_type: str | None) -> str:
    """Indent the body when its content type is JSON.

    - Only JSON is indented; everything else passes through untouched
    - Malformed JSON passes through untouched
    - Never raises
    """
    if not body or not is_json_content_type(content_type):
        return body
    try:
        return indent_json(body)
    except (ValueError, RecursionError):
        return body


def format_error(error: str) -> str:
    return f"Error: {error}"


def status_label(status_code: int) -> str:
    """Display form of a status code; 0 is the "no status" sentinel."""
    if not status_code:
        return STATUS_NONE_LABEL
    return str(status_code)


def elapsed_label(elapsed_ms: float) -> str:
    """Round-trip time for the status line; empty when unknown."""
    if elapsed_ms <= 0:
        return ""
    if elapsed_ms < 1000:
        return f"{elapsed_ms:.0f}ms"
    return f"{elapsed_ms / 1000:.2f}s"
