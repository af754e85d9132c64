"""reqtty render - turn a state snapshot into a block of text.

Rendering is read-only: nothing here changes the state it is given.
Scroll windows are recomputed from the selection on every frame.
"""

from __future__ import annotations

from dataclasses import dataclass

from reqtty.formatting import elapsed_label, status_label
from reqtty.history import summary
from reqtty.model import (
    CONTENT_TYPES,
    HEADER_TEMPLATES,
    HTTP_METHODS,
    AppState,
    HeadersMode,
    InputField,
    Pane,
)

HISTORY_COLUMN_WIDTH = 35
RIGHT_COLUMN_WIDTH = 40
MIN_MIDDLE_WIDTH = 40
MIN_CONTENT_HEIGHT = 24
MAX_URL_CHARS = 100

URL_PLACEHOLDER = "https://api.example.com/endpoint"
BODY_PLACEHOLDER = "Request body (JSON, XML, etc.)"
CURSOR = "█"
MARKER = "▶ "

THIN = {"h": "─", "v": "│", "tl": "┌", "tr": "┐", "bl": "└", "br": "┘"}
HEAVY = {"h": "━", "v": "┃", "tl": "┏", "tr": "┓", "bl": "┗", "br": "┛"}

HELP = "Tab next pane │ 1-7 jump │ ↑↓/jk move │ Enter send │ Alt+Enter send body │ Esc/q quit"


@dataclass(frozen=True)
class Dimensions:
    history_width: int
    middle_width: int
    right_width: int
    url_height: int
    body_height: int
    response_height: int
    method_height: int
    content_type_height: int
    headers_height: int
    history_height: int


def calculate_dimensions(width: int, height: int) -> Dimensions:
    """Three columns: History | URL, Body, Response | Method, Content-Type, Headers."""
    history_width = HISTORY_COLUMN_WIDTH
    right_width = RIGHT_COLUMN_WIDTH
    middle_width = width - history_width - right_width
    if middle_width < MIN_MIDDLE_WIDTH:
        middle_width = MIN_MIDDLE_WIDTH
        remaining = width - middle_width
        history_width = max(remaining // 2, 25)
        right_width = max(remaining - remaining // 2, 20)

    content_height = max(height - 1, MIN_CONTENT_HEIGHT)

    method_height = len(HTTP_METHODS) + 2
    content_type_height = len(CONTENT_TYPES) + 2
    headers_height = max(content_height - method_height - content_type_height, 6)

    url_height = 3
    body_height = max(content_height // 3, 5)
    response_height = max(content_height - url_height - body_height, 6)

    return Dimensions(
        history_width=history_width,
        middle_width=middle_width,
        right_width=right_width,
        url_height=url_height,
        body_height=body_height,
        response_height=response_height,
        method_height=method_height,
        content_type_height=content_type_height,
        headers_height=headers_height,
        history_height=content_height,
    )


# ── Primitives ───────────────────────────────────────────────────────────


def wrap_text(text: str, width: int) -> list[str]:
    """Hard-wrap a line into chunks of at most ``width`` characters."""
    if width <= 0:
        return [text]
    if len(text) <= width:
        return [text]
    return [text[i : i + width] for i in range(0, len(text), width)]


def box(title: str, lines: list[str], width: int, height: int, active: bool = False) -> list[str]:
    """Draw ``lines`` inside a border of exactly ``width`` x ``height`` cells."""
    b = HEAVY if active else THIN
    inner = max(width - 2, 0)
    label = f" {title} "[:inner]
    top = b["tl"] + label + b["h"] * (inner - len(label)) + b["tr"]
    body = []
    for line in lines[: max(height - 2, 0)]:
        text = (" " + line)[:inner]
        body.append(b["v"] + text.ljust(inner) + b["v"])
    while len(body) < height - 2:
        body.append(b["v"] + " " * inner + b["v"])
    bottom = b["bl"] + b["h"] * inner + b["br"]
    return [top] + body + [bottom]


def join_horizontal(*columns: list[str]) -> list[str]:
    """Place columns side by side, padding short ones with blank cells."""
    rows = max(len(c) for c in columns)
    widths = [max((len(line) for line in c), default=0) for c in columns]
    out = []
    for r in range(rows):
        parts = []
        for col, w in zip(columns, widths, strict=True):
            parts.append(col[r].ljust(w) if r < len(col) else " " * w)
        out.append("".join(parts))
    return out


def _select_list(items, selected: int) -> list[str]:
    return [(MARKER if i == selected else "  ") + item for i, item in enumerate(items)]


def _with_cursor(state: AppState, field: InputField, text: str) -> str:
    return text + CURSOR if state.input_focus == field else text


# ── Panes ────────────────────────────────────────────────────────────────


def render_url_pane(state: AppState, width: int, height: int) -> list[str]:
    inner = width - 4
    if not state.url and state.input_focus != InputField.URL:
        text = URL_PLACEHOLDER
    else:
        text = _with_cursor(state, InputField.URL, state.url)
    # keep the end of a long URL (where the cursor is) visible
    if len(text) > inner:
        text = text[-inner:]
    return box("[1] URL", [text], width, height, state.active_pane == Pane.URL)


def render_body_pane(state: AppState, width: int, height: int) -> list[str]:
    if not state.body and state.input_focus != InputField.BODY:
        lines = [BODY_PLACEHOLDER]
    else:
        text = _with_cursor(state, InputField.BODY, state.body)
        lines = []
        for line in text.split("\n"):
            lines.extend(wrap_text(line, width - 4))
    visible = height - 2
    if len(lines) > visible:
        lines = lines[-visible:]
    return box("[3] Body (Alt+Enter to send)", lines, width, height, state.active_pane == Pane.BODY)


def render_response_pane(state: AppState, width: int, height: int) -> list[str]:
    status = f"Status: {status_label(state.status_code)}"
    elapsed = elapsed_label(state.elapsed_ms)
    if state.executing:
        status += " (executing)"
    elif elapsed:
        status += f"  {elapsed}"
    body_lines = []
    for line in state.response_body.splitlines():
        body_lines.extend(wrap_text(line, width - 4))
    offset = min(state.response_offset, max(len(body_lines) - 1, 0))
    lines = [status, ""] + body_lines[offset:]
    return box("[5] Response", lines, width, height, state.active_pane == Pane.RESPONSE)


def render_method_pane(state: AppState, width: int, height: int) -> list[str]:
    lines = _select_list(HTTP_METHODS, state.selected_method)
    return box("[2] Method", lines, width, height, state.active_pane == Pane.METHOD)


def render_content_type_pane(state: AppState, width: int, height: int) -> list[str]:
    lines = _select_list(CONTENT_TYPES, state.selected_content_type)
    return box("[4] Content-Type", lines, width, height, state.active_pane == Pane.CONTENT_TYPE)


def render_headers_pane(state: AppState, width: int, height: int) -> list[str]:
    lines: list[str] = []
    if state.headers_mode == HeadersMode.ADD:
        lines.append("Select header type:")
        lines.extend(_select_list([t.name for t in HEADER_TEMPLATES], state.selected_template))
        lines.append("Enter: select | Esc: cancel")
    elif state.headers_mode == HeadersMode.EDIT and state.custom_headers:
        header = state.custom_headers[state.selected_custom_header]
        lines.append(f"Editing: {header.key}")
        lines.append("Value:")
        lines.append(_with_cursor(state, InputField.HEADER_VALUE, state.header_edit_buffer))
        lines.append("Enter: save | Esc: cancel")
    elif not state.custom_headers:
        lines.append("(no headers)")
        lines.append("Press 'a' to add")
    else:
        items = []
        for h in state.custom_headers:
            items.append("(empty)" if not h.key and not h.value else f"{h.key}: {h.value}")
        lines.extend(_select_list(items, state.selected_custom_header))
        lines.append("a: add | d: del | e: edit")
    return box("[6] Custom Headers", lines, width, height, state.active_pane == Pane.HEADERS)


def _history_entry(state: AppState, index: int, width: int) -> list[str]:
    item = state.history[index]
    head = f"[{index + 1}] {item.method}"
    if item.status_code > 0:
        head += f" [{item.status_code}]"
    url = item.url
    if len(url) > MAX_URL_CHARS:
        url = url[:MAX_URL_CHARS] + "..."
    lines = [head] + wrap_text(url, width - 6)
    if len(item.timestamp) >= 16:
        lines.append(item.timestamp[11:16])
    selected = index == state.selected_history
    return [(MARKER if selected and i == 0 else "  ") + line for i, line in enumerate(lines)]


def render_history_pane(state: AppState, width: int, height: int) -> list[str]:
    title = "[7] History" + summary(state)
    active = state.active_pane == Pane.HISTORY
    if not state.history:
        lines = ["No history yet.", "", "Make a request to", "see it here!"]
        return box(title, lines, width, height, active)

    entries: list[str] = []
    selected_start = selected_end = 0
    for i in range(len(state.history)):
        if i > 0:
            entries.append("")
        if i == state.selected_history:
            selected_start = len(entries)
        entries.extend(_history_entry(state, i, width))
        if i == state.selected_history:
            selected_end = len(entries)

    visible = height - 3
    top = 0
    if selected_end > visible:
        top = selected_end - visible
    top = min(top, selected_start)
    lines = entries[top : top + visible]
    lines += [""] * (visible - len(lines))
    lines.append("Enter: load | d: del")
    return box(title, lines, width, height, active)


# ── Layout ───────────────────────────────────────────────────────────────


def render(state: AppState) -> str:
    """Render the complete screen for the current terminal size."""
    if state.width == 0:
        return "Loading..."
    dims = calculate_dimensions(state.width, state.height)

    history_column = render_history_pane(state, dims.history_width, dims.history_height)
    middle_column = (
        render_url_pane(state, dims.middle_width, dims.url_height)
        + render_body_pane(state, dims.middle_width, dims.body_height)
        + render_response_pane(state, dims.middle_width, dims.response_height)
    )
    right_column = (
        render_method_pane(state, dims.right_width, dims.method_height)
        + render_content_type_pane(state, dims.right_width, dims.content_type_height)
        + render_headers_pane(state, dims.right_width, dims.headers_height)
    )
    rows = join_horizontal(history_column, middle_column, right_column)
    return "\n".join(rows + [HELP])
