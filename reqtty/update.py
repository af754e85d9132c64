"""reqtty update - route keys, results and resizes to the state transitions."""

from __future__ import annotations

from dataclasses import replace

from reqtty import headers, history
from reqtty.executor import execute
from reqtty.focus import advance_focus, jump_to_pane
from reqtty.model import (
    CONTENT_TYPES,
    HTTP_METHODS,
    AppState,
    Effect,
    HeadersMode,
    InputField,
    KeyEvent,
    Pane,
    Quit,
    Resize,
    ResponseResult,
    move_index,
)
from reqtty.reconciler import reconcile

JUMP_KEYS = {str(p.value): p for p in Pane}

UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")
RESPONSE_PAGE = 10


def update(state: AppState, msg) -> tuple[AppState, Effect | None]:
    """Apply one message. Runs to completion; never blocks."""
    if isinstance(msg, Resize):
        return replace(state, width=msg.width, height=msg.height), None
    if isinstance(msg, ResponseResult):
        return reconcile(state, msg), None
    if not isinstance(msg, KeyEvent):
        return state, None

    key = msg.name
    if key == "ctrl+c":
        return state, Quit()
    if key == "tab":
        return advance_focus(state, forward=True)
    if key == "shift+tab":
        return advance_focus(state, forward=False)

    if state.in_text_entry:
        return _update_text_entry(state, msg)
    return _update_command(state, key)


# ── Text entry: URL, Body, header value ─────────────────────────────────


def _update_text_entry(state: AppState, msg: KeyEvent) -> tuple[AppState, Effect | None]:
    editing_header = state.headers_mode == HeadersMode.EDIT and state.active_pane == Pane.HEADERS

    if msg.name == "enter" and msg.alt:
        if state.active_pane == Pane.BODY:
            return execute(state)
        return state, None

    if msg.name == "esc":
        if editing_header:
            return headers.cancel_edit(state), None
        return state, Quit()

    if msg.name == "enter":
        if editing_header:
            return headers.save_edit(state), None
        if state.active_pane == Pane.URL:
            return execute(state)
        return edit_text(state, "\n"), None

    if msg.alt:
        return state, None
    if msg.name == "backspace":
        return delete_char(state), None
    if len(msg.name) == 1 and msg.name.isprintable():
        return edit_text(state, msg.name), None
    return state, None


def _field_value(state: AppState, field: InputField) -> str:
    if field == InputField.URL:
        return state.url
    if field == InputField.BODY:
        return state.body
    return state.header_edit_buffer


def _set_field(state: AppState, field: InputField, value: str) -> AppState:
    if field == InputField.URL:
        return replace(state, url=value)
    if field == InputField.BODY:
        return replace(state, body=value)
    return replace(state, header_edit_buffer=value)


def edit_text(state: AppState, text: str) -> AppState:
    """Append text to the focused input. Newlines only reach the body."""
    field = state.input_focus
    if field is None:
        return state
    if "\n" in text and field != InputField.BODY:
        text = text.replace("\n", "")
    return _set_field(state, field, _field_value(state, field) + text)


def delete_char(state: AppState) -> AppState:
    field = state.input_focus
    if field is None:
        return state
    return _set_field(state, field, _field_value(state, field)[:-1])


# ── Command panes ────────────────────────────────────────────────────────


def _update_command(state: AppState, key: str) -> tuple[AppState, Effect | None]:
    adding_header = state.active_pane == Pane.HEADERS and state.headers_mode == HeadersMode.ADD

    if key in ("q", "esc") and not adding_header:
        return state, Quit()
    if key in JUMP_KEYS:
        return jump_to_pane(state, JUMP_KEYS[key])

    pane = state.active_pane
    if pane in (Pane.METHOD, Pane.CONTENT_TYPE):
        return _update_selector(state, key)
    if pane == Pane.RESPONSE:
        return _update_response(state, key)
    if pane == Pane.HEADERS:
        return _update_headers(state, key)
    if pane == Pane.HISTORY:
        return _update_history(state, key)
    return state, None


def _update_selector(state: AppState, key: str) -> tuple[AppState, Effect | None]:
    if key == "enter":
        return execute(state)
    direction = _direction(key)
    if direction is None:
        return state, None
    if state.active_pane == Pane.METHOD:
        selected = move_index(state.selected_method, len(HTTP_METHODS), direction)
        return replace(state, selected_method=selected), None
    selected = move_index(state.selected_content_type, len(CONTENT_TYPES), direction)
    return replace(state, selected_content_type=selected), None


def _update_response(state: AppState, key: str) -> tuple[AppState, Effect | None]:
    if key == "enter":
        return execute(state)
    offset = state.response_offset
    if key in UP_KEYS:
        offset -= 1
    elif key in DOWN_KEYS:
        offset += 1
    elif key == "pgup":
        offset -= RESPONSE_PAGE
    elif key == "pgdown":
        offset += RESPONSE_PAGE
    elif key in ("home", "g"):
        offset = 0
    elif key in ("end", "G"):
        offset = max(len(state.response_body.splitlines()) - 1, 0)
    else:
        return state, None
    return replace(state, response_offset=max(offset, 0)), None


def _update_headers(state: AppState, key: str) -> tuple[AppState, Effect | None]:
    if state.headers_mode == HeadersMode.ADD:
        direction = _direction(key)
        if direction is not None:
            return headers.navigate_templates(state, direction), None
        if key == "enter":
            return headers.select_template(state)
        if key == "esc":
            return headers.cancel_add(state), None
        return state, None

    direction = _direction(key)
    if direction is not None:
        return headers.navigate(state, direction), None
    if key in ("a", "n"):
        return headers.start_add(state), None
    if key in ("d", "x"):
        return headers.delete_selected(state), None
    if key in ("e", "enter"):
        return headers.start_edit(state)
    return state, None


def _update_history(state: AppState, key: str) -> tuple[AppState, Effect | None]:
    direction = _direction(key)
    if direction is not None:
        return history.navigate(state, direction), None
    if key in ("home", "g"):
        return history.navigate(state, "home"), None
    if key in ("end", "G"):
        return history.navigate(state, "end"), None
    if key in ("pgup", "pgdown"):
        return history.navigate(state, key), None
    if key == "enter":
        return history.load(state)
    if key in ("d", "x"):
        return history.delete(state), None
    return state, None


def _direction(key: str) -> str | None:
    if key in UP_KEYS:
        return "up"
    if key in DOWN_KEYS:
        return "down"
    return None
