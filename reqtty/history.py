"""reqtty history - bounded, newest-first record of executed requests."""

from __future__ import annotations

from dataclasses import replace

from loguru import logger

from reqtty.focus import jump_to_pane
from reqtty.model import (
    CONTENT_TYPES,
    HTTP_METHODS,
    MAX_HISTORY,
    AppState,
    Blink,
    HistoryItem,
    Pane,
    clamp_index,
    copy_headers,
    move_index,
)

HISTORY_PAGE = 5


def commit(state: AppState, item: HistoryItem) -> AppState:
    """Prepend an item, drop the oldest beyond MAX_HISTORY, select the newest."""
    history = (item,) + state.history
    if len(history) > MAX_HISTORY:
        logger.debug("history full, dropping {} oldest", len(history) - MAX_HISTORY)
        history = history[:MAX_HISTORY]
    return replace(state, history=history, selected_history=0)


def navigate(state: AppState, action: str) -> AppState:
    """Move the history selection: up, down, pgup, pgdown, home or end."""
    n = len(state.history)
    if action == "home":
        selected = 0
    elif action == "end":
        selected = max(n - 1, 0)
    elif action in ("pgup", "pgdown"):
        step = HISTORY_PAGE if action == "pgdown" else -HISTORY_PAGE
        selected = clamp_index(state.selected_history + step, n)
    else:
        selected = move_index(state.selected_history, n, action)
    return replace(state, selected_history=selected)


def delete(state: AppState) -> AppState:
    """Remove the selected entry and clamp the selection."""
    if not state.history:
        return state
    i = state.selected_history
    remaining = state.history[:i] + state.history[i + 1 :]
    return replace(
        state,
        history=remaining,
        selected_history=clamp_index(i, len(remaining)),
    )


def load(state: AppState) -> tuple[AppState, Blink | None]:
    """Copy the selected entry back into the working form and focus the URL pane.

    Method and content type are matched by name; an unknown name keeps the
    current selection. The stored response is shown again when it has a body.
    """
    if not state.history:
        return state, None
    item = state.history[state.selected_history]

    selected_method = state.selected_method
    if item.method in HTTP_METHODS:
        selected_method = HTTP_METHODS.index(item.method)
    selected_content_type = state.selected_content_type
    if item.content_type in CONTENT_TYPES:
        selected_content_type = CONTENT_TYPES.index(item.content_type)

    state = replace(
        state,
        url=item.url,
        body=item.body,
        selected_method=selected_method,
        selected_content_type=selected_content_type,
        custom_headers=copy_headers(item.headers),
        selected_custom_header=0,
    )
    if item.response_body:
        state = replace(
            state,
            response_body=item.response_body,
            status_code=item.status_code,
            elapsed_ms=0,
            response_offset=0,
        )
    logger.debug("loaded history entry {}: {} {}", state.selected_history, item.method, item.url)
    return jump_to_pane(state, Pane.URL)


def summary(state: AppState) -> str:
    """Title suffix for the history pane."""
    if not state.history:
        return ""
    return f" ({len(state.history)} requests)"
