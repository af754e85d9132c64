"""reqtty headers - the custom headers pane and its view/add/edit modes.

View  --a/n-->   Add   --enter--> Edit
View  --e/enter-> Edit (only with at least one header)
Add   --esc-->   View
Edit  --enter--> View (value saved)
Edit  --esc-->   View (value discarded)
"""

from __future__ import annotations

from dataclasses import replace

from loguru import logger

from reqtty.model import (
    CUSTOM_HEADER_KEY,
    HEADER_TEMPLATES,
    AppState,
    Blink,
    Header,
    HeadersMode,
    InputField,
    clamp_index,
    move_index,
)


def navigate(state: AppState, direction: str) -> AppState:
    """Move the header selection by one, without wrapping."""
    return replace(
        state,
        selected_custom_header=move_index(
            state.selected_custom_header,
            len(state.custom_headers),
            direction,
        ),
    )


def start_add(state: AppState) -> AppState:
    return replace(state, headers_mode=HeadersMode.ADD, selected_template=0)


def delete_selected(state: AppState) -> AppState:
    """Remove the selected header and clamp the selection into the shorter list."""
    headers = state.custom_headers
    if not headers:
        return state
    i = state.selected_custom_header
    remaining = headers[:i] + headers[i + 1 :]
    return replace(
        state,
        custom_headers=remaining,
        selected_custom_header=clamp_index(i, len(remaining)),
    )


def start_edit(state: AppState) -> tuple[AppState, Blink | None]:
    """Open the selected header for editing. No-op when there are no headers."""
    if not state.custom_headers:
        return state, None
    header = state.custom_headers[state.selected_custom_header]
    state = replace(
        state,
        headers_mode=HeadersMode.EDIT,
        header_edit_buffer=header.value,
        input_focus=InputField.HEADER_VALUE,
    )
    return state, Blink(InputField.HEADER_VALUE)


def navigate_templates(state: AppState, direction: str) -> AppState:
    return replace(
        state,
        selected_template=move_index(
            state.selected_template,
            len(HEADER_TEMPLATES),
            direction,
        ),
    )


def select_template(state: AppState) -> tuple[AppState, Blink | None]:
    """Append a header built from the chosen template and edit it straight away.

    The custom template has no key of its own, so it gets a placeholder
    key and an empty value.
    """
    template = HEADER_TEMPLATES[state.selected_template]
    if template.is_custom:
        header = Header(CUSTOM_HEADER_KEY, "")
    else:
        header = Header(template.key, template.placeholder)
    logger.debug("header added from template {!r}", template.name)
    state = replace(
        state,
        custom_headers=state.custom_headers + (header,),
        selected_custom_header=len(state.custom_headers),
    )
    return start_edit(state)


def save_edit(state: AppState) -> AppState:
    """Commit the edit buffer into the selected header's value."""
    if not state.custom_headers:
        return cancel_edit(state)
    i = state.selected_custom_header
    headers = list(state.custom_headers)
    headers[i] = Header(headers[i].key, state.header_edit_buffer)
    return replace(
        state,
        custom_headers=tuple(headers),
        headers_mode=HeadersMode.VIEW,
        header_edit_buffer="",
        input_focus=None,
    )


def cancel_edit(state: AppState) -> AppState:
    return replace(
        state,
        headers_mode=HeadersMode.VIEW,
        header_edit_buffer="",
        input_focus=None,
    )


def cancel_add(state: AppState) -> AppState:
    return replace(state, headers_mode=HeadersMode.VIEW)
