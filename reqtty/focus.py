"""reqtty focus - which pane is active and how focus moves between panes."""

from __future__ import annotations

from dataclasses import replace

from reqtty.model import AppState, Blink, HeadersMode, InputField, Pane

PANE_ORDER = tuple(Pane)

# Panes that take typed text directly, and the input they focus.
TEXT_INPUTS = {
    Pane.URL: InputField.URL,
    Pane.BODY: InputField.BODY,
}


def _focus(state: AppState, pane: Pane) -> tuple[AppState, Blink | None]:
    """Activate ``pane``, blurring every input and leaving any header mode."""
    field = TEXT_INPUTS.get(pane)
    state = replace(
        state,
        active_pane=pane,
        headers_mode=HeadersMode.VIEW,
        input_focus=field,
        header_edit_buffer="",
    )
    return state, Blink(field) if field is not None else None


def advance_focus(state: AppState, forward: bool = True) -> tuple[AppState, Blink | None]:
    """Cycle to the next (or previous) pane, wrapping at both ends."""
    i = PANE_ORDER.index(state.active_pane)
    step = 1 if forward else -1
    return _focus(state, PANE_ORDER[(i + step) % len(PANE_ORDER)])


def jump_to_pane(state: AppState, pane: Pane) -> tuple[AppState, Blink | None]:
    return _focus(state, Pane(pane))
