"""reqtty reconciler - fold a transport result back into the state."""

from __future__ import annotations

from dataclasses import replace

from loguru import logger

from reqtty import history
from reqtty.formatting import format_error, pretty_body
from reqtty.model import AppState, ResponseResult


def reconcile(state: AppState, result: ResponseResult) -> AppState:
    """Show the result and record the staged request in history.

    Busy and pending are always cleared. An error is shown as
    ``Error: <message>`` with status 0, and recorded the same way.
    """
    if result.error is not None:
        body = format_error(result.error)
        status = 0
        logger.warning("request failed: {}", result.error)
    else:
        body = pretty_body(result.body, result.content_type)
        status = result.status_code
        logger.info("response {} ({} bytes)", status, len(body))

    pending = state.pending
    state = replace(
        state,
        executing=False,
        pending=None,
        response_body=body,
        status_code=status,
        elapsed_ms=result.elapsed_ms if result.error is None else 0,
        response_offset=0,
    )
    if pending is not None:
        state = history.commit(
            state,
            replace(pending, status_code=status, response_body=body),
        )
    return state
