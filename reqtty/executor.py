"""reqtty executor - turn the working form into a dispatched request."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from loguru import logger

from reqtty.model import (
    EXECUTING_PLACEHOLDER,
    TIMESTAMP_FORMAT,
    AppState,
    HistoryItem,
    RequestParams,
    SendRequest,
    copy_headers,
)


def build_request_params(state: AppState) -> RequestParams:
    """Snapshot the working form as transport parameters."""
    return RequestParams(
        method=state.method,
        url=state.url,
        body=state.body,
        content_type=state.content_type,
        headers=copy_headers(state.custom_headers),
    )


def execute(state: AppState) -> tuple[AppState, SendRequest | None]:
    """Dispatch the current request.

    With an empty URL, or while another request is in flight, this returns
    the state untouched and no effect. Otherwise the state is marked busy,
    the request is staged for history and a SendRequest effect is returned
    for the event loop to run.
    """
    if not state.url or state.executing:
        logger.debug(
            "execute ignored (url={!r}, executing={})",
            state.url,
            state.executing,
        )
        return state, None

    params = build_request_params(state)
    pending = HistoryItem(
        method=params.method,
        url=params.url,
        body=params.body,
        content_type=params.content_type,
        headers=copy_headers(params.headers),
        timestamp=datetime.now().strftime(TIMESTAMP_FORMAT),
    )
    logger.info("dispatch {} {}", params.method, params.url)
    state = replace(
        state,
        executing=True,
        response_body=EXECUTING_PLACEHOLDER,
        response_offset=0,
        elapsed_ms=0,
        pending=pending,
    )
    return state, SendRequest(params)
