"""reqtty transport - perform one HTTP call."""

from __future__ import annotations

import time
from typing import Any

import requests
from loguru import logger

from reqtty.formatting import pretty_body
from reqtty.model import RequestParams, ResponseResult

BODY_METHODS = ("POST", "PUT", "PATCH")


def build_headers(params: RequestParams) -> dict[str, str]:
    """Content-Type first, then every custom header with a key and a value."""
    headers = {"Content-Type": params.content_type}
    for header in params.headers:
        if header.sendable:
            headers[header.key] = header.value
    return headers


def perform(params: RequestParams) -> ResponseResult:
    """Execute an HTTP request and return a ResponseResult.

    - Sends a body only for POST/PUT/PATCH with a non-empty body
    - Indents the response when its own Content-Type is JSON
    - No timeout: a hung server keeps the call open
    - Never raises - failures come back with the error field set
    """
    method = params.method.upper()
    kwargs: dict[str, Any] = {
        "method": method,
        "url": params.url,
        "headers": build_headers(params),
        "timeout": None,
        "allow_redirects": True,
    }
    if params.body and method in BODY_METHODS:
        kwargs["data"] = params.body.encode("utf-8")

    logger.debug("transport {} {}", method, params.url)
    try:
        start = time.monotonic()
        resp = requests.request(**kwargs)
        elapsed_ms = (time.monotonic() - start) * 1000
    except requests.exceptions.ConnectionError as e:
        return ResponseResult(error=f"Connection error: {e}")
    except (
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
        requests.exceptions.InvalidURL,
    ) as e:
        return ResponseResult(error=f"Invalid request: {e}")
    except requests.exceptions.RequestException as e:
        return ResponseResult(error=f"Request failed: {e}")
    except Exception as e:
        return ResponseResult(error=f"Unexpected error: {e}")

    content_type = resp.headers.get("Content-Type", "")
    return ResponseResult(
        body=pretty_body(resp.text, content_type),
        status_code=resp.status_code,
        content_type=content_type,
        elapsed_ms=elapsed_ms,
    )
