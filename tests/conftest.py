"""Shared fixtures for reqtty scenario tests."""

import json
import os

import pytest
from click.testing import CliRunner

from reqtty import config
from reqtty.model import AppState, Header, HistoryItem, ResponseResult, new_state


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def tmp_project(tmp_path):
    """Create a temporary project directory and cd into it."""
    original = os.getcwd()
    os.chdir(tmp_path)
    yield tmp_path
    os.chdir(original)


@pytest.fixture
def global_reqtty_dir(tmp_path, monkeypatch):
    """Override the global ~/.reqtty directory to a temp location."""
    fake_global = tmp_path / "fake_home" / ".reqtty"
    fake_global.mkdir(parents=True)
    monkeypatch.setattr(config, "GLOBAL_DIR", fake_global)
    monkeypatch.setattr(config, "GLOBAL_CONFIG", fake_global / "config.yaml")
    return fake_global


@pytest.fixture
def state() -> AppState:
    return new_state(url="http://x/")


def make_response_result(
    status_code=200,
    body=None,
    content_type="application/json",
    error=None,
    elapsed_ms=0,
):
    """Factory for transport results. dict/list bodies are JSON-encoded compactly."""
    if isinstance(body, dict | list):
        body = json.dumps(body, separators=(",", ":"))
    if error is not None:
        return ResponseResult(error=error)
    return ResponseResult(
        body=body or "",
        status_code=status_code,
        content_type=content_type,
        elapsed_ms=elapsed_ms,
    )


def make_history_item(
    method="GET",
    url="http://x/",
    body="",
    content_type="application/json",
    headers=(),
    status_code=200,
    response_body="ok",
    timestamp="2026-01-02 03:04:05",
):
    return HistoryItem(
        method=method,
        url=url,
        body=body,
        content_type=content_type,
        headers=tuple(Header(k, v) for k, v in headers),
        timestamp=timestamp,
        status_code=status_code,
        response_body=response_body,
    )
