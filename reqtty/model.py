"""reqtty model - panes, modes, headers, history records and application state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

MAX_HISTORY = 50
EXECUTING_PLACEHOLDER = "Executing request..."
CUSTOM_HEADER_KEY = "Custom-Header"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")

CONTENT_TYPES = (
    "application/json",
    "application/xml",
    "text/plain",
    "application/x-www-form-urlencoded",
    "multipart/form-data",
)


class Pane(IntEnum):
    """Focusable panes. Numeric order is the Tab order and the jump key."""

    URL = 1
    METHOD = 2
    BODY = 3
    CONTENT_TYPE = 4
    RESPONSE = 5
    HEADERS = 6
    HISTORY = 7


class HeadersMode(Enum):
    VIEW = "view"
    ADD = "add"
    EDIT = "edit"


class InputField(Enum):
    """Text inputs that can own the cursor."""

    URL = "url"
    BODY = "body"
    HEADER_VALUE = "header_value"


@dataclass(frozen=True)
class Header:
    key: str
    value: str

    @property
    def sendable(self) -> bool:
        return bool(self.key) and bool(self.value)


@dataclass(frozen=True)
class HeaderTemplate:
    name: str
    key: str
    placeholder: str

    @property
    def is_custom(self) -> bool:
        return self.key == ""


HEADER_TEMPLATES = (
    HeaderTemplate("Authorization (Bearer)", "Authorization", "Bearer <your-token>"),
    HeaderTemplate("Authorization (Basic)", "Authorization", "Basic <base64-credentials>"),
    HeaderTemplate("API Key", "X-API-Key", "<your-api-key>"),
    HeaderTemplate("Cookie", "Cookie", "session_id=<value>"),
    HeaderTemplate("User Agent", "User-Agent", "MyApp/1.0"),
    HeaderTemplate("Accept", "Accept", "application/json"),
    HeaderTemplate("Custom Header", "", ""),
)


def copy_headers(headers) -> tuple[Header, ...]:
    """Return a fresh tuple of fresh Header objects."""
    return tuple(Header(h.key, h.value) for h in headers)


@dataclass(frozen=True)
class HistoryItem:
    """One completed request/response round trip."""

    method: str
    url: str
    body: str
    content_type: str
    headers: tuple[Header, ...]
    timestamp: str
    status_code: int = 0
    response_body: str = ""


@dataclass(frozen=True)
class RequestParams:
    """Fully-resolved parameters handed to the transport."""

    method: str
    url: str
    body: str = ""
    content_type: str = CONTENT_TYPES[0]
    headers: tuple[Header, ...] = ()


@dataclass(frozen=True)
class ResponseResult:
    """Outcome of one transport call. ``error`` is set on failure."""

    body: str = ""
    status_code: int = 0
    content_type: str = ""
    error: str | None = None
    elapsed_ms: float = 0


# ── Messages and effects ─────────────────────────────────────────────────


@dataclass(frozen=True)
class KeyEvent:
    """A key abstracted from the terminal: ``tab``, ``enter``, ``a``, ..."""

    name: str
    alt: bool = False


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Blink:
    field: InputField


@dataclass(frozen=True)
class SendRequest:
    params: RequestParams


@dataclass(frozen=True)
class Quit:
    pass


Effect = Blink | SendRequest | Quit


# ── State ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AppState:
    """Snapshot of the whole working state.

    Transitions never mutate a snapshot; they build a new one with
    ``dataclasses.replace``.
    """

    active_pane: Pane = Pane.URL
    headers_mode: HeadersMode = HeadersMode.VIEW
    input_focus: InputField | None = InputField.URL

    url: str = ""
    body: str = ""
    selected_method: int = 0
    selected_content_type: int = 0

    custom_headers: tuple[Header, ...] = ()
    selected_custom_header: int = 0
    selected_template: int = 0
    header_edit_buffer: str = ""

    history: tuple[HistoryItem, ...] = ()
    selected_history: int = 0
    pending: HistoryItem | None = None

    executing: bool = False
    status_code: int = 0
    elapsed_ms: float = 0
    response_body: str = ""
    response_offset: int = 0

    width: int = 0
    height: int = 0

    @property
    def method(self) -> str:
        return HTTP_METHODS[self.selected_method]

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES[self.selected_content_type]

    @property
    def in_text_entry(self) -> bool:
        """True when keystrokes go to a text input rather than to commands."""
        if self.active_pane in (Pane.URL, Pane.BODY):
            return True
        return self.active_pane == Pane.HEADERS and self.headers_mode == HeadersMode.EDIT


def new_state(
    url: str = "",
    body: str = "",
    method: str = "GET",
    content_type: str = CONTENT_TYPES[0],
    headers=(),
) -> AppState:
    """Build the initial state with the URL input focused."""
    return AppState(
        url=url,
        body=body,
        selected_method=HTTP_METHODS.index(method),
        selected_content_type=CONTENT_TYPES.index(content_type),
        custom_headers=copy_headers(headers),
    )


def clamp_index(index: int, length: int) -> int:
    """Clamp a selection into ``[0, length)``; 0 for an empty list."""
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


def move_index(index: int, length: int, direction: str) -> int:
    """Move a selection one step up or down without wrapping."""
    if direction == "up" and index > 0:
        return index - 1
    if direction == "down" and index < length - 1:
        return index + 1
    return index
