"""reqtty app - the event loop and the curses terminal around it.

One control thread owns the state and handles one message at a time.
Requests run on worker threads that only post their result back onto
the message queue.
"""

from __future__ import annotations

import contextlib
import curses
import locale
import queue
import threading

from loguru import logger

from reqtty import transport
from reqtty.model import (
    AppState,
    Blink,
    InputField,
    KeyEvent,
    Quit,
    Resize,
    SendRequest,
)
from reqtty.render import render
from reqtty.update import update

POLL_MS = 100


class EventLoop:
    """Feed messages through ``update`` and carry out the effects it returns."""

    def __init__(self, state: AppState, perform=None):
        self.state = state
        self.messages: queue.Queue = queue.Queue()
        self.running = True
        self.cursor: InputField | None = state.input_focus
        self._perform = perform or transport.perform

    def post(self, msg) -> None:
        self.messages.put(msg)

    def dispatch(self, msg) -> None:
        self.state, effect = update(self.state, msg)
        self.cursor = self.state.input_focus
        if isinstance(effect, Quit):
            logger.info("quit")
            self.running = False
        elif isinstance(effect, SendRequest):
            worker = threading.Thread(
                target=self._send,
                args=(effect.params,),
                daemon=True,
            )
            worker.start()
        elif isinstance(effect, Blink):
            self.cursor = effect.field

    def drain(self) -> int:
        """Handle every queued message. Returns how many were handled."""
        handled = 0
        while True:
            try:
                msg = self.messages.get_nowait()
            except queue.Empty:
                return handled
            self.dispatch(msg)
            handled += 1

    def _send(self, params) -> None:
        self.post(self._perform(params))


# ── Terminal ─────────────────────────────────────────────────────────────

_CONTROL_KEYS = {
    "\t": "tab",
    "\n": "enter",
    "\r": "enter",
    "\x03": "ctrl+c",
    "\x7f": "backspace",
    "\x08": "backspace",
}

_SPECIAL_KEYS = {
    curses.KEY_BTAB: "shift+tab",
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_HOME: "home",
    curses.KEY_END: "end",
    curses.KEY_PPAGE: "pgup",
    curses.KEY_NPAGE: "pgdown",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_ENTER: "enter",
}


def _read_key(screen):
    """Next key from curses: a str for characters, an int for special keys, None on timeout."""
    try:
        return screen.get_wch()
    except curses.error:
        return None


def translate_key(key, screen=None) -> KeyEvent | Resize | None:
    """Map a curses key to a KeyEvent.

    ESC followed immediately by another key is that key with Alt held
    (Alt+Enter sends the body); ESC on its own is a plain Escape.
    """
    if key is None:
        return None
    if isinstance(key, int):
        if key == curses.KEY_RESIZE:
            if screen is None:
                return None
            height, width = screen.getmaxyx()
            return Resize(width, height)
        name = _SPECIAL_KEYS.get(key)
        return KeyEvent(name) if name else None

    if key == "\x1b":
        follow = None
        if screen is not None:
            screen.nodelay(True)
            try:
                follow = _read_key(screen)
            finally:
                screen.nodelay(False)
                screen.timeout(POLL_MS)
        if follow is None:
            return KeyEvent("esc")
        inner = translate_key(follow)
        if isinstance(inner, KeyEvent):
            return KeyEvent(inner.name, alt=True)
        return None

    if key in _CONTROL_KEYS:
        return KeyEvent(_CONTROL_KEYS[key])
    if len(key) == 1 and key.isprintable():
        return KeyEvent(key)
    return None


def draw(screen, state: AppState) -> None:
    height, width = screen.getmaxyx()
    screen.erase()
    for y, line in enumerate(render(state).split("\n")[:height]):
        # the bottom-right cell raises once written; the rest of the row is drawn
        with contextlib.suppress(curses.error):
            screen.addstr(y, 0, line[: width - 1])
    screen.refresh()


def _main(screen, state: AppState) -> AppState:
    with contextlib.suppress(curses.error):
        curses.use_default_colors()
        curses.curs_set(0)
    screen.keypad(True)
    screen.timeout(POLL_MS)
    curses.raw()

    loop = EventLoop(state)
    height, width = screen.getmaxyx()
    loop.dispatch(Resize(width, height))

    while loop.running:
        loop.drain()
        draw(screen, loop.state)
        msg = translate_key(_read_key(screen), screen)
        if msg is not None:
            loop.dispatch(msg)
    return loop.state


def run_app(state: AppState) -> AppState:
    """Run the interactive client until the user quits."""
    locale.setlocale(locale.LC_ALL, "")
    return curses.wrapper(_main, state)
