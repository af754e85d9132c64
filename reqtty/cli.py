"""reqtty CLI - interactive terminal HTTP client."""

import sys

import click
from loguru import logger

TOOL_HELP = """\
reqtty — interactive HTTP client for the terminal.

Build a request in panes, send it, inspect the response and replay
earlier requests from history.

\b
PANES
─────
  [1] URL            [2] Method         [3] Body
  [4] Content-Type   [5] Response       [6] Custom Headers
  [7] History

\b
KEYS
────
  Tab / Shift-Tab    Next / previous pane
  1-7                Jump to pane (outside URL and Body)
  ↑↓ / j k           Move selection or scroll
  Enter              Send (URL, Method, Content-Type, Response),
                     save header, load history entry
  Alt+Enter          Send from the Body pane
  a / n, e, d / x    Add, edit, delete header; d / x deletes history
  Esc / q            Cancel header mode, otherwise quit

\b
CONFIG FILE (.reqtty.yaml)
──────────────────────────
  Resolution order:
    1. -c/--config flag
    2. .reqtty.yaml / .reqtty.yml / reqtty.yaml / reqtty.yml in CWD
    3. ~/.reqtty/config.yaml

  \b
  defaults:
    env_file: .env
    url: ${API_BASE_URL}/health
    method: GET
    content_type: application/json
    headers:
      Authorization: Bearer ${API_TOKEN}

  Flags override config values. History is kept in memory only.
"""


def configure_logging(log_file: str | None, level: str) -> None:
    """Send logs to a file, or nowhere: stderr belongs to the terminal UI."""
    logger.remove()
    if log_file:
        logger.add(
            log_file,
            level=level.upper(),
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function} - {message}",
            rotation="10 MB",
        )


def _require_terminal() -> None:
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise click.ClickException("reqtty needs an interactive terminal.")


@click.command(
    help=TOOL_HELP,
    context_settings={"max_content_width": 88},
)
@click.argument("url", required=False)
@click.option("-X", "--method", default=None, help="Initial HTTP method. Default: GET.")
@click.option("-b", "--body", default=None, help="Initial request body.")
@click.option(
    "-H",
    "--header",
    multiple=True,
    help="Custom header as 'Name: Value'. Repeatable.",
)
@click.option(
    "-t",
    "--content-type",
    "content_type",
    default=None,
    help="Initial content type. Default: application/json.",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    default=None,
    help="Config file path. Default: .reqtty.yaml in CWD, then ~/.reqtty/config.yaml.",
)
@click.option("--log-file", default=None, help="Write logs to this file.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Log level for --log-file. Default: INFO.",
)
def main(url, method, body, header, content_type, config_file, log_file, log_level):
    """Start the interactive client."""
    from reqtty.app import run_app
    from reqtty.config import (
        ConfigError,
        build_form,
        find_config,
        load_environment,
        read_config,
    )
    from reqtty.model import new_state

    configure_logging(log_file, log_level)

    # --- Load config ---
    config_path = find_config(config_file)
    if config_file and config_path is None:
        raise click.UsageError(f"Config file '{config_file}' not found.")
    try:
        settings = read_config(config_path)
        env = load_environment(settings)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    try:
        form = build_form(
            settings.defaults,
            env,
            url=url,
            method=method,
            body=body,
            content_type=content_type,
            header_specs=header,
        )
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    _require_terminal()

    logger.info("starting with {} {}", form["method"], form["url"] or "(no url)")
    final = run_app(new_state(**form))
    logger.info("exiting with {} history entries", len(final.history))
