"""reqtty config - optional startup settings that seed the working form.

A config file holds a single ``defaults`` mapping:

    defaults:
      env_file: .env
      url: ${API_BASE_URL}/health
      method: GET
      content_type: application/json
      body: ""
      headers:
        Authorization: Bearer ${API_TOKEN}

Nothing here is written back; the file is read once before the UI starts.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import dotenv_values
from loguru import logger

from reqtty.model import CONTENT_TYPES, HTTP_METHODS, Header

GLOBAL_DIR = Path.home() / ".reqtty"
GLOBAL_CONFIG = GLOBAL_DIR / "config.yaml"

CWD_CONFIG_CANDIDATES = [
    ".reqtty.yaml",
    ".reqtty.yml",
    "reqtty.yaml",
    "reqtty.yml",
]

_ENV_REF = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


class ConfigError(ValueError):
    """The config file or a flag names something reqtty cannot use."""


@dataclass(frozen=True)
class Settings:
    """Parsed config file. ``source`` is None when no file was found."""

    defaults: dict = field(default_factory=dict)
    source: Path | None = None

    @property
    def base_dir(self) -> Path:
        return self.source.parent if self.source else Path(".")


def find_config(explicit: str | None) -> Path | None:
    """Locate the config file.

    An explicit ``-c`` path is used alone: when it is missing the result is
    None and nothing else is searched. Otherwise the CWD names are tried in
    order, then ``~/.reqtty/config.yaml``.
    """
    if explicit:
        candidates = [Path(explicit)]
    else:
        candidates = [Path(name) for name in CWD_CONFIG_CANDIDATES] + [GLOBAL_CONFIG]
    return next((p.resolve() for p in candidates if p.is_file()), None)


def read_config(path: str | Path | None) -> Settings:
    if path is None or not Path(path).is_file():
        return Settings()
    path = Path(path).resolve()
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise ConfigError(f"'defaults' in {path} must be a mapping")
    logger.debug("loaded config {}", path)
    return Settings(defaults=defaults, source=path)


def load_environment(settings: Settings) -> dict[str, str]:
    """os.environ overlaid with the config's env_file, if it names one.

    A relative env_file is looked up next to the config file.
    """
    env = dict(os.environ)
    env_file = _text(settings.defaults, "env_file")
    if not env_file:
        return env
    dotenv_path = settings.base_dir / env_file
    if dotenv_path.is_file():
        env.update({k: v for k, v in dotenv_values(dotenv_path).items() if v is not None})
    else:
        logger.debug("env file {} not found", dotenv_path)
    return env


def expand(value: str, env: dict[str, str]) -> str:
    """Substitute $VAR and ${VAR}. Unknown names are left as written."""
    return _ENV_REF.sub(lambda m: env.get(m.group(1) or m.group(2), m.group(0)), value)


def _text(defaults: dict, name: str) -> str | None:
    value = defaults.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{name}' must be a string, got {type(value).__name__}")
    return value


def _header_value(key: str, value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str | int | float):
        return str(value)
    raise ConfigError(f"Header '{key}' must have a plain value, got {type(value).__name__}")


def _config_headers(defaults: dict, env: dict[str, str]) -> list[Header]:
    raw = defaults.get("headers") or {}
    if not isinstance(raw, dict):
        raise ConfigError("'headers' must be a mapping of name to value")
    return [Header(str(k), expand(_header_value(str(k), v), env)) for k, v in raw.items()]


def parse_header(spec: str) -> Header | None:
    """Parse 'Name: Value'. Returns None when there is no colon."""
    name, sep, value = spec.partition(":")
    if not sep:
        return None
    return Header(name.strip(), value.strip())


def build_form(
    defaults: dict,
    env: dict[str, str],
    url: str | None = None,
    method: str | None = None,
    body: str | None = None,
    content_type: str | None = None,
    header_specs: tuple[str, ...] | list[str] = (),
) -> dict:
    """Merge config defaults and flags into the initial working form.

    Flags win over config values; flag headers come after config headers.
    Returns keyword arguments for ``model.new_state``.
    """
    method = (method or _text(defaults, "method") or "GET").upper()
    if method not in HTTP_METHODS:
        raise ConfigError(
            f"Unsupported method '{method}'. Choose from: {', '.join(HTTP_METHODS)}",
        )

    content_type = content_type or _text(defaults, "content_type") or CONTENT_TYPES[0]
    if content_type not in CONTENT_TYPES:
        raise ConfigError(
            f"Unsupported content type '{content_type}'. "
            f"Choose from: {', '.join(CONTENT_TYPES)}",
        )

    if url is None:
        url = expand(_text(defaults, "url") or "", env)
    if body is None:
        body = expand(_text(defaults, "body") or "", env)

    headers = _config_headers(defaults, env)
    for spec in header_specs:
        header = parse_header(spec)
        if header is None:
            raise ConfigError(f"Invalid header '{spec}'. Use 'Name: Value'.")
        headers.append(header)

    return {
        "url": url,
        "body": body,
        "method": method,
        "content_type": content_type,
        "headers": headers,
    }
