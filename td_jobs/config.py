"""Process-wide configuration and the on-configure listener registry."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Callable

import yaml
from dotenv import load_dotenv

from td_jobs.log import get_logger

log = get_logger(__name__)

DEFAULT_TIMEOUT: float = 30.0

ENV_KEYS: dict[str, str] = {
    "base_url": "TD_JOBS_BASE_URL",
    "application_secret": "TD_JOBS_APPLICATION_SECRET",
    "timeout": "TD_JOBS_TIMEOUT",
}


@dataclass
class Configuration:
    base_url: str | None = None
    application_secret: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    def copy(self) -> "Configuration":
        return replace(self)

    def update(self, **options: Any) -> None:
        known = {f.name for f in fields(self)}
        for key, value in options.items():
            if key not in known:
                raise TypeError(f"Unknown configuration option: {key}")
            setattr(self, key, value)
        self.timeout = float(self.timeout)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "Configuration":
        config = cls()
        config.update(**{k: v for k, v in data.items() if v is not None})
        return config

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> "Configuration":
        """Build a configuration from ``TD_JOBS_*`` variables (and a ``.env`` file)."""
        load_dotenv(dotenv_path)
        data: dict[str, Any] = {}
        for option, key in ENV_KEYS.items():
            value = get_env(key)
            if value:
                data[option] = value
        return cls.from_mapping(data)


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def load_configuration(path: str | Path) -> Configuration:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")

    # Accept both a flat document and one nested under a ``td_jobs`` key
    if isinstance(data.get("td_jobs"), dict):
        data = data["td_jobs"]

    return Configuration.from_mapping(data)


_configuration = Configuration()
_listeners: list[Callable[[], Any]] = []


def configuration() -> Configuration:
    """Return the live process-wide configuration."""
    return _configuration


def on_configure(callback: Callable[[], Any]) -> Callable[[], Any]:
    """Register ``callback`` to run, with no arguments, on every ``configure`` call."""
    _listeners.append(callback)
    return callback


def configure(fn: Callable[[Configuration], Any] | None = None, **options: Any) -> Configuration:
    """Apply configuration and re-run every registered listener in order.

    ``fn`` receives the mutable configuration object; keyword options are
    applied afterwards. Listeners read the configuration when they run, so
    calling this again rebinds every resource to the new values.
    """
    if fn is not None:
        fn(_configuration)
    if options:
        _configuration.update(**options)

    log.debug("Configured base_url=%s; running %d listener(s)", _configuration.base_url, len(_listeners))
    for listener in _listeners:
        listener()
    return _configuration


def configure_from_env(dotenv_path: str | Path | None = None) -> Configuration:
    loaded = Configuration.from_env(dotenv_path)
    return configure(_copy_from(loaded))


def configure_from_file(path: str | Path) -> Configuration:
    loaded = load_configuration(path)
    log.info("Loaded td_jobs configuration from %s", path)
    return configure(_copy_from(loaded))


def reset() -> None:
    """Restore default configuration values; registered listeners are kept."""
    _configuration.update(**{f.name: f.default for f in fields(Configuration)})


def _copy_from(source: Configuration) -> Callable[[Configuration], None]:
    def apply(config: Configuration) -> None:
        config.update(**{f.name: getattr(source, f.name) for f in fields(source)})

    return apply
