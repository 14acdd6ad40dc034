"""Telemetry services built on the standard ``logging`` package.

This module exposes a narrow surface area for the rest of the editor:

``configure(...)`` -- override or preset the logging configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager timing a block of work
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, MutableMapping, Optional

from rich.console import Console
from rich.logging import RichHandler

ENV_PREFIX = "FEMTO_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "femto")

_LOGGER_CACHE: MutableMapping[str, logging.Logger] = {}
_ACTIVE_CONFIG: Optional["TelemetryConfig"] = None


@dataclass(slots=True)
class TelemetryConfig:
    """Where and how loudly the editor logs."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json_format: bool = False
    log_file: str = ""


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


def _resolve_level() -> str:
    return (_env("LOG_LEVEL") or "INFO").upper()


class JsonLineFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": round(record.created, 3),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        data = getattr(record, "femto_data", None)
        if data:
            payload["data"] = {k: _stringify(v) for k, v in data.items()}
        return json.dumps(payload)


def _build_preset_config(preset: str) -> TelemetryConfig:
    key = preset.lower()

    if key == "development":
        return TelemetryConfig(level="DEBUG", console=True, colored=True)
    if key == "editor":
        # The terminal belongs to the editor while it runs.
        return TelemetryConfig(
            level=_resolve_level(),
            console=False,
            colored=False,
            json_format=_env_flag("LOG_JSON", False),
            log_file=_env("LOG_FILE") or "",
        )
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_default_config() -> TelemetryConfig:
    return TelemetryConfig(
        level=_resolve_level(),
        console=not _env_flag("DISABLE_CONSOLE", False),
        colored=not _env_flag("NO_COLOR", False),
        json_format=_env_flag("LOG_JSON", False),
        log_file=_env("LOG_FILE") or "",
    )


def _build_handlers(config: TelemetryConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    plain = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    if config.console:
        if config.colored and not config.json_format:
            handlers.append(
                RichHandler(
                    console=Console(stderr=True),
                    show_path=False,
                    rich_tracebacks=True,
                )
            )
        else:
            stream = logging.StreamHandler(sys.stderr)
            stream.setFormatter(JsonLineFormatter() if config.json_format else plain)
            handlers.append(stream)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(JsonLineFormatter() if config.json_format else plain)
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())
    return handlers


def _apply(config: TelemetryConfig) -> None:
    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(config):
        root.addHandler(handler)
    root.setLevel(config.level)
    root.propagate = False


def configure(
    *, config: Optional[TelemetryConfig] = None, preset: Optional[str] = None
) -> TelemetryConfig:
    """Override the active logging configuration.

    Parameters
    ----------
    config:
        Explicit ``TelemetryConfig`` instance to adopt.
    preset:
        Named preset (``"development"`` or ``"editor"``). ``config`` and
        ``preset`` are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()
    _apply(config)
    return config


def active_config() -> TelemetryConfig:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        configure()
    assert _ACTIVE_CONFIG is not None
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a cached logger living under the editor's logger tree."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if not logger_name.startswith(DEFAULT_LOGGER_NAME):
        logger_name = f"{DEFAULT_LOGGER_NAME}.{logger_name}"
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = logging.getLogger(logger_name)
    return _LOGGER_CACHE[logger_name]


def _resolve_level_number(level: Any) -> int:
    if isinstance(level, int):
        return level
    name = str(level).upper()
    if name == "WARN":
        name = "WARNING"
    number = logging.getLevelName(name)
    if not isinstance(number, int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return number


def record_event(
    name: str,
    *,
    level: str | int = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` log line."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    log.log(
        _resolve_level_number(level),
        "event::%s %s",
        name,
        _format_pairs(payload),
        extra={"femto_data": payload},
    )


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for optional metadata updates."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started) * 1000.0

    def _emit(
        self, level: str, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.log(
            _resolve_level_number(level),
            "%s %s",
            message,
            _format_pairs(payload),
            extra={"femto_data": payload},
        )

    def finish(self) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self._emit("debug", "span::end", {"elapsed_ms": f"{self.elapsed_ms():.3f}"})

    def fail(self, reason: str) -> None:
        self._emit("error", "span::fail", {"reason": reason})

    def cancel(self, reason: str | None = None) -> None:
        extra = {"reason": reason} if reason else None
        self._emit("warning", "span::cancel", extra)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a code block and log its outcome.

    Parameters
    ----------
    name:
        Operation name, e.g. ``"buffer::insert_char"``.
    logger_name:
        Target logger; defaults to the editor logger.
    component:
        If ``True`` use the same name as the span; if a string, use it as the
        component identifier attached to every line.
    metadata:
        Optional key/value pairs attached to the emitted lines.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata={k: _stringify(v) for k, v in (metadata or {}).items()},
    )
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    else:
        handle.finish()


# Initialize the module-level logger once the config is ready.
configure()
logger = get_logger()

__all__ = [
    "SpanHandle",
    "TelemetryConfig",
    "active_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
