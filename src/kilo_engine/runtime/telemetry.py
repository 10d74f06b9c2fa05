"""Structured logging for the editor, built on telelog.

The editor paints the whole terminal itself, so nothing is written to the
console unless ``KILO_ENGINE_LOG_CONSOLE`` asks for it. Callers use four
entry points:

``configure(...)`` -- pick a preset or hand over a ready ``telelog.Config``
``get_logger(name)`` -- cached logger bound to the active configuration
``record_event(name, ...)`` -- one ``event::<name>`` record with key/value data
``span(name, ...)`` -- profile a block, optionally tracked as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "KILO_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "kilo_engine")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Logging knobs read from ``KILO_ENGINE_LOG_*`` variables."""

    level: str = "INFO"
    console: bool = False
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: int = 0

    @classmethod
    def from_env(cls) -> "LogSettings":
        try:
            buffer_size = int(_env("LOG_BUFFER_SIZE") or "2048")
        except ValueError:
            buffer_size = 2048
        return cls(
            level=(_env("LOG_LEVEL") or "INFO").upper(),
            console=_env_flag("LOG_CONSOLE"),
            colored=not _env_flag("NO_COLOR"),
            json=_env_flag("LOG_JSON"),
            log_file=_env("LOG_FILE") or "",
            buffer_size=buffer_size if _env_flag("LOG_BUFFERED") else 0,
        )


def _to_config(settings: LogSettings, *, profiling: bool = False) -> Any:
    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    if settings.json:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffer_size:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    if profiling:
        config.with_profiling(True)
    return config


def _development(settings: LogSettings, log_file: str) -> Any:
    return _to_config(
        LogSettings(level="DEBUG", console=True, log_file=log_file)
    )


def _production(settings: LogSettings, log_file: str) -> Any:
    return _to_config(
        LogSettings(
            level="INFO",
            log_file=log_file or "kilo_engine.log",
            buffer_size=settings.buffer_size or 2048,
        )
    )


def _performance(settings: LogSettings, log_file: str) -> Any:
    return _to_config(
        LogSettings(
            level="DEBUG",
            json=True,
            log_file=log_file or "kilo_engine-performance.log",
            buffer_size=settings.buffer_size or 2048,
        ),
        profiling=True,
    )


def _terminal(settings: LogSettings, log_file: str) -> Any:
    # stderr shares the screen with the raw-mode host; only files are safe
    return _to_config(
        LogSettings(level=settings.level, json=settings.json, log_file=log_file)
    )


_PRESETS: Dict[str, Callable[[LogSettings, str], Any]] = {
    "development": _development,
    "production": _production,
    "performance": _performance,
    "terminal": _terminal,
}
PRESETS = tuple(_PRESETS)


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    ``config`` adopts a prepared ``telelog.Config``; ``preset`` builds one
    from ``PRESETS``. The two are mutually exclusive. With neither, the
    configuration comes from the environment. ``log_file`` overrides
    ``KILO_ENGINE_LOG_FILE`` for presets.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    settings = LogSettings.from_env()
    if preset:
        builder = _PRESETS.get(preset.lower())
        if builder is None:
            raise ValueError(f"Unknown preset '{preset}'.")
        config = builder(settings, log_file or settings.log_file)
    elif config is None:
        config = _to_config(settings)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` called ``name``."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _to_config(LogSettings.from_env())
    logger_name = name or DEFAULT_LOGGER_NAME
    log = _LOGGER_CACHE.get(logger_name)
    if log is None:
        log = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = log
    return log


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("latin-1")
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    """Log ``message`` at ``level``, as key/value data when telelog supports it."""

    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects metadata reported if the block fails."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``.

    ``component=True`` also tracks the block as a component called ``name``;
    a string picks another component name. ``metadata`` is pushed as logger
    context until the block exits. An exception escaping the block is logged
    through ``SpanHandle.fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(log, name, component_name, dict(context))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


configure()
logger = get_logger()

__all__ = [
    "PRESETS",
    "LogSettings",
    "SpanHandle",
    "configure",
    "get_logger",
    "logger",
    "record_event",
    "span",
]
