"""OpenTelemetry tracing + structured logging for the namedex TUI.

``Telemetry`` pairs an OTel tracer with a logger adapter that stamps each
record with the active trace and span ids. Attribute writes never raise,
so a bad attribute value cannot take the browser down.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Generator, Mapping

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

LOGGER_NAME = "namedex.tui"

_NO_TRACE = "0" * 32
_NO_SPAN = "0" * 16


def _current_ids() -> tuple[str, str]:
    """Hex trace and span ids of the active span, zero-filled outside one."""
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return _NO_TRACE, _NO_SPAN
    return format(ctx.trace_id, "032x"), format(ctx.span_id, "016x")


def _attribute_value(value: object) -> object:
    # SortKey, FilterCategory etc. are exported by value
    if isinstance(value, Enum):
        return value.value
    return value


class SpanHandle:
    """What ``Telemetry.span()`` yields; setters ignore OTel errors."""

    def __init__(self, span: object) -> None:
        self._span = span

    def set_attribute(self, key: str, value: object) -> None:
        try:
            self._span.set_attribute(key, _attribute_value(value))  # type: ignore[attr-defined]
        except Exception:
            pass

    def set_attributes(self, attributes: Mapping[str, object]) -> None:
        for key, value in attributes.items():
            self.set_attribute(key, value)

    def record_exception(self, exc: BaseException) -> None:
        try:
            self._span.record_exception(exc)  # type: ignore[attr-defined]
        except Exception:
            pass


class _TraceLogAdapter(logging.LoggerAdapter):
    """Adds ``trace_id``/``span_id`` of the current span to every record."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:  # type: ignore[override]
        trace_id, span_id = _current_ids()
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("trace_id", trace_id)
        extra.setdefault("span_id", span_id)
        return msg, kwargs


class Telemetry:
    """Tracer plus trace-aware logger shared by the app and its widgets.

    Usage::

        with telemetry.span("tui.dispatch", command="SetQuery") as span:
            span.set_attribute("result.total", 20)
            telemetry.log.info("query applied")
    """

    def __init__(self, provider: TracerProvider) -> None:
        self.provider = provider
        self._tracer = provider.get_tracer(LOGGER_NAME)
        self.log: _TraceLogAdapter = _TraceLogAdapter(logging.getLogger(LOGGER_NAME), {})

    @contextmanager
    def span(self, name: str, **attributes: object) -> Generator[SpanHandle, None, None]:
        """Open a span named ``name`` with optional initial attributes.

        An exception escaping the block is recorded on the span and re-raised.
        """
        with self._tracer.start_as_current_span(
            name, record_exception=False
        ) as otel_span:
            handle = SpanHandle(otel_span)
            handle.set_attributes(attributes)
            try:
                yield handle
            except Exception as exc:
                handle.record_exception(exc)
                raise

    @classmethod
    def for_testing(cls) -> tuple["Telemetry", InMemorySpanExporter]:
        """Telemetry whose finished spans land in an in-memory exporter."""
        exporter = InMemorySpanExporter()
        provider = TracerProvider()
        provider.add_span_processor(SimpleSpanProcessor(exporter))
        return cls(provider), exporter

    @classmethod
    def noop(cls) -> "Telemetry":
        """Telemetry with no span processors; spans are dropped."""
        return cls(TracerProvider())


# NamedexApp.__init__ installs its instance here so widgets can log
# without holding a reference to the App.
_active: Telemetry | None = None


def get_telemetry() -> Telemetry:
    """Return the installed Telemetry, creating a noop one on first use."""
    global _active
    if _active is None:
        _active = Telemetry.noop()
    return _active


def set_telemetry(tel: Telemetry) -> None:
    global _active
    _active = tel


class JsonLinesFormatter(logging.Formatter):
    """Formats a record as one JSON object: ts, level, logger, trace, span, msg."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "trace": getattr(record, "trace_id", _NO_TRACE),
            "span": getattr(record, "span_id", _NO_SPAN),
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_file_logging(log_dir: Path | str = "logs") -> Path:
    """Write every ``namedex`` logger to ``<log_dir>/tui-YYYYMMDD.log``.

    Called once from run_tui(); tests leave logging alone. A second call
    reuses the existing handler.

    Returns:
        Path of today's log file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"tui-{datetime.now():%Y%m%d}.log"

    logger = logging.getLogger("namedex")
    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        return log_path

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(JsonLinesFormatter())
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    return log_path
