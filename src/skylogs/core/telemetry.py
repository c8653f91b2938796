# ---------------------------------------------------------------------------
# File: telemetry.py
# Description:
#   Telemetry collector for skylogs.
#
#   Provides a small, stable facade for emitting:
#     - events
#     - counters
#     - timers
#
#   Telemetry is decoupled from any backend implementation. Backends are
#   implemented as "sinks". Items are buffered by an AsyncChannel and only
#   delivered to the sink when flush() is called, on a background worker.
#
# Notes:
#   - Telemetry is optional and safe to call even when disabled.
#   - flush() returns immediately. It gives no completion signal; use
#     wait_for_delivery(timeout) for a bounded, best-effort wait.
#   - There is no global instance. Build one with create_telemetry() and
#     hand it to whoever needs it.
#
# ---------------------------------------------------------------------------
# Revision History
# ---------------------------------------------------------------------------
# Date			Author						Change
# ---------------------------------------------------------------------------
# 10/17/2026	skylogs maintainers			Initial coding / release
# 10/17/2026	skylogs maintainers			Add AsyncChannel + JsonlSink
# ---------------------------------------------------------------------------

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from .config import cfg_first


DEFAULT_INSTRUMENTATION_KEY = "45b1a14d-6ac9-40df-bfd4-95327345f5ab"

_log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Telemetry data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TelemetryEvent:
	name: str
	timestamp: float
	attrs: Dict[str, Any]
	instrumentation_key: str = ""


@dataclass(frozen=True, slots=True)
class TelemetryMetric:
	name: str
	value: float
	attrs: Dict[str, Any]
	instrumentation_key: str = ""


TelemetryItem = Union[TelemetryEvent, TelemetryMetric]


# ---------------------------------------------------------------------------
# Sink protocol
# ---------------------------------------------------------------------------

class TelemetrySink(Protocol):
	def emit_event(self, event: TelemetryEvent) -> None: ...
	def emit_metric(self, metric: TelemetryMetric) -> None: ...


# ---------------------------------------------------------------------------
# Sink implementations
# ---------------------------------------------------------------------------

class NullSink:
	"""
	No-op telemetry sink.
	Used when telemetry is disabled.
	"""

	def emit_event(self, event: TelemetryEvent) -> None:
		return

	def emit_metric(self, metric: TelemetryMetric) -> None:
		return


class LogSink:
	"""
	Telemetry sink that emits events and metrics via Python logging.
	"""

	def __init__(self, logger: logging.Logger) -> None:
		self._log = logger

	def emit_event(self, event: TelemetryEvent) -> None:
		self._log.info(
			"telemetry.event name=%s attrs=%s",
			event.name,
			event.attrs,
		)

	def emit_metric(self, metric: TelemetryMetric) -> None:
		self._log.info(
			"telemetry.metric name=%s value=%s attrs=%s",
			metric.name,
			metric.value,
			metric.attrs,
		)


class JsonlSink:
	"""
	Telemetry sink that appends one JSON object per item to a file.
	"""

	def __init__(self, path: Union[str, Path]) -> None:
		self.path = Path(path)
		self.path.parent.mkdir(parents=True, exist_ok=True)
		self._fh = self.path.open("a", encoding="utf-8")
		self._lock = threading.Lock()

	def emit_event(self, event: TelemetryEvent) -> None:
		self._write("event", asdict(event))

	def emit_metric(self, metric: TelemetryMetric) -> None:
		self._write("metric", asdict(metric))

	def close(self) -> None:
		with self._lock:
			if not self._fh.closed:
				self._fh.close()

	def _write(self, kind: str, payload: Dict[str, Any]) -> None:
		line = json.dumps({"type": kind, **payload}, separators=(",", ":"), default=str)
		with self._lock:
			self._fh.write(line + "\n")
			self._fh.flush()


# ---------------------------------------------------------------------------
# Telemetry test sink
# ---------------------------------------------------------------------------

class MemorySink:
	"""
	In-memory telemetry sink for testing.

	Stores emitted events and metrics for inspection.
	"""

	def __init__(self) -> None:
		self.events: list[TelemetryEvent] = []
		self.metrics: list[TelemetryMetric] = []

	def emit_event(self, event: TelemetryEvent) -> None:
		self.events.append(event)

	def emit_metric(self, metric: TelemetryMetric) -> None:
		self.metrics.append(metric)

	def clear(self) -> None:
		self.events.clear()
		self.metrics.clear()


# ---------------------------------------------------------------------------
# Delivery channel
# ---------------------------------------------------------------------------

class AsyncChannel:
	"""
	Buffers telemetry items and delivers them to a sink on a worker thread.

	Nothing reaches the sink until flush() is called. Each flush() starts a
	daemon worker for the current batch and returns straight away.
	"""

	def __init__(self, sink: TelemetrySink) -> None:
		self.sink = sink
		self._pending: list[TelemetryItem] = []
		self._lock = threading.Lock()
		self._worker: Optional[threading.Thread] = None
		self._closed = False

	@property
	def pending(self) -> int:
		with self._lock:
			return len(self._pending)

	def submit(self, item: TelemetryItem) -> None:
		with self._lock:
			if self._closed:
				return
			self._pending.append(item)

	def flush(self) -> None:
		with self._lock:
			if not self._pending:
				return
			batch, self._pending = self._pending, []
			worker = threading.Thread(
				target=self._deliver,
				args=(batch, self._worker),
				name="skylogs-telemetry",
				daemon=True,
			)
			worker.start()
			self._worker = worker

	def wait(self, timeout: Optional[float] = None) -> bool:
		"""
		Wait for the most recent flush to finish.

		Returns:
			True if nothing is still being delivered when the wait ends.
		"""
		with self._lock:
			worker = self._worker
		if worker is None:
			return True
		worker.join(timeout)
		return not worker.is_alive()

	def close(self, timeout: Optional[float] = None) -> bool:
		self.flush()
		with self._lock:
			self._closed = True
		done = self.wait(timeout)

		closer = getattr(self.sink, "close", None)
		if callable(closer) and done:
			closer()
		return done

	def _deliver(self, batch: list[TelemetryItem], previous: Optional[threading.Thread]) -> None:
		# Batches go out in flush order
		if previous is not None:
			previous.join()

		for item in batch:
			try:
				if isinstance(item, TelemetryEvent):
					self.sink.emit_event(item)
				else:
					self.sink.emit_metric(item)
			except Exception:
				_log.exception("Telemetry delivery failed for %r", item.name)


# ---------------------------------------------------------------------------
# Telemetry facade
# ---------------------------------------------------------------------------

class Telemetry:
	"""
	Telemetry facade used throughout the application.

	All methods are safe to call even when telemetry is disabled.
	"""

	def __init__(
		self,
		enabled: bool,
		sink: TelemetrySink,
		instrumentation_key: str = "",
		channel: Optional[AsyncChannel] = None,
	) -> None:
		self._enabled = enabled
		self._sink = sink
		self._channel = channel or AsyncChannel(sink)
		self.instrumentation_key = instrumentation_key

	@property
	def enabled(self) -> bool:
		return self._enabled

	def event(self, name: str, attrs: Optional[Dict[str, Any]] = None) -> None:
		if not self._enabled:
			return

		event = TelemetryEvent(
			name=name,
			timestamp=time.time(),
			attrs=attrs or {},
			instrumentation_key=self.instrumentation_key,
		)
		self._channel.submit(event)

	def counter(
		self,
		name: str,
		value: int = 1,
		attrs: Optional[Dict[str, Any]] = None,
	) -> None:
		if not self._enabled:
			return

		metric = TelemetryMetric(
			name=name,
			value=float(value),
			attrs=attrs or {},
			instrumentation_key=self.instrumentation_key,
		)
		self._channel.submit(metric)

	track_event = event
	track_metric = counter

	def timer(self, name: str, attrs: Optional[Dict[str, Any]] = None):
		return _TelemetryTimer(self, name, attrs or {})

	def flush(self) -> None:
		"""
		Start delivering buffered items. Does not wait for delivery.
		"""
		if not self._enabled:
			return
		self._channel.flush()

	def wait_for_delivery(self, timeout: Optional[float] = None) -> bool:
		"""
		Bounded wait for the last flush(). Best-effort only.
		"""
		return self._channel.wait(timeout)

	def close(self, timeout: Optional[float] = None) -> bool:
		return self._channel.close(timeout)

	def __enter__(self) -> "Telemetry":
		return self

	def __exit__(self, exc_type, exc, tb) -> None:
		self.close(timeout=1.0)


class _TelemetryTimer:
	"""
	Context manager for timing operations.
	"""

	def __init__(
		self,
		telemetry: Telemetry,
		name: str,
		attrs: Dict[str, Any],
	) -> None:
		self._telemetry = telemetry
		self._name = name
		self._attrs = attrs
		self._start: float = 0.0

	def __enter__(self):
		self._start = time.perf_counter()
		return self

	def __exit__(self, exc_type, exc, tb):
		elapsed_ms = (time.perf_counter() - self._start) * 1000.0
		self._telemetry.counter(
			self._name,
			value=int(elapsed_ms),
			attrs=self._attrs,
		)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def create_telemetry(cfg: Any | None = None, logger: Optional[logging.Logger] = None) -> Telemetry:
	"""
	Build a Telemetry instance from configuration.

	Expected cfg keys (first match wins):
		telemetry.enabled / telemetry_enabled: bool (default True)
		telemetry.sink / telemetry_sink: "null" | "log" | "jsonl" (default "log")
		telemetry.path / telemetry_path: output file for "jsonl"
		telemetry.instrumentation_key / telemetry_instrumentation_key
	"""
	enabled = bool(cfg_first(cfg, ("telemetry.enabled", "telemetry_enabled"), True))
	sink_name = str(cfg_first(cfg, ("telemetry.sink", "telemetry_sink"), "log")).strip().lower()
	ikey = str(cfg_first(
		cfg,
		("telemetry.instrumentation_key", "telemetry_instrumentation_key"),
		DEFAULT_INSTRUMENTATION_KEY,
	))

	if not enabled:
		return Telemetry(False, NullSink(), instrumentation_key=ikey)

	sink: TelemetrySink
	if sink_name == "log" and logger is not None:
		sink = LogSink(logger)
	elif sink_name == "jsonl":
		path = cfg_first(cfg, ("telemetry.path", "telemetry_path"), "telemetry.jsonl")
		sink = JsonlSink(path)
	else:
		sink = NullSink()

	return Telemetry(enabled=True, sink=sink, instrumentation_key=ikey)
