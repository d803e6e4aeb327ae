from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from pythonjsonlogger import jsonlogger

if TYPE_CHECKING:
	from .config import Settings

# fields the scoring path attaches through ``extra=``; always present in json lines
RECEIPT_FIELDS = ("receipt_id", "rule", "points")

_JSON_FORMAT = "%(timestamp)s %(level)s %(service)s %(logger)s %(message)s"


class ReceiptJSONFormatter(jsonlogger.JsonFormatter):
	"""One JSON object per line, shaped for Loki.

	``receipt_id``, ``rule`` and ``points`` are emitted on every line (null when
	the record does not carry them) so every line has the same keys. The
	active span's ids are added when tracing is on.
	"""

	def __init__(self, service: str) -> None:
		super().__init__(_JSON_FORMAT)
		self.service = service

	def add_fields(
		self,
		log_record: dict[str, Any],
		record: logging.LogRecord,
		message_dict: dict[str, Any],
	):
		super().add_fields(log_record, record, message_dict)

		log_record["timestamp"] = datetime.fromtimestamp(
			record.created, timezone.utc
		).isoformat(timespec="milliseconds")
		log_record["level"] = record.levelname.lower()
		log_record["service"] = self.service
		log_record["logger"] = record.name
		for field in RECEIPT_FIELDS:
			log_record.setdefault(field, None)

		span = trace.get_current_span().get_span_context()
		if span.is_valid:
			log_record["trace_id"] = f"{span.trace_id:032x}"
			log_record["span_id"] = f"{span.span_id:016x}"

		return log_record


class ReceiptTextFormatter(logging.Formatter):
	"""Plain lines for local runs; appends receipt fields when a record has them."""

	def __init__(self) -> None:
		super().__init__(fmt="%(levelname)s %(name)s: %(message)s")

	def format(self, record: logging.LogRecord) -> str:
		line = super().format(record)
		tags = [
			f"{field}={getattr(record, field)}"
			for field in RECEIPT_FIELDS
			if getattr(record, field, None) is not None
		]
		return f"{line} [{' '.join(tags)}]" if tags else line


def build_handler(settings: Settings) -> logging.Handler:
	handler = logging.StreamHandler(sys.stdout)
	if settings.json_logs:
		handler.setFormatter(ReceiptJSONFormatter(settings.service))
	else:
		handler.setFormatter(ReceiptTextFormatter())
	return handler


def configure_logging(settings: Settings) -> logging.Logger:
	root = logging.getLogger()
	if not root.handlers:
		handler = build_handler(settings)
		root.setLevel(settings.log_level)
		root.addHandler(handler)

		# uvicorn installs its own handlers unless routed through ours
		for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
			ul = logging.getLogger(name)
			ul.handlers = [handler]
			ul.propagate = False

	return logging.getLogger(settings.service)
