# tests/test_logging.py
import json
import logging

from receipt_points.config import Settings
from receipt_points.logging import (
	ReceiptJSONFormatter,
	ReceiptTextFormatter,
	build_handler,
)


def _record(msg="scored receipt", **extra):
	record = logging.LogRecord("receipt_points.service", logging.INFO, __file__, 1, msg, None, None)
	for k, v in extra.items():
		setattr(record, k, v)
	return record


def test_json_formatter_carries_receipt_fields():
	fmt = ReceiptJSONFormatter("receipt-points-test")
	out = json.loads(fmt.format(_record(receipt_id="abc-123", points=25)))

	assert out["level"] == "info"
	assert out["service"] == "receipt-points-test"
	assert out["logger"] == "receipt_points.service"
	assert out["message"] == "scored receipt"
	assert out["receipt_id"] == "abc-123"
	assert out["points"] == 25
	assert out["rule"] is None
	assert "levelname" not in out
	assert "trace_id" not in out


def test_json_formatter_emits_rule_for_parse_misses():
	fmt = ReceiptJSONFormatter("receipt-points")
	out = json.loads(fmt.format(_record("unparseable total", rule="round_dollar_total")))
	assert out["rule"] == "round_dollar_total"
	assert out["receipt_id"] is None


def test_text_formatter_appends_present_fields():
	fmt = ReceiptTextFormatter()
	assert fmt.format(_record(receipt_id="abc", points=3)) == (
		"INFO receipt_points.service: scored receipt [receipt_id=abc points=3]"
	)
	assert fmt.format(_record("ready")) == "INFO receipt_points.service: ready"


def test_handler_follows_settings():
	json_handler = build_handler(Settings(service="svc", json_logs=True))
	assert isinstance(json_handler.formatter, ReceiptJSONFormatter)
	assert json_handler.formatter.service == "svc"
	assert isinstance(build_handler(Settings()).formatter, ReceiptTextFormatter)
