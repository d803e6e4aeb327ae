from __future__ import annotations

import logging
from typing import Optional

from opentelemetry import trace

from .schemas import Receipt
from .scoring import breakdown
from .store import PointsStore

log = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class ReceiptService:
	def __init__(self, store: PointsStore) -> None:
		self.store = store

	def process(self, receipt: Receipt) -> str:
		with tracer.start_as_current_span("service.process") as span:
			span.set_attribute("items.count", len(receipt.items))

			results = breakdown(receipt)
			points = sum(r.points for r in results)
			receipt_id = self.store.record(points)

			span.set_attribute("receipt.id", receipt_id)
			span.set_attribute("points", points)

		log.info(
			"scored receipt",
			extra={
				"receipt_id": receipt_id,
				"points": points,
				"rules": {r.rule: r.points for r in results},
			},
		)
		return receipt_id

	def points(self, receipt_id: str) -> Optional[int]:
		with tracer.start_as_current_span("service.points") as span:
			span.set_attribute("receipt.id", receipt_id)
			points = self.store.lookup(receipt_id)
			span.set_attribute("hit", points is not None)

		if points is None:
			log.info("receipt not found", extra={"receipt_id": receipt_id})
		return points

	def count(self) -> int:
		return len(self.store)
