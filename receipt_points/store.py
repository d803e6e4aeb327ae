from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from typing import Dict, Optional, Protocol


@dataclass(frozen=True)
class ScoredReceipt:
	id: str
	points: int


class PointsStore(Protocol):
	def record(self, points: int) -> str: ...
	def lookup(self, receipt_id: str) -> Optional[int]: ...
	def __len__(self) -> int: ...


class InMemoryPointsStore:
	"""Process-lifetime registry of scored receipts, keyed by a UUID4 string.

	Entries are never updated or removed. Unknown ids yield None rather than
	raising.
	"""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self._receipts: Dict[str, ScoredReceipt] = {}

	def record(self, points: int) -> str:
		with self._lock:
			receipt_id = str(uuid.uuid4())
			while receipt_id in self._receipts:
				receipt_id = str(uuid.uuid4())
			self._receipts[receipt_id] = ScoredReceipt(id=receipt_id, points=points)
		return receipt_id

	def get(self, receipt_id: str) -> Optional[ScoredReceipt]:
		with self._lock:
			return self._receipts.get(receipt_id)

	def lookup(self, receipt_id: str) -> Optional[int]:
		scored = self.get(receipt_id)
		return scored.points if scored is not None else None

	def __len__(self) -> int:
		with self._lock:
			return len(self._receipts)
