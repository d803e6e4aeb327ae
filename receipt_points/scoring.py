"""Loyalty points for a receipt.

Every rule is a plain function ``receipt -> int`` and is evaluated on its own.
A rule that cannot parse the field it depends on contributes 0; it never
raises, so one bad field does not cost the points the other rules award.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Callable, Optional

from .schemas import Item, Receipt

log = logging.getLogger(__name__)

# -----------------------------
# Weights
# -----------------------------
ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
ITEM_PAIR_POINTS = 5
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10

DESCRIPTION_LENGTH_MULTIPLE = 3
DESCRIPTION_PRICE_MULTIPLIER = Decimal("0.2")

AFTERNOON_START = time(14, 0)
AFTERNOON_END = time(16, 0)

_ALNUM_RE = re.compile(r"[A-Za-z0-9]")
# plain decimals only: no exponent, no surrounding whitespace, no NaN or Infinity
_AMOUNT_RE = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_TIME_RE = re.compile(r"[0-9]{2}:[0-9]{2}")


@dataclass(frozen=True)
class RuleResult:
	rule: str
	points: int


# -----------------------------
# Parsing helpers
# -----------------------------
def parse_amount(value: str) -> Optional[Decimal]:
	"""Parse a currency string such as ``"35.35"``; None if it is not a plain decimal."""
	if not _AMOUNT_RE.fullmatch(value):
		return None
	try:
		return Decimal(value)
	except InvalidOperation:
		return None


def parse_purchase_date(value: str) -> Optional[date]:
	if not _DATE_RE.fullmatch(value):
		return None
	try:
		return datetime.strptime(value, "%Y-%m-%d").date()
	except ValueError:
		return None


def parse_purchase_time(value: str) -> Optional[time]:
	if not _TIME_RE.fullmatch(value):
		return None
	try:
		return datetime.strptime(value, "%H:%M").time()
	except ValueError:
		return None


def to_cents(amount: Decimal) -> int:
	return int((amount * 100).to_integral_value(rounding=ROUND_HALF_EVEN))


# -----------------------------
# Rules
# -----------------------------
def retailer_name(receipt: Receipt) -> int:
	return len(_ALNUM_RE.findall(receipt.retailer))


def round_dollar_total(receipt: Receipt) -> int:
	total = parse_amount(receipt.total)
	if total is None:
		log.debug("unparseable total", extra={"rule": "round_dollar_total"})
		return 0
	return ROUND_DOLLAR_POINTS if total == total.to_integral_value() else 0


def quarter_multiple_total(receipt: Receipt) -> int:
	total = parse_amount(receipt.total)
	if total is None:
		log.debug("unparseable total", extra={"rule": "quarter_multiple_total"})
		return 0
	return QUARTER_MULTIPLE_POINTS if to_cents(total) % 25 == 0 else 0


def item_pairs(receipt: Receipt) -> int:
	return (len(receipt.items) // 2) * ITEM_PAIR_POINTS


def item_description_points(item: Item) -> int:
	if len(item.short_description.strip()) % DESCRIPTION_LENGTH_MULTIPLE != 0:
		return 0
	price = parse_amount(item.price)
	if price is None:
		log.debug("unparseable item price", extra={"rule": "item_descriptions"})
		return 0
	# negative prices would otherwise pull the total below zero
	return max(0, math.ceil(price * DESCRIPTION_PRICE_MULTIPLIER))


def item_descriptions(receipt: Receipt) -> int:
	return sum(item_description_points(item) for item in receipt.items)


def odd_purchase_day(receipt: Receipt) -> int:
	purchased = parse_purchase_date(receipt.purchase_date)
	if purchased is None:
		log.debug("unparseable purchase date", extra={"rule": "odd_purchase_day"})
		return 0
	return ODD_DAY_POINTS if purchased.day % 2 == 1 else 0


def afternoon_purchase(receipt: Receipt) -> int:
	purchased = parse_purchase_time(receipt.purchase_time)
	if purchased is None:
		log.debug("unparseable purchase time", extra={"rule": "afternoon_purchase"})
		return 0
	return AFTERNOON_POINTS if AFTERNOON_START < purchased < AFTERNOON_END else 0


Rule = Callable[[Receipt], int]

RULES: tuple[tuple[str, Rule], ...] = (
	("retailer_name", retailer_name),
	("round_dollar_total", round_dollar_total),
	("quarter_multiple_total", quarter_multiple_total),
	("item_pairs", item_pairs),
	("item_descriptions", item_descriptions),
	("odd_purchase_day", odd_purchase_day),
	("afternoon_purchase", afternoon_purchase),
)


# -----------------------------
# Main entry
# -----------------------------
def breakdown(receipt: Receipt) -> list[RuleResult]:
	return [RuleResult(rule=name, points=rule(receipt)) for name, rule in RULES]


def score(receipt: Receipt) -> int:
	return sum(result.points for result in breakdown(receipt))
