from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	short_description: str = Field(alias="shortDescription")
	price: str  # decimal string, parsed by the scoring rules


class Receipt(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	retailer: str
	purchase_date: str = Field(alias="purchaseDate")  # YYYY-MM-DD
	purchase_time: str = Field(alias="purchaseTime")  # HH:MM, 24h
	items: list[Item] = Field(default_factory=list)
	total: str


class ProcessResponse(BaseModel):
	id: str


class PointsResponse(BaseModel):
	points: int


class ErrorResponse(BaseModel):
	message: str


class Health(BaseModel):
	status: str = "ok"
	service: str
	receipts: int
