import pytest
from fastapi.testclient import TestClient

from receipt_points.app import create_app
from receipt_points.config import Settings
from receipt_points.schemas import Item, Receipt


@pytest.fixture
def settings():
	return Settings()


@pytest.fixture
def make_client(settings):
	def _make():
		return TestClient(create_app(settings))

	return _make


@pytest.fixture
def client(make_client):
	return make_client()


@pytest.fixture
def make_receipt():
	def _make(
		retailer="Shop",
		purchase_date="2022-01-02",
		purchase_time="12:00",
		items=(),
		total="1.01",
	):
		return Receipt(
			retailer=retailer,
			purchaseDate=purchase_date,
			purchaseTime=purchase_time,
			items=[Item(shortDescription=d, price=p) for d, p in items],
			total=total,
		)

	return _make
