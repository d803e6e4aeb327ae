# tests/test_rest.py
import uuid

TARGET = {
	"retailer": "Target",
	"purchaseDate": "2022-01-01",
	"purchaseTime": "13:01",
	"items": [
		{"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
		{"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
		{"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
		{"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
		{"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
	],
	"total": "35.35",
}


def test_health(client):
	resp = client.get("/health")
	assert resp.status_code == 200
	assert resp.json() == {"status": "ok", "service": "receipt-points", "receipts": 0}

	client.post("/receipts/process", json=TARGET)
	assert client.get("/health").json()["receipts"] == 1


def test_process_then_points(client):
	resp = client.post("/receipts/process", json=TARGET)
	assert resp.status_code == 200
	rid = resp.json()["id"]

	resp = client.get(f"/receipts/{rid}/points")
	assert resp.status_code == 200
	assert resp.json() == {"points": 28}


def test_unknown_id_is_404(client):
	rid = str(uuid.uuid4())
	resp = client.get(f"/receipts/{rid}/points")
	assert resp.status_code == 404
	assert resp.json() == {"message": f"Receipt with ID {rid} not found"}


def test_malformed_json_is_400(client):
	resp = client.post(
		"/receipts/process",
		content=b"{not json",
		headers={"Content-Type": "application/json"},
	)
	assert resp.status_code == 400
	assert resp.json() == {"message": "The receipt is invalid."}


def test_missing_field_is_400(client):
	body = {k: v for k, v in TARGET.items() if k != "retailer"}
	resp = client.post("/receipts/process", json=body)
	assert resp.status_code == 400


def test_unparseable_values_still_score(client):
	body = dict(TARGET, total="n/a", purchaseDate="soon", purchaseTime="later", items=[])
	resp = client.post("/receipts/process", json=body)
	assert resp.status_code == 200

	rid = resp.json()["id"]
	assert client.get(f"/receipts/{rid}/points").json() == {"points": 6}


def test_wrong_method(client):
	assert client.get("/receipts/process").status_code == 405


def test_apps_have_separate_stores(client, make_client):
	rid = client.post("/receipts/process", json=TARGET).json()["id"]
	other = make_client()
	assert other.get(f"/receipts/{rid}/points").status_code == 404


def test_out_of_range_total_still_returns_id(client):
	body = dict(TARGET, total="1e999999", items=[{"shortDescription": "abc", "price": "6e1000000"}])
	resp = client.post("/receipts/process", json=body)
	assert resp.status_code == 200

	rid = resp.json()["id"]
	assert client.get(f"/receipts/{rid}/points").json() == {"points": 6 + 6}
