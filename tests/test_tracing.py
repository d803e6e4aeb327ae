# tests/test_tracing.py
from receipt_points.app import build_tracer_provider
from receipt_points.config import Settings


def test_no_endpoint_no_provider():
	assert build_tracer_provider(Settings()) is None


def test_provider_is_tagged_with_service():
	provider = build_tracer_provider(Settings(service="svc", otlp_endpoint="http://localhost:4317"))
	try:
		assert provider.resource.attributes["service.name"] == "svc"
		assert "service.version" in provider.resource.attributes
	finally:
		provider.shutdown()
