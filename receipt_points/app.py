from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from .config import Settings, load_settings
from .logging import configure_logging
from .service import ReceiptService
from .store import InMemoryPointsStore
from .transport.rest import build_router, install_error_handlers
from .version import get_version_info, package_version

log = logging.getLogger(__name__)


def build_tracer_provider(settings: Settings) -> Optional[TracerProvider]:
	"""OTLP-exporting provider tagged with this build, or None when no endpoint is set."""
	if not settings.otlp_endpoint:
		return None

	resource = Resource.create(
		{"service.name": settings.service, "service.version": package_version()}
	)
	provider = TracerProvider(resource=resource)
	provider.add_span_processor(
		BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint, insecure=True))
	)
	return provider


def setup_tracing(app: FastAPI, settings: Settings) -> None:
	provider = build_tracer_provider(settings)
	if provider is None:
		log.info("tracing disabled (no OTLP_ENDPOINT)")
		return

	trace.set_tracer_provider(provider)
	# scoring spans nest under the request span opened by the instrumentor
	FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
	log.info("tracing enabled", extra={"otlp_endpoint": settings.otlp_endpoint})


def create_app(settings: Settings | None = None) -> FastAPI:
	settings = settings or load_settings()

	store = InMemoryPointsStore()
	svc = ReceiptService(store)

	app = FastAPI(title=settings.service, version=package_version())
	app.state.settings = settings
	app.state.service = svc
	install_error_handlers(app)
	app.include_router(build_router(settings, svc))
	return app


def serve(settings: Settings, host: str, port: int) -> None:
	log.info(
		"Starting server",
		extra={"service": settings.service, "host": host, "port": port, **get_version_info()},
	)

	app = create_app(settings)
	setup_tracing(app, settings)

	uvicorn.run(app, host=host, port=port, log_config=None)


def main() -> None:
	settings = load_settings()
	configure_logging(settings)

	parser = argparse.ArgumentParser(
		prog="receipt-points",
		description="Receipt loyalty points HTTP service"
	)
	parser.add_argument(
		"--host",
		default=settings.host,
		help=f"listen address (default: {settings.host})"
	)
	parser.add_argument(
		"--port",
		type=int,
		default=settings.port,
		help=f"HTTP port (default: {settings.port})"
	)
	args = parser.parse_args()

	try:
		serve(settings, host=args.host, port=args.port)
	except Exception as e:
		log.error("Server failed to start", extra={"error": str(e)})
		sys.exit(1)


if __name__ == "__main__":
	main()
