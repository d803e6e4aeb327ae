from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

SERVICE_NAME = "receipt-points"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
	service: str = SERVICE_NAME
	log_level: str = "INFO"
	json_logs: bool = False
	otlp_endpoint: Optional[str] = None
	host: str = "0.0.0.0"
	port: int = 8080


def _optional(environ: Mapping[str, str], name: str) -> Optional[str]:
	raw = environ.get(name, "").strip()
	return raw or None


def _log_level(environ: Mapping[str, str]) -> str:
	raw = environ.get("LOG_LEVEL", "INFO").strip().upper()
	if raw not in LOG_LEVELS:
		raise ValueError(f"env var 'LOG_LEVEL'={raw!r} not one of {', '.join(LOG_LEVELS)}")
	return raw


def _port(environ: Mapping[str, str]) -> int:
	raw = environ.get("PORT")
	if raw is None:
		return Settings.port
	try:
		port = int(raw)
	except ValueError as e:
		raise ValueError(f"env var 'PORT'={raw!r} is not an integer") from e
	if not 0 < port < 65536:
		raise ValueError(f"env var 'PORT'={port} out of range")
	return port


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
	environ = os.environ if environ is None else environ

	otlp_endpoint = _optional(environ, "OTLP_ENDPOINT")
	loki_url = _optional(environ, "LOKI_URL")  # only switches logs to json; shipping is external

	return Settings(
		log_level=_log_level(environ),
		json_logs=bool(otlp_endpoint or loki_url),
		otlp_endpoint=otlp_endpoint,
		host=_optional(environ, "HOST") or Settings.host,
		port=_port(environ),
	)
