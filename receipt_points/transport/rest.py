from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..config import Settings
from ..schemas import ErrorResponse, Health, PointsResponse, ProcessResponse, Receipt
from ..service import ReceiptService

log = logging.getLogger(__name__)


def http_error(message: str, status: int) -> JSONResponse:
	return JSONResponse(
		status_code=status,
		content=ErrorResponse(message=message).model_dump(),
	)


async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
	log.info(
		"rejected invalid request",
		extra={"path": request.url.path, "errors": len(exc.errors())},
	)
	return http_error("The receipt is invalid.", 400)


def install_error_handlers(app: FastAPI) -> None:
	app.add_exception_handler(RequestValidationError, invalid_request)


def build_router(settings: Settings, svc: ReceiptService) -> APIRouter:
	router = APIRouter()

	@router.get("/health", response_model=Health)
	async def health() -> Health:
		return Health(service=settings.service, receipts=svc.count())

	@router.post(
		"/receipts/process",
		response_model=ProcessResponse,
		responses={400: {"model": ErrorResponse}},
	)
	def process(receipt: Receipt):
		try:
			return ProcessResponse(id=svc.process(receipt))
		except Exception:
			log.exception("process failed")
			return http_error("internal server error", 500)

	@router.get(
		"/receipts/{receipt_id}/points",
		response_model=PointsResponse,
		responses={404: {"model": ErrorResponse}},
	)
	def points(receipt_id: str):
		try:
			value = svc.points(receipt_id)
		except Exception:
			log.exception("points lookup failed")
			return http_error("internal server error", 500)

		if value is None:
			return http_error(f"Receipt with ID {receipt_id} not found", 404)
		return PointsResponse(points=value)

	return router
