import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import AnalyzerError
from .settings import get_settings
from .routers import analyze, health, web

settings = get_settings()
logging.basicConfig(
	level=settings.log_level.upper(),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class EmptyPreflightCORSMiddleware(CORSMiddleware):
	"""Answers CORS preflights with the same empty 200 body as a bare OPTIONS."""

	def preflight_response(self, request_headers) -> Response:
		response = super().preflight_response(request_headers)
		headers = {
			key: value
			for key, value in response.headers.items()
			if key not in ("content-length", "content-type")
		}
		return Response(status_code=response.status_code, headers=headers)


app = FastAPI(title="Essay Analyzer API")

app.add_middleware(
	EmptyPreflightCORSMiddleware,
	allow_origins=settings.cors_origins,
	allow_credentials=False,
	allow_methods=["POST", "OPTIONS"],
	allow_headers=["Content-Type"],
)

app.include_router(health.router)
app.include_router(analyze.router)
app.include_router(web.router)


@app.exception_handler(AnalyzerError)
async def analyzer_error_handler(_: Request, exc: AnalyzerError):
	return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_: Request, exc: StarletteHTTPException):
	detail = "Method not allowed" if exc.status_code == 405 else exc.detail
	return JSONResponse(status_code=exc.status_code, content={"error": detail}, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_exception_handler(_: Request, exc: Exception):
	logger.exception("Unhandled error: %s", exc)
	return JSONResponse(status_code=500, content={"error": "Internal server error"})
