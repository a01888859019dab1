"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import MISSING_FIELDS_MESSAGE, router
from app.config import FFMPEG_PATH, TEMP_DIR, logger as config_logger

logging.getLogger("uvicorn").setLevel(logging.INFO)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    config_logger.info("Audio Converter API started (ffmpeg=%s, temp_dir=%s)", FFMPEG_PATH, TEMP_DIR)
    yield
    config_logger.info("Audio Converter API shutting down")


app = FastAPI(
    title="Audio Converter API",
    description="Convert base64-encoded audio files with ffmpeg.",
    version="1.0.0",
    lifespan=lifespan,
)


async def cors_header_middleware(request: Request, call_next):
    """Set the permissive CORS headers on every response, errors included."""
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


app.middleware("http")(cors_header_middleware)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = "Method not allowed" if exc.status_code == 405 else exc.detail
    return JSONResponse(status_code=exc.status_code, content={"error": detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    config_logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_MESSAGE})


app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    from app.config import HOST, PORT
    uvicorn.run("app.main:app", host=HOST, port=PORT, reload=True)
