"""API routes for audio conversion."""
import base64
import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse

from app.config import (
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_QUALITY,
    LOW_QUALITY_PRESETS,
    MAX_INPUT_SIZE_BYTES,
    MAX_INPUT_SIZE_MB,
)
from app.conversion.exceptions import AudioConversionError
from app.conversion.models import ConvertRequest, OutputFormat
from app.conversion.service import (
    AudioConversionService,
    get_conversion_service,
    is_valid_output_format,
)

logger = logging.getLogger("audioconv.api")
router = APIRouter(prefix="/api", tags=["converter"])

# Client-facing messages (the web client is Swedish)
MISSING_FIELDS_MESSAGE = "Fildata och filnamn krävs"
INVALID_FORMAT_MESSAGE = "Ogiltigt utdataformat"
SUCCESS_MESSAGE = "Konvertering lyckades!"
FAILURE_MESSAGE = "Konvertering misslyckades"


def _estimated_decoded_size(file_data: str) -> int:
    return len(file_data) * 3 // 4


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/formats")
def get_formats():
    return {
        "output": [f.value for f in OutputFormat if f != OutputFormat.OTHER],
        "default_output_format": DEFAULT_OUTPUT_FORMAT,
        "default_quality": DEFAULT_QUALITY,
        "low_quality_presets": sorted(LOW_QUALITY_PRESETS),
        "max_input_size_mb": MAX_INPUT_SIZE_MB,
    }


@router.options("/convert")
def convert_preflight():
    """CORS preflight. Headers are added by the app middleware."""
    return Response(status_code=200)


@router.post("/convert")
def convert(
    body: ConvertRequest,
    svc: AudioConversionService = Depends(get_conversion_service),
):
    """Convert a base64 audio file with ffmpeg and return the result as base64."""
    if not body.file_data or not body.file_name:
        raise HTTPException(400, MISSING_FIELDS_MESSAGE)
    output_format = (body.output_format or "").strip().lower() or DEFAULT_OUTPUT_FORMAT
    quality = (body.quality or "").strip() or DEFAULT_QUALITY
    if not is_valid_output_format(output_format):
        raise HTTPException(400, INVALID_FORMAT_MESSAGE)
    if _estimated_decoded_size(body.file_data) > MAX_INPUT_SIZE_BYTES:
        raise HTTPException(413, f"Filen är för stor (max {MAX_INPUT_SIZE_MB} MB)")

    logger.info("Conversion started: %s -> %s (%s)", body.file_name, output_format, quality)
    try:
        job, output = svc.convert(body.file_data, body.file_name, output_format, quality)
    except AudioConversionError as e:
        logger.error("Conversion failed for %s: %s (%s)", body.file_name, e, e.details)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": FAILURE_MESSAGE, "details": e.details},
        )
    except Exception as e:
        logger.exception("Conversion failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": FAILURE_MESSAGE, "details": str(e) or type(e).__name__},
        )

    return {
        "success": True,
        "message": SUCCESS_MESSAGE,
        "outputData": base64.b64encode(output).decode("ascii"),
        "originalName": job.original_name,
        "outputFormat": job.output_format,
        "fileSize": len(output),
    }
