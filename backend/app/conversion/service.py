"""Audio conversion service: stage the upload, run ffmpeg, read back, clean up."""
import base64
import binascii
import logging
import re
import subprocess
import uuid
from pathlib import Path
from typing import Optional

from app.config import FFMPEG_PATH, TEMP_DIR
from app.conversion.commands import build_ffmpeg_command
from app.conversion.exceptions import AudioConversionError, StagingError, TranscoderError
from app.conversion.models import ConversionJob, JobStatus

logger = logging.getLogger("audioconv.service")

# Extensions/formats end up in file names, so only plain tokens are allowed
_TOKEN_RE = re.compile(r"^[A-Za-z0-9]{1,16}$")


def is_valid_output_format(output_format: str) -> bool:
    return bool(_TOKEN_RE.match(output_format or ""))


def input_extension(file_name: str) -> str:
    """Extension of the client's file name including the dot, or "" if unusable."""
    suffix = Path(file_name).suffix
    if suffix and _TOKEN_RE.match(suffix[1:]):
        return suffix.lower()
    return ""


class AudioConversionService:
    """Runs one conversion job per call. Holds configuration only, no per-job state."""

    def __init__(self, ffmpeg_path: str = FFMPEG_PATH, temp_dir: Path = TEMP_DIR):
        self.ffmpeg_path = ffmpeg_path
        self.temp_dir = Path(temp_dir)
        logger.info("AudioConversionService initialized (ffmpeg=%s, temp_dir=%s)", ffmpeg_path, self.temp_dir)

    def create_job(self, file_data: str, file_name: str, output_format: str, quality: str) -> ConversionJob:
        """Decode the payload and allocate unique temp paths. Raises StagingError on bad base64."""
        try:
            data = base64.b64decode(file_data)
        except (binascii.Error, ValueError) as e:
            raise StagingError("Could not decode file data", f"Invalid base64 data: {e}") from e
        # Two independent ids so concurrent jobs never share a path
        input_id = uuid.uuid4().hex
        output_id = uuid.uuid4().hex
        return ConversionJob(
            input_bytes=data,
            original_name=file_name,
            output_format=output_format,
            quality=quality,
            input_path=self.temp_dir / f"input_{input_id}{input_extension(file_name)}",
            output_path=self.temp_dir / f"output_{output_id}.{output_format}",
        )

    def _stage(self, job: ConversionJob) -> None:
        logger.info("Staging input file: %s", job.input_path)
        try:
            job.input_path.write_bytes(job.input_bytes)
        except OSError as e:
            raise StagingError("Could not write temp input file", str(e)) from e
        job.status = JobStatus.STAGED

    def _transcode(self, job: ConversionJob) -> None:
        cmd = build_ffmpeg_command(self.ffmpeg_path, job.input_path, job.output_path, job.kind, job.quality)
        job.status = JobStatus.TRANSCODING
        logger.info("Running ffmpeg: %s", cmd)
        try:
            # Tag metadata in stderr is not guaranteed to be UTF-8
            result = subprocess.run(cmd, capture_output=True, text=True, errors="replace")
        except FileNotFoundError as e:
            logger.error("ffmpeg not found at %s. Install ffmpeg for audio conversion.", self.ffmpeg_path)
            raise TranscoderError("ffmpeg not installed", f"ffmpeg not found: {self.ffmpeg_path}") from e
        except OSError as e:
            raise TranscoderError("Could not start ffmpeg", str(e)) from e
        if result.returncode != 0:
            details = (result.stderr or result.stdout or "").strip()
            raise TranscoderError(
                "ffmpeg failed",
                details or f"ffmpeg exited with code {result.returncode}",
                returncode=result.returncode,
            )
        logger.info("ffmpeg finished for %s", job.output_path.name)

    def _read_output(self, job: ConversionJob) -> bytes:
        try:
            return job.output_path.read_bytes()
        except OSError as e:
            raise StagingError("Could not read converted file", str(e)) from e

    def _cleanup(self, path: Path) -> None:
        """Best-effort removal of a temp file; never raises."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove temp file %s: %s", path, e)

    def run(self, job: ConversionJob) -> bytes:
        """Stage, transcode and read back. Both temp files are removed before returning or raising."""
        try:
            self._stage(job)
            self._transcode(job)
            output = self._read_output(job)
        except AudioConversionError:
            job.status = JobStatus.FAILED
            raise
        except Exception as e:
            logger.exception("Unexpected error converting %s: %s", job.original_name, e)
            job.status = JobStatus.FAILED
            raise AudioConversionError("Conversion failed", str(e)) from e
        finally:
            self._cleanup(job.input_path)
            self._cleanup(job.output_path)
            logger.debug("Temp files removed for %s", job.original_name)
        job.status = JobStatus.COMPLETED
        logger.info("Converted %s -> %s (%d bytes)", job.original_name, job.output_format, len(output))
        return output

    def convert(self, file_data: str, file_name: str, output_format: str, quality: str) -> tuple[ConversionJob, bytes]:
        """Full pipeline for one request. Raises AudioConversionError on any failure."""
        job = self.create_job(file_data, file_name, output_format, quality)
        return job, self.run(job)


# Singleton
_conversion_service: Optional[AudioConversionService] = None


def get_conversion_service() -> AudioConversionService:
    global _conversion_service
    if _conversion_service is None:
        _conversion_service = AudioConversionService()
    return _conversion_service
