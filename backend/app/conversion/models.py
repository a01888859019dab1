"""Conversion request/response models."""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class JobStatus(str, Enum):
    """Requests rejected by validation never become a job, so there is no "rejected" state here."""

    VALIDATED = "validated"
    STAGED = "staged"
    TRANSCODING = "transcoding"
    COMPLETED = "completed"
    FAILED = "failed"


class OutputFormat(str, Enum):
    """Formats with a dedicated ffmpeg template. Anything else maps to OTHER."""

    MP3 = "mp3"
    WAV = "wav"
    OGG = "ogg"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str) -> "OutputFormat":
        try:
            return cls(name.lower())
        except ValueError:
            return cls.OTHER


class ConvertRequest(BaseModel):
    """JSON body of POST /api/convert. Field names follow the client's camelCase."""

    model_config = ConfigDict(populate_by_name=True)

    file_data: Optional[str] = Field(None, alias="fileData")
    file_name: Optional[str] = Field(None, alias="fileName")
    output_format: Optional[str] = Field(None, alias="outputFormat")
    quality: Optional[str] = None


@dataclass
class ConversionJob:
    """One request's worth of state. Never outlives the request."""

    input_bytes: bytes
    original_name: str
    output_format: str
    quality: str
    input_path: Path
    output_path: Path
    status: JobStatus = JobStatus.VALIDATED

    @property
    def kind(self) -> OutputFormat:
        return OutputFormat.from_name(self.output_format)
