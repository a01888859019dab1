from .service import AudioConversionService
from .models import ConversionJob, JobStatus, OutputFormat
from .exceptions import AudioConversionError, StagingError, TranscoderError

__all__ = [
    "AudioConversionService",
    "ConversionJob",
    "JobStatus",
    "OutputFormat",
    "AudioConversionError",
    "StagingError",
    "TranscoderError",
]
