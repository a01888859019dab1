"""ffmpeg argument lists per output format."""
from pathlib import Path

from app.config import LOW_QUALITY_BITRATE, LOW_QUALITY_PRESETS, LOW_QUALITY_SAMPLE_RATE
from app.conversion.models import OutputFormat


def build_ffmpeg_command(
    ffmpeg_path: str,
    input_path: Path,
    output_path: Path,
    output_format: OutputFormat,
    quality: str,
) -> list[str]:
    """Return the argv for one transcode. Passed to subprocess without a shell."""
    if output_format == OutputFormat.MP3:
        if quality in LOW_QUALITY_PRESETS:
            # Mono speech preset
            flags = [
                "-b:a", LOW_QUALITY_BITRATE,
                "-ac", "1",
                "-ar", str(LOW_QUALITY_SAMPLE_RATE),
            ]
        else:
            flags = ["-b:a", quality]
    elif output_format == OutputFormat.WAV:
        flags = ["-acodec", "pcm_s16le"]
    elif output_format == OutputFormat.OGG:
        flags = ["-b:a", quality, "-acodec", "libvorbis"]
    else:
        # Container is picked by ffmpeg from the output extension
        flags = ["-b:a", quality]
    return [ffmpeg_path, "-y", "-i", str(input_path), *flags, str(output_path)]
