"""Application configuration. Loads from environment and .env file."""
import logging
import os
import tempfile
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
# Load .env from cwd, then backend/.env, then project root .env
load_dotenv()
load_dotenv(BASE_DIR / ".env")
load_dotenv(BASE_DIR.parent / ".env")

# External transcoder
FFMPEG_PATH = os.getenv("FFMPEG_PATH", "ffmpeg")

# Staging area for per-request temp files (shared, never owned)
TEMP_DIR = Path(os.getenv("TEMP_DIR", tempfile.gettempdir()))

# Conversion defaults (env overrides)
DEFAULT_OUTPUT_FORMAT = os.getenv("DEFAULT_OUTPUT_FORMAT", "mp3").strip().lower()
DEFAULT_QUALITY = os.getenv("DEFAULT_QUALITY", "128k").strip()
# Quality values that select the fixed mono preset for mp3
LOW_QUALITY_PRESETS = {"64k", "mono64"}
LOW_QUALITY_BITRATE = "64k"
LOW_QUALITY_SAMPLE_RATE = 22050

# Limits (env). Applied to the decoded payload size.
MAX_INPUT_SIZE_MB = int(os.getenv("MAX_INPUT_SIZE_MB", "50"))
MAX_INPUT_SIZE_BYTES = MAX_INPUT_SIZE_MB * 1024 * 1024

# Server (for uvicorn)
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("audioconv")
