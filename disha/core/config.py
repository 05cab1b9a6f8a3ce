import os
import logging
from dotenv import load_dotenv
from logtail import LogtailHandler

# 1. Load the .env file
load_dotenv()

# 2. Project root: disha/core/config.py -> core -> disha -> ROOT
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# 3. Setup Logging (Centralized)
def setup_logging():
    logger = logging.getLogger("disha")

    # Stop records bubbling up to the root/uvicorn logger (double printing)
    logger.propagate = False

    # Hot-reload re-imports this module, so drop handlers from the last run
    if logger.hasHandlers():
        logger.handlers.clear()

    logger.setLevel(logging.INFO)

    # Console handler
    stream_handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    # Better Stack (Logtail), only if a token exists
    logtail_token = os.getenv("LOGTAIL_SOURCE_TOKEN")

    if logtail_token:
        try:
            handler = LogtailHandler(source_token=logtail_token)
            logger.addHandler(handler)
            logger.info("✅ Better Stack Cloud Logging ENABLED")
        except Exception as e:
            logger.error(f"❌ Failed to connect to Better Stack: {e}")
    else:
        logger.warning("⚠️ No LOGTAIL_SOURCE_TOKEN found. Logging to console only.")

    return logger

def _split_csv(raw: str) -> list:
    return [item.strip() for item in raw.split(",") if item.strip()]

def _env_number(name: str, default, cast=float):
    """Reads a numeric env var; a malformed value falls back to the default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"⚠️ Ignoring malformed {name}={raw!r}. Using {default}.")
        return default

logger = setup_logging()

class Settings:
    PROJECT_NAME = "Disha AI Career Coach"
    VERSION = "1.0.0"

    PROMPTS_PATH = os.path.join(PACKAGE_DIR, "prompts.yaml")

    # --- API KEYS ---
    # Single credential for the model gateway. API_KEY is the legacy name.
    GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY")

    # --- MODEL ---
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
    MODEL_TEMPERATURE = _env_number("MODEL_TEMPERATURE", 0.2)

    # --- LIMITS ---
    RESUME_CHAR_LIMIT = 10000
    INTERVIEW_QUESTION_COUNT = 5
    COURSE_COUNT = 5
    MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5MB

    # --- SESSIONS ---
    SESSION_MAX = _env_number("SESSION_MAX", 1000, int)
    SESSION_TTL_SECONDS = _env_number("SESSION_TTL_SECONDS", 60 * 60)

    # --- CORS ---
    CORS_ORIGINS = _split_csv(os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"))

settings = Settings()
