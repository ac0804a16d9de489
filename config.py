import os

from dotenv import load_dotenv

load_dotenv()

# Models - overridable from .env
TEXT_MODEL = os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash")
IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "imagen-4.0-generate-001")

PORT = int(os.getenv("PORT", "5001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def require_api_key():
    """Return the Gemini API key, refusing to start without one."""
    api_key = os.environ.get("GEMINI_API_KEY")
    if not api_key:
        raise RuntimeError("GEMINI_API_KEY environment variable not set")
    return api_key
