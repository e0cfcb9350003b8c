"""
Simple configuration for the Legal Document Analyzer.
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Configuration class for the Legal Document Analyzer."""

    # API Configuration
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")

    # Model Settings
    ANALYSIS_MODEL = os.environ.get("ANALYSIS_MODEL", "gpt-4o-mini")
    ANALYSIS_TEMPERATURE = 0.1
    ANALYSIS_MAX_TOKENS = 4096

    # Document Processing
    MAX_DOCUMENT_CHARS = int(os.environ.get("MAX_DOCUMENT_CHARS", "60000"))

    # File Upload
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", "uploads")
    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    ALLOWED_EXTENSIONS = ("pdf", "txt")

    # API Settings
    API_HOST = os.environ.get("API_HOST", "0.0.0.0")
    API_PORT = int(os.environ.get("API_PORT", "5001"))
    API_DEBUG = _env_bool("API_DEBUG", False)
    API_VERSION = "1.0.0"

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


# Module-level aliases
OPENAI_API_KEY = Config.OPENAI_API_KEY
ANALYSIS_MODEL = Config.ANALYSIS_MODEL
ANALYSIS_TEMPERATURE = Config.ANALYSIS_TEMPERATURE
ANALYSIS_MAX_TOKENS = Config.ANALYSIS_MAX_TOKENS
MAX_DOCUMENT_CHARS = Config.MAX_DOCUMENT_CHARS
UPLOAD_FOLDER = Config.UPLOAD_FOLDER
MAX_FILE_SIZE = Config.MAX_FILE_SIZE
ALLOWED_EXTENSIONS = Config.ALLOWED_EXTENSIONS
API_HOST = Config.API_HOST
API_PORT = Config.API_PORT
API_DEBUG = Config.API_DEBUG
API_VERSION = Config.API_VERSION
LOG_LEVEL = Config.LOG_LEVEL
