"""
Utility functions for the Legal Document Analyzer.
"""
import os
import logging
from werkzeug.utils import secure_filename

from config import ALLOWED_EXTENSIONS, MAX_FILE_SIZE

logger = logging.getLogger(__name__)


def get_file_extension(filename):
    """Return the lowercased extension of a filename, without the dot."""
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def get_file_size(file):
    """
    Measure an uploaded file without consuming it.

    Args:
        file: Uploaded file object (werkzeug FileStorage)

    Returns:
        int: Size in bytes
    """
    stream = file.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def validate_upload(file):
    """
    Validate an uploaded document.

    Args:
        file: Uploaded file object

    Returns:
        tuple: (is_valid, error_message)
    """
    if not file:
        return False, "No file provided"

    if file.filename == '':
        return False, "No file selected"

    if get_file_extension(file.filename) not in ALLOWED_EXTENSIONS:
        return False, "Invalid file type. Please upload a PDF or TXT file."

    if get_file_size(file) > MAX_FILE_SIZE:
        return False, "File too large. Maximum size is 10MB."

    return True, ""


def safe_file_cleanup(filepath):
    """
    Safely remove a file with error handling.

    Args:
        filepath: Path to file to remove

    Returns:
        bool: True if successfully removed or file doesn't exist
    """
    try:
        if filepath and os.path.exists(filepath):
            os.remove(filepath)
            logger.info(f"Cleaned up file: {filepath}")
        return True
    except OSError as e:
        logger.warning(f"Failed to cleanup file {filepath}: {str(e)}")
        return False


def get_secure_filename(original_filename):
    """
    Get a secure filename for upload.

    Args:
        original_filename: Original filename from upload

    Returns:
        str: Secure filename
    """
    return secure_filename(original_filename)


def log_error_and_return(error_msg, status_code=500):
    """
    Log an error and return a formatted error response.

    Args:
        error_msg: Error message to log and return
        status_code: HTTP status code

    Returns:
        tuple: (error_dict, status_code)
    """
    logger.error(error_msg)
    return {"error": error_msg}, status_code


def strip_code_fences(response_content):
    """Remove markdown code fences a model sometimes wraps its answer in."""
    cleaned = response_content.strip()
    if cleaned.startswith("```"):
        first_newline = cleaned.find("\n")
        cleaned = cleaned[first_newline + 1:] if first_newline != -1 else ""
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]
    return cleaned.strip()
