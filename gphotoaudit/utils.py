"""This modules contains common utils and environment settings"""

# pylint: disable=broad-exception-caught

import os
import re

from fake_useragent import UserAgent

DEFAULT_API_URL = "https://photoslibrary.googleapis.com/v1"
DEFAULT_PRIVATE_ALBUM = "Privat"
DEFAULT_OUTPUT_NAME = "output.html"
READONLY_SCOPE = "https://www.googleapis.com/auth/photoslibrary.readonly"


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, str(default)) or default)
    except ValueError:
        return default


# Debug flag controlled by env var GPHOTOS_DEBUG
DEBUG = os.environ.get("GPHOTOS_DEBUG", "").lower() in {"1", "true", "yes", "on"}
MAX_RETRIES = _env_int("GPHOTOS_MAX_RETRIES", 3)
API_URL = os.environ.get("GPHOTOS_API_URL", "") or DEFAULT_API_URL
PRIVATE_ALBUM = os.environ.get("GPHOTOS_PRIVATE_ALBUM", "") or DEFAULT_PRIVATE_ALBUM
OUTPUT_NAME = os.environ.get("GPHOTOS_OUTPUT", "") or DEFAULT_OUTPUT_NAME


def dbg(msg: str) -> None:
    """
    Print a debug message when the DEBUG flag is enabled.

    Args:
        msg (str): Message to print when debug logging is active.

    Returns:
        None
    """
    if DEBUG:
        print(f"[debug] {msg}")


def get_access_token() -> str:
    """Return the OAuth bearer token from the environment (empty if unset)."""
    return os.environ.get("GPHOTOS_ACCESS_TOKEN", "").strip()


def get_random_user_agent() -> str:
    """
    Return a random user agent string; fallback to a generic UA if generator fails.
    """
    try:
        return UserAgent().random
    except Exception:
        return "Mozilla/5.0"


def choices(prompt: str) -> bool:
    """
    Prompt the user with a yes/no question.

    Args:
        prompt (str): The message to display to the user.

    Returns:
        bool: True if the user enters 'y', False for 'n', empty or any other input.
    """
    return input(prompt).strip().lower() == "y"


def sanitize(name: str | None) -> str:
    """
    Sanitize a string to be safe for file names by replacing invalid
    characters with underscores. If input is None or empty, returns "output".

    Args:
        name (str | None): The input string to sanitize.

    Returns:
        str: A sanitized string safe to use as filename.
    """
    return re.sub(r'[\\/*?:"<>|]', "_", name) if name else "output"


def dedupe_path(path: str) -> str:
    """
    Generate a non-conflicting file path by appending ' (1)', ' (2)', etc.
    before the file extension if the path already exists.

    Args:
        path (str): Original file path.

    Returns:
        str: A unique file path that does not yet exist.
    """
    if not os.path.exists(path):
        return path
    root, ext = os.path.splitext(path)
    i = 1
    while True:
        candidate = f"{root} ({i}){ext}"
        if not os.path.exists(candidate):
            return candidate
        i += 1
