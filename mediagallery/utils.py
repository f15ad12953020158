"""Shared helpers for the gallery and editor."""

import os
import re
import sys
from pathlib import Path

# youtube.com/watch?v=ID, /embed/ID, /v/ID, /user/x/ID and youtu.be/ID
YOUTUBE_ID_PATTERN = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^\"&?/\s]{11})"
)


def extract_video_id(url: str) -> str | None:
    """Extract the 11-character YouTube video id from a URL, or None if it isn't one."""
    match = YOUTUBE_ID_PATTERN.search(url)
    return match.group(1) if match else None


def print_error(msg: str) -> None:
    """Print to stderr."""
    print(msg, file=sys.stderr)


def write_text_atomic(path: Path, text: str) -> None:
    """Write text to a temp file next to path, then move it into place."""
    temp_path = path.with_name(f".{path.name}.tmp")
    try:
        temp_path.write_text(text, encoding="utf-8")
        os.replace(temp_path, path)
    finally:
        temp_path.unlink(missing_ok=True)
