"""
Short-form classifier.
Pure functions: ISO-8601 duration parsing and the short/long verdict.
"""
import re
from typing import Optional

from pydantic import BaseModel

SHORT_FORM_MAX_SECONDS = 60
SHORTS_MARKER = "#shorts"

_DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


class Classification(BaseModel):
    """Verdict for a single video."""

    is_short_form: bool


def parse_duration_seconds(encoding: Optional[str]) -> int:
    """
    Convert a `PT#H#M#S` duration into total seconds.

    Absent or unparseable encodings yield 0 ("duration unknown").
    """
    if not encoding or not isinstance(encoding, str):
        return 0
    match = _DURATION_PATTERN.search(encoding)
    if match is None:
        return 0
    hours, minutes, seconds = (int(group or 0) for group in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def is_short_form(title: Optional[str], duration_encoding: Optional[str]) -> bool:
    """Short-form if 0 < duration < 60s, or the title carries #shorts."""
    seconds = parse_duration_seconds(duration_encoding)
    if 0 < seconds < SHORT_FORM_MAX_SECONDS:
        return True
    return SHORTS_MARKER in (title or "").lower()


def classify(title: Optional[str], duration_encoding: Optional[str] = None) -> Classification:
    """Classify a video by title and duration encoding."""
    return Classification(is_short_form=is_short_form(title, duration_encoding))
