"""MIME-type and filename helpers used by the policy rules."""

from __future__ import annotations

import functools
import mimetypes
import re
from typing import Iterable

GENERIC_MIME_TYPE = "application/octet-stream"


def filename_extension(filename: str | None) -> str:
    """Return the lowercased text after the last '.', or '' if there is none."""
    if not filename:
        return ""
    _, dot, extension = filename.rpartition(".")
    if not dot:
        return ""
    return extension.lower()


@functools.lru_cache(maxsize=256)
def _pattern_to_regex(pattern: str) -> re.Pattern[str]:
    return re.compile(re.escape(pattern).replace(r"\*", ".*"), re.IGNORECASE)


def mime_type_matches(mime_type: str, patterns: Iterable[str]) -> bool:
    """True if mime_type matches any pattern; '*' matches any run of characters."""
    return any(_pattern_to_regex(pattern).fullmatch(mime_type) for pattern in patterns)


def infer_mime_type(filename: str | None, declared: str | None) -> str:
    """Pick the effective MIME type, guessing from the extension when none is declared."""
    if declared and declared.strip():
        return declared.strip().lower()

    extension = filename_extension(filename)
    if not extension:
        return GENERIC_MIME_TYPE
    if extension == "eml":
        return "message/rfc822"

    guessed, _ = mimetypes.guess_type(f"attachment.{extension}", strict=False)
    if guessed:
        return guessed
    # Synthesise a type so extension-specific viewers can still claim the file.
    return f"application/{extension}"
