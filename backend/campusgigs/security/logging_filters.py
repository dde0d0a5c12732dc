"""Logging filters that scrub credentials from log output."""

from __future__ import annotations

import logging
import re

REDACTED = "**REDACTED**"

_SENSITIVE_PATTERNS = (
    re.compile(r"(Bearer\s+)[\w\.-]+", re.IGNORECASE),
    re.compile(r"(\"?(?:access_token|password|hashed_password)\"?\s*[:=]\s*\"?)[^\"&\s,}]+", re.IGNORECASE),
)


def scrub(text: str) -> str:
    """Mask bearer tokens and password-like fields in ``text``."""
    for pattern in _SENSITIVE_PATTERNS:
        text = pattern.sub(rf"\g<1>{REDACTED}", text)
    return text


class SensitiveFilter(logging.Filter):
    """Redact credentials from the message and its string arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = scrub(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                scrub(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


__all__ = ["REDACTED", "SensitiveFilter", "scrub"]
