"""Logging helpers with sensitive data redaction."""

import re

# Query parameters that carry credentials
SENSITIVE_PARAMS = [
    "appid",
    "api_key",
    "apikey",
    "token",
    "key",
    "secret",
]

_SENSITIVE_PATTERN = re.compile(rf"\b({'|'.join(SENSITIVE_PARAMS)})=([^&\s\"']+)", re.IGNORECASE)


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameter values from a URL or message."""
    return _SENSITIVE_PATTERN.sub(r"\1=***REDACTED***", url)
