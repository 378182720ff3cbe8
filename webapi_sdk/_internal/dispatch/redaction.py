"""Redaction of sensitive values before request parameters are logged."""

import re
from typing import Any

REDACT_KEYS: frozenset[str] = frozenset({
    "token",
    "client_secret",
    "secret",
    "password",
    "api_key",
    "access_token",
    "refresh_token",
    "authorization",
    "code",
    "private_key",
})

# Credentials that turn up as plain values, e.g. a header copied into params.
CREDENTIAL_VALUE_PATTERN = re.compile(r"^(?:bearer|basic)\s+\S+$|^xox[a-z]-\S+$", re.IGNORECASE)

REDACTED_VALUE = "[REDACTED]"


def redact_params(params: dict[Any, Any]) -> dict[Any, Any]:
    """Return a copy of ``params`` safe to write to a log line.

    Values under a sensitive key (matched case-insensitively) and values that
    look like credentials themselves are replaced, at any nesting depth. The
    original mapping is never mutated.
    """
    redacted = {}
    for key, value in params.items():
        if isinstance(key, str) and key.lower() in REDACT_KEYS:
            redacted[key] = REDACTED_VALUE
        else:
            redacted[key] = _redact_value(value)
    return redacted


def _redact_value(value: Any) -> Any:
    if isinstance(value, dict):
        return redact_params(value)
    if isinstance(value, (list, tuple)):
        return [_redact_value(item) for item in value]
    if isinstance(value, str) and CREDENTIAL_VALUE_PATTERN.match(value):
        return REDACTED_VALUE
    return value
