"""Helpers that keep personal data out of log lines."""

from typing import Any, Dict, Iterable

SENSITIVE_KEYS = frozenset({"email", "password"})


def mask_email(email: str) -> str:
    """``alice@example.com`` -> ``al***@example.com``"""
    local, _, domain = email.partition("@")
    return f"{local[:2]}***@{domain}"


def mask_value(value: Any) -> Any:
    """Mask an email or secret; non-strings pass through unchanged."""
    if not isinstance(value, str):
        return value
    if "@" in value:
        return mask_email(value)
    # Long opaque values (tokens) keep their ends for correlation
    if len(value) > 12:
        return f"{value[:4]}...{value[-4:]}"
    return "***"


def sanitize_payload(payload: Dict[str, Any], allowed_keys: Iterable[str]) -> Dict[str, Any]:
    """Copy only ``allowed_keys`` from ``payload``, masking sensitive values."""
    sanitized = {}
    for key in allowed_keys:
        if key not in payload:
            continue
        value = payload[key]
        if key in SENSITIVE_KEYS or (isinstance(value, str) and "@" in value):
            value = mask_value(value)
        sanitized[key] = value
    return sanitized
