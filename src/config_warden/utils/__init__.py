"""Utility functions and helpers."""

from config_warden.utils.redaction import mask_secret, redact_in_text

__all__ = [
    "mask_secret",
    "redact_in_text",
]
