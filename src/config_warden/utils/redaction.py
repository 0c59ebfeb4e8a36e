"""Secret masking utilities for safe display.

This module provides functions for masking sensitive values before they
are printed to the console or written to a report.
"""

VISIBLE_CHARS = 4
MAX_MASK_RUN = 16


def mask_secret(value: str, mask_char: str = "*") -> str:
    """Mask a secret for safe display.

    Values of eight characters or fewer are fully masked. Longer values
    keep their first and last four characters; the interior becomes a
    run of mask characters capped at sixteen.

    Args:
        value: The secret value to mask.
        mask_char: Character to use for masking.

    Returns:
        Masked string.

    Examples:
        >>> mask_secret("abcd1234")
        '********'
        >>> mask_secret("sk-abcdefghijklmnop")
        'sk-a***********mnop'
    """
    length = len(value)
    if length <= VISIBLE_CHARS * 2:
        return mask_char * length

    hidden = min(length - VISIBLE_CHARS * 2, MAX_MASK_RUN)
    return f"{value[:VISIBLE_CHARS]}{mask_char * hidden}{value[-VISIBLE_CHARS:]}"


def redact_in_text(
    text: str,
    secret: str,
    replacement: str | None = None,
) -> str:
    """Replace occurrences of a secret in text with its masked form.

    Args:
        text: Text that may contain the secret.
        secret: The secret value to redact.
        replacement: Custom replacement string (default: ``mask_secret``).

    Returns:
        Text with all occurrences of the secret redacted.

    Examples:
        >>> redact_in_text('key = "abcdefghijkl"', '"abcdefghijkl"')
        'key = "abc******jkl"'
    """
    if not secret or not text:
        return text

    if replacement is None:
        replacement = mask_secret(secret)

    return text.replace(secret, replacement)
