"""Melody rules that are independent from HTTP and the device.

Rule of thumb:
- OK: validation, pure transformations of the melody string.
- Not OK: opening the device, FastAPI, datetime.now(), etc.
"""

import string

MAX_MELODY_LENGTH = 1000

PRINTABLE_PUNCTUATION = set(string.punctuation)


def validate_melody(melody: str) -> str | None:
    """Check the melody against the length bound.

    The bound counts characters, not encoded bytes.

    Args:
        melody (str): Decoded melody text

    Returns:
        str | None: The reason the melody is rejected, None if it is acceptable
    """
    if len(melody) > MAX_MELODY_LENGTH:
        return f"Melody exceeds {MAX_MELODY_LENGTH} characters"
    return None


def printable_melody(melody: str) -> str:
    """Keep only ASCII alphanumerics, punctuation and whitespace for the audit log."""
    return "".join(
        char
        for char in melody
        if char.isascii()
        and (char.isalnum() or char in PRINTABLE_PUNCTUATION or char.isspace())
    )
