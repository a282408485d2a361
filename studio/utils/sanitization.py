import re
from typing import Optional

CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def clean_text(value: Optional[str], max_length: int = 2000) -> Optional[str]:
    """
    Trim free-text input and strip control characters.
    Returns None for blank input.

    Raises:
        ValueError: If input is longer than max_length
    """
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)

    value = CONTROL_CHARS.sub("", value).strip()
    if not value:
        return None

    if len(value) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    return value

