"""
Input sanitization utilities.

Profile free text (injuries, movement preferences, goals) ends up inside LLM
prompts, so it is cleaned before it reaches the generator.
This module has no dependencies on models or services to avoid circular imports.
"""

import re
from typing import Any, List

from core.constants import MAX_PROFILE_LIST_COUNT, MAX_PROFILE_TEXT_LENGTH


def sanitize_user_input(value: str, max_length: int = MAX_PROFILE_TEXT_LENGTH) -> str:
    """
    Sanitize user input by removing control characters and limiting length.

    - Replaces newlines, tabs, and other control characters with spaces
    - Collapses multiple spaces into one
    - Strips leading/trailing whitespace
    - Truncates to a maximum length

    Args:
        value: Raw user-provided string
        max_length: Maximum allowed length (default: MAX_PROFILE_TEXT_LENGTH)

    Returns:
        Sanitized string safe for prompt inclusion
    """
    sanitized = re.sub(r"[\n\r\t\x00-\x1f\x7f-\x9f]", " ", value)
    sanitized = re.sub(r" +", " ", sanitized)
    sanitized = sanitized.strip()
    return sanitized[:max_length]


def sanitize_text_list(
    values: Any,
    field_name: str,
    max_count: int = MAX_PROFILE_LIST_COUNT,
    max_length: int = MAX_PROFILE_TEXT_LENGTH,
) -> List[str]:
    """
    Sanitize a list of free-text entries.

    Non-list input becomes an empty list, non-string and empty entries are
    dropped.

    Raises:
        ValueError: If more than max_count entries are supplied
    """
    if not values or not isinstance(values, list):
        return []

    if len(values) > max_count:
        raise ValueError(f"Too many {field_name}. Maximum allowed: {max_count}")

    sanitized = []
    for value in values:
        if not isinstance(value, str):
            continue
        clean = sanitize_user_input(value, max_length=max_length)
        if clean:
            sanitized.append(clean)
    return sanitized
