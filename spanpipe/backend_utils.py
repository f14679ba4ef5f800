"""
Utility functions for backend factory functions and output conversion.

This module provides common helpers shared by the backend implementations.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Any, Callable, Dict, List, Optional

_ENTITY_PREFIXES = ("B-", "I-", "E-", "S-", "L-", "U-")


def validate_backend_kwargs(
    kwargs: Dict[str, Any],
    backend_name: str,
    *,
    allowed_extra: Optional[List[str]] = None,
) -> None:
    """
    Validate that no unexpected kwargs remain after processing.

    Args:
        kwargs: Dictionary of remaining kwargs to validate
        backend_name: Name of the backend (for error messages)
        allowed_extra: Optional list of kwargs that are allowed but not explicitly
                      handled (e.g., ["verbose"])

    Raises:
        ValueError: If unexpected kwargs are found
    """
    if allowed_extra:
        for key in allowed_extra:
            kwargs.pop(key, None)

    if kwargs:
        unexpected = ", ".join(sorted(kwargs.keys()))
        raise ValueError(f"Unexpected {backend_name} backend arguments: {unexpected}")


def strip_entity_prefix(label: Optional[str]) -> Optional[str]:
    """
    Drop BIO/BIOES/BILOU position prefixes from an entity label.

    Examples:
        "B-PER" -> "PER"
        "S-LOC" -> "LOC"
        "O" -> "O"
        "PERSON" -> "PERSON"
    """
    if not label:
        return label
    if label[:2] in _ENTITY_PREFIXES and len(label) > 2:
        return label[2:]
    return label


def utf16_offset_converter(text: str) -> Callable[[int], int]:
    """
    Return a function mapping UTF-16 code unit offsets to ``str`` indices.

    Java based annotators (CoreNLP) count characters outside the Basic
    Multilingual Plane as two units; Python counts them as one.
    """
    astral = [idx for idx, char in enumerate(text) if ord(char) > 0xFFFF]
    if not astral:
        return lambda offset: offset
    # UTF-16 offset at which each astral character starts
    astral_utf16 = [idx + n for n, idx in enumerate(astral)]

    def convert(offset: int) -> int:
        # every astral character starting before the offset contributed one extra unit
        return offset - bisect_right(astral_utf16, offset - 1)

    return convert
