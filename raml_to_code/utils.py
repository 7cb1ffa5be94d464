"""
Utility functions for the RAML type resolver.
"""

import re

# Any character that may not appear in a bare identifier
_INVALID_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_]")


def _is_word_separator(char: str) -> bool:
    """Whether a character ends a word for title casing."""
    if char.isascii():
        return not (char.isalnum() or char == "_")
    return char.isspace()


def title_case(text: str) -> str:
    """Upper-case the first letter of every word, leaving the rest untouched.

    Examples:
        "cat" -> "Cat"
        "homeNum" -> "HomeNum"
        "my-prop name" -> "My-Prop Name"
        "my_prop" -> "My_prop"
    """
    chars = []
    previous = " "
    for char in text:
        chars.append(char.upper() if _is_word_separator(previous) else char)
        previous = char
    return "".join(chars)


def sanitize_identifier(text: str) -> str:
    """Turn arbitrary text into a valid upper-case bare identifier.

    Examples:
        "2-for-1" -> "_2_FOR_1"
        "in progress" -> "IN_PROGRESS"
    """
    name = _INVALID_IDENTIFIER_CHARS.sub("_", text.upper())
    if name[:1].isdigit():
        name = "_" + name
    return name
