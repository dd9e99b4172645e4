"""Conversions between naming conventions used in generated code."""

from __future__ import annotations


def camel_case_to_snake_case(text: str) -> str:
    """Return the snake_case form of a camelCase string."""
    out: list[str] = []
    for position, char in enumerate(text):
        if "A" <= char <= "Z":
            if position > 0:
                out.append("_")
            out.append(char.lower())
        else:
            out.append(char)
    return "".join(out)


def snake_case_to_camel_case(text: str) -> str:
    """Return the camelCase form of a snake_case string."""
    words = text.split("_")
    head, rest = words[0], words[1:]
    return head + "".join(word[0].upper() + word[1:] if word else "" for word in rest)


def _is_separator(char: str) -> bool:
    if ord(char) < 0x80:
        return not (char.isascii() and (char.isalnum() or char == "_"))
    if char.isalpha() or char.isdigit():
        return False
    return char.isspace()


def title(text: str) -> str:
    """Upper-case the first letter of every word, leaving other letters alone."""
    out: list[str] = []
    previous = " "
    for char in text:
        if _is_separator(previous):
            char = char.upper() if len(char.upper()) == 1 else char
        out.append(char)
        previous = char
    return "".join(out)