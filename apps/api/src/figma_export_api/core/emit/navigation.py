from __future__ import annotations


def next_index(index: int, count: int) -> int:
    if count < 1:
        raise ValueError("Navigation requires at least one screen")
    return (index + 1) % count


def previous_index(index: int, count: int) -> int:
    if count < 1:
        raise ValueError("Navigation requires at least one screen")
    return (index - 1 + count) % count


# Emitted code uses the same arithmetic as the functions above.


def next_expression(index: str, count: str) -> str:
    return f"({index} + 1) % {count}"


def previous_expression(index: str, count: str) -> str:
    return f"({index} - 1 + {count}) % {count}"
