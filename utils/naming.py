from __future__ import annotations


def upper_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def starts_with_capital(name: str) -> bool:
    first = name[:1]
    return first.upper() == first


def starts_with_lowercase(name: str) -> bool:
    first = name[:1]
    return first.lower() == first


def is_all_capitals(name: str) -> bool:
    return name.upper() == name


__all__ = [
    "upper_first",
    "starts_with_capital",
    "starts_with_lowercase",
    "is_all_capitals",
]
