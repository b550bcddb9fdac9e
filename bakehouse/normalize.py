from typing import Optional


def normalize_key(s: str) -> str:
    # Inner whitespace is kept: it counts toward edit distance.
    return s.strip().lower()


def normalize_name(name: str) -> str:
    return normalize_key(name)


def normalize_code(code: str) -> str:
    return normalize_key(code)


def is_blank(s: Optional[str]) -> bool:
    return s is None or s.strip() == ""
