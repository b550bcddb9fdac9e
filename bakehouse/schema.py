from typing import Any, Dict, List

REQUIRED_STR_FIELDS = ["name"]
OPTIONAL_STR_FIELDS = ["code", "kind"]

KINDS = ("ingredient", "product", "recipe")

MAX_NAME_LENGTH = 200
MAX_CODE_LENGTH = 64


class InvalidArgumentError(ValueError):
    """Raised when a caller passes a missing or malformed argument."""
    pass


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def require_text(value: Any, field: str) -> str:
    """Return value unchanged if it is a string, else raise InvalidArgumentError."""
    if value is None:
        raise InvalidArgumentError(f"{field} is required")
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"{field} must be a string, got {type(value).__name__}"
        )
    return value


def parse_threshold(value: Any) -> float:
    """Parse a similarity threshold and check it lies in [0, 1]."""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Threshold must be a number, got {value!r}")
    try:
        threshold = float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Threshold must be a number, got {value!r}")
    if not 0.0 <= threshold <= 1.0:
        raise InvalidArgumentError(f"Threshold must be between 0 and 1, got {threshold}")
    return threshold


def validate_entry(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Length caps keep user input small enough for pairwise edit distance.
    """
    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data or data[f] is None:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    name = data.get("name")
    if isinstance(name, str) and len(name.strip()) > MAX_NAME_LENGTH:
        errors.append(f"Field 'name' exceeds maximum length of {MAX_NAME_LENGTH}")

    code = data.get("code")
    if isinstance(code, str) and len(code.strip()) > MAX_CODE_LENGTH:
        errors.append(f"Field 'code' exceeds maximum length of {MAX_CODE_LENGTH}")

    kind = data.get("kind")
    if isinstance(kind, str) and kind not in KINDS:
        errors.append(f"Field 'kind' must be one of: {', '.join(KINDS)}")

    return errors
