import math
import uuid

from .exceptions import InvalidInput


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; 2.5 must become 3.
    return int(math.floor(value + 0.5))


def parse_int(raw, name: str, default=None, minimum=None, maximum=None) -> int:
    if raw is None or raw == "":
        if default is None:
            raise InvalidInput(f"{name} required")
        return default
    if isinstance(raw, bool):
        raise InvalidInput(f"{name} must be an integer")
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be an integer")
    if minimum is not None and value < minimum:
        raise InvalidInput(f"{name} must be at least {minimum}")
    if maximum is not None and value > maximum:
        raise InvalidInput(f"{name} must be at most {maximum}")
    return value


def parse_uuid(raw, name: str) -> uuid.UUID:
    if raw is None or raw == "":
        raise InvalidInput(f"{name} required")
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw).strip())
    except (TypeError, ValueError, AttributeError):
        raise InvalidInput(f"{name} must be a valid id")


def parse_int_list(raw, name: str) -> list[int]:
    """Accept a list or a comma separated string of ids."""
    if raw in (None, ""):
        return []
    if isinstance(raw, str):
        raw = [p for p in raw.split(",") if p.strip()]
    if not isinstance(raw, (list, tuple)):
        raise InvalidInput(f"{name} must be a list")
    return [parse_int(item, name) for item in raw]


def parse_choice(raw, name: str, choices, default=None, upper=True):
    if raw in (None, ""):
        return default
    value = str(raw).strip()
    value = value.upper() if upper else value.lower()
    if value not in choices:
        allowed = ", ".join(choices)
        raise InvalidInput(f"{name} must be one of: {allowed}")
    return value


def parse_names(raw) -> list[str]:
    if raw in (None, ""):
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    return [str(n).strip() for n in raw if str(n).strip()]
