"""
Request parameter helpers shared by every resource method.

Explicit keyword arguments always win over same-named keys passed through the
open-ended ``**data`` mapping.
"""

from typing import Any, Dict, Mapping, Optional

_EMPTY_COLLECTIONS = (list, tuple, set, frozenset, dict)


class MissingParameterError(ValueError):
    """Raised when a required parameter is missing at the call site."""

    def __init__(self, name: str):
        super().__init__(f"{name} is required")
        self.name = name


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, _EMPTY_COLLECTIONS) and not value)


def require(**named: Any) -> None:
    """
    Raise MissingParameterError for the first named parameter that is None or
    an empty collection (it would be dropped from the request anyway).
    """
    for name, value in named.items():
        if is_blank(value):
            raise MissingParameterError(name)


def compact(data: Optional[Mapping[str, Any]] = None, **named: Any) -> Dict[str, Any]:
    """
    Merge pass-through ``data`` with explicit ``named`` params and drop every
    entry that is None or an empty collection.
    """
    merged = {**(data or {}), **named}
    return {k: v for k, v in merged.items() if not is_blank(v)}


def exclusive(**named: Any) -> None:
    """Raise ValueError when more than one of the named parameters is set."""
    given = [name for name, value in named.items() if value is not None]
    if len(given) > 1:
        raise ValueError(f"{' and '.join(given)} cannot both be specified.")


__all__ = ["MissingParameterError", "require", "compact", "exclusive", "is_blank"]
