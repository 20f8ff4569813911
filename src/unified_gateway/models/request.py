"""Provider request models and field transforms."""

import re
from dataclasses import dataclass, field
from typing import Any

_NON_WORD = re.compile(r"[^\w.]")


@dataclass(frozen=True)
class ProviderRequest:
    """
    A provider-specific request ready for encoding.

    `params` is ordered; codecs emit fields in insertion order so that
    transcripts and test assertions are deterministic.
    """

    method: str
    url: str
    params: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)


def truncate(value: Any, max_length: int) -> str | None:
    """Truncate a value's string form to max_length characters."""
    if value is None:
        return None
    return str(value)[:max_length]


def strip_non_word(value: Any, replacement: str = "") -> str:
    """Replace every character outside [A-Za-z0-9_.] with replacement."""
    return _NON_WORD.sub(replacement, str(value))


def camelize(key: str) -> str:
    """snake_case -> CamelCase (custom_one -> CustomOne)."""
    return "".join(part[:1].upper() + part[1:] for part in str(key).split("_"))
