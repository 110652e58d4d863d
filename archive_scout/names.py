"""archive_scout.names: extraction and clean-up of host names scraped from archived pages."""

from __future__ import annotations

import re
import warnings
from functools import lru_cache
from re import Pattern
from typing import Final

__all__ = ("SUBDOMAIN_RE", "subdomain_regex", "clean_name")

# One DNS label followed by a dot; single-character labels are allowed.
_LABEL: Final[str] = r"(?:[a-zA-Z0-9]|[_a-zA-Z0-9][_a-zA-Z0-9-]{0,61}[a-zA-Z0-9])[.]"

#: Any dotted host name ending in an alphabetic TLD.
SUBDOMAIN_RE: Final[Pattern[str]] = re.compile(rf"(?:{_LABEL})+[a-zA-Z]{{2,61}}")

# Escape remnants left at the start of a token after naive unquoting:
# "é" → "u00e9", "%2F" → "2f", "%20" → "20" and so on.
_ARTIFACT_RE: Final[Pattern[str]] = re.compile(r"u[0-9a-f]{4}|20|22|25|2b|2f|3d|3a|40")

_TRIM_CHARS: Final[str] = "-."

# a double quote preceded by an even number of backslashes
_BARE_QUOTE_RE: Final[Pattern[str]] = re.compile(r'(?:^|[^\\])(?:\\\\)*"')


@lru_cache(maxsize=256)
def subdomain_regex(domain: str) -> Pattern[str]:
    """Compile a pattern matching *domain* itself or any of its subdomains."""
    escaped = re.escape(domain.strip().strip(".").lower())
    return re.compile(rf"(?:{_LABEL})*{escaped}", re.IGNORECASE)


def _unquote(text: str) -> str:
    """Interpret *text* as the body of a double-quoted literal with backslash escapes.

    Raises ValueError when the text could not appear inside such a literal.
    """
    if "\n" in text or _BARE_QUOTE_RE.search(text):
        raise ValueError("unescaped quote or newline")
    raw = text.encode("latin-1", "backslashreplace")
    with warnings.catch_warnings():
        # unknown escapes such as \q only warn in the codec
        warnings.simplefilter("error")
        try:
            return raw.decode("unicode_escape")
        except Warning as exc:
            raise ValueError(str(exc)) from exc


def clean_name(name: str) -> str:
    """Turn a raw fragment of a scraped URL into a canonical host name.

    Returns an empty string when nothing usable survives.
    """
    name = name.strip()
    try:
        name = _unquote(name)
    except ValueError:
        pass

    match = SUBDOMAIN_RE.search(name)
    if match is None:
        return ""
    name = match.group(0).lower()

    # every pass drops at least two characters
    for _ in range(len(name) // 2 + 1):
        name = name.strip(_TRIM_CHARS)
        artifact = _ARTIFACT_RE.match(name)
        if artifact is None:
            break
        name = name[artifact.end():]

    if not SUBDOMAIN_RE.fullmatch(name):
        return ""
    return name
