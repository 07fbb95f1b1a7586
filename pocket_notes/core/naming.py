from __future__ import annotations

import re
import unicodedata

from pocket_notes.settings import DEFAULT_COLOR, GROUP_COLORS
from .errors import UnknownColorError

_WS_RE = re.compile(r"\s+")

_PALETTE = {c.upper() for c in GROUP_COLORS}


def clean_name(name: str | None) -> str:
    """Trim a group name; ``None`` is treated as empty."""
    return (name or "").strip()


def name_key(name: str | None) -> str:
    """
    Key used for duplicate detection:
    - trimmed
    - NFKC-normalized, so visually identical names collide
    - case-insensitive via casefold(), stricter than a plain lower():
      "Straße" and "STRASSE" share a key, so the second one is rejected
    """
    s = unicodedata.normalize("NFKC", clean_name(name))
    return s.casefold()


def initials_for(name: str | None) -> str:
    words = [w for w in _WS_RE.split(clean_name(name)) if w]
    if not words:
        return ""
    if len(words) == 1:
        return words[0][0].upper()[:1]
    return words[0][0].upper()[:1] + words[1][0].upper()[:1]


def normalize_color(color: str | None) -> str:
    if color is None or not str(color).strip():
        return DEFAULT_COLOR
    c = str(color).strip().upper()
    if c not in _PALETTE:
        raise UnknownColorError(str(color))
    return c
