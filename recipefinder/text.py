"""Text helpers shared by the search index and the facet filters."""
from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: object) -> str:
    """Return a case and accent insensitive comparison key for *text*.

    ``None`` and empty values map to ``""``. Other non-string values are
    stringified first, so recipe quantities or ids can be passed through
    unchanged.
    """

    if text is None:
        return ""
    value = text if isinstance(text, str) else str(text)
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFD", value.lower())
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return _WHITESPACE_RE.sub(" ", stripped).strip()
