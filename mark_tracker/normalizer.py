"""Query normalization: raw search text to canonical tokens."""

import re

# Only these four characters are stripped; all other punctuation is kept.
QUERY_STRIP_PATTERN = re.compile(r"[?!'.]")
# Quest names also drop spaces so multi-word tokens can match across words.
NAME_STRIP_PATTERN = re.compile(r"['!?. ]")


def normalize(raw: str) -> list[str]:
    """Turn raw input into an ordered list of lowercase tokens.

    Trims, lowercases, strips ``? ! ' .``, splits on single spaces and drops
    the empty tokens left by repeated spaces. Blank input yields ``[]``.
    """
    text = QUERY_STRIP_PATTERN.sub("", raw.strip().lower())
    return [token for token in text.split(" ") if token]


def normalize_name(name: str) -> str:
    """Quest name form used for token matching."""
    return NAME_STRIP_PATTERN.sub("", name).lower()


def normalize_label(label: str) -> str:
    """Type/dungeon label form used for candidate matching."""
    return QUERY_STRIP_PATTERN.sub("", label.lower())
