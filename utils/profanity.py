from __future__ import annotations

from typing import Iterable

MASK = "****"


def clean_body(text: str, banned_words: Iterable[str]) -> str:
    """Replace every space-separated word found in `banned_words` with ****.

    Matching is case-insensitive on whole words only; punctuation attached
    to a word ("fornax!") keeps it from matching.
    """
    banned = {w.lower() for w in banned_words}
    words = text.split(" ")
    cleaned = [MASK if w.lower() in banned else w for w in words]
    return " ".join(cleaned)
